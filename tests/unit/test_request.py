"""Tests for the retrying request wrapper."""

from unittest.mock import patch

import pytest
import requests
import responses
from triageaccess._core._request import RequestConfig, request
from triageaccess.exceptions import TransportError

URL = "https://api.tria.ge/v0/samples/231020-a1b2c3d4e5"


def config(**changes) -> RequestConfig:
    return RequestConfig(url=URL, max_retries=2, backoff_factor=0).derive(**changes)


class TestRequestConfig:
    def test_defaults(self):
        cfg = RequestConfig()

        assert cfg.method == "GET"
        assert cfg.timeout == 30
        assert cfg.max_retries == 3
        assert cfg.backoff_factor == 0.5

    def test_derive_leaves_original_untouched(self):
        cfg = RequestConfig(url=URL)
        derived = cfg.derive(method="POST")

        assert derived.method == "POST"
        assert derived.url == URL
        assert cfg.method == "GET"


class TestRequest:
    @responses.activate
    def test_success(self):
        responses.add(responses.GET, URL, json={"id": "x"}, status=200)

        resp = request(config())

        assert resp.json() == {"id": "x"}
        assert len(responses.calls) == 1

    @responses.activate
    def test_auth_token_header(self):
        responses.add(responses.GET, URL, json={}, status=200)

        request(config(headers={"Accept": "application/json"}), auth_token="secret")

        headers = responses.calls[0].request.headers
        assert headers["Authorization"] == "Bearer secret"
        assert headers["Accept"] == "application/json"

    @responses.activate
    def test_caller_headers_are_not_mutated(self):
        responses.add(responses.GET, URL, json={}, status=200)
        headers = {"Accept": "application/json"}

        request(config(headers=headers), auth_token="secret")

        assert headers == {"Accept": "application/json"}

    @responses.activate
    @pytest.mark.parametrize("status", [400, 401, 404])
    def test_client_errors_are_not_retried(self, status):
        responses.add(responses.GET, URL, json={"error": "nope"}, status=status)

        with pytest.raises(TransportError) as excinfo:
            request(config())

        assert excinfo.value.status_code == status
        assert excinfo.value.url == URL
        assert len(responses.calls) == 1

    @responses.activate
    def test_server_error_is_retried_then_succeeds(self):
        responses.add(responses.GET, URL, status=503)
        responses.add(responses.GET, URL, status=429)
        responses.add(responses.GET, URL, json={"id": "x"}, status=200)

        resp = request(config())

        assert resp.status_code == 200
        assert len(responses.calls) == 3

    @responses.activate
    def test_server_error_after_retries(self):
        responses.add(responses.GET, URL, status=500)

        with pytest.raises(TransportError) as excinfo:
            request(config())

        assert excinfo.value.status_code == 500
        assert len(responses.calls) == 3

    @responses.activate
    def test_connection_error(self):
        responses.add(responses.GET, URL, body=requests.ConnectionError("refused"))

        with pytest.raises(TransportError) as excinfo:
            request(config())

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
        assert len(responses.calls) == 3

    @responses.activate
    def test_no_retries(self):
        responses.add(responses.GET, URL, status=502)

        with pytest.raises(TransportError):
            request(config(max_retries=0))

        assert len(responses.calls) == 1

    @responses.activate
    def test_uses_given_session(self):
        responses.add(responses.GET, URL, json={}, status=200)
        session = requests.Session()
        session.headers["X-Test"] = "1"

        request(config(), session=session)

        assert responses.calls[0].request.headers["X-Test"] == "1"

    @responses.activate
    def test_without_session_opens_no_long_lived_session(self):
        responses.add(responses.GET, URL, json={}, status=200)

        with patch("requests.Session") as session_cls:
            resp = request(config())

        assert resp.status_code == 200
        session_cls.assert_not_called()
