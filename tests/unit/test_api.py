"""Tests for the module-level API."""

from unittest.mock import Mock, patch

import pytest
import triageaccess
from triageaccess import api
from triageaccess.environment import PRIVATE, PUBLIC
from triageaccess.exceptions import LoginError, TriageError


@pytest.fixture(autouse=True)
def _logged_out():
    api.logout()
    yield
    api.logout()


class TestLogin:
    def test_login_with_key(self):
        client = triageaccess.login(api_key="secret")

        assert client.auth.api_key == "secret"
        assert client.environment is PUBLIC
        assert api._client is client

    def test_login_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRIAGE_API_KEY", "from-env")
        monkeypatch.setenv("TRIAGE_ENVIRONMENT", "private")

        client = triageaccess.login()

        assert client.auth.api_key == "from-env"
        assert client.environment is PRIVATE

    def test_login_with_environment_name(self):
        assert triageaccess.login("secret", "private").environment is PRIVATE

    def test_login_with_environment(self):
        assert triageaccess.login("secret", PRIVATE).environment is PRIVATE

    def test_login_without_key(self):
        with pytest.raises(LoginError):
            triageaccess.login()

        assert api._client is None

    def test_login_again_closes_previous_client(self):
        first = triageaccess.login("one")
        first.session = Mock()

        triageaccess.login("two")

        first.session.close.assert_called_once_with()

    def test_logout(self):
        client = triageaccess.login("secret")

        triageaccess.logout()

        assert api._client is None
        assert not client.auth.authenticated


class TestDelegation:
    @pytest.mark.parametrize(
        "name,args",
        [
            ("search", ("family:emotet",)),
            ("search_window", ("family:emotet", "2023-10-01T00:00:00Z", "2023-10-02T00:00:00Z")),
            ("get_sample", ("s1",)),
            ("get_triage_report", ("s1", "behavioral1")),
            ("get_static_report", ("s1",)),
            ("get_triage_overview", ("s1",)),
        ],
    )
    def test_requires_login(self, name, args):
        with pytest.raises(TriageError, match="login"):
            getattr(triageaccess, name)(*args)

    def test_get_sample(self):
        client = triageaccess.login("secret")

        with patch.object(client, "get_sample", return_value="sample") as get_sample:
            assert triageaccess.get_sample("s1") == "sample"

        get_sample.assert_called_once_with("s1")

    def test_get_reports(self):
        client = triageaccess.login("secret")

        with patch.object(client, "get_triage_report") as report, patch.object(
            client, "get_static_report"
        ) as static, patch.object(client, "get_triage_overview") as overview:
            triageaccess.get_triage_report("s1", "behavioral1")
            triageaccess.get_static_report("s1")
            triageaccess.get_triage_overview("s1")

        report.assert_called_once_with("s1", "behavioral1")
        static.assert_called_once_with("s1")
        overview.assert_called_once_with("s1")

    def test_search(self):
        client = triageaccess.login("secret")

        with patch.object(client, "search") as search:
            triageaccess.search("family:emotet", limit=5)

        search.assert_called_once_with("family:emotet", limit=5)

    def test_search_window(self):
        client = triageaccess.login("secret")

        with patch.object(client, "search_window", return_value=[]) as search_window:
            result = triageaccess.search_window("q", "2023-10-01", "2023-10-02", limit=10)

        assert result == []
        search_window.assert_called_once_with("q", "2023-10-01", "2023-10-02", limit=10)


def test_version():
    assert isinstance(triageaccess.__version__, str)


class TestSearchNames:
    def test_package_attribute_is_the_search_function(self):
        assert triageaccess.search is api.search

    def test_subpackage_is_still_importable(self):
        from triageaccess.search import windowed, windowed_search

        assert windowed.windowed_search is windowed_search
        assert triageaccess.windowed_search is windowed_search
