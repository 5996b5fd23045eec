"""Core HTTP request wrapper used by the client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, MutableMapping, Optional

import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..exceptions import TransportError

log = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: MutableMapping[str, str] = field(default_factory=dict)
    data: Optional[Mapping[str, Any]] = None
    files: Optional[Mapping[str, Any]] = None
    timeout: int = 30
    max_retries: int = 3
    backoff_factor: float = 0.5

    def derive(self, **changes: Any) -> "RequestConfig":
        """Return a copy with *changes* applied, leaving this config untouched."""
        return replace(self, **changes)


class _RetryableResponse(Exception):
    def __init__(self, response: requests.Response) -> None:
        super().__init__(f"retryable status {response.status_code}")
        self.response = response


def _should_retry(resp: requests.Response) -> bool:
    """Return True for status codes that merit a retry."""
    return resp.status_code >= 500 or resp.status_code == 429


def _is_failure(status_code: int) -> bool:
    return status_code < 100 or status_code >= 400


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    log.warning("Retrying request (attempt %s): %s", state.attempt_number, exc)


def request(
    config: RequestConfig,
    session: Optional[requests.Session] = None,
    auth_token: Optional[str] = None,
) -> requests.Response:
    """Perform an HTTP request with retry and error handling.

    Connection errors, timeouts and 429/5xx responses are retried up to
    ``config.max_retries`` times with exponential backoff.

    Args:
        config: Fully populated ``RequestConfig`` instance.
        session: Session to send the request with; without one the request
            goes through ``requests.request``.
        auth_token: Optional bearer token; if supplied it is added to the
            ``Authorization`` header.

    Returns:
        The successful ``requests.Response``.

    Raises:
        TransportError: The request could not be sent, or the final response
            had a status code below 100 or of 400 and above.
    """
    headers = dict(config.headers)  # copy to avoid mutating caller data
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    send = session.request if session is not None else requests.request

    def _send() -> requests.Response:
        log.debug("%s %s params=%s", config.method, config.url, dict(config.params))
        resp = send(
            method=config.method,
            url=config.url,
            params=config.params,
            headers=headers,
            data=config.data,
            files=config.files,
            timeout=config.timeout,
        )
        if _should_retry(resp):
            raise _RetryableResponse(resp)
        return resp

    retrying = Retrying(
        reraise=True,
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_factor, max=10),
        retry=retry_if_exception_type(
            (requests.ConnectionError, requests.Timeout, _RetryableResponse)
        ),
        before_sleep=_log_retry,
    )

    try:
        for attempt in retrying:
            with attempt:
                resp = _send()
    except _RetryableResponse as exc:
        resp = exc.response
    except requests.RequestException as exc:
        raise TransportError(
            f"Request to {config.url!r} failed: {exc}", url=config.url
        ) from exc

    if _is_failure(resp.status_code):
        raise TransportError(
            f'Status code error: the response of "{config.url}" returned '
            f"{resp.status_code}",
            url=config.url,
            status_code=resp.status_code,
        )
    return resp
