"""Module-level convenience functions backed by a single logged-in client."""

import logging
import threading
from typing import List, Optional, Union

from .auth import Auth
from .client import QueryLike, TriageClient
from .environment import Environment, get_environment
from .exceptions import TriageError
from .records import (
    Sample,
    SearchResultEntry,
    StaticReport,
    TriageOverview,
    TriageReport,
)
from .search import DateLike, SearchResults
from .search.windowed import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

_client: Optional[TriageClient] = None
_lock = threading.Lock()


def login(
    api_key: Optional[str] = None,
    environment: Union[str, Environment, None] = None,
) -> TriageClient:
    """Create the client used by the module-level functions.

    Parameters:
        api_key: The API key; read from ``TRIAGE_API_KEY`` when omitted.
        environment: An ``Environment`` or its name; read from
            ``TRIAGE_ENVIRONMENT`` when omitted, ``public`` by default.

    Returns:
        The new client, also stored for the module-level functions.

    Raises:
        LoginError: No API key was given and ``TRIAGE_API_KEY`` is unset.
        PreconditionError: The environment name is unknown.

    Examples:
        ```python
        import triageaccess

        triageaccess.login(environment="private")
        sample = triageaccess.get_sample("231020-abcdefghij")
        ```
    """
    global _client

    if not isinstance(environment, Environment):
        environment = get_environment(environment)
    if api_key:
        auth = Auth(api_key=api_key, environment=environment)
    else:
        auth = Auth.from_environment(environment)

    client = TriageClient(auth=auth)
    with _lock:
        previous, _client = _client, client
    if previous is not None:
        previous.close()
    logger.info("Logged in to the %s Triage environment", environment.name)
    return client


def logout() -> None:
    """Forget the module client and close its session."""
    global _client

    with _lock:
        previous, _client = _client, None
    if previous is not None:
        previous.auth.logout()
        previous.close()


def _get_client() -> TriageClient:
    client = _client
    if client is None:
        raise TriageError("Not logged in, call triageaccess.login() first")
    return client


def search(query: QueryLike, limit: Optional[int] = None) -> SearchResults:
    """Search samples matching *query*, newest first, fetching lazily.

    Examples:
        >>> results = triageaccess.search("family:emotet", limit=20)  # doctest: +SKIP
    """
    return _get_client().search(query, limit=limit)


def search_window(
    query: QueryLike,
    earliest: DateLike,
    latest: DateLike,
    limit: int = MAX_PAGE_SIZE,
) -> List[SearchResultEntry]:
    """Search samples matching *query* that completed between two instants.

    Both bounds are exclusive; naive values are local time.
    """
    return _get_client().search_window(query, earliest, latest, limit=limit)


def get_sample(sample_id: str) -> Sample:
    return _get_client().get_sample(sample_id)


def get_triage_report(sample_id: str, task_id: str) -> TriageReport:
    return _get_client().get_triage_report(sample_id, task_id)


def get_static_report(sample_id: str) -> StaticReport:
    return _get_client().get_static_report(sample_id)


def get_triage_overview(sample_id: str) -> TriageOverview:
    return _get_client().get_triage_overview(sample_id)
