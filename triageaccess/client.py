"""HTTP client for the Triage sandbox API."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

import requests

from ._core._request import RequestConfig, request
from ._core._validators import require_ids
from .auth import Auth
from .cache import KnownValuesCache
from .environment import Environment, get_environment
from .exceptions import PreconditionError
from .records import (
    FileUploadResult,
    Profile,
    Sample,
    SampleEvents,
    SearchPage,
    SearchResultEntry,
    StaticReport,
    TriageOverview,
    TriageReport,
    load_document,
    parse_list,
)
from .records._base import opt_string
from .search import DateLike, SearchQuery, SearchResults, windowed_search
from .search.windowed import MAX_PAGE_SIZE, clamp_page_size

logger = logging.getLogger(__name__)

QueryLike = Union[str, SearchQuery]


def _query_text(query: QueryLike) -> str:
    if isinstance(query, SearchQuery):
        query.validate().raise_if_invalid()
        return query.to_query()
    return query


class TriageClient:
    """Talks to one Triage deployment on behalf of one API key.

    Every call is synchronous; the client owns its ``requests.Session``.

    Parameters:
        auth: Credentials; without them requests are sent unauthenticated.
        environment: The deployment to talk to; defaults to the one ``auth``
            belongs to.
        session: Session to reuse, a new one is created if omitted.
        config: Template for every request (timeout, retries, backoff).
    """

    def __init__(
        self,
        auth: Optional[Auth] = None,
        environment: Optional[Environment] = None,
        session: Optional[requests.Session] = None,
        config: Optional[RequestConfig] = None,
    ) -> None:
        if auth is None:
            auth = Auth(environment=environment or get_environment())
        self.auth = auth
        self.environment = environment or self.auth.environment
        self.session = session if session is not None else requests.Session()
        self.config = config or RequestConfig()

    def __repr__(self) -> str:
        return f"TriageClient(environment={self.environment.name!r})"

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "TriageClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(
        self, path: str, method: str = "GET", **kwargs: Any
    ) -> requests.Response:
        config = self.config.derive(
            method=method,
            url=self.environment.url(path),
            headers={**self.config.headers, **self.auth.get_headers()},
            **kwargs,
        )
        return request(config, session=self.session)

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> bytes:
        return self._request(path, params=params or {}).content

    # Reports

    def get_triage_report(self, sample_id: str, task_id: str) -> TriageReport:
        """Fetch the dynamic analysis report of one task of a sample."""
        require_ids(sample_id=sample_id, task_id=task_id)
        report = TriageReport.parse(
            self._get(f"samples/{sample_id}/{task_id}/report_triage.json")
        )
        return replace(report, task_id=task_id)

    def get_static_report(self, sample_id: str) -> StaticReport:
        require_ids(sample_id=sample_id)
        return StaticReport.parse(self._get(f"samples/{sample_id}/reports/static"))

    def get_triage_overview(self, sample_id: str) -> TriageOverview:
        """Fetch the summary of every task run for a sample."""
        require_ids(sample_id=sample_id)
        return TriageOverview.parse(self._get(f"samples/{sample_id}/overview.json"))

    # Samples

    def get_sample(self, sample_id: str) -> Sample:
        require_ids(sample_id=sample_id)
        return Sample.parse(self._get(f"samples/{sample_id}"))

    def get_samples(self, own_uploads_only: bool = False) -> Tuple[Sample, ...]:
        """List recent samples, either your own uploads or public ones."""
        subset = "owned" if own_uploads_only else "public"
        return parse_list(Sample, self._get("samples", {"subset": subset}))

    def get_sample_status(self, sample_id: str) -> str:
        require_ids(sample_id=sample_id)
        node = load_document(self._get(f"samples/{sample_id}/status"))
        return opt_string(node.get("status")) if isinstance(node, Mapping) else ""

    def get_sample_events(self, sample_id: str) -> SampleEvents:
        require_ids(sample_id=sample_id)
        return SampleEvents.parse(self._get(f"samples/{sample_id}/events"))

    def download_sample(self, sample_id: str) -> bytes:
        """Download the submitted file itself."""
        require_ids(sample_id=sample_id)
        return self._get(f"samples/{sample_id}/sample")

    def upload_sample(self, path: Union[str, Path]) -> FileUploadResult:
        """Submit a single file for analysis.

        Raises:
            PreconditionError: *path* is not an existing file.
        """
        path = Path(path)
        if not path.is_file():
            raise PreconditionError(f"Not a file: {path}")
        # read up front so that retries send the whole file again
        content = path.read_bytes()
        payload = json.dumps({"kind": "file", "interactive": False})
        logger.info("Uploading %s (%s bytes)", path.name, len(content))
        response = self._request(
            "samples",
            method="POST",
            data={"_json": payload},
            files={"file": (path.name, content)},
        )
        return FileUploadResult.parse(response.content)

    # Task artifacts

    def get_kernel_monitor_output(self, sample_id: str, task_id: str) -> str:
        require_ids(sample_id=sample_id, task_id=task_id)
        return self._request(f"samples/{sample_id}/{task_id}/logs/onemon.json").text

    def get_pcap(self, sample_id: str, task_id: str) -> bytes:
        require_ids(sample_id=sample_id, task_id=task_id)
        return self._get(f"samples/{sample_id}/{task_id}/dump.pcap")

    def get_pcapng(self, sample_id: str, task_id: str) -> bytes:
        require_ids(sample_id=sample_id, task_id=task_id)
        return self._get(f"samples/{sample_id}/{task_id}/dump.pcapng")

    # Profiles

    def get_profiles(self) -> Tuple[Profile, ...]:
        return parse_list(Profile, self._get("profiles"))

    def profile_cache(self) -> KnownValuesCache:
        """Return a new cache of the profile names available to this account."""
        return KnownValuesCache(lambda: [p.name for p in self.get_profiles()])

    # Search

    def fetch_page(self, query: str, offset: Optional[str], limit: int) -> bytes:
        """Fetch one raw page of search results.

        The page starts at *offset*, a continuation token or timestamp, or at
        the newest result when *offset* is empty.
        """
        params = {"query": query}
        if offset:
            params["offset"] = offset
        params["limit"] = str(limit)
        return self._get("search", params)

    def search_page(
        self, query: QueryLike, offset: Optional[str] = None, limit: int = MAX_PAGE_SIZE
    ) -> SearchPage:
        text = _query_text(query)
        if not isinstance(text, str) or not text.strip():
            raise PreconditionError("query must be a non-empty string")
        return SearchPage.parse(self.fetch_page(text, offset, clamp_page_size(limit)))

    def search(self, query: QueryLike, limit: Optional[int] = None) -> SearchResults:
        """Search every sample matching *query*, newest first.

        Results are fetched lazily as they are iterated.
        """
        return SearchResults(self, query, limit=limit)

    def search_window(
        self,
        query: QueryLike,
        earliest: DateLike,
        latest: DateLike,
        limit: int = MAX_PAGE_SIZE,
    ) -> List[SearchResultEntry]:
        """Search samples matching *query* that completed inside a time window.

        See :func:`triageaccess.search.windowed_search` for the details.
        """
        return windowed_search(self, _query_text(query), earliest, latest, limit=limit)
