"""Lazy, open-ended search results."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Union

from ..exceptions import PreconditionError
from ..records.search import SearchPage, SearchResultEntry
from .query import SearchQuery
from .windowed import MAX_PAGE_SIZE, PageSource, clamp_page_size

logger = logging.getLogger(__name__)


class SearchResults:
    """Search results that fetch pages from the service only as they are used.

    Unlike a windowed search there is no time bound: paging continues until
    the service stops handing out continuation tokens, a page comes back
    empty, or *limit* entries have been produced.

    Attributes:
        source: The page source, usually a ``TriageClient``
        query: The query text
        limit: Maximum number of entries to produce, None for unlimited

    Examples:
        >>> results = client.search("family:emotet", limit=50)  # doctest: +SKIP
        >>> first = results[0]  # doctest: +SKIP
        >>> for page in results.pages():  # doctest: +SKIP
        ...     print(len(page))
    """

    __module__ = "triageaccess.search"

    def __init__(
        self,
        source: PageSource,
        query: Union[str, SearchQuery],
        limit: Optional[int] = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        if isinstance(query, SearchQuery):
            query.validate().raise_if_invalid()
            query = query.to_query()
        if not isinstance(query, str) or not query.strip():
            raise PreconditionError("query must be a non-empty string")
        if limit is not None and limit < 0:
            raise PreconditionError("limit must not be negative")

        self.source = source
        self.query = query
        self.limit = limit
        self.page_size = clamp_page_size(page_size)
        self._cached_results: List[SearchResultEntry] = []
        self._next_offset: Optional[str] = None
        self._exhausted = False

    def __len__(self) -> int:
        """Return the number of entries fetched so far, not the total."""
        return len(self._cached_results)

    def __iter__(self) -> Iterator[SearchResultEntry]:
        yield from self._cached_results
        position = len(self._cached_results)

        while self._fetch_more():
            for entry in self._cached_results[position:]:
                yield entry
            position = len(self._cached_results)

    def __getitem__(self, index: int) -> SearchResultEntry:
        if index < 0:
            self._ensure_cached(None)
        else:
            self._ensure_cached(index + 1)
        return self._cached_results[index]

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else "more available"
        return (
            f"SearchResults(query={self.query!r}, "
            f"fetched={len(self._cached_results)}, {state})"
        )

    def pages(self) -> Iterator[Tuple[SearchResultEntry, ...]]:
        """Iterate page by page, starting from the newest results.

        Pages are fetched fresh and independently of the entries cached by
        plain iteration.
        """
        offset: Optional[str] = None
        produced = 0

        while self.limit is None or produced < self.limit:
            page = self._fetch_page(offset)
            entries = page.entries
            if self.limit is not None:
                entries = entries[: self.limit - produced]
            if not entries:
                break
            produced += len(entries)
            yield entries
            if not page.next_offset:
                break
            offset = page.next_offset

    def _ensure_cached(self, count: Optional[int]) -> None:
        while count is None or len(self._cached_results) < count:
            if not self._fetch_more():
                break

    def _fetch_more(self) -> bool:
        """Fetch the next page into the cache; False once nothing is left."""
        if self._exhausted:
            return False
        if self.limit is not None and len(self._cached_results) >= self.limit:
            self._exhausted = True
            return False

        page = self._fetch_page(self._next_offset)
        entries = page.entries
        if self.limit is not None:
            entries = entries[: self.limit - len(self._cached_results)]
        self._cached_results.extend(entries)

        if page.exhausted or not page.next_offset:
            self._exhausted = True
        self._next_offset = page.next_offset or None
        return bool(entries)

    def _fetch_page(self, offset: Optional[str]) -> SearchPage:
        raw = self.source.fetch_page(self.query, offset, self.page_size)
        page = SearchPage.parse(raw)
        logger.debug("Fetched %s entries at offset %s", len(page), offset)
        return page
