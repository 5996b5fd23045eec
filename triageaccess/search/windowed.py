"""Search restricted to an absolute time window.

The search endpoint pages backwards in time: the ``offset`` of a request is a
timestamp and every page hands back the token for the next, older, page. A
windowed search starts paging at the end of the window and keeps the entries
that completed inside it.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from typing_extensions import Protocol

from .._core._validators import clamp
from ..exceptions import PreconditionError
from ..records.search import SearchPage, SearchResultEntry
from ._time import DateLike, format_offset, parse_timestamp, to_utc, utc_now

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 200
"""The most entries the service returns in a single page."""


class PageSource(Protocol):
    """Anything that can fetch one raw page of search results."""

    def fetch_page(self, query: str, offset: Optional[str], limit: int) -> bytes:
        ...


def clamp_page_size(limit: int) -> int:
    """Clamp a requested page size into ``[MIN_PAGE_SIZE, MAX_PAGE_SIZE]``."""
    return clamp(limit, MIN_PAGE_SIZE, MAX_PAGE_SIZE)


def _is_before(entry: SearchResultEntry, moment) -> bool:
    completed = parse_timestamp(entry.completed)
    return completed is not None and completed < moment


def windowed_search(
    source: PageSource,
    query: str,
    earliest: DateLike,
    latest: DateLike,
    limit: int = MAX_PAGE_SIZE,
    now: Optional[DateLike] = None,
) -> List[SearchResultEntry]:
    """Return every entry matching *query* that completed within the window.

    Pages are fetched one after the other, starting at *latest*, until one of
    these holds:

    * the page has no entries;
    * the window is a single instant (``earliest == latest``), after one page;
    * the first and the last entry of the page both completed before
      *earliest*, so older pages cannot match (pages are ordered newest first);
    * the page carries no continuation token.

    An entry matches when ``earliest < completed < latest``; entries that
    completed exactly on a boundary are left out.

    Parameters:
        source: The page source, usually a ``TriageClient``.
        query: Search query in the service's syntax.
        earliest: Start of the window; local time unless it carries an offset.
        latest: End of the window; local time unless it carries an offset.
        limit: Page size, clamped to ``[1, 200]``.
        now: The current time, for validating *earliest*; defaults to the clock.

    Returns:
        The matching entries in page order, possibly empty.

    Raises:
        PreconditionError: The query is empty, *earliest* lies in the future
            or after *latest*. Raised before anything is fetched.
        TransportError: A page could not be fetched. Nothing collected so far
            is returned.
        MalformedInputError: A page was not valid JSON.
    """
    if not isinstance(query, str) or not query.strip():
        raise PreconditionError("query must be a non-empty string")

    start = to_utc(earliest)
    end = to_utc(latest)
    current = to_utc(now) if now is not None else utc_now()
    if start > current:
        raise PreconditionError(
            f"earliest ({start.isoformat()}) is later than now ({current.isoformat()})"
        )
    if start > end:
        raise PreconditionError(
            f"earliest ({start.isoformat()}) is later than latest ({end.isoformat()})"
        )

    page_size = clamp_page_size(limit)
    offset = format_offset(end)
    matches: List[SearchResultEntry] = []
    fetched = 0

    while True:
        page = SearchPage.parse(source.fetch_page(query, offset, page_size))
        fetched += 1
        logger.debug("Page %s at offset %s: %s entries", fetched, offset, len(page))
        if page.exhausted:
            break

        for entry in page.entries:
            completed = parse_timestamp(entry.completed)
            if completed is not None and start < completed < end:
                matches.append(entry)

        if start == end:
            break
        if _is_before(page.entries[0], start) and _is_before(page.entries[-1], start):
            break
        if not page.next_offset:
            break
        offset = page.next_offset

    logger.info(
        "Windowed search %r matched %s entries over %s pages",
        query,
        len(matches),
        fetched,
    )
    return matches
