"""Tests for lazily paginated SearchResults.

Tests the wrapper that fetches pages only as entries are consumed.
"""

import pytest
from triageaccess.exceptions import PreconditionError
from triageaccess.records import SearchResultEntry
from triageaccess.search import SearchQuery, SearchResults

from tests.unit.fixtures import make_entry, make_page

STAMP = "2023-10-20T08:22:12Z"


def pages(*sizes: int, last_token: str = ""):
    """Build pages of the given sizes with sequential ids and chained tokens."""
    result = []
    counter = 0
    for number, size in enumerate(sizes, start=1):
        entries = []
        for _ in range(size):
            counter += 1
            entries.append(make_entry(f"s{counter}", STAMP))
        token = f"T{number}" if number < len(sizes) else last_token
        result.append(make_page(entries, token))
    return result


class TestSearchResultsCreation:
    """Test SearchResults instantiation."""

    def test_create_with_query(self, page_source) -> None:
        source = page_source()
        results = SearchResults(source, "family:emotet")

        assert results.source is source
        assert results.query == "family:emotet"
        assert results.limit is None
        assert results.page_size == 200
        assert results._cached_results == []
        assert results._exhausted is False

    def test_nothing_fetched_on_creation(self, page_source) -> None:
        source = page_source(*pages(3))
        SearchResults(source, "family:emotet")

        assert source.calls == []

    def test_create_with_query_builder(self, page_source) -> None:
        results = SearchResults(page_source(), SearchQuery(family="emotet", score=10))

        assert results.query == "family:emotet score:10"

    def test_invalid_query_builder(self, page_source) -> None:
        with pytest.raises(PreconditionError):
            SearchResults(page_source(), SearchQuery())

    def test_empty_query(self, page_source) -> None:
        with pytest.raises(PreconditionError):
            SearchResults(page_source(), " ")

    def test_page_size_is_clamped(self, page_source) -> None:
        assert SearchResults(page_source(), "q", page_size=10000).page_size == 200
        assert SearchResults(page_source(), "q", page_size=0).page_size == 1

    def test_repr(self, page_source) -> None:
        results = SearchResults(page_source(), "family:emotet")

        assert "SearchResults" in repr(results)
        assert "fetched=0" in repr(results)


class TestSearchResultsIteration:
    """Test iterating through results."""

    def test_iterates_all_pages(self, page_source) -> None:
        source = page_source(*pages(2, 2, 1))
        results = SearchResults(source, "family:emotet")

        entries = list(results)

        assert [entry.id for entry in entries] == ["s1", "s2", "s3", "s4", "s5"]
        assert all(isinstance(entry, SearchResultEntry) for entry in entries)
        assert source.offsets == [None, "T1", "T2"]
        assert len(results) == 5

    def test_stops_on_empty_page(self, page_source) -> None:
        source = page_source(*pages(2, last_token="T9"))
        results = SearchResults(source, "family:emotet")

        assert len(list(results)) == 2
        assert len(source.calls) == 2

    def test_second_iteration_uses_cache(self, page_source) -> None:
        source = page_source(*pages(2, 1))
        results = SearchResults(source, "family:emotet")

        first = list(results)
        second = list(results)

        assert first == second
        assert len(source.calls) == 2

    def test_limit(self, page_source) -> None:
        source = page_source(*pages(2, 2, 2))
        results = SearchResults(source, "family:emotet", limit=3)

        assert [entry.id for entry in results] == ["s1", "s2", "s3"]
        assert len(source.calls) == 2

    def test_page_size_is_sent(self, page_source) -> None:
        source = page_source(*pages(1))
        list(SearchResults(source, "family:emotet", page_size=50))

        assert source.calls[0]["limit"] == 50


class TestSearchResultsIndexing:
    def test_fetches_only_what_is_needed(self, page_source) -> None:
        source = page_source(*pages(2, 2, 2))
        results = SearchResults(source, "family:emotet")

        assert results[2].id == "s3"
        assert len(source.calls) == 2

    def test_negative_index_fetches_everything(self, page_source) -> None:
        source = page_source(*pages(2, 1))
        results = SearchResults(source, "family:emotet")

        assert results[-1].id == "s3"

    def test_out_of_range(self, page_source) -> None:
        results = SearchResults(page_source(*pages(1)), "family:emotet")

        with pytest.raises(IndexError):
            results[5]


class TestSearchResultsPages:
    def test_pages(self, page_source) -> None:
        source = page_source(*pages(2, 1))
        results = SearchResults(source, "family:emotet")

        sizes = [len(page) for page in results.pages()]

        assert sizes == [2, 1]

    def test_pages_with_limit(self, page_source) -> None:
        source = page_source(*pages(2, 2, 2))
        results = SearchResults(source, "family:emotet", limit=3)

        sizes = [len(page) for page in results.pages()]

        assert sizes == [2, 1]
        assert len(source.calls) == 2
