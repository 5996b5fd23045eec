"""Helpers for loading the JSON documents used as test fixtures.

Each fixture is a trimmed copy of a document returned by the Triage API:

- `report_triage.json` - dynamic analysis report of one task
- `static_report.json` - static analysis report
- `overview.json` - sample overview across tasks
- `sample.json` - a single sample
- `search_page.json` - one page of search results
- `profiles.json` - analysis profiles of an account

Usage:
    from tests.unit.fixtures import load_fixture

    def test_report():
        report = TriageReport.parse(load_fixture("report_triage"))
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

FIXTURES_DIR = Path(__file__).parent


def fixture_path(name: str) -> Path:
    """Return the path of a fixture, with or without its ``.json`` extension.

    Raises:
        FileNotFoundError: If the fixture doesn't exist.
    """
    if not name.endswith(".json"):
        name = f"{name}.json"
    path = FIXTURES_DIR / name
    if not path.is_file():
        available = sorted(p.stem for p in FIXTURES_DIR.glob("*.json"))
        raise FileNotFoundError(f"Fixture {name!r} not found. Available: {available}")
    return path


def load_fixture(name: str) -> bytes:
    """Load a fixture as the raw bytes an HTTP response would carry."""
    return fixture_path(name).read_bytes()


def load_fixture_json(name: str) -> Any:
    """Load a fixture as a parsed JSON tree."""
    with fixture_path(name).open(encoding="utf-8") as f:
        return json.load(f)


def make_entry(entry_id: str, completed: str, **extra: Any) -> Dict[str, Any]:
    """Build a search result entry as the service returns it."""
    entry = {
        "id": entry_id,
        "kind": "file",
        "filename": f"{entry_id}.exe",
        "private": False,
        "tasks": [{"id": f"{entry_id}-behavioral1"}],
        "submitted": completed,
        "completed": completed,
    }
    entry.update(extra)
    return entry


def make_page(entries: Sequence[Dict[str, Any]], next_offset: str = "") -> bytes:
    """Build a raw search page; ``next`` is left out when *next_offset* is empty."""
    document: Dict[str, Any] = {"data": list(entries)}
    if next_offset:
        document["next"] = next_offset
    return json.dumps(document).encode("utf-8")


class FakePageSource:
    """Page source serving canned pages and recording every call.

    Once the canned pages run out every further call gets an empty page.
    """

    def __init__(self, pages: Sequence[bytes] = ()) -> None:
        self.pages: List[bytes] = list(pages)
        self.calls: List[Dict[str, Any]] = []

    def fetch_page(self, query: str, offset: Optional[str], limit: int) -> bytes:
        self.calls.append({"query": query, "offset": offset, "limit": limit})
        if self.pages:
            return self.pages.pop(0)
        return make_page([])

    @property
    def offsets(self) -> List[Optional[str]]:
        return [call["offset"] for call in self.calls]
