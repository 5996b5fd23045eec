"""Records of one page of search results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ._base import Record, flag, nested_list, string


@dataclass(frozen=True)
class TaskId(Record):
    id: str = string("id")


@dataclass(frozen=True)
class SearchResultEntry(Record):
    """A sample matched by a search query.

    ``tasks`` keeps the task objects exactly as listed, duplicates included;
    ``task_ids`` is the distinct ids in first-seen order.
    """

    id: str = string("id")
    kind: str = string("kind")
    filename: str = string("filename")
    private: bool = flag("private")
    submitted: str = string("submitted")
    completed: str = string("completed")
    tasks: Tuple[TaskId, ...] = nested_list(TaskId, "tasks")

    @property
    def task_ids(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(task.id for task in self.tasks))


@dataclass(frozen=True)
class SearchPage(Record):
    """Entries of one page plus the token that requests the next page."""

    entries: Tuple[SearchResultEntry, ...] = nested_list(SearchResultEntry, "data")
    next_offset: str = string("next")

    @property
    def exhausted(self) -> bool:
        """True when the service returned no entries."""
        return not self.entries

    def __len__(self) -> int:
        return len(self.entries)
