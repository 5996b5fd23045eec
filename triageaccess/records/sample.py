"""Records describing submissions: samples, their events and upload results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ._base import Record, flag, nested_list, number, string, strings


@dataclass(frozen=True)
class Task(Record):
    id: str = string("id")
    status: str = string("status")
    target: str = string("target")


@dataclass(frozen=True)
class Sample(Record):
    """A submission (not the raw malware sample itself)."""

    id: str = string("id")
    status: str = string("status")
    kind: str = string("kind")
    filename: str = string("filename")
    url: str = string("url")
    private: bool = flag("private")
    tasks: Tuple[Task, ...] = nested_list(Task, "tasks")
    submitted: str = string("submitted")
    completed: str = string("completed")

    @property
    def target(self) -> str:
        """The file name for file submissions, the URL for anything else."""
        return self.filename if self.kind.lower() == "file" else self.url


@dataclass(frozen=True)
class Event(Record):
    id: str = string("id")
    status: str = string("status")
    target: str = string("target")
    pick: str = string("pick")


@dataclass(frozen=True)
class SampleEvents(Record):
    id: str = string("id")
    status: str = string("status")
    kind: str = string("kind")
    filename: str = string("filename")
    private: bool = flag("private")
    tasks: Tuple[Event, ...] = nested_list(Event, "tasks")
    submitted: str = string("submitted")
    completed: str = string("completed")


@dataclass(frozen=True)
class FileUploadResult(Record):
    id: str = string("id")
    status: str = string("status")
    kind: str = string("kind")
    filename: str = string("filename")
    private: bool = flag("private")
    submitted: str = string("submitted")


@dataclass(frozen=True)
class Profile(Record):
    """An analysis profile configured for the account."""

    id: str = string("id")
    name: str = string("name")
    tags: Tuple[str, ...] = strings("tags")
    network: str = string("network")
    timeout: int = number("timeout")
