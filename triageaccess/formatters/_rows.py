from typing import Any, Dict, Iterable, List

from ..records import SearchResultEntry


def entry_rows(entries: Iterable[SearchResultEntry]) -> List[Dict[str, Any]]:
    """Flatten search entries into rows for ``to_table`` and ``to_csv``."""
    return [
        {
            "id": entry.id,
            "kind": entry.kind,
            "filename": entry.filename,
            "private": entry.private,
            "submitted": entry.submitted,
            "completed": entry.completed,
            "tasks": " ".join(entry.task_ids),
        }
        for entry in entries
    ]
