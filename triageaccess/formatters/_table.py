from typing import Any, Mapping, Optional, Sequence

from tabulate import tabulate


def to_table(
    rows: Sequence[Mapping[str, Any]], *, headers: Optional[Sequence[str]] = None
) -> str:
    """Render dict rows as a GitHub style table using ``tabulate``.

    Without *headers* the keys of the rows become the column names.
    """
    if not rows:
        return ""
    if headers is None:
        return tabulate(rows, headers="keys", tablefmt="github")
    return tabulate(
        [[row.get(name, "") for name in headers] for row in rows],
        headers=list(headers),
        tablefmt="github",
    )
