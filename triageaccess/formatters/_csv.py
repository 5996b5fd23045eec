import csv
import io
from typing import Any, Mapping, Optional, Sequence


def to_csv(
    rows: Sequence[Mapping[str, Any]], *, columns: Optional[Sequence[str]] = None
) -> str:
    """Render dict rows as CSV text, one header line first.

    The columns default to the keys of the first row; keys outside the
    columns are dropped and missing ones are left blank.
    """
    if not rows:
        return ""
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=list(columns if columns is not None else rows[0]),
        restval="",
        extrasaction="ignore",
        lineterminator="\n",
    )
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()
