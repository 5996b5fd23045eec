"""Render records and search results as JSON, tables or CSV."""

from ._csv import to_csv
from ._json import to_json
from ._rows import entry_rows
from ._table import to_table

__all__ = ["entry_rows", "to_csv", "to_json", "to_table"]
