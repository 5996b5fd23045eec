"""Null-safe mapping of JSON documents onto immutable records.

Every record is a frozen dataclass whose fields are declared with the helpers
in this module. Each helper names the JSON key the field is read from and the
rule used to read it, so a record class is nothing more than a list of fields:

    @dataclass(frozen=True)
    class Task(Record):
        id: str = string("id")
        status: str = string("status")
        retries: int = number("retries")

The rules never fail. A missing key, a ``null`` value or a value of the wrong
type resolves to the field's default: ``""`` for strings, ``-1`` for numbers,
``False`` for flags, an empty tuple for arrays and the nested type's
``empty()`` instance for nested records. Only a top-level document that is not
JSON at all raises, with ``MalformedInputError``.

Because no field is ever absent, presence is reported once per record through
``is_empty``: it is ``True`` for records built from an absent or non-object
node and ``False`` for records built from a JSON object, however sparse.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from ..exceptions import MalformedInputError

MISSING_NUMBER = -1
"""Sentinel for numbers that were absent or not numeric."""

_KEY = "json_key"
_EXTRACT = "json_extract"

R = TypeVar("R", bound="Record")

Document = Union[None, str, bytes, bytearray, Mapping[str, Any], list]
Extractor = Callable[[Any], Any]


# =============================================================================
# Scalar rules
# =============================================================================


def opt_string(value: Any) -> str:
    """Read a string; numbers are rendered, everything else is ``""``."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(value)
    return ""


def opt_number(value: Any) -> int:
    """Read an integer; floats truncate and numeric strings are parsed."""
    if isinstance(value, bool):
        return MISSING_NUMBER
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return MISSING_NUMBER
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return MISSING_NUMBER


def opt_flag(value: Any) -> bool:
    """Read a boolean; the strings ``"true"``/``"false"`` are accepted too."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def opt_strings(value: Any) -> Tuple[str, ...]:
    """Read an array of strings, element by element, keeping order and duplicates."""
    if not isinstance(value, list):
        return ()
    return tuple(opt_string(item) for item in value)


# =============================================================================
# Field declarations
# =============================================================================


def converted(key: str, extract: Extractor, default: Any = "") -> Any:
    """Declare a field read from *key* with a custom *extract* rule."""
    return field(default=default, metadata={_KEY: key, _EXTRACT: extract})


def string(key: str) -> Any:
    return converted(key, opt_string, "")


def number(key: str) -> Any:
    return converted(key, opt_number, MISSING_NUMBER)


def flag(key: str) -> Any:
    return converted(key, opt_flag, False)


def strings(key: str) -> Any:
    return converted(key, opt_strings, ())


def nested(cls: Type[R], key: str) -> Any:
    """Declare a nested record read from the JSON object at *key*."""
    return field(
        default_factory=cls.empty,
        metadata={_KEY: key, _EXTRACT: cls.from_json},
    )


def nested_list(cls: Type[R], key: str) -> Any:
    """Declare an array of nested records read from the JSON array at *key*."""

    def extract(value: Any) -> Tuple[R, ...]:
        if not isinstance(value, list):
            return ()
        return tuple(cls.from_json(item) for item in value)

    return converted(key, extract, ())


def nested_map(cls: Type[R], key: str) -> Any:
    """Declare nested records read from the values of the JSON object at *key*.

    Values keep the order in which they appear in the document.
    """

    def extract(value: Any) -> Tuple[R, ...]:
        if not isinstance(value, Mapping):
            return ()
        return tuple(cls.from_json(item) for item in value.values())

    return converted(key, extract, ())


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Record:
    """Base class of every deserialized object.

    Attributes:
        is_empty: ``True`` when the record stands in for an absent node.
    """

    is_empty: bool = field(default=True, repr=False)

    @classmethod
    def empty(cls: Type[R]) -> R:
        """Return the canonical empty instance, with every field at its default."""
        return cls()

    @classmethod
    def from_json(cls: Type[R], node: Any) -> R:
        """Build a record from an already-parsed JSON node.

        Anything other than a JSON object yields ``cls.empty()``.
        """
        if not isinstance(node, Mapping):
            return cls.empty()
        values: Dict[str, Any] = {}
        for f in fields(cls):
            extract = f.metadata.get(_EXTRACT)
            if extract is None:
                continue
            values[f.name] = extract(node.get(f.metadata[_KEY]))
        return cls(is_empty=False, **values)

    @classmethod
    def parse(cls: Type[R], document: Document) -> R:
        """Deserialize *document*; see :func:`parse`."""
        return parse(cls, document)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record, recursively, into plain JSON-compatible data."""
        return _plain(self)


def _plain(value: Any) -> Any:
    if isinstance(value, Record):
        return {
            f.name: _plain(getattr(value, f.name))
            for f in fields(value)
            if f.name != "is_empty"
        }
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


def load_document(document: Document) -> Any:
    """Turn a string or bytes document into a JSON tree; trees pass through.

    Raises:
        MalformedInputError: The document is not valid JSON, or cannot be
            decoded (oversized integers, nesting too deep).
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = bytes(document).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"Document is not UTF-8 text: {exc}") from exc
    if isinstance(document, str):
        try:
            return json.loads(document)
        except (ValueError, RecursionError) as exc:
            raise MalformedInputError(f"Document is not valid JSON: {exc}") from exc
    return document


def parse(cls: Type[R], document: Document) -> R:
    """Deserialize *document* into an instance of *cls*.

    Parameters:
        cls: The record type to produce.
        document: ``None``, JSON text (``str`` or ``bytes``) or a parsed tree.

    Returns:
        ``cls.empty()`` for ``None`` (nothing is parsed), otherwise a record
        with every field populated.

    Raises:
        MalformedInputError: *document* is text that cannot be decoded as JSON.
    """
    if document is None:
        return cls.empty()
    return cls.from_json(load_document(document))


def parse_list(
    cls: Type[R], document: Document, key: Optional[str] = "data"
) -> Tuple[R, ...]:
    """Deserialize an array of records, by default from a ``{"data": [...]}`` envelope.

    Pass ``key=None`` when the document itself is the array.
    """
    if document is None:
        return ()
    node = load_document(document)
    if key is not None:
        node = node.get(key) if isinstance(node, Mapping) else None
    if not isinstance(node, list):
        return ()
    return tuple(cls.from_json(item) for item in node)
