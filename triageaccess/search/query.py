"""Query builder for the Triage search syntax.

A Triage query is a space separated list of ``filter:value`` terms, for
example ``family:emotet tag:loader score:10``.
"""

import re
from copy import deepcopy
from inspect import getmembers, ismethod
from typing import Any, List, Tuple

from typing_extensions import Self

from .validation import ValidationResult

_HASH_LENGTHS = {"md5": 32, "sha1": 40, "sha256": 64}
_HEX = re.compile(r"^[0-9a-fA-F]+$")


def _quote(value: str) -> str:
    if re.search(r"\s", value):
        return '"' + value.replace('"', '\\"') + '"'
    return value


class SearchQuery:
    """Build a search query with method chaining or named parameters.

    Example - Method chaining:
        >>> query = SearchQuery().family("emotet").tag("loader")
        >>> query.to_query()
        'family:emotet tag:loader'

    Example - Named parameters:
        >>> SearchQuery(family="emotet", score=10).to_query()
        'family:emotet score:10'
    """

    __module__ = "triageaccess.search"

    def __init__(self, **kwargs: Any) -> None:
        self._terms: List[Tuple[str, str]] = []
        if kwargs:
            self.parameters(**kwargs)

    def parameters(self, **kwargs: Any) -> Self:
        """Apply filters as keyword arguments.

        The keyword needs to match the name of a filter method; tuple values are
        unpacked into the method's arguments.

        Raises:
            ValueError: If a keyword doesn't match a filter.
        """
        methods = dict(getmembers(self, predicate=ismethod))

        for key, val in kwargs.items():
            if key not in methods or key.startswith("_") or key in _NOT_FILTERS:
                raise ValueError(f"Unknown parameter: {key}")

            if isinstance(val, tuple):
                methods[key](*val)
            else:
                methods[key](val)

        return self

    def _add(self, name: str, value: str) -> Self:
        if not isinstance(value, str):
            raise TypeError(f"{name} must be of type str")
        self._terms.append((name, value.strip()))
        return self

    def family(self, family: str) -> Self:
        """Match samples attributed to a malware family."""
        return self._add("family", family)

    def tag(self, tag: str) -> Self:
        return self._add("tag", tag)

    def score(self, score: int) -> Self:
        """Match samples with this analysis score (0 to 10)."""
        if isinstance(score, bool) or not isinstance(score, int):
            raise TypeError("score must be of type int")
        return self._add("score", str(score))

    def kind(self, kind: str) -> Self:
        """Match the kind of submission, e.g. ``file`` or ``url``."""
        return self._add("kind", kind)

    def md5(self, digest: str) -> Self:
        return self._add("md5", digest)

    def sha1(self, digest: str) -> Self:
        return self._add("sha1", digest)

    def sha256(self, digest: str) -> Self:
        return self._add("sha256", digest)

    def url(self, url: str) -> Self:
        return self._add("url", url)

    def domain(self, domain: str) -> Self:
        return self._add("domain", domain)

    def ip(self, ip: str) -> Self:
        return self._add("ip", ip)

    def filename(self, filename: str) -> Self:
        return self._add("filename", filename)

    def custom(self, text: str) -> Self:
        """Append raw query text, passed through untouched."""
        return self._add("", text)

    def copy(self) -> Self:
        return deepcopy(self)

    def validate(self) -> ValidationResult:
        """Check the terms collected so far.

        Returns:
            A ValidationResult; an empty query is never valid.
        """
        result = ValidationResult()
        if not any(value for _, value in self._terms):
            result.add_error("query", "must contain at least one filter")
        for name, value in self._terms:
            if name and not value:
                result.add_error(name, "must not be empty", value)
            elif name == "score" and not 0 <= int(value) <= 10:
                result.add_error(name, "must be between 0 and 10", int(value))
            elif name in _HASH_LENGTHS and (
                len(value) != _HASH_LENGTHS[name] or not _HEX.match(value)
            ):
                result.add_error(
                    name, f"must be {_HASH_LENGTHS[name]} hexadecimal characters", value
                )
        return result

    def to_query(self) -> str:
        """Render the query text sent to the search endpoint."""
        parts = []
        for name, value in self._terms:
            if not value:
                continue
            parts.append(value if not name else f"{name}:{_quote(value)}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_query()

    def __repr__(self) -> str:
        return f"SearchQuery({self.to_query()!r})"


_NOT_FILTERS = {"parameters", "copy", "validate", "to_query"}
