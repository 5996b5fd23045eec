"""Records of a static analysis report (``reports/static``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ._base import Record, flag, nested, nested_list, number, string, strings


@dataclass(frozen=True)
class SampleWrapper(Record):
    sample: str = string("sample")
    kind: str = string("kind")
    size: int = number("size")
    target: str = string("target")


@dataclass(frozen=True)
class TriageFile(Record):
    """A file found in the submission, such as an archive member."""

    filename: str = string("filename")
    filesize: int = number("filesize")
    md5: str = string("md5")
    sha1: str = string("sha1")
    sha256: str = string("sha256")
    sha512: str = string("sha512")
    exts: Tuple[str, ...] = strings("exts")
    tags: Tuple[str, ...] = strings("tags")
    depth: int = number("depth")
    kind: str = string("kind")
    selected: bool = flag("selected")
    runas: str = string("runas")


@dataclass(frozen=True)
class StaticAnalysis(Record):
    reported: str = string("reported")
    score: int = number("score")
    tags: Tuple[str, ...] = strings("tags")


@dataclass(frozen=True)
class StaticIndicator(Record):
    yara_rule: str = string("yara_rule")


@dataclass(frozen=True)
class StaticSignature(Record):
    name: str = string("name")
    score: int = number("score")
    tags: Tuple[str, ...] = strings("tags")
    indicators: Tuple[StaticIndicator, ...] = nested_list(
        StaticIndicator, "indicators"
    )

    @property
    def all_tags(self) -> Tuple[str, ...]:
        """Tags plus the YARA rules of the indicators, without blanks or repeats."""
        candidates = self.tags + tuple(i.yara_rule for i in self.indicators)
        return tuple(dict.fromkeys(tag for tag in candidates if tag))


@dataclass(frozen=True)
class StaticReport(Record):
    version: str = string("version")
    sample: SampleWrapper = nested(SampleWrapper, "sample")
    files: Tuple[TriageFile, ...] = nested_list(TriageFile, "files")
    analysis: StaticAnalysis = nested(StaticAnalysis, "analysis")
    signatures: Tuple[StaticSignature, ...] = nested_list(
        StaticSignature, "signatures"
    )
    unpack_count: int = number("unpack_count")
    error_count: int = number("error_count")

    @property
    def target(self) -> str:
        return self.sample.target
