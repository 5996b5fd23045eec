"""Records of the sample overview (``overview.json``).

The overview flattens several report records into its own objects; those
records subclass the report record they extend, so a sample or target of the
overview carries every ``TargetDesc`` field as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ._base import Record, nested, nested_list, nested_map, number, string, strings
from .report import Extract, ReportTaskFailure, Signature, TargetDesc


@dataclass(frozen=True)
class OverviewIOCs(Record):
    urls: Tuple[str, ...] = strings("urls")
    domains: Tuple[str, ...] = strings("domains")
    ips: Tuple[str, ...] = strings("ips")


@dataclass(frozen=True)
class OverviewSample(TargetDesc):
    created: str = string("created")
    iocs: OverviewIOCs = nested(OverviewIOCs, "iocs")


@dataclass(frozen=True)
class TaskSummary(Record):
    sample: str = string("sample")
    kind: str = string("kind")
    name: str = string("name")
    status: str = string("status")
    ttp: Tuple[str, ...] = strings("ttp")
    tags: Tuple[str, ...] = strings("tags")
    score: int = number("score")
    target: str = string("target")
    backend: str = string("backend")
    resource: str = string("resource")
    platform: str = string("platform")
    task_name: str = string("task_name")
    failure: str = string("failure")
    queue_id: int = number("queue_id")
    pick: str = string("pick")


@dataclass(frozen=True)
class OverviewAnalysis(Record):
    score: int = number("score")
    family: Tuple[str, ...] = strings("family")
    tags: Tuple[str, ...] = strings("tags")


@dataclass(frozen=True)
class OverviewTarget(TargetDesc):
    tasks: Tuple[str, ...] = strings("tasks")
    tags: Tuple[str, ...] = strings("tags")
    families: Tuple[str, ...] = strings("family")
    signatures: Tuple[Signature, ...] = nested_list(Signature, "signatures")
    iocs: OverviewIOCs = nested(OverviewIOCs, "iocs")


@dataclass(frozen=True)
class OverviewExtracted(Extract):
    tasks: Tuple[str, ...] = strings("tasks")


@dataclass(frozen=True)
class TriageOverview(Record):
    """Summary of a sample across all of its tasks.

    ``tasks`` is keyed by task name in the document; the summaries are kept in
    document order and each carries its own ``name``.
    """

    version: str = string("version")
    sample: OverviewSample = nested(OverviewSample, "sample")
    tasks: Tuple[TaskSummary, ...] = nested_map(TaskSummary, "tasks")
    analysis: OverviewAnalysis = nested(OverviewAnalysis, "analysis")
    targets: Tuple[OverviewTarget, ...] = nested_list(OverviewTarget, "targets")
    errors: Tuple[ReportTaskFailure, ...] = nested_list(ReportTaskFailure, "errors")
    signatures: Tuple[Signature, ...] = nested_list(Signature, "signatures")
    extracted: Tuple[OverviewExtracted, ...] = nested_list(
        OverviewExtracted, "extracted"
    )

    def family_names(self) -> Tuple[str, ...]:
        """Families named by the analysis and by every target, first-seen order."""
        names = list(self.analysis.family)
        for target in self.targets:
            names.extend(target.families)
        return tuple(dict.fromkeys(name for name in names if name))
