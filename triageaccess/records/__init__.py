"""Null-safe records deserialized from Triage JSON documents.

Every record has all of its fields populated, whatever the document left out;
``Record.is_empty`` tells whether the record stands in for an absent node.
"""

from triageaccess.records._base import (
    MISSING_NUMBER,
    Record,
    load_document,
    parse,
    parse_list,
)
from triageaccess.records.overview import (
    OverviewAnalysis,
    OverviewExtracted,
    OverviewIOCs,
    OverviewSample,
    OverviewTarget,
    TaskSummary,
    TriageOverview,
)
from triageaccess.records.report import (
    Config,
    Credentials,
    Dropper,
    DropperURL,
    Dump,
    Extract,
    Indicator,
    Key,
    NetworkDomainRequest,
    NetworkDomainResponse,
    NetworkFlow,
    NetworkReport,
    NetworkRequest,
    NetworkWebRequest,
    NetworkWebResponse,
    Process,
    Ransom,
    ReportAnalysisInfo,
    ReportTaskFailure,
    Signature,
    TargetDesc,
    TriageReport,
)
from triageaccess.records.sample import (
    Event,
    FileUploadResult,
    Profile,
    Sample,
    SampleEvents,
    Task,
)
from triageaccess.records.search import SearchPage, SearchResultEntry, TaskId
from triageaccess.records.static import (
    SampleWrapper,
    StaticAnalysis,
    StaticIndicator,
    StaticReport,
    StaticSignature,
    TriageFile,
)

__all__ = [
    # deserialization machinery
    "MISSING_NUMBER",
    "Record",
    "load_document",
    "parse",
    "parse_list",
    # dynamic report
    "Config",
    "Credentials",
    "Dropper",
    "DropperURL",
    "Dump",
    "Extract",
    "Indicator",
    "Key",
    "NetworkDomainRequest",
    "NetworkDomainResponse",
    "NetworkFlow",
    "NetworkReport",
    "NetworkRequest",
    "NetworkWebRequest",
    "NetworkWebResponse",
    "Process",
    "Ransom",
    "ReportAnalysisInfo",
    "ReportTaskFailure",
    "Signature",
    "TargetDesc",
    "TriageReport",
    # static report
    "SampleWrapper",
    "StaticAnalysis",
    "StaticIndicator",
    "StaticReport",
    "StaticSignature",
    "TriageFile",
    # overview
    "OverviewAnalysis",
    "OverviewExtracted",
    "OverviewIOCs",
    "OverviewSample",
    "OverviewTarget",
    "TaskSummary",
    "TriageOverview",
    # samples
    "Event",
    "FileUploadResult",
    "Profile",
    "Sample",
    "SampleEvents",
    "Task",
    # search
    "SearchPage",
    "SearchResultEntry",
    "TaskId",
]
