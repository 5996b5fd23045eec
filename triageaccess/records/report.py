"""Records of a dynamic analysis report (``report_triage.json``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from ._base import (
    Record,
    converted,
    flag,
    nested,
    nested_list,
    number,
    opt_string,
    string,
    strings,
)


def _command_line(value: Any) -> str:
    # Windows tasks report the command line as a string, Linux tasks as argv.
    if isinstance(value, list):
        return " ".join(opt_string(part) for part in value)
    return opt_string(value)


@dataclass(frozen=True)
class TargetDesc(Record):
    """Description of an analysis target: the submitted sample or a task."""

    id: str = string("id")
    score: int = number("score")
    submitted: str = string("submitted")
    completed: str = string("completed")
    target: str = string("target")
    pick: str = string("pick")
    type: str = string("type")
    size: int = number("size")
    md5: str = string("md5")
    sha1: str = string("sha1")
    sha256: str = string("sha256")
    sha512: str = string("sha512")
    ssdeep: str = string("ssdeep")
    filetype: str = string("filetype")
    static_tags: Tuple[str, ...] = strings("static_tags")
    family: str = string("family")


@dataclass(frozen=True)
class ReportTaskFailure(Record):
    task: str = string("task")
    backend: str = string("backend")
    reason: str = string("reason")


@dataclass(frozen=True)
class ReportAnalysisInfo(Record):
    score: int = number("score")
    family: str = string("family")
    tags: Tuple[str, ...] = strings("tags")
    ttp: Tuple[str, ...] = strings("ttp")
    features: Tuple[str, ...] = strings("features")
    submitted: str = string("submitted")
    reported: str = string("reported")
    max_time_network: int = number("max_time_network")
    max_time_kernel: int = number("max_time_kernel")
    backend: str = string("backend")
    resource: str = string("resource")
    resource_tags: Tuple[str, ...] = strings("resource_tags")
    platform: str = string("platform")


@dataclass(frozen=True)
class Process(Record):
    """A process observed during the analysis.

    ``cmd`` is always a string; argv-style command lines are joined by spaces.
    """

    procid: int = number("procid")
    procid_parent: int = number("procid_parent")
    pid: int = number("pid")
    ppid: int = number("ppid")
    cmd: str = converted("cmd", _command_line)
    image: str = string("image")
    orig: bool = flag("orig")
    system: bool = flag("-")
    started: int = number("started")
    terminated: int = number("terminated")


@dataclass(frozen=True)
class Indicator(Record):
    ioc: str = string("ioc")
    description: str = string("description")
    at: int = number("at")
    pid: int = number("pid")
    procid: int = number("procid")
    pid_target: int = number("pid_target")
    procid_target: int = number("procid_target")
    flow: int = number("flow")
    dump_file: str = string("dump_file")
    resource: str = string("resource")
    yara_rule: str = string("yara_rule")


@dataclass(frozen=True)
class Signature(Record):
    label: str = string("label")
    name: str = string("name")
    score: int = number("score")
    ttp: Tuple[str, ...] = strings("ttp")
    tags: Tuple[str, ...] = strings("tags")
    indicators: Tuple[Indicator, ...] = nested_list(Indicator, "indicators")
    yara_rule: str = string("yara_rule")
    desc: str = string("desc")
    url: str = string("url")


@dataclass(frozen=True)
class NetworkFlow(Record):
    id: int = number("id")
    src: str = string("src")
    dst: str = string("dst")
    proto: str = string("proto")
    pid: int = number("pid")
    procid: int = number("procid")
    first_seen: int = number("first_seen")
    last_seen: int = number("last_seen")
    rx_bytes: int = number("rx_bytes")
    rx_packets: int = number("rx_packets")
    tx_bytes: int = number("tx_bytes")
    tx_packets: int = number("tx_packets")
    domain: str = string("domain")
    tls_ja3: str = string("tls_ja3")
    sni: str = string("sni")
    country: str = string("country")
    as_num: str = string("as_num")
    as_org: str = string("as_org")


@dataclass(frozen=True)
class NetworkDomainRequest(Record):
    domains: Tuple[str, ...] = strings("domains")


@dataclass(frozen=True)
class NetworkDomainResponse(Record):
    domains: Tuple[str, ...] = strings("domains")
    ip: Tuple[str, ...] = strings("ip")


@dataclass(frozen=True)
class NetworkWebRequest(Record):
    method: str = string("method")
    url: str = string("url")
    headers: Tuple[str, ...] = strings("headers")


@dataclass(frozen=True)
class NetworkWebResponse(Record):
    status: str = string("status")
    headers: Tuple[str, ...] = strings("headers")


@dataclass(frozen=True)
class NetworkRequest(Record):
    flow: int = number("flow")
    at: int = number("at")
    dns_request: NetworkDomainRequest = nested(NetworkDomainRequest, "dns_request")
    dns_response: NetworkDomainResponse = nested(NetworkDomainResponse, "dns_response")
    http_request: NetworkWebRequest = nested(NetworkWebRequest, "http_request")
    http_response: NetworkWebResponse = nested(NetworkWebResponse, "http_response")


@dataclass(frozen=True)
class NetworkReport(Record):
    flows: Tuple[NetworkFlow, ...] = nested_list(NetworkFlow, "flows")
    requests: Tuple[NetworkRequest, ...] = nested_list(NetworkRequest, "requests")


@dataclass(frozen=True)
class Dump(Record):
    at: int = number("at")
    pid: int = number("pid")
    procid: int = number("procid")
    path: str = string("path")
    name: str = string("name")
    kind: str = string("kind")
    addr: int = number("addr")
    length: int = number("length")


@dataclass(frozen=True)
class Key(Record):
    kind: str = string("kind")
    key: str = string("key")
    value: str = string("value")


@dataclass(frozen=True)
class Credentials(Record):
    flow: int = number("flow")
    protocol: str = string("protocol")
    host: str = string("host")
    port: int = number("port")
    username: str = string("username")
    password: str = string("password")


@dataclass(frozen=True)
class Config(Record):
    """Malware configuration extracted by a family-specific parser."""

    family: str = string("family")
    tags: Tuple[str, ...] = strings("tags")
    rule: str = string("rule")
    c2: Tuple[str, ...] = strings("c2")
    decoy: Tuple[str, ...] = strings("decoy")
    version: str = string("version")
    botnet: str = string("botnet")
    campaign: str = string("campaign")
    mutex: Tuple[str, ...] = strings("mutex")
    dns: Tuple[str, ...] = strings("dns")
    keys: Tuple[Key, ...] = nested_list(Key, "keys")
    webinject: Tuple[str, ...] = strings("webinject")
    command_lines: Tuple[str, ...] = strings("command_lines")
    listen_addr: str = string("listen_addr")
    listen_port: int = number("listen_port")
    listen_for: Tuple[str, ...] = strings("listen_for")
    shellcode: Tuple[str, ...] = strings("shellcode")
    extracted_pe: Tuple[str, ...] = strings("extracted_pe")


@dataclass(frozen=True)
class Ransom(Record):
    family: str = string("family")
    target: str = string("target")
    emails: Tuple[str, ...] = strings("emails")
    wallets: Tuple[str, ...] = strings("wallets")
    urls: Tuple[str, ...] = strings("urls")
    note: str = string("note")


@dataclass(frozen=True)
class DropperURL(Record):
    type: str = string("type")
    url: str = string("url")


@dataclass(frozen=True)
class Dropper(Record):
    family: str = string("family")
    language: str = string("language")
    source: str = string("source")
    urls: Tuple[DropperURL, ...] = nested_list(DropperURL, "urls")


@dataclass(frozen=True)
class Extract(Record):
    """Something extracted from a dump: a config, a ransom note or a dropper."""

    dumped_file: str = string("dumped_file")
    resource: str = string("resource")
    config: Config = nested(Config, "config")
    path: str = string("path")
    ransom_note: Ransom = nested(Ransom, "ransom_note")
    dropper: Dropper = nested(Dropper, "dropper")
    credentials: Credentials = nested(Credentials, "credentials")


@dataclass(frozen=True)
class TriageReport(Record):
    """The dynamic analysis report of one task of a sample.

    ``task_id`` is not part of the document; the client fills it in with the
    task the report was requested for.
    """

    version: str = string("version")
    task_id: str = field(default="")
    sample: TargetDesc = nested(TargetDesc, "sample")
    task: TargetDesc = nested(TargetDesc, "task")
    errors: Tuple[ReportTaskFailure, ...] = nested_list(ReportTaskFailure, "errors")
    analysis: ReportAnalysisInfo = nested(ReportAnalysisInfo, "analysis")
    processes: Tuple[Process, ...] = nested_list(Process, "processes")
    signatures: Tuple[Signature, ...] = nested_list(Signature, "signatures")
    network: NetworkReport = nested(NetworkReport, "network")
    dumped: Tuple[Dump, ...] = nested_list(Dump, "dumped")
    extracted: Tuple[Extract, ...] = nested_list(Extract, "extracted")
