import json
from dataclasses import asdict, is_dataclass
from typing import Any

from ..records import Record


def _default(obj: Any) -> Any:
    if isinstance(obj, Record):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return str(obj)


def to_json(obj: Any, *, indent: int = 2) -> str:
    """Serialize *obj*, records included, to a pretty‑printed JSON string."""
    if isinstance(obj, Record):
        obj = obj.to_dict()
    return json.dumps(obj, default=_default, indent=indent)
