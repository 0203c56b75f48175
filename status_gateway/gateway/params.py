"""Parameter objects per operation, lenient JSON decoding, and outbound path construction."""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import quote

RawParams = Optional[Union[bytes, str]]

P = TypeVar("P")


@dataclass(frozen=True)
class MachinesParams:
    """get_machines takes no parameters."""


@dataclass(frozen=True)
class SysinfoParams:
    machine_uuid: str = field(default="", metadata={"json": "MachineUuid"})
    limit: int = field(default=0, metadata={"json": "Limit"})


@dataclass(frozen=True)
class NetinfoParams:
    machine_uuid: str = field(default="", metadata={"json": "MachineUuid"})


@dataclass(frozen=True)
class PlannersParams:
    machine_uuid: str = field(default="", metadata={"json": "MachineUuid"})


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _accepts(default: Any, value: Any) -> bool:
    """Value matches the field's JSON type. int fields take integers only (no bool, no float)."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str)
    return True


def _lookup(data: Dict[str, Any], names: Tuple[str, ...]) -> Tuple[bool, Any]:
    """Find a key: exact wire name or attribute name first, then case-insensitive."""
    for name in names:
        if name in data:
            return True, data[name]
    lowered = {n.lower() for n in names}
    for key, value in data.items():
        if isinstance(key, str) and key.lower() in lowered:
            return True, value
    return False, None


def decode_params(cls: Type[P], raw: RawParams) -> Tuple[P, str]:
    """Decode raw JSON into cls. Never raises: fields that cannot be decoded keep their defaults.

    Returns (params, decode_error). decode_error is "" when the payload decoded cleanly; otherwise it
    describes what was ignored (invalid JSON, non-object payload, empty payload, wrong field types,
    integers outside int64).
    JSON null leaves every field at its default without an error; unknown keys are ignored.
    """
    cls_fields = fields(cls)
    if not cls_fields:
        return cls(), ""
    if raw is None or (isinstance(raw, (bytes, str)) and not raw.strip()):
        return cls(), "empty parameters"
    try:
        data = json.loads(raw)
    except (ValueError, TypeError) as e:
        return cls(), f"invalid JSON: {e}"
    if data is None:
        return cls(), ""
    if not isinstance(data, dict):
        return cls(), f"parameters must be a JSON object, got {_json_type_name(data)}"

    values: Dict[str, Any] = {}
    errors: List[str] = []
    for f in cls_fields:
        wire = f.metadata.get("json", f.name)
        found, value = _lookup(data, (wire, f.name))
        if not found or value is None:
            continue
        if not _accepts(f.default, value):
            errors.append(f"{wire}: expected {_json_type_name(f.default)}, got {_json_type_name(value)}")
            continue
        if isinstance(value, int) and not isinstance(value, bool) and not INT64_MIN <= value <= INT64_MAX:
            errors.append(f"{wire}: number {value} overflows int64")
            continue
        values[f.name] = value
    return cls(**values), "; ".join(errors)


def build_path(prefix: str, *segments: Any) -> str:
    """Join prefix with percent-encoded segments: build_path("/status/get_sysinfo", "abc-123", 42) -> "/status/get_sysinfo/abc-123/42"."""
    return prefix + "".join("/" + quote(str(s), safe="") for s in segments)
