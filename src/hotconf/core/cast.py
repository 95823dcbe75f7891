"""Best-effort value coercion used by the typed getters.

Every ``to_*`` function returns the zero value of its type when the input
cannot be converted; none of them raise.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

_TRUE = {"1", "t", "true", "y", "yes", "on"}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_SIZE_SUFFIXES = {
    "kb": 1 << 10,
    "k": 1 << 10,
    "mb": 1 << 20,
    "m": 1 << 20,
    "gb": 1 << 30,
    "g": 1 << 30,
    "b": 1,
}


def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float, datetime, date, timedelta)):
        return str(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE
    return False


def _parse_int(text: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return None
    # "8080.0" style values come out of some writers
    if re.fullmatch(r"[-+]?\d+\.0*", text):
        text = text.split(".", 1)[0]
    try:
        return int(text, 0)
    except ValueError:
        pass
    # base 0 rejects leading zeros such as "0800"
    if re.fullmatch(r"[-+]?\d+", text):
        return int(text, 10)
    return None


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        parsed = _parse_int(value)
        return parsed if parsed is not None else 0
    return 0


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def parse_duration(text: str) -> Optional[timedelta]:
    """Parse ``1h30m``, ``300ms``, ``-1.5s`` or a bare number of seconds."""
    text = text.strip()
    if not text:
        return None
    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    try:
        return timedelta(seconds=sign * float(text))
    except (ValueError, OverflowError):
        pass
    pos = 0
    seconds = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            return None
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(text) or pos == 0:
        return None
    return timedelta(seconds=sign * seconds)


def to_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        return timedelta(0)
    if isinstance(value, (int, float)):
        try:
            return timedelta(seconds=value)
        except (ValueError, OverflowError):
            return timedelta(0)
    if isinstance(value, str):
        parsed = parse_duration(value)
        return parsed if parsed is not None else timedelta(0)
    return timedelta(0)


def to_time(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError):
            return None
    return None


def parse_size_in_bytes(text: str) -> int:
    text = text.strip().lower()
    multiplier = 1
    for suffix, factor in _SIZE_SUFFIXES.items():
        if text.endswith(suffix):
            multiplier = factor
            text = text[: -len(suffix)].strip()
            break
    try:
        size = float(text) if text else 0.0
    except ValueError:
        return 0
    size *= multiplier
    if not math.isfinite(size) or size < 0:
        return 0
    return int(size)


def to_size_in_bytes(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    if isinstance(value, str):
        return parse_size_in_bytes(value)
    return 0


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple, set)):
        return list(value)
    if isinstance(value, str):
        return value.split()
    return []


def to_string_list(value: Any) -> List[str]:
    return [to_string(item) for item in _as_list(value)]


def to_int_list(value: Any) -> List[int]:
    return [to_int(item) for item in _as_list(value)]


def _as_mapping(value: Any) -> Mapping[Any, Any]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return {}
        if isinstance(decoded, dict):
            return decoded
    return {}


def to_string_map(value: Any) -> Dict[str, Any]:
    return {str(k): v for k, v in _as_mapping(value).items()}


def to_string_map_string(value: Any) -> Dict[str, str]:
    return {str(k): to_string(v) for k, v in _as_mapping(value).items()}


def to_string_map_string_list(value: Any) -> Dict[str, List[str]]:
    result: Dict[str, List[str]] = {}
    for k, v in _as_mapping(value).items():
        if isinstance(v, (list, tuple, set)):
            result[str(k)] = to_string_list(v)
        else:
            result[str(k)] = [to_string(v)]
    return result
