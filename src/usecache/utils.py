"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Small serialization and clock helpers shared by cache modules.
"""

import json
import time
from typing import Any


def now_ms() -> int:
    return int(time.time() * 1000)


def serialize_value(value: Any) -> str | bytes:
    """
    Encode a value into the string form written to the store.

    Structured values and JSON literals are JSON encoded, bytes pass through,
    everything else is stringified.
    """
    if isinstance(value, (str, bytes)):
        return value
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def decode_text(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8")
    return raw


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
