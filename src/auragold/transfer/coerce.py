"""Best-effort coercion of untrusted JSON values.

All helpers are total: malformed input yields ``None``, never an exception.
Numeric strings are accepted so that values survive text round-trips.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Union


def as_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _fits_float(value: int) -> bool:
    try:
        float(value)
    except OverflowError:
        return False
    return True


def as_number(value: Any) -> Optional[Union[int, float]]:
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if _fits_float(value) else None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text or not text.isascii():
            return None
        try:
            whole = int(text)
        except ValueError:
            pass
        else:
            return whole if _fits_float(whole) else None
        try:
            parsed = float(text)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def as_plain_object(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def as_sequence(value: Any) -> Optional[List[Any]]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None
