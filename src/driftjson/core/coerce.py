"""Best-effort conversions from stored leaf values to the type a caller asks for.

Every function here is total: unsupported sources (``None``, nested models,
arrays, anything unexpected) fall through to the target type's zero value.
Numeric text follows the usual float spellings, including ``inf``,
``infinity`` and ``nan`` in any case.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

_INT_TEXT = re.compile(r"[+-]?\d+")
_FLOAT_TEXT = re.compile(r"[+-]?((\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE)

_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


def to_string(raw: Any) -> str:
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return repr(raw)
    if isinstance(raw, Decimal):
        return str(raw)
    if isinstance(raw, str):
        return raw
    return ""


def to_int(raw: Any) -> int:
    if isinstance(raw, bool):
        return 1 if raw else 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    if isinstance(raw, Decimal):
        return int(raw) if raw.is_finite() else 0
    if isinstance(raw, str):
        if not _INT_TEXT.fullmatch(raw):
            return 0
        try:
            return int(raw)
        except ValueError:
            # digit count above sys.get_int_max_str_digits()
            return 0
    return 0


def to_float(raw: Any) -> float:
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, int):
        try:
            return float(raw)
        except OverflowError:
            return 0.0
    if isinstance(raw, float):
        return raw
    if isinstance(raw, Decimal):
        try:
            return float(raw)
        except (InvalidOperation, ValueError):
            return 0.0
    if isinstance(raw, str):
        return float(raw) if _FLOAT_TEXT.fullmatch(raw) else 0.0
    return 0.0


def to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        return raw != 0
    if isinstance(raw, float):
        return raw != 0.0
    if isinstance(raw, Decimal):
        return not raw.is_snan() and raw != 0
    if isinstance(raw, str):
        lowered = raw.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        return False
    return False
