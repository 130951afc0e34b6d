"""
Todos API: Value Coercion Helpers
==================================

What:  Total parsing functions for the loosely typed values clients send.
How:   Each helper accepts any JSON-ish value and never raises; failure is
       signalled with None (integers) or falls out of the truthiness rules
       (booleans).
Who:   Used by the TodoStore for body fields and by routes for path/query ids.

Rules:
    parse_int   "12" → 12, "12abc" → 12, " -3" → -3, 4.9 → 4
                "abc" → None, "" → None, True → None, None → None
    to_bool     False, None, 0, 0.0, NaN, ""      → False
                everything else ("false", [], {}) → True
"""

import math
import re
from typing import Any, Optional

# Optional whitespace, optional sign, then at least one ASCII digit. Anything after
# the digits is ignored.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer id/userId/limit, returning None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def to_bool(value: Any) -> bool:
    """Coerce a `completed` value to a boolean."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True
