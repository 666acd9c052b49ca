"""Path Identifier Parsing — numeric ids become numbers, anything else passes through.

Invariants:
    - parse_record_id is PURE and total: never raises
    - A value parsing to zero is NOT converted (zero is not a valid store id)
    - Integral values become int, others float; non-numeric strings stay str

Design Decisions:
    - Tolerant parsing over 422 on non-numeric ids: the store decides whether
      a string id matches anything (integer and text primary keys both work)
"""

import math
import re

from roster_api.core.domain_types import RecordId


_NUMERIC = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_record_id(raw: str) -> RecordId:
    """Convert a path segment to a number when it is one, else return it unchanged."""
    text = raw.strip()
    if not _NUMERIC.match(text):
        return raw
    if _INTEGER.match(text):
        value: int | float = int(text)
    else:
        value = float(text)
        if math.isinf(value):
            return raw
        if value.is_integer():
            value = int(value)
    if value == 0:
        return raw
    return value
