"""
Quantity and units normalization for ingredient, cookware and timer fields.
"""

import math
import re
from typing import Optional, Union

Number = Union[int, float]

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def _to_number(text: str) -> Optional[Number]:
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def parse_quantity(quantity: Optional[str]) -> Optional[Union[Number, str]]:
    """
    Turn a raw quantity into a number where it reads as one.

    Returns None for a missing or blank quantity so the caller can apply its
    default. Fractions are divided out unless either side has a leading zero,
    anything else that isn't a plain number comes back as the trimmed text.
    """
    if quantity is None or not quantity.strip():
        return None

    quantity = quantity.strip()
    # Only the first two parts count: "1/2/3" reads as 1/2
    parts = quantity.split("/")
    left = parts[0]
    right = parts[1] if len(parts) > 1 else ""
    num_left = _to_number(left)
    num_right = _to_number(right) if right else None

    if right and num_right is None:
        return quantity

    if num_left is not None and not right:
        return num_left
    if (
        num_left is not None
        and num_right
        and not (left.strip().startswith("0") or right.strip().startswith("0"))
    ):
        result = num_left / num_right
        return int(result) if result.is_integer() else result

    return quantity


def parse_units(units: Optional[str]) -> Optional[str]:
    if units is None or not units.strip():
        return None
    return units.strip()
