"""
Selection Helpers
=================

Pure functions over selection lists and flag maps. None of them mutate
their inputs; each returns a fresh list or dict.
"""

import math
import re
from typing import Any, Dict, Hashable, List, TypeVar

T = TypeVar("T")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def toggle_item(item: T, items: List[T]) -> List[T]:
    """
    Add the item if no entry shares its id, otherwise remove that entry.

    Untouched entries keep their order; additions go at the end.
    """
    if any(existing.id == item.id for existing in items):
        return [existing for existing in items if existing.id != item.id]
    return [*items, item]


def parse_quantity(raw_value: Any) -> int:
    """
    Parse free-text quantity input.

    Leading digits win ("12 seats" -> 12, "3.9" -> 3). Anything that does
    not parse, and anything negative, is 0.
    """
    if raw_value is None or isinstance(raw_value, bool):
        return 0

    if isinstance(raw_value, (int, float)):
        if isinstance(raw_value, float) and not math.isfinite(raw_value):
            return 0
        return max(0, int(raw_value))

    match = _LEADING_INT.match(str(raw_value))
    if not match:
        return 0
    try:
        return max(0, int(match.group(1)))
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        return 0


def set_quantity(item_id: Hashable, raw_value: Any, quantities: Dict) -> Dict:
    """Return quantities with item_id set to the parsed, floored value."""
    return {**quantities, item_id: parse_quantity(raw_value)}


def toggle_with_global_reset(key: str, states: Dict[str, bool]) -> Dict[str, bool]:
    """
    Flip one flag and clear every other flag in the map.

    At most one flag can be true afterwards, across the whole map.
    """
    updated = {k: False for k in states}
    updated[key] = not states.get(key, False)
    return updated
