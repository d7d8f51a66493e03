"""
Plan-Tier Checkbox Matrix
=========================

Standard (non-customizable) packages show add-ons against three plan
tiers. Cells are keyed "{tier}-{addOnId}". Toggling any cell clears every
other cell in the whole grid, so at most one cell is ever selected.
"""

from enum import Enum
from typing import Dict, Iterable

from configurator.models.catalog import AddOn
from configurator.pricing.selection import toggle_with_global_reset


class PlanTier(str, Enum):
    BUSINESS = "business"
    STARTUP = "startup"
    PERSONAL = "personal"


def matrix_key(tier: PlanTier | str, add_on_id: int) -> str:
    return f"{PlanTier(tier).value}-{add_on_id}"


def build_matrix(add_ons: Iterable[AddOn]) -> Dict[str, bool]:
    """All cells for the given add-ons, cleared."""
    return {
        matrix_key(tier, add_on.id): False
        for add_on in add_ons
        for tier in PlanTier
    }


def toggle_cell(matrix: Dict[str, bool], key: str) -> Dict[str, bool]:
    """Toggle a cell under the global reset. Keys not in the grid are ignored."""
    if key not in matrix:
        return matrix
    return toggle_with_global_reset(key, matrix)


def any_cell_selected(matrix: Dict[str, bool]) -> bool:
    return any(matrix.values())


def selected_cell(matrix: Dict[str, bool]) -> str | None:
    for key, checked in matrix.items():
        if checked:
            return key
    return None
