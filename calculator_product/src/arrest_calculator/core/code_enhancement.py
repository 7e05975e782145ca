"""Code enhancement ("Streets") eligibility."""

from __future__ import annotations

from typing import Sequence

from .types import ChargeDefinition, ChargeSelection

STREETS = "STREETS"


def is_streets_charge(charge: ChargeDefinition | None) -> bool:
    return charge is not None and charge.code_enhancement == STREETS


def has_enough_count(selection: ChargeSelection | None, charge: ChargeDefinition | None) -> bool:
    threshold = charge.code_enhancement_min_count if charge else None
    if not threshold:
        return True
    if selection is None or not selection.offense_slot:
        return False
    try:
        return int(selection.offense_slot) >= threshold
    except ValueError:
        return False


def is_enhancement_eligible(
    selections: Sequence[ChargeSelection | None],
    resolved_definitions: Sequence[ChargeDefinition | None],
) -> bool:
    """True if any selection, paired by index with its definition, qualifies.

    A pair qualifies when the definition is tagged STREETS and the selection's
    offense slot reaches the definition's minimum count, if it has one.
    """
    for index, charge in enumerate(resolved_definitions):
        selection = selections[index] if index < len(selections) else None
        if is_streets_charge(charge) and has_enough_count(selection, charge):
            return True
    return False
