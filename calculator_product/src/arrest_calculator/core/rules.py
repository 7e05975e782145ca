"""Deterministic charge lookup and aggregation rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from .types import (
    Addition,
    BailFlags,
    BailMode,
    BailStatus,
    ByCategory,
    ByOffense,
    ChargeDefinition,
    ChargeSelection,
    Direct,
    ZERO_DURATION,
)

T = TypeVar("T")


@dataclass(slots=True)
class CapDecision:
    value: float
    capped: bool


@dataclass(slots=True)
class BailDecision:
    auto: BailMode | None
    cost: float


def validate_input(selections: Any, is_parole_violator: Any) -> list[str]:
    errors: list[str] = []

    if not isinstance(selections, (list, tuple)):
        errors.append("selections must be a list of ChargeSelection")
    else:
        for index, selection in enumerate(selections):
            if not isinstance(selection, ChargeSelection):
                errors.append(f"selections[{index}] must be a ChargeSelection")

    if not isinstance(is_parole_violator, bool):
        errors.append("is_parole_violator must be a boolean")

    return errors


def resolve_lookup(
    lookup: Direct[T] | ByCategory[T] | ByOffense[T],
    category: str | None,
    offense: str | None,
    default: T,
) -> T:
    if isinstance(lookup, Direct):
        return lookup.value
    if isinstance(lookup, ByCategory):
        if not category:
            return default
        return lookup.values.get(category, default)
    if not offense:
        return default
    return lookup.values.get(offense, default)


def drug_category(charge: ChargeDefinition, selection: ChargeSelection) -> str | None:
    """The selected category, only when it governs lookups for this charge."""
    if charge.is_drug_variant and selection.drug_category_key:
        return selection.drug_category_key
    return None


def resolve_times(charge: ChargeDefinition, selection: ChargeSelection) -> tuple[float, float]:
    category = drug_category(charge, selection)
    min_time = resolve_lookup(charge.time, category, None, ZERO_DURATION).minutes
    max_time = resolve_lookup(charge.max_time, category, None, ZERO_DURATION).minutes
    if max_time < min_time:
        max_time = min_time
    return min_time, max_time


def resolve_fine(charge: ChargeDefinition, selection: ChargeSelection) -> float:
    return resolve_lookup(
        charge.fine, drug_category(charge, selection), selection.offense_slot, 0
    )


def resolve_points(charge: ChargeDefinition, selection: ChargeSelection) -> float:
    if charge.is_drug_variant or not selection.class_letter:
        return 0
    return charge.points.get(selection.class_letter, 0)


def resolve_offense_days(table: dict[str, float], selection: ChargeSelection) -> float:
    if not selection.offense_slot:
        return 0
    return table.get(selection.offense_slot, 0)


def resolve_bail(charge: ChargeDefinition, selection: ChargeSelection) -> BailDecision:
    if charge.bail is None:
        return BailDecision(None, 0)

    category = selection.drug_category_key
    auto = resolve_lookup(charge.bail.auto, category, None, None)
    if auto is BailMode.NONE:
        return BailDecision(auto, 0)
    if auto is None and isinstance(charge.bail.auto, ByCategory):
        return BailDecision(None, 0)
    return BailDecision(auto, resolve_lookup(charge.bail.cost, category, None, 0))


def unique_additions(additions: list[Addition]) -> list[Addition]:
    seen: set[str] = set()
    unique: list[Addition] = []
    for addition in additions:
        if addition.name in seen:
            continue
        seen.add(addition.name)
        unique.append(addition)
    return unique


def sentence_multiplier(additions: list[Addition]) -> float:
    product = 1.0
    for addition in additions:
        product *= addition.sentence_multiplier
    return product


def points_multiplier(additions: list[Addition]) -> float:
    product = 1.0
    for addition in additions:
        product *= addition.points_multiplier
    return product


def record_bail(flags: BailFlags, auto: BailMode | None) -> None:
    if auto is None:
        return
    flags.has_bail_charge = True
    if auto is BailMode.NONE:
        flags.no_bail = True
    elif auto is BailMode.DISCRETIONARY:
        flags.discretionary = True
    elif auto is BailMode.AUTO:
        flags.eligible = True


def bail_status(flags: BailFlags) -> BailStatus:
    # most restrictive wins
    if not flags.has_bail_charge:
        return "N/A"
    if flags.no_bail:
        return "NOT ELIGIBLE"
    if flags.discretionary:
        return "DISCRETIONARY"
    if flags.eligible:
        return "ELIGIBLE"
    return "N/A"


def apply_cap(value: float, maximum: float) -> CapDecision:
    return CapDecision(value=min(value, maximum), capped=value > maximum)

