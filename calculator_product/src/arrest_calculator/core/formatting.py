"""Plain-text labels for calculation results."""

from __future__ import annotations

from .types import ChargeDefinition, ChargeResult, ChargeSelection, MINUTES_PER_DAY

DEFAULT_ADDITION = "Offender"


def _unit(count: int, singular: str) -> str:
    return f"{count} {singular}" if count == 1 else f"{count} {singular}s"


def format_total_time(total_minutes: float) -> str:
    rounded = round(total_minutes)
    if rounded <= 0:
        return "0 minutes"

    days, remainder = divmod(rounded, MINUTES_PER_DAY)
    hours, minutes = divmod(remainder, 60)

    parts = []
    if days:
        parts.append(_unit(days, "day"))
    if hours:
        parts.append(_unit(hours, "hour"))
    if minutes:
        parts.append(_unit(minutes, "minute"))
    return " ".join(parts)


def format_days(value: float) -> str | None:
    rounded = round(value)
    if rounded <= 0:
        return None
    return _unit(rounded, "day")


def charge_title(selection: ChargeSelection, charge: ChargeDefinition) -> str:
    title = f"{charge.type}{selection.class_letter or ''} {charge.id}. {charge.charge}"
    if selection.offense_slot and selection.offense_slot != "1":
        title += f" (Offence #{selection.offense_slot})"
    if charge.is_drug_variant and selection.drug_category_key:
        title += f" (Category {selection.drug_category_key})"
    return title


def addition_label(result: ChargeResult) -> str:
    if result.applied_additions:
        return " + ".join(addition.name for addition in result.applied_additions)
    return result.row.addition_name or DEFAULT_ADDITION
