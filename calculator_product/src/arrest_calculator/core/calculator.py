"""Arrest calculator orchestration."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .catalog import find_addition
from .code_enhancement import is_enhancement_eligible
from .formatting import charge_title
from .rules import (
    apply_cap,
    bail_status,
    points_multiplier,
    record_bail,
    resolve_bail,
    resolve_fine,
    resolve_offense_days,
    resolve_points,
    resolve_times,
    sentence_multiplier,
    unique_additions,
    validate_input,
)
from .types import (
    Addition,
    ArrestCalculation,
    BailMode,
    CalculationTotals,
    ChargeDefinition,
    ChargeResult,
    ChargeSelection,
    EngineConfig,
    SentenceFigures,
    Stipulation,
)

logger = logging.getLogger(__name__)

NO_EXTRA = "N/A"


def build_extras(
    selections: Sequence[ChargeSelection],
    penal_code: Mapping[str, ChargeDefinition],
) -> list[Stipulation]:
    extras: list[Stipulation] = []
    for selection in selections:
        charge = penal_code.get(selection.charge_id) if selection.charge_id else None
        if charge and charge.extra and charge.extra != NO_EXTRA:
            extras.append(Stipulation(title=charge_title(selection, charge), extra=charge.extra))
    return extras


def calculate_charge(
    selection: ChargeSelection,
    charge: ChargeDefinition,
    additions: list[Addition],
    parole_addition: Addition | None,
) -> ChargeResult:
    addition = find_addition(additions, selection.addition_name)

    applied: list[Addition] = []
    if addition:
        applied.append(addition)
    if parole_addition:
        applied.append(parole_addition)
    applied = unique_additions(applied)

    sentence_mult = sentence_multiplier(applied)
    points_mult = points_multiplier(applied)

    min_time, max_time = resolve_times(charge, selection)
    points = resolve_points(charge, selection)
    bail = resolve_bail(charge, selection)

    return ChargeResult(
        row=selection,
        charge_details=charge,
        applied_additions=applied,
        sentence_multiplier=sentence_mult,
        points_multiplier=points_mult,
        original=SentenceFigures(min_time=min_time, max_time=max_time, points=points),
        modified=SentenceFigures(
            min_time=min_time * sentence_mult,
            max_time=max_time * sentence_mult,
            points=points * points_mult,
        ),
        fine=resolve_fine(charge, selection),
        impound=resolve_offense_days(charge.impound, selection),
        suspension=resolve_offense_days(charge.suspension, selection),
        bail_auto=bail.auto,
        bail_cost=bail.cost,
        addition_details=addition,
        parole_addition_details=parole_addition,
    )


def sum_totals(results: list[ChargeResult]) -> CalculationTotals:
    totals = CalculationTotals()
    for result in results:
        totals.original.min_time += result.original.min_time
        totals.original.max_time += result.original.max_time
        totals.original.points += result.original.points

        totals.modified.min_time += result.modified.min_time
        totals.modified.max_time += result.modified.max_time
        totals.modified.points += result.modified.points

        totals.fine += result.fine

        # impound and suspension only pick up the multiplier in the totals
        totals.original.impound += result.impound
        totals.original.suspension += result.suspension
        totals.modified.impound += result.impound * result.sentence_multiplier
        totals.modified.suspension += result.suspension * result.sentence_multiplier

        record_bail(totals.bail_status, result.bail_auto)
        if result.bail_auto is not BailMode.NONE:
            totals.highest_bail = max(totals.highest_bail, result.bail_cost)
    return totals


def calculate_arrest(
    selections: Sequence[ChargeSelection],
    is_parole_violator: bool,
    penal_code: Mapping[str, ChargeDefinition],
    additions: list[Addition],
    config: EngineConfig,
) -> ArrestCalculation:
    errors = validate_input(selections, is_parole_violator)
    if errors:
        raise ValueError("; ".join(errors))

    parole_addition = None
    if is_parole_violator:
        parole_addition = find_addition(additions, config.parole_violation_definition)
        if parole_addition is None:
            logger.warning(
                f"Parole violation addition {config.parole_violation_definition!r} not in catalog"
            )

    results: list[ChargeResult] = []
    for selection in selections:
        charge = penal_code.get(selection.charge_id) if selection.charge_id else None
        if charge is None:
            logger.debug(f"Skipping unresolved charge id {selection.charge_id!r}")
            continue
        results.append(calculate_charge(selection, charge, additions, parole_addition))

    totals = sum_totals(results)

    max_sentence = config.max_sentence_minutes
    min_time = apply_cap(totals.modified.min_time, max_sentence)
    max_time = apply_cap(totals.modified.max_time, max_sentence)
    impound = apply_cap(totals.modified.impound, config.max_impound_days)
    suspension = apply_cap(totals.modified.suspension, config.max_suspension_days)

    streets_eligible = is_enhancement_eligible(
        [result.row for result in results],
        [result.charge_details for result in results],
    )

    return ArrestCalculation(
        calculation_results=results,
        extras=build_extras(selections, penal_code),
        totals=totals,
        bail_status=bail_status(totals.bail_status),
        min_time_capped=min_time.value,
        max_time_capped=max_time.value,
        is_capped=min_time.capped or max_time.capped,
        impound_capped=impound.value,
        is_impound_capped=impound.capped,
        suspension_capped=suspension.value,
        is_suspension_capped=suspension.capped,
        is_streets_eligible=streets_eligible,
    )
