"""Parse raw penal code and addition JSON into typed definitions.

The penal code table stores several fields in more than one shape (a plain
duration, or a mapping keyed by drug category; a fine keyed by offense slot,
or by drug category). Each field is resolved into a tagged lookup here, once,
so the calculator never has to inspect raw values.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .types import (
    Addition,
    BailMode,
    BailPolicy,
    ByCategory,
    ByOffense,
    ChargeDefinition,
    Direct,
    Duration,
    EngineConfig,
    ZERO_DURATION,
)

logger = logging.getLogger(__name__)

CHARGE_TYPES = {"F", "M", "I"}
CLASS_LETTERS = ("A", "B", "C")
OFFENSE_SLOTS = ("1", "2", "3", "4", "5")


def _number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _duration(value: Any) -> Duration:
    if not isinstance(value, dict):
        return ZERO_DURATION
    return Duration(
        days=_number(value.get("days")),
        hours=_number(value.get("hours")),
        min=_number(value.get("min")),
    )


def _number_map(value: Any) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    return {str(key): _number(item) for key, item in value.items()}


def _flag_map(value: Any, keys: Iterable[str]) -> dict[str, bool]:
    value = value if isinstance(value, dict) else {}
    return {key: bool(value.get(key)) for key in keys}


def parse_time(value: Any, is_drug_variant: bool) -> Direct[Duration] | ByCategory[Duration]:
    if is_drug_variant:
        if not isinstance(value, dict):
            return ByCategory({})
        return ByCategory(
            {str(key): _duration(item) for key, item in value.items() if isinstance(item, dict)}
        )
    return Direct(_duration(value))


def parse_fine(value: Any, is_drug_variant: bool) -> ByOffense[float] | ByCategory[float]:
    if is_drug_variant:
        return ByCategory(_number_map(value))
    return ByOffense(_number_map(value))


def parse_bail(value: Any) -> BailPolicy | None:
    if not isinstance(value, dict):
        return None

    raw_auto = value.get("auto")
    if isinstance(raw_auto, dict):
        modes = {str(key): BailMode.from_raw(item) for key, item in raw_auto.items()}
        auto = ByCategory({key: mode for key, mode in modes.items() if mode is not None})
    else:
        auto = Direct(BailMode.from_raw(raw_auto))

    raw_cost = value.get("cost")
    if isinstance(raw_cost, dict):
        cost = ByCategory(_number_map(raw_cost))
    else:
        cost = Direct(_number(raw_cost))

    return BailPolicy(auto=auto, cost=cost)


def _min_count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_charge(key: str, raw: dict[str, Any]) -> ChargeDefinition:
    drugs = raw.get("drugs")
    drug_categories = (
        {str(k): str(v) for k, v in drugs.items()} if isinstance(drugs, dict) else None
    )
    is_drug_variant = drug_categories is not None

    charge_type = raw.get("type")
    if charge_type not in CHARGE_TYPES:
        charge_type = "?"

    return ChargeDefinition(
        id=str(raw.get("id") or key),
        charge=str(raw.get("charge") or ""),
        type=charge_type,
        class_weights=_flag_map(raw.get("class"), CLASS_LETTERS),
        valid_offense_slots=_flag_map(raw.get("offence"), OFFENSE_SLOTS),
        time=parse_time(raw.get("time"), is_drug_variant),
        max_time=parse_time(raw.get("maxtime"), is_drug_variant),
        points=_number_map(raw.get("points")),
        fine=parse_fine(raw.get("fine"), is_drug_variant),
        impound=_number_map(raw.get("impound")),
        suspension=_number_map(raw.get("suspension")),
        bail=parse_bail(raw.get("bail")),
        definition=raw.get("definition"),
        extra=raw.get("extra"),
        drug_categories=drug_categories,
        code_enhancement=raw.get("code_enhancement"),
        code_enhancement_min_count=_min_count(raw.get("code_enhancement_count")),
        raw=raw,
    )


def parse_penal_code(raw_table: dict[str, Any]) -> dict[str, ChargeDefinition]:
    """Parse a raw penal code table keyed by charge id."""
    penal_code: dict[str, ChargeDefinition] = {}
    for key, raw in raw_table.items():
        if not isinstance(raw, dict):
            logger.warning(f"Skipping malformed penal code entry {key!r}")
            continue
        penal_code[str(key)] = parse_charge(str(key), raw)
    logger.debug(f"Parsed {len(penal_code)} penal code entries")
    return penal_code


def parse_additions(raw: Any) -> list[Addition]:
    """Parse the additions catalog, either ``{"additions": [...]}`` or a bare list."""
    items = raw.get("additions", []) if isinstance(raw, dict) else raw
    additions: list[Addition] = []
    for item in items or []:
        if not isinstance(item, dict) or not item.get("name"):
            logger.warning(f"Skipping malformed addition {item!r}")
            continue
        additions.append(
            Addition(
                name=str(item["name"]),
                sentence_multiplier=_number(item.get("sentence_multiplier"), 1.0),
                points_multiplier=_number(item.get("points_multiplier"), 1.0),
            )
        )
    return additions


def find_addition(additions: list[Addition], name: str | None) -> Addition | None:
    if not name:
        return None
    return next((addition for addition in additions if addition.name == name), None)


def selectable_additions(additions: list[Addition], config: EngineConfig) -> list[Addition]:
    """Additions a user may pick per charge; parole violation is applied globally."""
    return [a for a in additions if a.name != config.parole_violation_definition]
