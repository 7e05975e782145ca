import pytest

from arrest_calculator.core.catalog import parse_additions, parse_penal_code
from arrest_calculator.core.types import ChargeSelection, EngineConfig


def make_raw_charge(**overrides):
    base = {
        "id": "101",
        "charge": "Assault",
        "type": "F",
        "class": {"A": True, "B": True, "C": False},
        "offence": {"1": True, "2": True, "3": True, "4": False, "5": False},
        "time": {"days": 0, "hours": 0, "min": 30},
        "maxtime": {"days": 0, "hours": 0, "min": 60},
        "points": {"A": 10, "B": 5},
        "fine": {"1": 500, "2": 1000},
        "impound": {},
        "suspension": {},
        "bail": {"auto": True, "cost": 1000},
        "extra": "N/A",
    }
    base.update(overrides)
    return base


def make_drug_charge(**overrides):
    base = make_raw_charge(
        id="602",
        charge="Possession of a Controlled Substance",
        time={
            "1": {"days": 0, "hours": 1, "min": 0},
            "2": {"days": 0, "hours": 6, "min": 0},
        },
        maxtime={
            "1": {"days": 0, "hours": 2, "min": 0},
            "2": {"days": 0, "hours": 3, "min": 0},
        },
        points={"A": 25, "B": 25, "C": 25},
        fine={"1": 1000, "2": 5000},
        bail={"auto": {"1": True, "2": 2}, "cost": {"1": 2500, "2": 10000}},
        drugs={"1": "Category 1", "2": "Category 2"},
    )
    base.update(overrides)
    return base


def make_selection(**overrides):
    base = {
        "charge_id": "101",
        "class_letter": "A",
        "offense_slot": "1",
        "addition_name": None,
        "drug_category_key": None,
    }
    base.update(overrides)
    return ChargeSelection(**base)


def make_penal_code(*raw_charges):
    return parse_penal_code({raw["id"]: raw for raw in raw_charges})


@pytest.fixture
def additions():
    return parse_additions(
        {
            "additions": [
                {"name": "Offender"},
                {"name": "Attempt", "sentence_multiplier": 0.5, "points_multiplier": 1},
                {"name": "Accessory", "sentence_multiplier": 0.5, "points_multiplier": 0.5},
                {"name": "Conspiracy", "sentence_multiplier": 0.75, "points_multiplier": 0.8},
                {"name": "Parole Violation", "sentence_multiplier": 1.5, "points_multiplier": 2},
            ]
        }
    )


@pytest.fixture
def engine_config():
    return EngineConfig(
        max_sentence_days=25,
        max_impound_days=14,
        max_suspension_days=30,
        parole_violation_definition="Parole Violation",
    )
