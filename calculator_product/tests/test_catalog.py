from arrest_calculator.core.catalog import (
    find_addition,
    parse_additions,
    parse_penal_code,
    selectable_additions,
)
from arrest_calculator.core.types import BailMode, ByCategory, ByOffense, Direct, Duration

from conftest import make_drug_charge, make_raw_charge


def test_parse_plain_charge():
    charge = parse_penal_code({"101": make_raw_charge()})["101"]

    assert charge.is_drug_variant is False
    assert charge.time == Direct(Duration(0, 0, 30))
    assert isinstance(charge.fine, ByOffense)
    assert charge.fine.values == {"1": 500, "2": 1000}
    assert charge.bail.auto == Direct(BailMode.AUTO)
    assert charge.class_weights == {"A": True, "B": True, "C": False}
    assert charge.valid_offense_slots["4"] is False
    assert charge.code_enhancement_min_count is None


def test_parse_drug_charge_uses_category_variants():
    charge = parse_penal_code({"602": make_drug_charge()})["602"]

    assert charge.is_drug_variant is True
    assert isinstance(charge.time, ByCategory)
    assert charge.time.values["2"].minutes == 360
    assert isinstance(charge.fine, ByCategory)
    assert charge.bail.auto == ByCategory({"1": BailMode.AUTO, "2": BailMode.DISCRETIONARY})
    assert charge.bail.cost == ByCategory({"1": 2500, "2": 10000})
    assert charge.drug_categories == {"1": "Category 1", "2": "Category 2"}


def test_parse_is_lenient_with_sparse_entries():
    table = parse_penal_code(
        {
            "7": {"charge": "Loitering", "type": "X", "code_enhancement_count": "4"},
            "8": "not a charge",
        }
    )

    assert list(table) == ["7"]
    charge = table["7"]
    assert charge.id == "7"
    assert charge.type == "?"
    assert charge.time == Direct(Duration())
    assert charge.bail is None
    assert charge.points == {}
    assert charge.code_enhancement_min_count == 4


def test_parse_additions_defaults_multipliers():
    additions = parse_additions(
        {
            "additions": [
                {"name": "Offender"},
                {"name": "Attempt", "sentence_multiplier": 0.5, "points_multiplier": None},
                {"sentence_multiplier": 2},
            ]
        }
    )

    assert [a.name for a in additions] == ["Offender", "Attempt"]
    assert additions[0].sentence_multiplier == 1.0
    assert additions[1].sentence_multiplier == 0.5
    assert additions[1].points_multiplier == 1.0


def test_parse_additions_accepts_bare_list():
    additions = parse_additions([{"name": "Attempt", "sentence_multiplier": 0.5}])
    assert find_addition(additions, "Attempt").sentence_multiplier == 0.5
    assert find_addition(additions, "Missing") is None
    assert find_addition(additions, None) is None


def test_selectable_additions_hide_parole_violation(additions, engine_config):
    names = [a.name for a in selectable_additions(additions, engine_config)]
    assert "Parole Violation" not in names
    assert "Attempt" in names
