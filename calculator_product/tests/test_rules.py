import itertools

import pytest

from arrest_calculator.core.rules import (
    apply_cap,
    bail_status,
    points_multiplier,
    record_bail,
    resolve_lookup,
    sentence_multiplier,
    unique_additions,
)
from arrest_calculator.core.types import (
    Addition,
    BailFlags,
    BailMode,
    ByCategory,
    ByOffense,
    Direct,
)

ATTEMPT = Addition("Attempt", sentence_multiplier=0.5, points_multiplier=1.0)
ACCESSORY = Addition("Accessory", sentence_multiplier=0.5, points_multiplier=0.5)
PAROLE = Addition("Parole Violation", sentence_multiplier=1.5, points_multiplier=2.0)


def test_multiplier_composition_is_order_independent():
    products = {
        (sentence_multiplier(list(order)), points_multiplier(list(order)))
        for order in itertools.permutations([ATTEMPT, ACCESSORY, PAROLE])
    }
    assert len(products) == 1
    sentence, points = products.pop()
    assert sentence == pytest.approx(0.375)
    assert points == pytest.approx(1.0)


def test_empty_additions_multiply_to_one():
    assert sentence_multiplier([]) == 1.0
    assert points_multiplier([]) == 1.0


def test_unique_additions_keeps_first_by_name():
    duplicate = Addition("Attempt", sentence_multiplier=0.1)
    assert unique_additions([ATTEMPT, PAROLE, duplicate]) == [ATTEMPT, PAROLE]


def test_resolve_lookup_variants():
    assert resolve_lookup(Direct(7), "1", "2", 0) == 7
    assert resolve_lookup(ByCategory({"1": 10}), "1", None, 0) == 10
    assert resolve_lookup(ByCategory({"1": 10}), "9", None, 0) == 0
    assert resolve_lookup(ByCategory({"1": 10}), None, "1", 0) == 0
    assert resolve_lookup(ByOffense({"2": 300}), None, "2", 0) == 300
    assert resolve_lookup(ByOffense({"2": 300}), None, None, 0) == 0


@pytest.mark.parametrize(
    "value, maximum, expected, capped",
    [
        (10, 14, 10, False),
        (14, 14, 14, False),
        (20, 14, 14, True),
        (0, 0, 0, False),
    ],
)
def test_apply_cap(value, maximum, expected, capped):
    decision = apply_cap(value, maximum)
    assert decision.value == expected == min(value, maximum)
    assert decision.capped is capped
    assert apply_cap(decision.value, maximum).value == decision.value


@pytest.mark.parametrize(
    "modes, expected",
    [
        ([], "N/A"),
        ([None], "N/A"),
        ([BailMode.AUTO], "ELIGIBLE"),
        ([BailMode.AUTO, BailMode.DISCRETIONARY], "DISCRETIONARY"),
        ([BailMode.AUTO, BailMode.NONE], "NOT ELIGIBLE"),
        ([BailMode.DISCRETIONARY, BailMode.NONE, BailMode.AUTO], "NOT ELIGIBLE"),
    ],
)
def test_bail_status_most_restrictive_wins(modes, expected):
    flags = BailFlags()
    for mode in modes:
        record_bail(flags, mode)
    assert bail_status(flags) == expected


def test_bail_mode_from_raw():
    assert BailMode.from_raw(True) is BailMode.AUTO
    assert BailMode.from_raw(False) is BailMode.NONE
    assert BailMode.from_raw(2) is BailMode.DISCRETIONARY
    assert BailMode.from_raw(1) is None
    assert BailMode.from_raw(None) is None
    assert [m.wire_value for m in BailMode] == [True, False, 2]
