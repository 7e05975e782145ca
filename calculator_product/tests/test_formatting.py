import pytest

from arrest_calculator.core.calculator import calculate_arrest
from arrest_calculator.core.formatting import (
    addition_label,
    charge_title,
    format_days,
    format_total_time,
)

from conftest import make_penal_code, make_raw_charge, make_selection


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "0 minutes"),
        (1, "1 minute"),
        (90, "1 hour 30 minutes"),
        (1440, "1 day"),
        (2 * 1440 + 61, "2 days 1 hour 1 minute"),
        (22.5, "22 minutes"),
        (22.6, "23 minutes"),
    ],
)
def test_format_total_time(minutes, expected):
    assert format_total_time(minutes) == expected


def test_format_days():
    assert format_days(0) is None
    assert format_days(1) == "1 day"
    assert format_days(6.4) == "6 days"


def test_charge_title():
    charge = make_penal_code(make_raw_charge(charge="Assault"))["101"]
    assert charge_title(make_selection(), charge) == "FA 101. Assault"
    assert charge_title(make_selection(offense_slot="2", class_letter=None), charge) == (
        "F 101. Assault (Offence #2)"
    )


def test_addition_label(additions, engine_config):
    penal_code = make_penal_code(make_raw_charge())
    calc = calculate_arrest(
        [make_selection(), make_selection(addition_name="Attempt")],
        True,
        penal_code,
        additions,
        engine_config,
    )
    assert addition_label(calc.calculation_results[0]) == "Parole Violation"
    assert addition_label(calc.calculation_results[1]) == "Attempt + Parole Violation"

    plain = calculate_arrest([make_selection()], False, penal_code, additions, engine_config)
    assert addition_label(plain.calculation_results[0]) == "Offender"
