import pytest

from tracker.data_model import IncomeState, TrackerState
from tracker.engine.actions import add_one_time_payment, parse_amount, update_income_field


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("12abc", 12.0),
        (" 3.5 ", 3.5),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("-20", -20.0),
        (7, 7.0),
        ("NaN", 0.0),
        (float("inf"), 0.0),
        (True, 0.0),
        (10**400, 0.0),
        ("1" + "0" * 400, 0.0),
    ],
)
def test_parse_amount_coerces_bad_input_to_zero(raw, expected):
    assert parse_amount(raw) == expected


def test_update_income_field_replaces_single_field():
    state = TrackerState(income=IncomeState(monthly_retainer=1000.0), accumulated_total=50.0)

    updated = update_income_field(state, "monthly_secondary_revenue", "250")

    assert updated.income == IncomeState(monthly_retainer=1000.0, monthly_secondary_revenue=250.0)
    assert updated.accumulated_total == 50.0
    assert state.income.monthly_secondary_revenue == 0.0


def test_invalid_input_sets_field_to_zero():
    state = TrackerState(income=IncomeState(monthly_retainer=1000.0))

    updated = update_income_field(state, "monthly_retainer", "abc")

    assert updated.income.monthly_retainer == 0.0


def test_unknown_field_is_rejected():
    with pytest.raises(KeyError):
        update_income_field(TrackerState(), "salary", "10")


def test_add_one_time_payment_moves_payment_into_total():
    state = TrackerState(income=IncomeState(one_time_payment=500.0, monthly_retainer=900.0), accumulated_total=1000.0)

    updated = add_one_time_payment(state)

    assert updated.accumulated_total == 1500.0
    assert updated.income.one_time_payment == 0.0
    assert updated.income.monthly_retainer == 900.0
    assert state.accumulated_total == 1000.0
