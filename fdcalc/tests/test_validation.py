from __future__ import annotations

from math import isfinite

import pytest

from fdcalc.core.maturity import calculate
from fdcalc.domain.validation import validate_calculation_input


def form_values(**overrides) -> dict:
    values = {
        "principal": "100000",
        "annualRate": "6.5",
        "years": "5",
        "compoundingFrequency": "4",
    }
    values.update(overrides)
    return values


def errors_by_field(outcome) -> dict:
    return {error.field: error for error in outcome.errors}


def test_string_form_values_are_normalised():
    outcome = validate_calculation_input(form_values())

    assert outcome.ok
    assert outcome.errors == []
    calc_input = outcome.input
    assert calc_input.principal == 100000.0
    assert calc_input.annualRate == 6.5
    assert calc_input.years == 5
    assert calc_input.compoundingFrequency == 4


@pytest.mark.parametrize("risk_profile", [None, "", "   "])
def test_missing_risk_profile_defaults_to_moderate(risk_profile):
    values = form_values()
    if risk_profile is not None:
        values["riskProfile"] = risk_profile

    outcome = validate_calculation_input(values)

    assert outcome.ok
    assert outcome.input.riskProfile == "moderate"


def test_explicit_none_risk_profile_defaults_to_moderate():
    outcome = validate_calculation_input(form_values(riskProfile=None))
    assert outcome.input.riskProfile == "moderate"


def test_risk_profile_is_case_insensitive():
    outcome = validate_calculation_input(form_values(riskProfile=" Aggressive "))
    assert outcome.input.riskProfile == "aggressive"


def test_unknown_risk_profile_is_rejected():
    outcome = validate_calculation_input(form_values(riskProfile="reckless"))

    assert not outcome.ok
    assert errors_by_field(outcome)["riskProfile"].kind == "not_allowed"


def test_original_form_field_names_are_accepted():
    outcome = validate_calculation_input(
        {"principal": 5000, "rate": 7, "years": 3, "compounding": "quarterly"}
    )

    assert outcome.ok
    assert outcome.input.annualRate == 7.0
    assert outcome.input.compoundingFrequency == 4


@pytest.mark.parametrize(
    "label, expected",
    [("annually", 1), ("Semi-Annually", 2), ("quarterly", 4), ("monthly", 12), (12, 12), ("2", 2)],
)
def test_compounding_labels_and_numbers(label, expected):
    outcome = validate_calculation_input(form_values(compoundingFrequency=label))
    assert outcome.input.compoundingFrequency == expected


@pytest.mark.parametrize("principal", [0, -1, "-250.5"])
def test_non_positive_principal_is_out_of_range(principal):
    error = errors_by_field(validate_calculation_input(form_values(principal=principal)))["principal"]

    assert error.kind == "out_of_range"
    assert error.message == "Principal must be greater than 0."


@pytest.mark.parametrize("rate, message", [
    (0, "Rate must be greater than 0."),
    (-3, "Rate must be greater than 0."),
    (100.01, "Rate cannot exceed 100%."),
])
def test_rate_bounds(rate, message):
    error = errors_by_field(validate_calculation_input(form_values(annualRate=rate)))["annualRate"]

    assert error.kind == "out_of_range"
    assert error.message == message


def test_rate_of_exactly_one_hundred_is_allowed():
    assert validate_calculation_input(form_values(annualRate=100)).ok


@pytest.mark.parametrize("years", [0, -2])
def test_years_below_one_is_out_of_range(years):
    error = errors_by_field(validate_calculation_input(form_values(years=years)))["years"]

    assert error.kind == "out_of_range"
    assert error.message == "Period must be at least 1 year."


@pytest.mark.parametrize("years", [2.5, "2.5"])
def test_fractional_years_are_non_integer(years):
    error = errors_by_field(validate_calculation_input(form_values(years=years)))["years"]

    assert error.kind == "non_integer"
    assert error.message == "Please enter a whole number for years."


def test_integral_float_years_are_accepted():
    outcome = validate_calculation_input(form_values(years=3.0))
    assert outcome.input.years == 3


@pytest.mark.parametrize("frequency", [0, 3, 6, 365, "weekly", "abc"])
def test_unsupported_frequency_is_rejected(frequency):
    error = errors_by_field(
        validate_calculation_input(form_values(compoundingFrequency=frequency))
    )["compoundingFrequency"]

    assert error.kind == "not_allowed"


def test_non_numeric_values_are_reported():
    error = errors_by_field(validate_calculation_input(form_values(principal="lots")))["principal"]

    assert error.kind == "non_numeric"
    assert error.message == "Please enter a valid number."
    assert error.value == "lots"


@pytest.mark.parametrize("value", ["inf", "nan", float("inf")])
def test_non_finite_values_are_rejected(value):
    error = errors_by_field(validate_calculation_input(form_values(principal=value)))["principal"]
    assert error.kind == "non_finite"


def test_every_invalid_field_is_reported():
    outcome = validate_calculation_input(
        {"principal": 0, "annualRate": 150, "years": 1.5, "compoundingFrequency": 5}
    )

    assert not outcome.ok
    assert outcome.input is None
    assert set(errors_by_field(outcome)) == {
        "principal",
        "annualRate",
        "years",
        "compoundingFrequency",
    }


def test_missing_fields_are_reported():
    errors = errors_by_field(validate_calculation_input({}))

    assert set(errors) == {"principal", "annualRate", "years", "compoundingFrequency"}
    assert all(error.kind == "missing" for error in errors.values())


@pytest.mark.parametrize("raw", [None, [], "principal=100"])
def test_non_object_payload_is_malformed(raw):
    outcome = validate_calculation_input(raw)

    assert not outcome.ok
    assert [error.kind for error in outcome.errors] == ["malformed"]


def test_years_above_limit_are_out_of_range():
    outcome = validate_calculation_input(
        {"principal": 1000, "annualRate": 100, "years": 2000, "compoundingFrequency": 1}
    )

    error = errors_by_field(outcome)["years"]
    assert not outcome.ok
    assert error.kind == "out_of_range"
    assert error.message == "Period cannot exceed 100 years."


def test_longest_term_is_accepted():
    assert validate_calculation_input(form_values(years=100)).ok


def test_maturity_too_large_for_a_float_is_rejected_on_years():
    outcome = validate_calculation_input(
        {"principal": 1e300, "annualRate": 100, "years": 100, "compoundingFrequency": 12}
    )

    assert not outcome.ok
    error = errors_by_field(outcome)["years"]
    assert error.kind == "out_of_range"
    assert error.value == 100
    assert "too large" in error.message


def test_accepted_inputs_always_produce_finite_results():
    for principal in (1e300, 1e200, 1e12):
        for years in (1, 10, 100):
            outcome = validate_calculation_input(
                {"principal": principal, "annualRate": 100, "years": years, "compoundingFrequency": 12}
            )
            if outcome.ok:
                assert isfinite(calculate(outcome.input).maturityAmount)
