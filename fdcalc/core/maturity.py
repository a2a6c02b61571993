"""Fixed-deposit maturity arithmetic."""

from typing import List

from fdcalc.schemas.calculation import (
    COMPOUNDING_FREQUENCIES,
    CalculationInput,
    CalculationResult,
    ChartSlice,
    SchedulePoint,
)


def _growth_factor(calc_input: CalculationInput, years: int) -> float:
    periods_per_year = calc_input.compoundingFrequency
    if periods_per_year not in COMPOUNDING_FREQUENCIES:
        raise ValueError(f"unsupported compounding frequency: {periods_per_year!r}")
    periodic_rate = (calc_input.annualRate / 100) / periods_per_year
    return (1 + periodic_rate) ** (periods_per_year * years)


def calculate(calc_input: CalculationInput) -> CalculationResult:
    """Compound the principal over the full term. No rounding is applied."""
    maturity_amount = calc_input.principal * _growth_factor(calc_input, calc_input.years)
    return CalculationResult(
        principal=calc_input.principal,
        maturityAmount=maturity_amount,
        interestEarned=maturity_amount - calc_input.principal,
    )


def maturity_schedule(calc_input: CalculationInput) -> List[SchedulePoint]:
    """Balance at the end of every year, from the deposit date (period 0) to maturity."""
    return [
        SchedulePoint(
            period=year,
            balance=calc_input.principal * _growth_factor(calc_input, year),
        )
        for year in range(0, calc_input.years + 1)
    ]


def composition(result: CalculationResult) -> List[ChartSlice]:
    """Principal vs. interest split of the maturity amount, as drawn on the pie chart."""
    return [
        ChartSlice(name="Principal", value=result.principal),
        ChartSlice(name="Interest", value=result.interestEarned),
    ]
