"""Data contracts for fixed-deposit calculations."""

from __future__ import annotations

import math
import sys
from typing import Any, List, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

RiskProfile = Literal["conservative", "moderate", "aggressive"]

DEFAULT_RISK_PROFILE = "moderate"

# compounding periods per year, keyed by the labels the form offers
COMPOUNDING_OPTIONS = {
    "annually": 1,
    "semi-annually": 2,
    "quarterly": 4,
    "monthly": 12,
}
COMPOUNDING_FREQUENCIES = frozenset(COMPOUNDING_OPTIONS.values())

# longest term the schedule is built for, one row per year
MAX_YEARS = 100
# natural log of the largest amount a float can hold, minus one for headroom
_MAX_LOG_AMOUNT = math.log(sys.float_info.max) - 1


class CalculationInput(BaseModel):
    """Validated FD parameters. Only instances of this model reach the calculator."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    principal: float = Field(..., gt=0, description="Deposit amount in currency units.")
    annualRate: float = Field(
        ...,
        gt=0,
        le=100,
        validation_alias=AliasChoices("annualRate", "rate"),
        description="Annual interest rate as a percentage (6.5 for 6.5%).",
    )
    years: int = Field(..., ge=1, le=MAX_YEARS, description="Deposit term in whole years.")
    compoundingFrequency: int = Field(
        ...,
        validation_alias=AliasChoices("compoundingFrequency", "compounding"),
        description="Compounding periods per year: 1, 2, 4 or 12.",
    )
    riskProfile: RiskProfile = DEFAULT_RISK_PROFILE

    @field_validator("compoundingFrequency", mode="before")
    @classmethod
    def _named_frequency(cls, value: Any) -> Any:
        if isinstance(value, str):
            label = value.strip().lower()
            return COMPOUNDING_OPTIONS.get(label, label)
        return value

    @field_validator("compoundingFrequency")
    @classmethod
    def _supported_frequency(cls, value: int) -> int:
        if value not in COMPOUNDING_FREQUENCIES:
            raise ValueError("compounding frequency must be one of 1, 2, 4 or 12")
        return value

    @field_validator("riskProfile", mode="before")
    @classmethod
    def _default_risk_profile(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_RISK_PROFILE
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _finite_maturity(self) -> "CalculationInput":
        # log of principal * (1 + r/n) ** (n * years), checked before any float can overflow
        periods = self.compoundingFrequency * self.years
        log_amount = math.log(self.principal) + periods * math.log1p(
            (self.annualRate / 100) / self.compoundingFrequency
        )
        if log_amount > _MAX_LOG_AMOUNT:
            raise PydanticCustomError(
                "maturity_overflow",
                "Maturity amount is too large to calculate; shorten the period.",
            )
        return self


class CalculationResult(BaseModel):
    """Maturity figures for one deposit. Values are unrounded."""

    model_config = ConfigDict(frozen=True)

    principal: float
    maturityAmount: float
    interestEarned: float


class SchedulePoint(BaseModel):
    """Deposit balance at the end of a given year."""

    period: int = Field(..., ge=0)
    balance: float


class ChartSlice(BaseModel):
    name: str
    value: float


class FormattedResult(BaseModel):
    principal: str
    maturityAmount: str
    interestEarned: str


class CalculationResponse(BaseModel):
    """Payload returned to the calculator page."""

    input: CalculationInput
    result: CalculationResult
    schedule: List[SchedulePoint]
    chart: List[ChartSlice]
    formatted: FormattedResult
