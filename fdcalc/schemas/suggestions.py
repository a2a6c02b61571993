"""Data contracts for the investment suggestion endpoint."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from fdcalc.schemas.calculation import DEFAULT_RISK_PROFILE


class SuggestionRequest(BaseModel):
    """FD figures handed to the suggestion model."""

    fdAmount: float = Field(..., gt=0, description="The fixed deposit amount.")
    interestRate: float = Field(..., gt=0, le=100, description="Annual interest rate in percent.")
    period: int = Field(..., ge=1, description="Deposit term in years.")
    maturityAmount: float = Field(..., ge=0, description="Calculated maturity amount.")
    interestEarned: float = Field(..., ge=0, description="Total interest earned.")
    riskProfile: str = Field(
        DEFAULT_RISK_PROFILE,
        description="conservative, moderate or aggressive; moderate when not provided.",
    )

    @field_validator("riskProfile", mode="before")
    @classmethod
    def _default_risk_profile(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_RISK_PROFILE
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SuggestionResponse(BaseModel):
    suggestions: str
