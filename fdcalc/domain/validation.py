from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from fdcalc.schemas.calculation import MAX_YEARS, CalculationInput

# form-level names that map onto CalculationInput fields
FIELD_ALIASES = {
    "rate": "annualRate",
    "compounding": "compoundingFrequency",
}

# model-level errors that belong to a single form field
_FIELD_BY_ERROR_TYPE = {
    "maturity_overflow": "years",
}

_KIND_BY_ERROR_TYPE = {
    "missing": "missing",
    "float_parsing": "non_numeric",
    "float_type": "non_numeric",
    "int_parsing": "non_numeric",
    "int_type": "non_numeric",
    "finite_number": "non_finite",
    "greater_than": "out_of_range",
    "greater_than_equal": "out_of_range",
    "less_than_equal": "out_of_range",
    "int_parsing_size": "out_of_range",
    "int_from_float": "non_integer",
    "literal_error": "not_allowed",
    "value_error": "not_allowed",
    "maturity_overflow": "out_of_range",
}

_MESSAGES: Dict[Tuple[str, str], str] = {
    ("principal", "non_numeric"): "Please enter a valid number.",
    ("principal", "out_of_range"): "Principal must be greater than 0.",
    ("annualRate", "non_numeric"): "Please enter a valid number.",
    ("annualRate", "greater_than"): "Rate must be greater than 0.",
    ("annualRate", "less_than_equal"): "Rate cannot exceed 100%.",
    ("years", "non_numeric"): "Please enter a valid integer.",
    ("years", "non_integer"): "Please enter a whole number for years.",
    ("years", "out_of_range"): "Period must be at least 1 year.",
    ("years", "less_than_equal"): f"Period cannot exceed {MAX_YEARS} years.",
    ("years", "maturity_overflow"): "Maturity amount is too large to calculate; shorten the period.",
    ("compoundingFrequency", "not_allowed"): "Choose annually, semi-annually, quarterly or monthly compounding.",
    ("riskProfile", "not_allowed"): "Risk profile must be conservative, moderate or aggressive.",
}


@dataclass
class FieldError:
    field: str
    kind: str
    message: str
    value: Any = None


@dataclass
class ValidationOutcome:
    input: Optional[CalculationInput]
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.input is not None and not self.errors


def validate_calculation_input(raw: Any) -> ValidationOutcome:
    """Turn raw form values into a CalculationInput, collecting every field failure.

    Nothing is raised: the caller renders ``errors`` next to the offending fields.
    """
    if not isinstance(raw, Mapping):
        return ValidationOutcome(
            input=None,
            errors=[FieldError(field="body", kind="malformed", message="Expected a JSON object.")],
        )

    try:
        return ValidationOutcome(input=CalculationInput.model_validate(dict(raw)))
    except ValidationError as exc:
        return ValidationOutcome(input=None, errors=[_field_error(error) for error in exc.errors()])


def _field_error(error: Dict[str, Any]) -> FieldError:
    loc = error.get("loc") or ("body",)
    error_type = error["type"]
    name = _FIELD_BY_ERROR_TYPE.get(error_type) or FIELD_ALIASES.get(str(loc[0]), str(loc[0]))
    value = error.get("input") if error_type != "missing" else None
    if error_type in _FIELD_BY_ERROR_TYPE:
        value = value.get(name) if isinstance(value, Mapping) else None

    kind = _KIND_BY_ERROR_TYPE.get(error_type, "not_allowed")
    if name == "compoundingFrequency" and kind != "missing":
        kind = "not_allowed"
    elif name == "years" and kind == "non_numeric" and _is_fractional(value):
        kind = "non_integer"

    if kind == "missing":
        message = "This field is required."
    else:
        message = (
            _MESSAGES.get((name, error_type))
            or _MESSAGES.get((name, kind))
            or error.get("msg", "Invalid value.")
        )
    return FieldError(field=name, kind=kind, message=message, value=value)


def _is_fractional(value: Any) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and not number.is_integer()
