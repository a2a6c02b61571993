"""HTTP routes for the Flask API."""

import time
from dataclasses import asdict
from http import HTTPStatus
from typing import Any, Dict

import structlog
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fdcalc.core.formatting import format_currency
from fdcalc.core.maturity import calculate, composition, maturity_schedule
from fdcalc.domain.validation import validate_calculation_input
from fdcalc.schemas.calculation import CalculationResponse, FormattedResult
from fdcalc.schemas.ping import PingResponse
from fdcalc.schemas.suggestions import SuggestionRequest
from fdcalc.suggestions.service import SuggestionFetchError, get_investment_suggestions

SUGGESTION_ERROR_MESSAGE = "Could not fetch investment suggestions. Please try again."

api_bp = Blueprint("api", __name__)
log = structlog.get_logger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    errors = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(SuggestionFetchError)
def _handle_suggestion_error(exc: SuggestionFetchError):
    """The model failure is already logged; the client only gets a generic message."""
    return jsonify({"error": SUGGESTION_ERROR_MESSAGE}), HTTPStatus.BAD_GATEWAY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse()
    return jsonify(response.model_dump())


@api_bp.post("/calc/fd")
def fd_calculation() -> Any:
    """Validate the form values and return maturity figures plus chart data."""
    raw_payload: Any = request.get_json(force=True, silent=True)
    outcome = validate_calculation_input(raw_payload)
    if not outcome.ok:
        log.info("calc.rejected", fields=[error.field for error in outcome.errors])
        body: Dict[str, Any] = {"errors": [asdict(error) for error in outcome.errors]}
        return jsonify(body), HTTPStatus.UNPROCESSABLE_ENTITY

    delay_ms = current_app.config["FD_SETTINGS"].calculation_delay_ms
    if delay_ms:
        time.sleep(delay_ms / 1000)

    calc_input = outcome.input
    result = calculate(calc_input)
    response = CalculationResponse(
        input=calc_input,
        result=result,
        schedule=maturity_schedule(calc_input),
        chart=composition(result),
        formatted=FormattedResult(
            principal=format_currency(result.principal),
            maturityAmount=format_currency(result.maturityAmount),
            interestEarned=format_currency(result.interestEarned),
        ),
    )
    log.info(
        "calc.completed",
        years=calc_input.years,
        compounding=calc_input.compoundingFrequency,
        risk_profile=calc_input.riskProfile,
    )
    return jsonify(response.model_dump())


@api_bp.post("/suggestions")
async def suggestions() -> Any:
    """Ask the configured model for investment ideas on a finished calculation."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = SuggestionRequest.model_validate(raw_payload)
    response = await get_investment_suggestions(
        payload,
        model=current_app.extensions["suggestion_model"],
        market=current_app.extensions["market_data"],
    )
    return jsonify(response.model_dump())
