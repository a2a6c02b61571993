"""Single best-effort call for investment suggestions.

There is no retry or caching here: a failure is logged, surfaced once as
SuggestionFetchError, and the caller decides whether to ask again.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from fdcalc.schemas.calculation import CalculationInput, CalculationResult
from fdcalc.schemas.suggestions import SuggestionRequest, SuggestionResponse
from fdcalc.suggestions.market import MARKETS, MarketDataProvider, StaticMarketTrends
from fdcalc.suggestions.models import SuggestionModel, load_model

log = structlog.get_logger(__name__)


class SuggestionFetchError(RuntimeError):
    """The suggestion model or its market data could not produce an answer."""


async def get_investment_suggestions(
    request: SuggestionRequest,
    model: Optional[SuggestionModel] = None,
    market: Optional[MarketDataProvider] = None,
) -> SuggestionResponse:
    model = model or load_model()
    market = market or StaticMarketTrends()

    log.info(
        "suggestions.requested",
        risk_profile=request.riskProfile,
        period=request.period,
        model=type(model).__name__,
    )
    try:
        trends = {name: market.get_market_trend(name) for name in MARKETS}
        # model clients block on network I/O, keep them off the event loop
        text = await asyncio.to_thread(model.suggest, request, trends)
    except Exception as exc:
        log.exception("suggestions.failed", error=type(exc).__name__)
        raise SuggestionFetchError(f"suggestion model failed: {exc}") from exc

    if not text or not text.strip():
        log.warning("suggestions.failed", error="empty_response")
        raise SuggestionFetchError("suggestion model returned no text")

    log.info("suggestions.completed", length=len(text))
    return SuggestionResponse(suggestions=text.strip())


async def request_suggestions(
    result: CalculationResult,
    calc_input: CalculationInput,
    risk_profile: Optional[str] = None,
    model: Optional[SuggestionModel] = None,
    market: Optional[MarketDataProvider] = None,
) -> SuggestionResponse:
    """Ask for suggestions about a finished calculation."""
    request = SuggestionRequest(
        fdAmount=result.principal,
        interestRate=calc_input.annualRate,
        period=calc_input.years,
        maturityAmount=result.maturityAmount,
        interestEarned=result.interestEarned,
        riskProfile=risk_profile or calc_input.riskProfile,
    )
    return await get_investment_suggestions(request, model=model, market=market)
