"""Advisor prompt sent to the hosted model."""

from typing import Mapping

from fdcalc.schemas.suggestions import SuggestionRequest

PROMPT_TEMPLATE = """You are an experienced financial advisor providing investment suggestions.

Based on the user's fixed deposit details and their risk profile, suggest potentially more lucrative investment opportunities.
Consider current market trends to provide relevant and timely advice.

Fixed Deposit Amount: {fdAmount}
Interest Rate: {interestRate}
Period: {period} years
Maturity Amount: {maturityAmount}
Interest Earned: {interestEarned}
Risk Profile: {riskProfile}

Current market trends:
{trends}

Include analysis of stock, bond and real estate market and suggest opportunities where user can invest.
If the user has a conservative risk profile, suggest low-risk investments. If the user has an aggressive risk profile, suggest high-risk, high-reward investments.
"""


def build_prompt(request: SuggestionRequest, trends: Mapping[str, str]) -> str:
    trend_lines = "\n".join(f"- {market}: {trend}" for market, trend in trends.items())
    return PROMPT_TEMPLATE.format(
        fdAmount=request.fdAmount,
        interestRate=request.interestRate,
        period=request.period,
        maturityAmount=round(request.maturityAmount, 2),
        interestEarned=round(request.interestEarned, 2),
        riskProfile=request.riskProfile,
        trends=trend_lines or "- none available",
    )
