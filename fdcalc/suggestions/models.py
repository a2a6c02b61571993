"""Suggestion model implementations and the loader that picks one."""

from __future__ import annotations

import importlib
from typing import Mapping, Optional

import boto3

from fdcalc.config import Settings
from fdcalc.core.formatting import format_currency
from fdcalc.schemas.suggestions import SuggestionRequest
from fdcalc.suggestions.prompt import build_prompt


class SuggestionModel:
    def suggest(self, request: SuggestionRequest, trends: Mapping[str, str]) -> str:
        raise NotImplementedError


class StubSuggestionModel(SuggestionModel):
    """Deterministic suggestions for local runs and tests; no model is called."""

    ADVICE = {
        "conservative": (
            "Stay with low-risk options: ladder new fixed deposits across terms, "
            "and look at government bonds or short-duration debt funds."
        ),
        "moderate": (
            "Balance safety and growth: keep part of the corpus in deposits or bonds "
            "and move the rest into diversified index funds through a monthly SIP."
        ),
        "aggressive": (
            "Favour growth: consider equity mutual funds or direct equities, "
            "with a small allocation to REITs for real estate exposure."
        ),
    }

    def suggest(self, request: SuggestionRequest, trends: Mapping[str, str]) -> str:
        lines = [
            f"Your deposit of {format_currency(request.fdAmount)} at {request.interestRate}% "
            f"grows to {format_currency(request.maturityAmount)} over {request.period} years, "
            f"earning {format_currency(request.interestEarned)}.",
            self.ADVICE.get(request.riskProfile, self.ADVICE["moderate"]),
        ]
        if trends:
            lines.append("Market view:")
            lines.extend(f"- {market}: {trend}" for market, trend in trends.items())
        return "\n".join(lines)


class BedrockSuggestionModel(SuggestionModel):
    """Asks a Bedrock-hosted model through the Converse API."""

    def __init__(
        self,
        model_id: str,
        region: str,
        max_tokens: int = 512,
        temperature: float = 0.2,
        client=None,
    ):
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client or boto3.client("bedrock-runtime", region_name=region)

    def suggest(self, request: SuggestionRequest, trends: Mapping[str, str]) -> str:
        resp = self._client.converse(
            modelId=self.model_id,
            messages=[
                {"role": "user", "content": [{"text": build_prompt(request, trends)}]}
            ],
            inferenceConfig={"maxTokens": self.max_tokens, "temperature": self.temperature},
        )
        # most models answer with a single text block
        parts = resp["output"]["message"]["content"]
        return "".join(p.get("text", "") for p in parts)


def load_model(settings: Optional[Settings] = None) -> SuggestionModel:
    """Build the model named by ``settings.suggestion_model``.

    "stub" and "bedrock" are built in; anything else must be "module:factory".
    """
    settings = settings or Settings.from_env()
    name = settings.suggestion_model
    if not name or name == "stub":
        return StubSuggestionModel()
    if name == "bedrock":
        return BedrockSuggestionModel(
            model_id=settings.model_id,
            region=settings.aws_region,
            max_tokens=settings.model_max_tokens,
            temperature=settings.model_temperature,
        )
    if ":" not in name:
        raise ValueError(f"SUGGESTION_MODEL must be 'stub', 'bedrock' or 'module:factory', got {name!r}")
    module, factory = name.split(":", 1)
    return getattr(importlib.import_module(module), factory)()
