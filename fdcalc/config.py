"""Environment-driven settings for the API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    cors_origins: Tuple[str, ...] = ("http://localhost:5173",)
    # artificial pause before answering a calculation, for UI feedback only
    calculation_delay_ms: int = 0
    # "stub", "bedrock" or "package.module:factory"
    suggestion_model: str = "stub"
    aws_region: str = "eu-west-2"
    model_id: str = "deepseek.v3-v1:0"
    model_max_tokens: int = 512
    model_temperature: float = 0.2
    log_level: str = "INFO"
    env: str = "dev"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from ``environ`` (defaults to os.environ after loading .env)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        origins = environ.get("CORS_ORIGINS")
        delay_ms = _parse(environ, "CALCULATION_DELAY_MS", int, cls.calculation_delay_ms)
        if delay_ms < 0:
            raise ValueError("CALCULATION_DELAY_MS must not be negative")

        return cls(
            cors_origins=(
                tuple(origin.strip() for origin in origins.split(",") if origin.strip())
                if origins
                else cls.cors_origins
            ),
            calculation_delay_ms=delay_ms,
            suggestion_model=environ.get("SUGGESTION_MODEL", cls.suggestion_model).strip(),
            aws_region=environ.get("AWS_REGION", cls.aws_region),
            model_id=environ.get("MODEL_ID", cls.model_id),
            model_max_tokens=_parse(environ, "MODEL_MAX_TOKENS", int, cls.model_max_tokens),
            model_temperature=_parse(environ, "MODEL_TEMPERATURE", float, cls.model_temperature),
            log_level=environ.get("LOG_LEVEL", cls.log_level).upper(),
            env=environ.get("ENV", cls.env),
        )


def _parse(environ: Mapping[str, str], name: str, cast, default):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc
