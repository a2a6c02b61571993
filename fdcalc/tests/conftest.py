from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from fdcalc.app import create_app
from fdcalc.config import Settings
from fdcalc.suggestions.market import StaticMarketTrends
from fdcalc.suggestions.models import StubSuggestionModel


@pytest.fixture()
def settings() -> Settings:
    return Settings(env="test")


@pytest.fixture()
def flask_app(settings):
    return create_app(
        settings=settings,
        suggestion_model=StubSuggestionModel(),
        market_data=StaticMarketTrends(),
    )


@pytest.fixture()
def client(flask_app) -> FlaskClient:
    with flask_app.test_client() as test_client:
        yield test_client
