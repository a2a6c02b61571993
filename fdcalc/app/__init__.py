"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from fdcalc.app.api.routes import api_bp
from fdcalc.config import Settings
from fdcalc.logging_setup import configure_logging, init_request_logging
from fdcalc.suggestions.market import MarketDataProvider, StaticMarketTrends
from fdcalc.suggestions.models import SuggestionModel, load_model


def create_app(
    settings: Optional[Settings] = None,
    suggestion_model: Optional[SuggestionModel] = None,
    market_data: Optional[MarketDataProvider] = None,
) -> Flask:
    """Build the Flask app instance.

    The suggestion model and market data source can be injected, which is how
    tests run without touching a hosted model.
    """
    settings = settings or Settings.from_env()
    logger = configure_logging(settings)

    app = Flask(__name__)
    app.config["FD_SETTINGS"] = settings
    app.extensions["suggestion_model"] = suggestion_model or load_model(settings)
    app.extensions["market_data"] = market_data or StaticMarketTrends()

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    init_request_logging(app)
    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(
        "app.created",
        suggestion_model=type(app.extensions["suggestion_model"]).__name__,
        calculation_delay_ms=settings.calculation_delay_ms,
    )
    return app
