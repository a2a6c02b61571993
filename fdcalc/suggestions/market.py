"""Market trend lookups used to ground investment suggestions."""

import structlog

log = structlog.get_logger(__name__)

# markets the advisor prompt always covers
MARKETS = ("stock", "bond", "real estate")


class MarketDataProvider:
    def get_market_trend(self, market: str) -> str:
        """Return a one-paragraph view of the given market (stock, bond, ...)."""
        raise NotImplementedError


class StaticMarketTrends(MarketDataProvider):
    """Canned trends; anything that is not stock or bond is treated as real estate."""

    TRENDS = {
        "stock": "The stock market is currently experiencing high volatility due to recent economic data releases.",
        "bond": "Bond yields are currently low due to the central bank policy.",
    }
    DEFAULT_TREND = "Real estate market is stable with moderate growth."

    def get_market_trend(self, market: str) -> str:
        log.info("market.trend", market=market)
        return self.TRENDS.get(market.strip().lower(), self.DEFAULT_TREND)
