"""Package-wide logger setup."""
import logging

from portfolio_bot.settings import settings

logger = logging.getLogger("portfolio_bot")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    logger.addHandler(h)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))


def get_logger(name: str = "portfolio_bot") -> logging.Logger:
    # children propagate to the handler installed above
    if name != "portfolio_bot" and not name.startswith("portfolio_bot."):
        name = f"portfolio_bot.{name}"
    return logging.getLogger(name)
