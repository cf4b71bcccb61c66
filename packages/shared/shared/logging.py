import logging
import re
import sys
from typing import Any, Optional


_LOGGING_CONFIGURED = False

# Loggers that would print request URLs, and with them the API key query param.
_QUIET_LOGGERS = ("httpx", "httpcore")

_SECRET_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure process logging once.
    Safe to call multiple times; only the first call takes effect.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


def redact(value: Any) -> str:
    """Mask `key=` query parameters in anything that may carry a URL."""
    return _SECRET_PARAM.sub(r"\1***", str(value))


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log `event k1=v1 k2=v2` with every value redacted."""
    if not logger.isEnabledFor(level):
        return
    if not fields:
        logger.log(level, event)
        return
    logger.log(level, "%s %s", event, " ".join(f"{k}={redact(v)}" for k, v in fields.items()))
