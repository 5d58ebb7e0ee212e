"""Stdlib logging setup.

Traces and structured events go through Logfire; this only covers plain
`logging` records (our adapters plus uvicorn, httpx and SQLAlchemy).
"""

import logging
import sys

from fpv.config import Settings

# Libraries that log every request or statement at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the running environment.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Statement echo only when debugging queries
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    logging.getLogger("fpv").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
