from __future__ import annotations

import logging

import sentry_sdk

from placement_engine.core.config import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=_LOG_FORMAT)
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)
        logging.getLogger(__name__).info("sentry_enabled")
