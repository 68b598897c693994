"""Logging setup for applications embedding the offering packages.

Library modules only create module loggers; nothing is configured on import.
Entry points (the audit export CLI, a web app) call configure_logging() once.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .settings import get_settings

PACKAGE_LOGGERS = ("offering_domain", "offering_excel")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Attach a stream handler to the offering package loggers.

    Args:
        level: Log level name; defaults to OfferingSettings.log_level
        fmt: "text" or "json"; defaults to OfferingSettings.log_format

    Calling it again replaces the handler instead of adding a second one.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    handler.set_name("offering")

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if existing.get_name() == "offering":
                logger.removeHandler(existing)
        logger.addHandler(handler)
        logger.setLevel(level)
