"""
Configurator Logging
====================

JSON lines for deployed storefronts, readable text for local work.

Controller log calls pass session context through `extra=`; the JSON
formatter lifts those keys to top-level fields so a single wizard session
can be followed across navigation, validation and save.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from configurator.config import ConfiguratorConfig

# Keys passed via `extra=` that are copied onto JSON log lines
CONTEXT_FIELDS = ("session_id", "package_id", "step", "currency")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's own creation time."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}
        )
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", fmt: str = "json"):
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Level name; unknown names fall back to INFO
        fmt: "json" for structured lines, anything else for plain text
    """
    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # request lines from the storefront client are noise at INFO
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(config: ConfiguratorConfig):
    """Apply the level and format carried by a ConfiguratorConfig."""
    configure_logging(config.log_level, config.log_format)
