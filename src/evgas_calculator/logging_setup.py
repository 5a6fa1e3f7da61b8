"""Logging setup shared by the API server and dashboard.

Level names arrive already normalised by ``Settings`` (aliases such as
``verbose`` are expanded there).
"""

import logging
import sys

SERVICE_NAME = "evgas-calculator"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s", '
    f'"service_name": "{SERVICE_NAME}"}}'
)


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Point the root logger at stdout in ``text`` or ``json`` format."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(_JSON_FORMAT if log_format == "json" else _TEXT_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Per-request chatter only when debugging
    noisy_level = logging.DEBUG if root_logger.level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
