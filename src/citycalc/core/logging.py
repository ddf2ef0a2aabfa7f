from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if json:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)

    # Avoid duplicate handlers on reload
    root.handlers = [handler]
