from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_HANDLER_NAME = "bankapp-console"


def configure_logging(level: str = "INFO") -> None:
    """
    Single console handler on the "bankapp" logger.
    Safe to call more than once (uvicorn reload, tests).
    """
    logger = logging.getLogger("bankapp")
    logger.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    # avoid duplicate lines when uvicorn also configures the root logger
    logger.propagate = False
