"""Logging configuration helpers."""

import logging

HANDLER_NAME = "fityo-stream"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with a single stream handler.

    Handlers installed by others (test capture, hosting runtimes) are left alone
    and do not count as the application's handler.
    """
    logger = logging.getLogger("fityo")
    logger.setLevel(level)
    if any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
