"""Console logging configuration."""

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_console_logging(level: int | str = logging.WARNING) -> None:
    """
    Send quizbank logs to stderr at the given level.

    Safe to call on every CLI invocation: when the root logger already has
    a handler only its level is updated.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
