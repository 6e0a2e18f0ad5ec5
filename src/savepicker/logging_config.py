import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "SAVEPICKER_LOG_LEVEL"


def configure_logging(level: Optional[int] = None, default_level: int = logging.INFO) -> None:
    """Configure the root logger with a single stream handler.

    An explicit ``level`` wins; otherwise SAVEPICKER_LOG_LEVEL is honored if set.
    """
    if level is None:
        level = default_level
        level_name = os.getenv(LOG_LEVEL_ENV)
        if level_name:
            level = getattr(logging, level_name.upper(), default_level)

    handler = logging.StreamHandler(stream=sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
