"""Logging setup for applications embedding QuestLang."""
from __future__ import annotations

import logging
import sys

from questlang.core.config import QuestLangConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the root logger with a stdout handler and an optional file handler.

    Library modules only create loggers; calling this is left to the host
    application or tool that drives the interpreter.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging configured with level=%s, file=%s", log_level, log_file)


def configure_logging_from_config(config: QuestLangConfig, log_file: str | None = None) -> None:
    """Configure logging at the level stored in ``config``."""
    configure_logging(config.log_level, log_file)
