# seamless_player/logger.py

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from seamless_player.constants import LOG_FILE
from seamless_player.utils.file_utils import get_user_data_dir_for_app

APP_LOGGER_NAME = "seamless_player"
FILE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_RESET = "\x1b[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\x1b[2m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[1;31m",
}


class LevelColorFormatter(logging.Formatter):
    """Colours only the level name; INFO lines stay plain."""

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(tinted)


def setup_logging(log_dir: str | None = None, console_level: int = logging.INFO) -> logging.Logger:
    """Routes every seamless_player.* logger to a rotating file and stderr.

    Safe to call again: existing handlers are closed and replaced.
    """
    logging.getLogger("kivy").setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    log_path = None
    try:
        log_dir = log_dir or get_user_data_dir_for_app()
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, LOG_FILE)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        app_logger.addHandler(file_handler)
    except OSError as e:
        log_path = None
        print(f"Log file unavailable ({e}); logging to console only.", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(LevelColorFormatter(CONSOLE_FORMAT))
    app_logger.addHandler(console_handler)
    app_logger.propagate = False

    app_logger.info("Logging started; file: %s", log_path or "(none)")
    return app_logger
