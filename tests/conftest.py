import locale
import logging
import os
import tempfile

# Kivy reads these at import time: keep it away from pytest's argv and the user's ~/.kivy.
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")
os.environ.setdefault("KIVY_LOG_MODE", "PYTHON")
os.environ.setdefault("KIVY_HOME", tempfile.mkdtemp(prefix="kivy_home_"))

import pytest

from seamless_player.core.sorting import Track


@pytest.fixture
def make_tracks():
    def _make(*names):
        return [Track(f"content://media/{i}", name) for i, name in enumerate(names)]
    return _make


@pytest.fixture
def app_logger():
    """Yields the package logger and strips whatever handlers a test installed."""
    logger = logging.getLogger("seamless_player")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


@pytest.fixture
def restore_collation():
    saved = locale.setlocale(locale.LC_COLLATE)
    yield
    locale.setlocale(locale.LC_COLLATE, saved)
