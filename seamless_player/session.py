# seamless_player/session.py

import logging

from seamless_player.constants import PRESET_STANDARD
from seamless_player.core.playback_controller import PlaybackController
from seamless_player.core.settings_manager import SettingsManager
from seamless_player.logger import setup_logging

log = logging.getLogger(__name__)

def start_session(preset: str = PRESET_STANDARD, folder: str | None = None,
                  settings_path: str | None = None, log_dir: str | None = None,
                  **controller_kwargs) -> PlaybackController:
    """Starts a player session the way the launcher presets do.

    Configures logging, stores the preset's sort policy and muted flag, builds
    the controller and, when `folder` is given, loads it.
    """
    setup_logging(log_dir)
    settings = SettingsManager(settings_path)
    settings.apply_preset(preset)

    controller = PlaybackController(settings_manager=settings, **controller_kwargs)
    log.info(f"Session started with preset '{preset}'.")
    if folder is not None:
        controller.load_folder(folder)
    return controller
