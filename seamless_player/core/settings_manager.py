# seamless_player/core/settings_manager.py

import logging
import os
from kivy.event import EventDispatcher
from kivy.storage.jsonstore import JsonStore

from seamless_player.constants import (
    CONFIG_KEY_LOOP,
    CONFIG_KEY_MUTED,
    CONFIG_KEY_SHUFFLE,
    CONFIG_KEY_SORT_POLICY,
    SESSION_PRESETS,
    SETTINGS_FILE,
)
from seamless_player.core.exceptions import SettingsError
from seamless_player.core.sorting import SortPolicy
from seamless_player.utils.file_utils import get_user_data_dir_for_app

log = logging.getLogger(__name__)

class SettingsManager(EventDispatcher):
    """Manages loading, saving, and accessing all application settings."""
    __events__ = ('on_setting_changed',)

    def __init__(self, settings_path: str | None = None):
        super().__init__()
        if settings_path is None:
            settings_path = os.path.join(get_user_data_dir_for_app(), SETTINGS_FILE)
        self.settings_path = settings_path
        self.store = JsonStore(self.settings_path)
        self._defaults = {
            CONFIG_KEY_SORT_POLICY: SortPolicy.NATURAL.value,
            CONFIG_KEY_LOOP: False,
            CONFIG_KEY_SHUFFLE: False,
            CONFIG_KEY_MUTED: False,
        }
        self._load_settings()

    def _load_settings(self):
        """Ensures all default settings exist in the JSON store."""
        is_new_file = not os.path.exists(self.settings_path)
        for key, default_value in self._defaults.items():
            if not self.store.exists(key):
                self._write(key, default_value)
        if is_new_file:
            log.info(f"Created new settings file at: {self.settings_path}")
        else:
            log.info(f"Loaded settings from: {self.settings_path}")

    def _write(self, key, value):
        try:
            self.store.put(key, value=value)
        except (IOError, OSError) as e:
            log.error(f"Failed to save setting '{key}' to {self.settings_path}: {e}")
            raise SettingsError(f"Could not save setting '{key}': {e}")

    def get(self, key, default=None):
        """Gets a value from the settings store."""
        if self.store.exists(key):
            return self.store.get(key)["value"]
        if key in self._defaults:
            log.warning(f"Key '{key}' not in store, returning default value.")
            return self._defaults[key]
        log.error(f"Key '{key}' not found in store or defaults.")
        return default

    def put(self, key, value):
        """Puts a value into the settings store and dispatches an event."""
        self._write(key, value)
        log.debug(f"Setting '{key}' changed to '{value}'")
        self.dispatch('on_setting_changed', key, value)

    def get_sort_policy(self) -> SortPolicy:
        return SortPolicy.from_value(self.get(CONFIG_KEY_SORT_POLICY), default=SortPolicy.NATURAL)

    def set_sort_policy(self, policy):
        self.put(CONFIG_KEY_SORT_POLICY, SortPolicy.from_value(policy).value)

    def get_loop(self) -> bool:
        return bool(self.get(CONFIG_KEY_LOOP))

    def set_loop(self, value: bool):
        self.put(CONFIG_KEY_LOOP, bool(value))

    def get_shuffle(self) -> bool:
        return bool(self.get(CONFIG_KEY_SHUFFLE))

    def set_shuffle(self, value: bool):
        self.put(CONFIG_KEY_SHUFFLE, bool(value))

    def get_muted(self) -> bool:
        return bool(self.get(CONFIG_KEY_MUTED))

    def set_muted(self, value: bool):
        self.put(CONFIG_KEY_MUTED, bool(value))

    def apply_preset(self, preset: str):
        """Stores the sort policy and muted flag of one of the launcher presets."""
        if preset not in SESSION_PRESETS:
            raise ValueError(f"Unknown session preset: {preset}")
        policy_value, muted = SESSION_PRESETS[preset]
        self.set_sort_policy(policy_value)
        self.set_muted(muted)
        log.info(f"Applied session preset '{preset}'.")

    def on_setting_changed(self, key, value):
        pass
