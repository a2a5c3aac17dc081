# seamless_player/constants.py


# =============================================================================
# Application Metadata
# =============================================================================
APP_NAME = "Seamless Player"
APP_VERSION = "1.0.0"

# =============================================================================
# File and Directory Names
# =============================================================================
SETTINGS_FILE = "seamless_player_settings.json"
LOG_FILE = "app.log"

# =============================================================================
# Supported Formats
# =============================================================================
MEDIA_EXTENSIONS = frozenset({
    "mp3", "mp4", "avi", "mkv", "flv", "wmv",
    "mov", "m4v", "flac", "wav", "ogg", "aac",
    "wma", "m4a", "webm", "3gp", "ts", "m2ts",
})

# =============================================================================
# Settings Keys
# =============================================================================
CONFIG_KEY_SORT_POLICY = "sort_policy"
CONFIG_KEY_LOOP = "loop"
CONFIG_KEY_SHUFFLE = "shuffle"
CONFIG_KEY_MUTED = "muted"

# =============================================================================
# Playback Modes
# =============================================================================
REPEAT_NONE = 0
REPEAT_PLAYLIST = 2

# =============================================================================
# Session Presets
# =============================================================================
# Launcher variants: (sort policy value, muted)
PRESET_STANDARD = "standard"
PRESET_WINDOWS_SORT = "windows_sort"
PRESET_MUTED = "muted"
SESSION_PRESETS = {
    PRESET_STANDARD: ("natural", False),
    PRESET_WINDOWS_SORT: ("locale", False),
    PRESET_MUTED: ("locale", True),
}
