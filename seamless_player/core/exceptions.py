# seamless_player/core/exceptions.py

class SeamlessPlayerError(Exception):
    """Base exception class for all application-specific errors."""
    pass

# --- File and Folder Errors ---
class InvalidFolderPathError(SeamlessPlayerError):
    """Raised when a provided path is not a valid folder."""
    pass

class NoMediaFoundError(SeamlessPlayerError):
    """Raised when a folder or track list holds no playable media."""
    pass

# --- Settings Errors ---
class SettingsError(SeamlessPlayerError):
    """Raised when the settings store cannot be written."""
    pass

# --- Playlist Errors ---
class PlaylistError(SeamlessPlayerError):
    """Base exception for playlist sequencing operations."""
    pass

class TrackIndexOutOfRangeError(PlaylistError):
    """Raised when a seek targets a position outside [1, length]."""

    def __init__(self, requested, length: int):
        self.requested = requested
        self.length = length
        super().__init__(f"Enter a number from 1 to {length} (got: {requested!r})")

class EndOfPlaylistError(PlaylistError):
    """Raised when advancing past the last track with loop disabled."""
    pass
