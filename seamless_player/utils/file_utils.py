# seamless_player/utils/file_utils.py

import logging
import os
import sys
from typing import Iterable

from seamless_player.constants import APP_NAME, MEDIA_EXTENSIONS
from seamless_player.core.exceptions import InvalidFolderPathError
from seamless_player.core.sorting import Track

log = logging.getLogger(__name__)

def get_user_data_dir_for_app() -> str:
    """Gets the platform-specific user data directory for the application."""
    user_data_dir = ""
    if os.name == "nt": # Windows
        user_data_dir = os.path.join(os.environ.get("APPDATA", ""), APP_NAME)
    elif sys.platform == "darwin": # macOS
        user_data_dir = os.path.join(os.path.expanduser("~/Library/Application Support"), APP_NAME)
    else: # Linux and other POSIX
        user_data_dir = os.path.join(os.path.expanduser("~/.local/share"), APP_NAME)

    try:
        os.makedirs(user_data_dir, exist_ok=True)
    except OSError as e:
        log.critical(f"Could not create user data directory at {user_data_dir}: {e}")
    return user_data_dir

def get_extension(name: str) -> str:
    """Returns the lower-cased text after the last dot, or "" if there is none."""
    if not name or "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()

def is_media_file(name: str) -> bool:
    return get_extension(name) in MEDIA_EXTENSIONS

def filter_media_tracks(entries: Iterable) -> list[Track]:
    """Keeps entries whose name carries a media extension.

    Entries are Track objects or (identifier, name) pairs.
    """
    tracks = []
    for entry in entries:
        track = entry if isinstance(entry, Track) else Track(*entry)
        if track.name and is_media_file(track.name):
            tracks.append(track)
        else:
            log.debug(f"Skipping non-media entry: {track.name!r}")
    return tracks

def scan_folder(folder: str) -> list[Track]:
    """Lists media files at the top level of `folder`, in listing order."""
    norm_path = os.path.normpath(folder)
    if not os.path.isdir(norm_path):
        raise InvalidFolderPathError(f"Path is not a valid directory: {norm_path}")

    with os.scandir(norm_path) as it:
        entries = [(entry.path, entry.name) for entry in it if entry.is_file()]
    tracks = filter_media_tracks(entries)
    log.info(f"Found {len(tracks)} media file(s) of {len(entries)} in {norm_path}")
    return tracks
