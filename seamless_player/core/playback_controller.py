# seamless_player/core/playback_controller.py

import logging
from kivy.event import EventDispatcher
from kivy.properties import BooleanProperty, NumericProperty, ObjectProperty

from seamless_player.constants import REPEAT_NONE, REPEAT_PLAYLIST
from seamless_player.core.exceptions import (
    EndOfPlaylistError, NoMediaFoundError, TrackIndexOutOfRangeError
)
from seamless_player.core.sequencer import PlaylistSequencer
from seamless_player.core.sorting import SortPolicy, default_collator
from seamless_player.utils.file_utils import filter_media_tracks, scan_folder
from seamless_player.utils.formatting import (
    format_file_counter, format_info_label, parse_track_number
)

log = logging.getLogger(__name__)

class PlaybackController(EventDispatcher):
    """Binds one player session to a PlaylistSequencer.

    The external playback engine listens for playlist/index events and reports
    finished tracks back through `on_track_finished`. Events are dispatched
    synchronously.
    """
    __events__ = (
        "on_playlist_changed", "on_index_changed", "on_loop_changed",
        "on_shuffle_changed", "on_end_of_playlist", "on_error",
    )

    current_track = ObjectProperty(None, allownone=True)
    current_index = NumericProperty(0)
    loop = BooleanProperty(False)
    shuffle = BooleanProperty(False)
    muted = BooleanProperty(False)

    def __init__(self, settings_manager=None, sort_policy=None, collator=None,
                 permute=None, **kwargs):
        super().__init__(**kwargs)
        self.settings_manager = settings_manager

        if sort_policy is None:
            sort_policy = (self.settings_manager.get_sort_policy()
                           if self.settings_manager else SortPolicy.NATURAL)
        self.sort_policy = SortPolicy.from_value(sort_policy)

        if collator is None and self.sort_policy is SortPolicy.LOCALE:
            # Adopts the environment's collation locale for this session.
            collator = default_collator()
        self._sequencer = PlaylistSequencer(self.sort_policy, collator=collator, permute=permute)
        if self.settings_manager:
            self.loop = self.settings_manager.get_loop()
            self.shuffle = self.settings_manager.get_shuffle()
            self.muted = self.settings_manager.get_muted()
        self._sequencer.set_loop(self.loop)
        log.info(f"PlaybackController ready: sort={self.sort_policy.value}, "
                 f"loop={self.loop}, shuffle={self.shuffle}, muted={self.muted}")

    @property
    def sequencer(self) -> PlaylistSequencer:
        return self._sequencer

    @property
    def repeat_mode(self) -> int:
        return REPEAT_PLAYLIST if self.loop else REPEAT_NONE

    def ordered_tracks(self):
        return self._sequencer.ordered_tracks()

    def _sync_index(self):
        self.current_index = self._sequencer.current_index
        self.current_track = self._sequencer.current_track()
        self.dispatch("on_index_changed", self.current_index)

    def _sync_playlist(self):
        self.dispatch("on_playlist_changed", self._sequencer.ordered_tracks())
        self._sync_index()

    # --- Loading ---

    def load_tracks(self, entries):
        tracks = filter_media_tracks(entries)
        # A fresh load is always in sort order, even with the shuffle flag on.
        self._sequencer.load(tracks)
        self._sync_playlist()
        if not tracks:
            raise NoMediaFoundError("No media files found.")

    def load_folder(self, folder: str):
        log.info(f"Loading folder: {folder}")
        self.load_tracks(scan_folder(folder))

    # --- Toggles ---

    def toggle_loop(self):
        self.set_loop(not self.loop)

    def set_loop(self, enabled: bool):
        self._sequencer.set_loop(enabled)
        self.loop = self._sequencer.loop
        if self.settings_manager:
            self.settings_manager.set_loop(self.loop)
        self.dispatch("on_loop_changed", self.loop)

    def toggle_shuffle(self):
        self.set_shuffle(not self.shuffle)

    def set_shuffle(self, enabled: bool):
        enabled = bool(enabled)
        if enabled == self.shuffle:
            return
        # Sequencer first; it rejects a bad permutation before anything else changes.
        reordered = bool(len(self._sequencer))
        if reordered:
            self._sequencer.set_shuffle(enabled)

        self.shuffle = enabled
        self.dispatch("on_shuffle_changed", enabled)
        if reordered:
            self._sync_playlist()
        if self.settings_manager:
            self.settings_manager.set_shuffle(enabled)

    # --- Navigation ---

    def goto(self, text) -> int:
        """Seeks to the 1-based track number typed by the user."""
        total = len(self._sequencer)
        if not total:
            log.debug("goto ignored: playlist is empty.")
            return self.current_index
        number = parse_track_number(text)
        if number is None:
            raise TrackIndexOutOfRangeError(text, total)
        self._sequencer.seek(number)
        self._sync_index()
        return self.current_index

    def next_track(self) -> bool:
        """Moves to the next track. Returns False when playback should stop."""
        if not len(self._sequencer):
            return False
        try:
            self._sequencer.advance()
        except EndOfPlaylistError as e:
            log.info(f"End of playlist: {e}")
            self.dispatch("on_end_of_playlist")
            return False
        self._sync_index()
        return True

    def on_track_finished(self) -> bool:
        return self.next_track()

    def previous_track(self):
        if not len(self._sequencer):
            return
        old_index = self._sequencer.current_index
        if self._sequencer.retreat() != old_index:
            self._sync_index()

    # --- Display ---

    def counter_text(self) -> str:
        return format_file_counter(self._sequencer.current_index, len(self._sequencer))

    def info_text(self) -> str:
        return format_info_label(len(self._sequencer), self.loop, self.shuffle)

    def report_error(self, message: str):
        log.error(f"Playback error: {message}")
        self.dispatch("on_error", message)

    def on_playlist_changed(self, *args): pass
    def on_index_changed(self, *args): pass
    def on_loop_changed(self, *args): pass
    def on_shuffle_changed(self, *args): pass
    def on_end_of_playlist(self, *args): pass
    def on_error(self, *args): pass
