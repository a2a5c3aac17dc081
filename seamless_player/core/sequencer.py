# seamless_player/core/sequencer.py

import logging
import random
from enum import Enum
from typing import Callable, Iterable, Sequence

from seamless_player.core.exceptions import EndOfPlaylistError, TrackIndexOutOfRangeError
from seamless_player.core.sorting import Collator, SortPolicy, Track, sort_tracks

log = logging.getLogger(__name__)

Permutation = Callable[[Sequence[Track]], list]


def random_permutation(items: Sequence, rng: random.Random | None = None) -> list:
    """Returns a uniformly random permutation of `items` as a new list."""
    return (rng or random).sample(list(items), len(items))


class SequencerState(Enum):
    EMPTY = "empty"
    LOADED = "loaded"


class PlaylistSequencer:
    """Owns the active play order, the current index and the loop/shuffle flags.

    Every mutation is synchronous. It either commits the new order, index and
    flags together or raises and leaves them untouched. Calls other than
    `load` and `set_loop` are no-ops while the sequencer is EMPTY.
    """

    def __init__(self, policy: SortPolicy = SortPolicy.NATURAL,
                 collator: Collator | None = None, permute: Permutation | None = None):
        self._policy = policy
        self._collator = collator
        self._permute = permute or random_permutation
        self._loaded: tuple[Track, ...] = ()
        self._order: list[Track] = []
        self._index = 0
        self._loop = False
        self._shuffle = False

    # --- Queries ---

    @property
    def state(self) -> SequencerState:
        return SequencerState.LOADED if self._order else SequencerState.EMPTY

    @property
    def policy(self) -> SortPolicy:
        return self._policy

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return len(self._order)

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def shuffle(self) -> bool:
        return self._shuffle

    def ordered_tracks(self) -> tuple[Track, ...]:
        return tuple(self._order)

    def current_track(self) -> Track | None:
        if 0 <= self._index < len(self._order):
            return self._order[self._index]
        return None

    def __len__(self) -> int:
        return len(self._order)

    # --- Mutations ---

    def _canonical_order(self) -> list[Track]:
        return sort_tracks(self._loaded, self._policy, self._collator)

    def load(self, tracks: Iterable[Track], policy: SortPolicy | None = None):
        """Replaces the track set and applies the sort policy. Never shuffles."""
        loaded = tuple(tracks)
        new_policy = policy or self._policy
        order = sort_tracks(loaded, new_policy, self._collator)

        self._loaded, self._policy, self._order, self._index = loaded, new_policy, order, 0
        if not order:
            log.warning("Load called with no tracks; playlist is empty.")
            return
        log.info(f"Loaded {len(order)} track(s) in {new_policy.value} order.")

    def set_shuffle(self, enabled: bool):
        enabled = bool(enabled)
        if not self._order:
            log.debug("set_shuffle ignored: playlist is empty.")
            return
        if enabled == self._shuffle:
            return

        if enabled:
            order = list(self._permute(self._order))
            if len(order) != len(self._order):
                raise ValueError("Permutation must return every track it was given.")
        else:
            order = self._canonical_order()

        self._order, self._index, self._shuffle = order, 0, enabled
        log.info(f"Shuffle {'enabled' if enabled else 'disabled'}; index reset to 0.")

    def set_loop(self, enabled: bool):
        self._loop = bool(enabled)
        log.debug(f"Loop set to {self._loop}.")

    def seek(self, one_based_index: int) -> int:
        """Moves to the 1-based position `one_based_index` and returns the new 0-based index."""
        if not self._order:
            log.debug("seek ignored: playlist is empty.")
            return self._index
        length = len(self._order)
        if (isinstance(one_based_index, bool) or not isinstance(one_based_index, int)
                or not 1 <= one_based_index <= length):
            raise TrackIndexOutOfRangeError(one_based_index, length)
        self._index = one_based_index - 1
        return self._index

    def advance(self) -> int:
        if not self._order:
            return self._index
        new_index = self._index + 1
        if new_index >= len(self._order):
            if not self._loop:
                raise EndOfPlaylistError(f"Reached the last of {len(self._order)} track(s).")
            new_index = 0
        self._index = new_index
        return self._index

    def retreat(self) -> int:
        if not self._order:
            return self._index
        new_index = self._index - 1
        if new_index < 0:
            if not self._loop:
                return self._index
            new_index = len(self._order) - 1
        self._index = new_index
        return self._index
