# seamless_player/core/sorting.py
"""Natural (numeric-aware) and locale-collation ordering of track names.

NATURAL puts "video2.mp4" before "video10.mp4". LOCALE delegates to the host
collator, which ranks digits as characters and usually puts "video10.mp4" first.
"""

import functools
import locale
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Iterable, NamedTuple, Protocol

log = logging.getLogger(__name__)

_DIGIT_RUN = re.compile(r"(\d+)")

# Digit runs the interpreter refuses to convert compare as the largest value.
_SATURATED = math.inf


# =============================================================================
# Types
# =============================================================================

@dataclass(frozen=True)
class Track:
    """One playable entry: an opaque identifier plus its display name."""

    identifier: Any
    name: str


class SortPolicy(Enum):
    NATURAL = "natural"
    LOCALE = "locale"

    @classmethod
    def from_value(cls, value, default=None):
        """Looks up a policy by its stored value, falling back to `default`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            if default is None:
                raise
            log.warning(f"Unknown sort policy '{value}', using '{default.value}'.")
            return default


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, a, b) -> "Ordering":
        return cls((a > b) - (a < b))


class SegmentKind(IntEnum):
    # TEXT < NUMBER decides mixed segments at the same position.
    TEXT = 0
    NUMBER = 1


class Segment(NamedTuple):
    kind: SegmentKind
    value: Any


SortKey = tuple[Segment, ...]


class Collator(Protocol):
    def compare(self, a: str, b: str) -> int:
        ...


def apply_host_locale(locale_name: str = "") -> str:
    """Switches LC_COLLATE to `locale_name` (the environment's locale when empty).

    Returns the collation locale in effect afterwards.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, locale_name)
    except locale.Error as e:
        log.warning(f"Could not set collation locale '{locale_name or '<environment>'}': {e}")
    current = locale.setlocale(locale.LC_COLLATE)
    log.debug(f"Collation locale: {current}")
    return current


class LocaleCollator:
    """Collation by the host C library for the LC_COLLATE locale.

    Python starts with LC_COLLATE set to "C", so the collator first adopts the
    locale named by the environment (LC_ALL, LC_COLLATE, LANG).
    """

    def __init__(self, locale_name: str = ""):
        self.locale_name = apply_host_locale(locale_name)

    def compare(self, a: str, b: str) -> int:
        try:
            return locale.strcoll(a, b)
        except ValueError:
            # strcoll rejects embedded NUL characters
            return (a > b) - (a < b)


# =============================================================================
# Natural Ordering
# =============================================================================

def _parse_number(digits: str):
    try:
        return int(digits)
    except ValueError:
        log.debug(f"Digit run of length {len(digits)} saturated to the maximum value.")
        return _SATURATED


def sort_key(name: str) -> SortKey:
    """Splits a lower-cased name into TEXT and NUMBER segments.

    Example:
        "Video10.mp4" -> (TEXT "video", NUMBER 10, TEXT ".mp4")
    """
    segments = []
    for index, fragment in enumerate(_DIGIT_RUN.split(name.lower())):
        if not fragment:
            continue
        # re.split with a capture group puts the digit runs at odd positions
        if index % 2:
            segments.append(Segment(SegmentKind.NUMBER, _parse_number(fragment)))
        else:
            segments.append(Segment(SegmentKind.TEXT, fragment))
    return tuple(segments)


def compare_keys(key_a: SortKey, key_b: SortKey) -> Ordering:
    """Compares two keys segment by segment; a key that is a prefix sorts first."""
    for seg_a, seg_b in zip(key_a, key_b):
        if seg_a.kind != seg_b.kind:
            return Ordering.of(seg_a.kind, seg_b.kind)
        if seg_a.value != seg_b.value:
            return Ordering.of(seg_a.value, seg_b.value)
    return Ordering.of(len(key_a), len(key_b))


def compare_natural(name_a: str, name_b: str) -> Ordering:
    return compare_keys(sort_key(name_a), sort_key(name_b))


# =============================================================================
# Locale Ordering
# =============================================================================

@functools.lru_cache(maxsize=None)
def default_collator() -> LocaleCollator:
    return LocaleCollator()


def compare_locale(name_a: str, name_b: str, collator: Collator | None = None) -> Ordering:
    result = (collator or default_collator()).compare(name_a, name_b)
    return Ordering.of(result, 0)


# =============================================================================
# Sorting
# =============================================================================

def sort_tracks(tracks: Iterable[Track], policy: SortPolicy,
                collator: Collator | None = None) -> list[Track]:
    """Returns the tracks ordered by name under `policy`.

    Names that compare equal fall back to raw code-point order and then to
    their input position, so the result depends only on the input sequence.
    """
    if policy is SortPolicy.NATURAL:
        return sorted(tracks, key=lambda t: (sort_key(t.name), t.name))

    collator = collator or default_collator()

    def compare_tracks(a: Track, b: Track) -> int:
        return compare_locale(a.name, b.name, collator) or Ordering.of(a.name, b.name)

    return sorted(tracks, key=functools.cmp_to_key(compare_tracks))
