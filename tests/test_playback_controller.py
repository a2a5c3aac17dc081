import pytest

from seamless_player.constants import REPEAT_NONE, REPEAT_PLAYLIST
from seamless_player.core.exceptions import NoMediaFoundError, TrackIndexOutOfRangeError
from seamless_player.core.playback_controller import PlaybackController
from seamless_player.core.settings_manager import SettingsManager
from seamless_player.core.sorting import SortPolicy, sort_tracks
from seamless_player.utils.file_utils import filter_media_tracks


def reverse(items):
    return list(reversed(items))


def names(controller):
    return [t.name for t in controller.ordered_tracks()]


@pytest.fixture
def settings(tmp_path):
    return SettingsManager(str(tmp_path / "settings.json"))


@pytest.fixture
def entries():
    return [
        ("uri:1", "video10.mp4"),
        ("uri:2", "video2.mp4"),
        ("uri:3", "video1.mp4"),
        ("uri:4", "notes.txt"),
        ("uri:5", "video3.MKV"),
        ("uri:6", "video4.mov"),
    ]


@pytest.fixture
def controller(settings, entries):
    controller = PlaybackController(settings_manager=settings, permute=reverse)
    controller.load_tracks(entries)
    return controller


def test_load_filters_and_sorts(controller):
    assert names(controller) == ["video1.mp4", "video2.mp4", "video3.MKV", "video4.mov", "video10.mp4"]
    assert controller.current_index == 0
    assert controller.current_track.name == "video1.mp4"
    assert controller.counter_text() == "1/5"
    assert controller.info_text() == "Files: 5 | Loop: OFF | Random: OFF"


def test_sort_policy_comes_from_settings(settings, entries):
    settings.set_sort_policy(SortPolicy.LOCALE)
    controller = PlaybackController(settings_manager=settings)
    controller.load_tracks(entries)
    assert controller.sort_policy is SortPolicy.LOCALE
    expected = sort_tracks(filter_media_tracks(entries), SortPolicy.LOCALE)
    assert controller.ordered_tracks() == tuple(expected)


def test_load_without_media_raises(controller):
    with pytest.raises(NoMediaFoundError):
        controller.load_tracks([("uri:9", "notes.txt")])
    assert controller.ordered_tracks() == ()
    assert controller.counter_text() == "0/0"


def test_load_folder(tmp_path):
    for name in ("b.mp3", "a.mp3", "cover.jpg"):
        (tmp_path / name).write_bytes(b"")
    controller = PlaybackController(sort_policy="natural")
    controller.load_folder(str(tmp_path))
    assert names(controller) == ["a.mp3", "b.mp3"]


def test_events_are_dispatched_synchronously(controller):
    seen = []
    controller.bind(on_index_changed=lambda instance, index: seen.append(("index", index)))
    controller.bind(on_playlist_changed=lambda instance, tracks: seen.append(("playlist", len(tracks))))
    controller.goto("3")
    assert seen == [("index", 2)]
    assert controller.counter_text() == "3/5"

    controller.toggle_shuffle()
    assert seen[-2:] == [("playlist", 5), ("index", 0)]


def test_goto_rejects_bad_input(controller):
    controller.goto("4")
    for text in ("0", "6", "abc", "", "-2"):
        with pytest.raises(TrackIndexOutOfRangeError) as excinfo:
            controller.goto(text)
        assert "from 1 to 5" in str(excinfo.value)
        assert controller.current_index == 3


def test_toggle_shuffle_round_trip_and_persists(controller, settings):
    original = controller.ordered_tracks()
    controller.toggle_shuffle()
    assert controller.shuffle is True
    assert settings.get_shuffle() is True
    assert controller.ordered_tracks() == tuple(reversed(original))
    assert controller.info_text().endswith("Random: ON")

    controller.toggle_shuffle()
    assert controller.ordered_tracks() == original
    assert settings.get_shuffle() is False


def test_shuffle_flag_remembered_without_tracks(settings):
    controller = PlaybackController(settings_manager=settings, permute=reverse)
    controller.toggle_shuffle()
    assert controller.shuffle is True
    assert settings.get_shuffle() is True
    controller.load_tracks([("uri:1", "b.mp3"), ("uri:2", "a.mp3")])
    assert names(controller) == ["a.mp3", "b.mp3"]


def test_toggle_loop_sets_repeat_mode(controller, settings):
    loop_events = []
    controller.bind(on_loop_changed=lambda instance, value: loop_events.append(value))
    assert controller.repeat_mode == REPEAT_NONE
    controller.toggle_loop()
    assert controller.repeat_mode == REPEAT_PLAYLIST
    assert settings.get_loop() is True
    assert loop_events == [True]
    assert PlaybackController(settings_manager=settings).loop is True


def test_track_finished_stops_at_end_without_loop(controller):
    ended = []
    controller.bind(on_end_of_playlist=lambda instance: ended.append(True))
    controller.goto("5")
    assert controller.on_track_finished() is False
    assert ended == [True]
    assert controller.current_index == 4


def test_track_finished_wraps_with_loop(controller):
    controller.toggle_loop()
    controller.goto("5")
    assert controller.on_track_finished() is True
    assert controller.current_index == 0
    controller.previous_track()
    assert controller.current_index == 4


def test_previous_track_stays_at_start_without_loop(controller):
    controller.previous_track()
    assert controller.current_index == 0
    controller.next_track()
    controller.previous_track()
    assert controller.current_index == 0


def test_report_error_dispatches(controller):
    errors = []
    controller.bind(on_error=lambda instance, message: errors.append(message))
    controller.report_error("decoder failed")
    assert errors == ["decoder failed"]


def test_rejected_shuffle_leaves_controller_unchanged(settings, entries):
    controller = PlaybackController(settings_manager=settings, permute=lambda items: list(items)[:1])
    controller.load_tracks(entries)
    controller.goto("2")
    before = controller.ordered_tracks()
    shuffle_events = []
    controller.bind(on_shuffle_changed=lambda instance, value: shuffle_events.append(value))

    with pytest.raises(ValueError):
        controller.toggle_shuffle()

    assert controller.shuffle is False
    assert controller.sequencer.shuffle is False
    assert settings.get_shuffle() is False
    assert shuffle_events == []
    assert controller.ordered_tracks() == before
    assert controller.current_index == 1


def test_goto_on_empty_playlist_is_a_noop(settings):
    controller = PlaybackController(settings_manager=settings)
    for text in ("abc", "", "1", "7"):
        assert controller.goto(text) == 0
    assert controller.counter_text() == "0/0"
