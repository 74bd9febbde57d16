"""Tests for the interactive timing editor."""

import logging
import math

import pytest

from lrcsync.core.editor import EditorSession
from lrcsync.core.models import LyricLine
from lrcsync.core.store import LrcDirectoryStore
from lrcsync.exceptions import IncompleteTimingError, LyricsError, ValidationError


def _lines(session):
    return [(line.start_time, line.text) for line in session.lyrics]


# ------------------------------
# Construction
# ------------------------------


class TestCreation:
    def test_parses_raw_text(self, playback, track, raw_lyrics):
        session = EditorSession(playback, track, text=raw_lyrics)
        assert _lines(session) == [
            (None, "First line"),
            (None, "Second line"),
            (None, "Third line"),
        ]
        assert session.current_index == -1

    def test_prefers_saved_lyrics_without_aliasing(self, playback, track):
        saved = [LyricLine(1.0, "saved")]
        session = EditorSession(playback, track, text="raw", saved_lyrics=saved)
        session.modify_line(0, "edited")
        assert saved[0].text == "saved"
        assert _lines(session) == [(1.0, "edited")]

    def test_from_store_loads_saved_lrc(self, playback, track, store):
        store.save(track, "[00:01.00] a\n[00:02.00] b\n")
        session = EditorSession.from_store(playback, track, "raw text", store)
        assert _lines(session) == [(1.0, "a"), (2.0, "b")]

    def test_from_store_keeps_saved_pause(self, playback, track, store):
        store.save(track, "[00:01.00] a\n[00:02.00] \n[00:03.00] b\n")
        session = EditorSession.from_store(playback, track, "raw text", store)
        assert _lines(session) == [(1.0, "a"), (2.0, ""), (3.0, "b")]

    def test_from_store_falls_back_to_text(self, playback, track, store):
        session = EditorSession.from_store(playback, track, "raw text", store)
        assert _lines(session) == [(None, "raw text")]
        assert session.origin_lyrics is None


# ------------------------------
# Mark / insert / remove
# ------------------------------


class TestMark:
    def test_marks_in_order_then_stops(self, make_session, playback):
        session = make_session([(None, "a"), (None, "b")])

        playback.current_time = 5
        assert session.mark() is True
        assert _lines(session) == [(5, "a"), (None, "b")]
        assert session.current_index == 0

        playback.current_time = 9
        assert session.mark() is True
        assert _lines(session) == [(5, "a"), (9, "b")]
        assert session.current_index == 1

        playback.current_time = 12
        assert session.mark() is False
        assert _lines(session) == [(5, "a"), (9, "b")]
        assert session.current_index == 1

    def test_mark_on_empty_sequence(self, make_session):
        session = make_session([])
        assert session.mark() is False
        assert session.current_index == -1

    def test_remark_after_jump(self, make_session, playback):
        session = make_session([(1, "a"), (2, "b"), (3, "c")])
        session.jump(1, 0)
        playback.current_time = 2.5
        session.mark()
        assert _lines(session) == [(1, "a"), (2.5, "b"), (3, "c")]
        assert session.current_index == 1


class TestInsert:
    def test_insert_before_first(self, make_session, playback):
        session = make_session([(5, "a")])
        playback.current_time = 3
        assert session.insert_line() is True
        assert _lines(session) == [(3, ""), (5, "a")]
        assert session.current_index == 0

    def test_insert_appends_at_end(self, make_session, playback):
        session = make_session([(5, "a")])
        session.jump(5, 0)
        playback.current_time = 8
        session.insert_line()
        assert _lines(session) == [(5, "a"), (8, "")]
        assert session.current_index == 1

    def test_insert_into_empty(self, make_session, playback):
        session = make_session([])
        playback.current_time = 1
        session.insert_line()
        assert _lines(session) == [(1, "")]


class TestRemove:
    def test_remove_before_cursor_shifts_cursor(self, make_session):
        session = make_session([(5, "a"), (9, "b")])
        session.jump(9, 1)
        assert session.remove_line(0) is True
        assert _lines(session) == [(9, "b")]
        assert session.current_index == 0

    def test_remove_cursor_line(self, make_session):
        session = make_session([(5, "a"), (9, "b"), (12, "c")])
        session.jump(9, 1)
        session.remove_line(1)
        assert _lines(session) == [(5, "a"), (12, "c")]
        assert session.current_index == 0

    def test_remove_after_cursor_keeps_cursor(self, make_session):
        session = make_session([(5, "a"), (9, "b")])
        session.jump(5, 0)
        session.remove_line(1)
        assert session.current_index == 0

    def test_remove_only_marked_line(self, make_session):
        session = make_session([(5, "a")])
        session.jump(5, 0)
        session.remove_line(0)
        assert session.lyrics == []
        assert session.current_index == -1

    def test_remove_out_of_range(self, make_session):
        session = make_session([(5, "a")])
        assert session.remove_line(3) is False
        assert session.remove_line(-1) is False
        assert len(session) == 1


# ------------------------------
# Jump / modify / retime
# ------------------------------


class TestJump:
    def test_jump_seeks_and_moves_cursor(self, make_session, playback):
        session = make_session([(5, "a"), (9, "b")])
        assert session.jump(9, 1) is True
        assert playback.current_time == 9
        assert session.current_index == 1

    @pytest.mark.parametrize("time", [None, "5", True, math.nan, math.inf])
    def test_jump_ignores_untimed(self, make_session, playback, time):
        session = make_session([(None, "a")])
        playback.current_time = 4
        assert session.jump(time, 0) is False
        assert playback.current_time == 4
        assert session.current_index == -1

    def test_jump_out_of_range(self, make_session):
        session = make_session([(5, "a")])
        assert session.jump(5, 4) is False
        assert session.current_index == -1


class TestModifyAndRetime:
    def test_modify_line_keeps_time_and_cursor(self, make_session):
        session = make_session([(5, "a")])
        assert session.modify_line(0, "new") is True
        assert _lines(session) == [(5, "new")]
        assert session.current_index == -1

    def test_modify_line_folds_breaks_and_strips(self, make_session):
        session = make_session([(5, "a")])
        session.modify_line(0, "  first\r\nsecond\nthird  ")
        assert _lines(session) == [(5, "first second third")]

    def test_modify_out_of_range(self, make_session):
        session = make_session([(5, "a")])
        assert session.modify_line(1, "x") is False

    def test_retime_and_clear(self, make_session):
        session = make_session([(5, "a")])
        assert session.retime_line(0, 6.5) is True
        assert _lines(session) == [(6.5, "a")]
        session.retime_line(0, None)
        assert session.untimed_count == 1

    def test_retime_rejects_negative(self, make_session):
        session = make_session([(5, "a")])
        with pytest.raises(ValidationError, match="non-negative"):
            session.retime_line(0, -1)


# ------------------------------
# Reset / import
# ------------------------------


class TestReset:
    def test_reset_local_rewinds(self, make_session, playback):
        session = make_session([(5, "a")])
        session.jump(5, 0)
        session.reset_local()
        assert playback.current_time == 0
        assert session.current_index == -1
        assert _lines(session) == [(5, "a")]

    def test_reset_local_logs(self, make_session, caplog):
        session = make_session([(5, "a"), (6, "b")])
        caplog.set_level(logging.DEBUG, logger="lrcsync")
        session.reset_local()
        assert "Reset cursor over 2 line(s)" in caplog.text

    def test_paste_import_replaces_sequence(self, make_session, playback):
        session = make_session([(5, "a")])
        session.jump(5, 0)
        count = session.paste_import("one\n\n\ntwo\n")
        assert count == 2
        assert _lines(session) == [(None, "one"), (None, "two")]
        assert session.current_index == -1
        assert playback.current_time == 0

    def test_paste_import_of_nothing_gives_empty(self, make_session):
        session = make_session([(5, "a")])
        assert session.paste_import("\n♪\n") == 0
        assert session.lyrics == []

    def test_import_file(self, make_session, temp_dir):
        path = temp_dir / "lyrics.txt"
        path.write_text("[00:01.00] hi\nthere\n", encoding="utf-8")
        session = make_session([])
        assert session.import_file(path) == 2
        assert _lines(session) == [(1.0, "hi"), (None, "there")]

    def test_import_missing_file(self, make_session, temp_dir):
        session = make_session([(5, "a")])
        with pytest.raises(LyricsError):
            session.import_file(temp_dir / "missing.txt")
        assert _lines(session) == [(5, "a")]

    def test_reset_remote_clears_store(self, playback, track, store):
        store.save(track, "[00:01.00] saved\n")
        session = EditorSession.from_store(playback, track, "raw line", store)
        session.reset_remote()
        assert store.load(track) is None
        assert _lines(session) == [(None, "raw line")]
        assert session.origin_lyrics == [LyricLine(None, "raw line")]


# ------------------------------
# Save / download
# ------------------------------


class TestSave:
    def test_save_refused_with_untimed_line(self, make_session, store, track):
        session = make_session([(0, "a"), (None, "b")])
        with pytest.raises(IncompleteTimingError) as exc_info:
            session.save()
        assert exc_info.value.untimed_count == 1
        assert exc_info.value.first_untimed_index == 1
        assert "line 2" in str(exc_info.value)
        assert store.load(track) is None

    def test_save_complete_lyrics(self, make_session, store, track):
        session = make_session([(0, "a"), (3, "b")])
        lyric = session.save()
        assert lyric == "[00:00.00] a\n[00:03.00] b\n"
        assert lyric.count("\n") == 2
        assert store.load(track) == lyric
        assert session.origin_lyrics == [LyricLine(0, "a"), LyricLine(3, "b")]

    def test_save_to_directory_store(self, playback, track, temp_dir):
        store = LrcDirectoryStore(temp_dir)
        session = EditorSession(playback, track, saved_lyrics=[LyricLine(1.0, "a")], store=store)
        session.save()
        assert (temp_dir / "Song - Artist.lrc").read_text(encoding="utf-8") == "[00:01.00] a\n"

    def test_download_allows_untimed(self, make_session, temp_dir):
        session = make_session([(None, "x"), (3, "y")])
        path = session.download(temp_dir / "out")
        assert path.name == "Song - Artist.lrc"
        assert path.read_text(encoding="utf-8") == "[00:00.00] x\n[00:03.00] y\n"

    def test_save_logs(self, make_session, caplog):
        caplog.set_level(logging.INFO, logger="lrcsync")
        make_session([(1, "a")]).save()
        assert "Saved 1 line(s) for Song - Artist" in caplog.text


# ------------------------------
# Session lifecycle
# ------------------------------


class TestLifecycle:
    def test_open_loops_and_close_restores(self, make_session, playback):
        playback.playback_rate = 0.75
        session = make_session([(5, "a")])
        with session:
            assert playback.loop is True
            session.set_playback_rate(1.5)
            assert playback.playback_rate == 1.5
        assert playback.loop is False
        assert playback.playback_rate == 0.75

    def test_open_rewinds(self, make_session, playback):
        session = make_session([(5, "a")])
        session.jump(5, 0)
        session.open()
        assert playback.current_time == 0
        assert session.current_index == -1

    def test_close_returns_origin_lyrics(self, playback, track):
        saved = [LyricLine(1.0, "saved")]
        session = EditorSession(playback, track, saved_lyrics=saved)
        session.open()
        session.modify_line(0, "unsaved edit")
        assert session.close() == saved

    def test_rejects_unknown_rate(self, make_session):
        with pytest.raises(ValidationError, match="Playback rate"):
            make_session([]).set_playback_rate(3.0)

    def test_is_marked(self, make_session):
        session = make_session([(1, "a"), (2, "b")])
        session.jump(1, 0)
        assert session.is_marked(0)
        assert not session.is_marked(1)
