"""Tests for the PlaylistWriter and its sort helpers."""

from pathlib import Path

import pytest

from sync_playlists.core.sync import (
    PlaylistWriteError,
    PlaylistWriter,
    ascii_lower,
    name_sort_key,
    playlist_filename,
    strip_article,
    strip_track_number,
)
from sync_playlists.models import Playlist, SortMode, Track


def make_track(filename: str, order: int, name: str | None = None) -> Track:
    """Build a track sourced from /src."""
    return Track(
        display_name=name,
        target_filename=filename,
        source_path=Path("/src") / filename,
        play_order=order,
    )


class TestSortHelpers:
    """Test name mode sort key helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("02 Song", "Song"),
            ("2 Song", "2 Song"),
            ("123 Song", "123 Song"),
            ("01-12 Song", "Song"),
            ("1-12 Song", "1-12 Song"),
            ("0a Song", "0a Song"),
            ("02", "02"),
            ("02 03 Song", "03 Song"),
        ],
    )
    def test_strip_track_number(self, value, expected):
        """Test that only the exact NN and NN-NN prefixes strip."""
        assert strip_track_number(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("The Band", "Band"),
            ("the band", "band"),
            ("THE Band", "Band"),
            ("A Tribe", "Tribe"),
            ("a tribe", "tribe"),
            ("An Album", "An Album"),
            ("Theory", "Theory"),
            ("The", "The"),
            ("The The", "The"),
        ],
    )
    def test_strip_article(self, value, expected):
        """Test that a single leading article strips."""
        assert strip_article(value) == expected

    def test_ascii_lower_ignores_non_ascii(self):
        """Test that lowering is ASCII only."""
        assert ascii_lower("ÀBC Déf") == "Àbc déf"

    def test_name_sort_key_prefers_display_name(self):
        """Test the key comes from the display name when present."""
        track = make_track("01 Zebra.mp3", 1, name="The Apple")
        assert name_sort_key(track) == "apple"

    def test_name_sort_key_strips_track_number_from_display_name(self):
        """Test a numbered display name sorts without its prefix."""
        track = make_track("zebra.mp3", 1, name="03 The Song")
        assert name_sort_key(track) == "song"

    def test_name_sort_key_falls_back_to_filename(self):
        """Test the key uses the filename when there is no display name."""
        assert name_sort_key(make_track("03 The Song.mp3", 1)) == "song.mp3"
        assert name_sort_key(make_track("x.mp3", 1, name="")) == "x.mp3"

    def test_track_number_then_article_only_once(self):
        """Test strips are not applied recursively."""
        track = make_track("01 A 02 Thing.mp3", 1)
        assert name_sort_key(track) == "02 thing.mp3"

    def test_playlist_filename(self):
        """Test playlist file naming."""
        assert playlist_filename("Rock") == "Rock.m3u"


class TestOrdering:
    """Test dedupe and ordering."""

    def test_dedupe_last_wins(self):
        """Test a repeated filename keeps the last entry's data."""
        tracks = [
            make_track("x.mp3", 1, name="First"),
            make_track("y.mp3", 2),
            make_track("x.mp3", 3, name="Last"),
        ]

        unique = PlaylistWriter.dedupe_tracks(tracks)

        assert [t.target_filename for t in unique] == ["x.mp3", "y.mp3"]
        assert unique[0].display_name == "Last"

    def test_play_order_mode(self, tmp_path):
        """Test output is ascending by play order."""
        writer = PlaylistWriter(tmp_path)
        tracks = [make_track("c.mp3", 3), make_track("a.mp3", 1), make_track("b.mp3", 2)]

        ordered = writer.order_tracks(tracks)

        assert [t.play_order for t in ordered] == [1, 2, 3]

    def test_name_mode(self, tmp_path):
        """Test name mode ignores track numbers, articles and case."""
        writer = PlaylistWriter(tmp_path, sort_mode=SortMode.NAME)
        tracks = [
            make_track("1.mp3", 1, name="The Zombies"),
            make_track("2.mp3", 2, name="a tribe"),
            make_track("01 Middle.mp3", 3),
            make_track("4.mp3", 4, name="BAND"),
        ]

        ordered = writer.order_tracks(tracks)

        assert [t.target_filename for t in ordered] == [
            "4.mp3",
            "01 Middle.mp3",
            "2.mp3",
            "1.mp3",
        ]

    def test_name_mode_uses_last_display_name(self, tmp_path):
        """Test the dedup law in name mode."""
        writer = PlaylistWriter(tmp_path, sort_mode=SortMode.NAME)
        tracks = [
            make_track("x.mp3", 1, name="Aardvark"),
            make_track("y.mp3", 2, name="Middle"),
            make_track("x.mp3", 3, name="Zulu"),
        ]

        path = writer.write_playlist("Mix", tracks)

        assert path.read_bytes() == b"y.mp3\r\nx.mp3\r\n"


class TestWritePlaylist:
    """Test playlist file output."""

    def test_scenario_b(self, tmp_path):
        """Test play order mode output bytes."""
        writer = PlaylistWriter(tmp_path)

        path = writer.write_playlist(
            "Rock", [make_track("x.mp3", 2), make_track("y.mp3", 1)]
        )

        assert path == tmp_path / "Rock.m3u"
        assert path.read_bytes() == b"y.mp3\r\nx.mp3\r\n"

    def test_duplicates_written_once(self, tmp_path):
        """Test a filename appears on exactly one line."""
        writer = PlaylistWriter(tmp_path)
        tracks = [make_track("x.mp3", 1), make_track("y.mp3", 2), make_track("x.mp3", 3)]

        content = writer.write_playlist("Mix", tracks).read_bytes()

        assert content.split(b"\r\n").count(b"x.mp3") == 1

    def test_utf8_and_crlf(self, tmp_path):
        """Test filenames are UTF-8 with CRLF terminators and no header."""
        writer = PlaylistWriter(tmp_path)

        path = writer.write_playlist("Café", [make_track("Motörhead.mp3", 1)])

        assert path.name == "Café.m3u"
        assert path.read_bytes() == "Motörhead.mp3".encode("utf-8") + b"\r\n"

    def test_empty_playlist_writes_empty_file(self, tmp_path):
        """Test a playlist without tracks still produces a file."""
        path = PlaylistWriter(tmp_path).write_playlist("Empty", [])

        assert path.exists()
        assert path.read_bytes() == b""

    def test_truncates_existing_file(self, tmp_path):
        """Test that an existing playlist is overwritten."""
        (tmp_path / "Rock.m3u").write_bytes(b"old.mp3\r\nolder.mp3\r\n")

        PlaylistWriter(tmp_path).write_playlist("Rock", [make_track("new.mp3", 1)])

        assert (tmp_path / "Rock.m3u").read_bytes() == b"new.mp3\r\n"

    def test_unencodable_filename_is_fatal(self, tmp_path):
        """Test that a filename holding surrogates cannot be written."""
        # Lone surrogates do not pass model validation, so skip it here
        track = Track.model_construct(
            display_name=None,
            target_filename="bad\udcff.mp3",
            source_path=Path("/src/bad.mp3"),
            play_order=1,
        )

        with pytest.raises(PlaylistWriteError, match="cannot convert filename"):
            PlaylistWriter(tmp_path).write_playlist("Rock", [track])

        assert not (tmp_path / "Rock.m3u").exists()

    def test_unopenable_file_is_fatal(self, tmp_path):
        """Test that a missing target directory is reported."""
        writer = PlaylistWriter(tmp_path / "missing")

        with pytest.raises(PlaylistWriteError, match="unable to open"):
            writer.write_playlist("Rock", [make_track("a.mp3", 1)])

    def test_dry_run_writes_nothing(self, tmp_path):
        """Test a dry run returns the path without creating it."""
        writer = PlaylistWriter(tmp_path, dry_run=True)

        path = writer.write_playlist("Rock", [make_track("a.mp3", 1)])

        assert path == tmp_path / "Rock.m3u"
        assert not path.exists()

    def test_write_playlists(self, tmp_path):
        """Test writing several playlists in order."""
        playlists = [
            Playlist(name="Rock", tracks=[make_track("a.mp3", 1)]),
            Playlist(name="Pop", tracks=[]),
        ]

        paths = PlaylistWriter(tmp_path).write_playlists(playlists)

        assert paths == [tmp_path / "Rock.m3u", tmp_path / "Pop.m3u"]
