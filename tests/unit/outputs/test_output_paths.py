"""Tests for default output path derivation."""

from pathlib import Path

import pytest

from ffrecipe.exceptions import PreconditionError
from ffrecipe.outputs import default_output_dir, default_output_path


class TestDefaultOutputPath:
    """Tests for default_output_path function."""

    def test_next_to_input(self):
        path = default_output_path(Path("clips/holiday.mov"), "compressed", "mp4")
        assert path == Path("clips/holiday_compressed.mp4")

    def test_output_dir_created(self, tmp_path):
        target = tmp_path / "renders" / "today"
        path = default_output_path(Path("/media/a.mp4"), "gif", "gif", output_dir=target)

        assert path == target / "a_gif.gif"
        assert target.is_dir()

    def test_explicit_out_wins(self, tmp_path):
        out = tmp_path / "nested" / "final.mkv"
        path = default_output_path(
            Path("/media/a.mp4"), "trim", "mp4", out=out, output_dir=tmp_path / "unused"
        )

        assert path == out
        assert out.parent.is_dir()
        assert not (tmp_path / "unused").exists()

    def test_empty_stem_rejected(self):
        with pytest.raises(PreconditionError, match="Invalid input filename"):
            default_output_path(Path("/"), "trim", "mp4")

    def test_uncreatable_directory(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.touch()
        with pytest.raises(PreconditionError, match="Failed to create output directory"):
            default_output_path(Path("a.mp4"), "x", "mp4", output_dir=blocker / "sub")


class TestDefaultOutputDir:
    """Tests for default_output_dir function."""

    def test_derived_from_input(self, tmp_path):
        directory = default_output_dir(tmp_path / "talk.mp4", "hls")
        assert directory == tmp_path / "talk_hls"
        assert directory.is_dir()

    def test_explicit_out(self, tmp_path):
        directory = default_output_dir(tmp_path / "talk.mp4", "frames", out=tmp_path / "f")
        assert directory == tmp_path / "f"
        assert directory.is_dir()
