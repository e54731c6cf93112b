"""Tests for ffmpeg/ffprobe executable lookup."""

from pathlib import Path
from unittest.mock import patch

from ffrecipe.tools.detection import find_tool, resolve_executable


class TestFindTool:
    """Tests for find_tool function."""

    def test_configured_file_wins(self, tmp_path):
        configured = tmp_path / "ffmpeg"
        configured.touch()
        with patch("ffrecipe.tools.detection.shutil.which") as mock_which:
            assert find_tool("ffmpeg", configured) == configured
        mock_which.assert_not_called()

    def test_missing_configured_path_falls_back_to_path(self, tmp_path):
        with patch(
            "ffrecipe.tools.detection.shutil.which", return_value="/usr/bin/ffmpeg"
        ):
            assert find_tool("ffmpeg", tmp_path / "nope") == Path("/usr/bin/ffmpeg")

    def test_not_found(self):
        with patch("ffrecipe.tools.detection.shutil.which", return_value=None):
            assert find_tool("ffprobe") is None


class TestResolveExecutable:
    """Tests for resolve_executable function."""

    def test_found(self):
        with patch(
            "ffrecipe.tools.detection.shutil.which", return_value="/usr/bin/ffprobe"
        ):
            assert resolve_executable("ffprobe") == "/usr/bin/ffprobe"

    def test_bare_name_when_missing(self):
        """An unknown tool is spawned by name so the spawn error is reported."""
        with patch("ffrecipe.tools.detection.shutil.which", return_value=None):
            assert resolve_executable("ffmpeg") == "ffmpeg"
