"""Shared test fixtures for ffrecipe."""

import logging
import os
from pathlib import Path

import pytest

from ffrecipe.compiler.registry import RecipeContext
from ffrecipe.probe import MediaInfo


class FakeProbe:
    """In-memory ProbeFacade.

    Durations are looked up by path; unknown paths report ``default``.
    Every query is recorded in ``calls`` so tests can assert how often the
    compiler probed.
    """

    def __init__(
        self,
        durations: dict[Path, float] | None = None,
        default: float = 60.0,
        info: MediaInfo | None = None,
    ) -> None:
        self.durations = {Path(k): v for k, v in (durations or {}).items()}
        self.default = default
        self.info = info
        self.calls: list[Path] = []

    def duration_seconds(self, path: Path) -> float:
        self.calls.append(Path(path))
        return self.durations.get(Path(path), self.default)

    def get_media_info(self, path: Path) -> MediaInfo:
        if self.info is not None:
            return self.info
        return MediaInfo(duration=self.duration_seconds(path))


@pytest.fixture
def probe() -> FakeProbe:
    """Probe reporting 60 seconds for every file."""
    return FakeProbe()


@pytest.fixture
def make_probe():
    """Factory for probes with per-file durations or a fixed MediaInfo."""
    return FakeProbe


@pytest.fixture
def ctx(probe: FakeProbe) -> RecipeContext:
    """Recipe context without overwrite."""
    return RecipeContext(probe=probe)


@pytest.fixture
def sample_info() -> MediaInfo:
    """Typical 1080p H.264/AAC file."""
    return MediaInfo(
        duration=75.5,
        width=1920,
        height=1080,
        frame_rate=29.97,
        video_codec="h264",
        video_bitrate=4_500_000,
        audio_codec="aac",
        audio_bitrate=128_000,
        total_bitrate=4_700_000,
        file_size=44_000_000,
    )


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    """An existing (empty) input file."""
    path = tmp_path / "clip.mp4"
    path.touch()
    return path


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's config file and FFRECIPE_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("FFRECIPE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("FFRECIPE_CONFIG_PATH", str(tmp_path / "no-config.yaml"))


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler, level and propagation changes made by configure_logging."""
    logger = logging.getLogger("ffrecipe")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
