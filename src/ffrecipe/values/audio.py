"""Audio-related parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ffrecipe.exceptions import ParseError
from ffrecipe.values._common import format_number, lookup_alias

_DECIBEL_SUFFIXES = ("decibels", "decibel", "db")


@dataclass(frozen=True)
class VolumeAdjustment:
    """A volume change as a percentage in ``[0, 100]`` or as decibels.

    Exactly one of ``percent`` or ``decibels`` is set.
    """

    percent: float | None = None
    decibels: float | None = None

    @classmethod
    def parse(cls, raw: str) -> VolumeAdjustment:
        """Parse ``50%``, ``+10db`` or ``-5dB``."""
        text = raw.strip()
        lowered = text.lower()
        hint = "50% or +10db"
        if lowered.endswith("%"):
            try:
                percent = float(text[:-1])
            except ValueError:
                raise ParseError(f"Invalid volume adjustment: {raw}", raw=raw, hint=hint) from None
            if not 0.0 <= percent <= 100.0:
                raise ParseError("Percentage must be between 0% and 100%", raw=raw)
            return cls(percent=percent)
        for suffix in _DECIBEL_SUFFIXES:
            if lowered.endswith(suffix):
                try:
                    return cls(decibels=float(text[: -len(suffix)]))
                except ValueError:
                    break
        raise ParseError(f"Invalid volume adjustment: {raw}", raw=raw, hint=hint)

    def to_gain(self) -> float:
        """Linear gain for the volume filter."""
        if self.percent is not None:
            return self.percent / 100.0
        return 10.0 ** ((self.decibels or 0.0) / 20.0)

    def to_ffmpeg(self) -> str:
        return f"volume={self.to_gain():.6f}"

    def __str__(self) -> str:
        if self.percent is not None:
            return f"{format_number(self.percent)}%"
        decibels = self.decibels or 0.0
        sign = "+" if decibels >= 0 else ""
        return f"{sign}{format_number(decibels)}db"


class AudioSyncDirection(Enum):
    """Whether the audio track is pushed later or pulled earlier."""

    DELAY = "delay"
    ADVANCE = "advance"

    @classmethod
    def parse(cls, raw: str) -> AudioSyncDirection:
        return lookup_alias(
            raw,
            {"delay": cls.DELAY, "advance": cls.ADVANCE},
            "sync direction",
            "'delay' or 'advance'",
        )


class AudioFormat(Enum):
    """Audio container produced by extraction and mixing."""

    MP3 = "mp3"
    WAV = "wav"
    M4A = "m4a"
    OGG = "ogg"

    @classmethod
    def parse(cls, raw: str) -> AudioFormat:
        return lookup_alias(
            raw,
            {
                "mp3": cls.MP3,
                "wav": cls.WAV,
                "m4a": cls.M4A,
                "aac": cls.M4A,
                "ogg": cls.OGG,
            },
            "audio format",
            "mp3, wav, m4a, or ogg",
        )

    @classmethod
    def from_extension(cls, extension: str) -> AudioFormat:
        """Map a file extension to a format, defaulting to AAC in M4A."""
        try:
            return cls(extension.lower().lstrip("."))
        except ValueError:
            return cls.M4A

    def codec_args(self) -> list[str]:
        """Encoder flags for this container."""
        return list(_AUDIO_CODEC_ARGS[self])


_AUDIO_CODEC_ARGS = {
    AudioFormat.MP3: ("-c:a", "libmp3lame", "-q:a", "2"),
    AudioFormat.WAV: ("-c:a", "pcm_s16le"),
    AudioFormat.M4A: ("-c:a", "aac", "-b:a", "192k"),
    AudioFormat.OGG: ("-c:a", "libvorbis", "-q:a", "5"),
}


class VisualizationStyle(Enum):
    WAVEFORM = "waveform"
    SPECTRUM = "spectrum"

    @classmethod
    def parse(cls, raw: str) -> VisualizationStyle:
        return lookup_alias(
            raw,
            {"waveform": cls.WAVEFORM, "wave": cls.WAVEFORM, "spectrum": cls.SPECTRUM},
            "visualization style",
            "waveform or spectrum",
        )
