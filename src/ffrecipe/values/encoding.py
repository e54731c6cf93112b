"""Encoding choices: quality presets, codecs and target formats."""

from __future__ import annotations

from enum import Enum

from ffrecipe.values._common import lookup_alias


class QualityPreset(Enum):
    """Coarse quality knob shared by convert and compress."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ULTRA = "ultra"

    @classmethod
    def parse(cls, raw: str) -> QualityPreset:
        return lookup_alias(
            raw,
            {
                "low": cls.LOW,
                "medium": cls.MEDIUM,
                "med": cls.MEDIUM,
                "high": cls.HIGH,
                "ultra": cls.ULTRA,
            },
            "quality preset",
            "low, medium, high, or ultra",
        )

    @property
    def crf(self) -> int:
        """x264/x265 constant rate factor (lower is better)."""
        return _X264_CRF[self]

    @property
    def vp9_crf(self) -> int:
        """libvpx-vp9 constant rate factor on its 0-63 scale."""
        return _VP9_CRF[self]

    @property
    def bitrate_multiplier(self) -> float:
        """Approximate bitrate relative to the medium preset."""
        return _BITRATE_MULTIPLIER[self]

    def __str__(self) -> str:
        return self.value


_X264_CRF = {
    QualityPreset.LOW: 28,
    QualityPreset.MEDIUM: 23,
    QualityPreset.HIGH: 18,
    QualityPreset.ULTRA: 15,
}

_VP9_CRF = {
    QualityPreset.LOW: 50,
    QualityPreset.MEDIUM: 40,
    QualityPreset.HIGH: 30,
    QualityPreset.ULTRA: 20,
}

_BITRATE_MULTIPLIER = {
    QualityPreset.LOW: 0.5,
    QualityPreset.MEDIUM: 1.0,
    QualityPreset.HIGH: 2.0,
    QualityPreset.ULTRA: 4.0,
}


class VideoCodec(Enum):
    """Video encoder selectable by the user. Values are ffmpeg encoder names."""

    H264 = "libx264"
    H265 = "libx265"
    VP9 = "libvpx-vp9"
    COPY = "copy"

    @classmethod
    def parse(cls, raw: str) -> VideoCodec:
        return lookup_alias(
            raw,
            {
                "h264": cls.H264,
                "x264": cls.H264,
                "avc": cls.H264,
                "h265": cls.H265,
                "x265": cls.H265,
                "hevc": cls.H265,
                "vp9": cls.VP9,
                "copy": cls.COPY,
            },
            "video codec",
            "h264, h265, vp9, or copy",
        )

    @property
    def ffmpeg_name(self) -> str:
        return self.value


class ConvertFormat(Enum):
    """Target of a convert request."""

    GIF = "gif"
    MP4 = "mp4"
    WEBM = "webm"
    MP3 = "mp3"
    WAV = "wav"
    IPHONE = "iphone"
    ANDROID = "android"
    HLS = "hls"
    DASH = "dash"
    VIDEO_360 = "360"

    @classmethod
    def parse(cls, raw: str) -> ConvertFormat:
        return lookup_alias(
            raw,
            {
                "gif": cls.GIF,
                "mp4": cls.MP4,
                "webm": cls.WEBM,
                "mp3": cls.MP3,
                "wav": cls.WAV,
                "iphone": cls.IPHONE,
                "ios": cls.IPHONE,
                "android": cls.ANDROID,
                "hls": cls.HLS,
                "dash": cls.DASH,
                "360": cls.VIDEO_360,
                "360-video": cls.VIDEO_360,
            },
            "format",
            "gif, mp4, webm, mp3, wav, iphone, android, hls, dash, or 360",
        )

    @property
    def extension(self) -> str:
        """File extension of the produced output."""
        return _FORMAT_EXTENSIONS[self]


_FORMAT_EXTENSIONS = {
    ConvertFormat.GIF: "gif",
    ConvertFormat.MP4: "mp4",
    ConvertFormat.WEBM: "webm",
    ConvertFormat.MP3: "mp3",
    ConvertFormat.WAV: "wav",
    ConvertFormat.IPHONE: "mp4",
    ConvertFormat.ANDROID: "mp4",
    ConvertFormat.HLS: "m3u8",
    ConvertFormat.DASH: "mpd",
    ConvertFormat.VIDEO_360: "mp4",
}


class MetadataField(Enum):
    """Container metadata keys that can be written."""

    TITLE = "title"
    AUTHOR = "author"
    COPYRIGHT = "copyright"
    COMMENT = "comment"
    DESCRIPTION = "description"

    @classmethod
    def parse(cls, raw: str) -> MetadataField:
        return lookup_alias(
            raw,
            {member.value: member for member in cls},
            "metadata field",
            "title, author, copyright, comment, or description",
        )

    @property
    def ffmpeg_key(self) -> str:
        return self.value


class MetadataFormat(Enum):
    """Serialization used when exporting probed metadata."""

    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, raw: str) -> MetadataFormat:
        return lookup_alias(
            raw,
            {"json": cls.JSON, "xml": cls.XML},
            "metadata format",
            "json or xml",
        )
