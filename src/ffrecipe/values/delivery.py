"""Delivery targets: social platforms, crops, transitions and film looks."""

from __future__ import annotations

from enum import Enum

from ffrecipe.values._common import lookup_alias


class SocialPlatform(Enum):
    """Platform presets as (key, width, height, video kbps)."""

    INSTAGRAM = ("instagram", 1080, 1080, 3500)
    TIKTOK = ("tiktok", 1080, 1920, 4000)
    YOUTUBE_SHORTS = ("youtube-shorts", 1080, 1920, 5000)
    TWITTER = ("twitter", 1280, 720, 3000)

    def __init__(self, key: str, width: int, height: int, bitrate_kbps: int) -> None:
        self.key = key
        self.width = width
        self.height = height
        self.bitrate_kbps = bitrate_kbps

    @classmethod
    def parse(cls, raw: str) -> SocialPlatform:
        return lookup_alias(
            raw,
            {
                "instagram": cls.INSTAGRAM,
                "ig": cls.INSTAGRAM,
                "tiktok": cls.TIKTOK,
                "tt": cls.TIKTOK,
                "youtube-shorts": cls.YOUTUBE_SHORTS,
                "youtube shorts": cls.YOUTUBE_SHORTS,
                "shorts": cls.YOUTUBE_SHORTS,
                "yt-shorts": cls.YOUTUBE_SHORTS,
                "twitter": cls.TWITTER,
                "x": cls.TWITTER,
            },
            "social platform",
            "instagram, tiktok, youtube-shorts, or twitter",
        )

    def __str__(self) -> str:
        return self.key


class SocialCropShape(Enum):
    SQUARE = "square"
    CIRCLE = "circle"

    @classmethod
    def parse(cls, raw: str) -> SocialCropShape:
        return lookup_alias(
            raw,
            {"square": cls.SQUARE, "circle": cls.CIRCLE, "round": cls.CIRCLE},
            "crop shape",
            "square or circle",
        )


class TransitionType(Enum):
    """Transition style. Values are xfade transition names."""

    FADE = "fade"
    WIPE = "wipeleft"
    SLIDE = "slideleft"

    @classmethod
    def parse(cls, raw: str) -> TransitionType:
        return lookup_alias(
            raw,
            {"fade": cls.FADE, "wipe": cls.WIPE, "slide": cls.SLIDE},
            "transition type",
            "fade, wipe, or slide",
        )


class VintageEra(Enum):
    """Film look for the vintage effect."""

    SEVENTIES = "70s"
    EIGHTIES = "80s"
    NINETIES = "90s"
    CLASSIC = "classic"

    @classmethod
    def parse(cls, raw: str) -> VintageEra:
        return lookup_alias(
            raw,
            {
                "70s": cls.SEVENTIES,
                "1970s": cls.SEVENTIES,
                "80s": cls.EIGHTIES,
                "1980s": cls.EIGHTIES,
                "90s": cls.NINETIES,
                "1990s": cls.NINETIES,
                "classic": cls.CLASSIC,
            },
            "era",
            "70s, 80s, 90s, or classic",
        )
