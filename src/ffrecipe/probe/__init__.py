"""Probe facade: duration and structured metadata of media files."""

from ffrecipe.probe.ffprobe import FFprobeFacade
from ffrecipe.probe.interface import MediaInfo, ProbeFacade

__all__ = ["FFprobeFacade", "MediaInfo", "ProbeFacade"]
