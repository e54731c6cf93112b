"""ffrecipe: compile media-processing requests into ffmpeg invocations."""

__version__ = "0.1.0"
