"""Formatting utilities.

Pure functions for presenting probed media properties to a human.
"""


def get_resolution_label(width: int | None, height: int | None) -> str:
    """Map video dimensions to a resolution label such as ``1080p`` or ``4K``.

    Returns ``-`` when the dimensions are unknown.
    """
    if not width or not height:
        return "-"

    if height >= 2160:
        return "4K"
    elif height >= 1440:
        return "1440p"
    elif height >= 1080:
        return "1080p"
    elif height >= 720:
        return "720p"
    elif height >= 480:
        return "480p"
    else:
        return f"{height}p"


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form (e.g. "4.2 GB", "1.5 KB")."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def format_bitrate(bits_per_second: int) -> str:
    """Format a bitrate with decimal units (e.g. "2.5 Mbps", "128 kbps")."""
    if bits_per_second <= 0:
        return "-"
    if bits_per_second >= 1000**2:
        return f"{bits_per_second / 1000**2:.1f} Mbps"
    return f"{bits_per_second / 1000:.0f} kbps"


def format_duration(seconds: float) -> str:
    """Format seconds as ``H:MM:SS.ss`` or ``M:SS.ss``.

    Examples:
        >>> format_duration(75.5)
        '1:15.50'
        >>> format_duration(3725)
        '1:02:05.00'
    """
    seconds = max(seconds, 0.0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours >= 1:
        return f"{int(hours)}:{int(minutes):02d}:{secs:05.2f}"
    return f"{int(minutes)}:{secs:05.2f}"
