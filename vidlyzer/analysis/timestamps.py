"""
Timestamp helpers for playback positions
"""
import math
from typing import Optional


def format_timestamp(seconds: float) -> str:
    """
    Format seconds as mm:ss, or hh:mm:ss once the position passes one hour

    :param seconds: playback position (seconds); NaN / inf format as 00:00
    :return: display string
    """
    if math.isnan(seconds) or math.isinf(seconds):
        return "00:00"
    total_seconds = max(int(seconds), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_timestamp(timestamp: str) -> Optional[float]:
    """
    Parse mm:ss or hh:mm:ss back to seconds

    :param timestamp: display string
    :return: seconds, or None when the string is not a timestamp
    """
    parts = timestamp.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 or math.isnan(v) or math.isinf(v) for v in values):
        return None

    seconds = 0.0
    for value in values:
        seconds = seconds * 60 + value
    return seconds
