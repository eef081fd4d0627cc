"""Timestamp and size formatting for list rows and previews.

Relative formats take ``now`` explicitly so rendering stays reproducible.
"""

from __future__ import annotations

import time


def format_time(timestamp: int) -> str:
    """Format a unix timestamp as local ``YYYY-MM-DD HH:MM:SS``."""
    if timestamp <= 0:
        return "0000-00-00 00:00:00"
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))


def _ago(value: int, unit: str) -> str:
    if value == 1:
        return f"1 {unit} ago"
    return f"{value} {unit}s ago"


def format_relative_time(timestamp: int, now: int) -> str:
    """Long relative form used by previews (``"3 hours ago"``)."""
    if timestamp <= 0:
        return "unknown"
    seconds = max(0, now - timestamp)
    minutes = seconds // 60
    hours = seconds // 3600
    days = seconds // 86400
    if seconds < 60:
        return _ago(seconds, "second")
    if minutes < 60:
        return _ago(minutes, "minute")
    if hours < 24:
        return _ago(hours, "hour")
    if days < 7:
        return _ago(days, "day")
    if days // 7 < 4:
        return _ago(days // 7, "week")
    if days // 30 < 12:
        return _ago(days // 30, "month")
    return _ago(days // 365, "year")


def format_time_ago(timestamp: int, now: int) -> str:
    """Compact relative form used in list rows (``"5m ago"``)."""
    seconds = max(0, now - timestamp)
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def format_file_size(size: int) -> str:
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024
    if size >= gb:
        return f"{size / gb:.2f} GB"
    if size >= mb:
        return f"{size / mb:.2f} MB"
    if size >= kb:
        return f"{size / kb:.2f} KB"
    return f"{size} bytes"
