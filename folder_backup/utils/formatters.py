"""Formatting utilities for backup run output."""

from datetime import datetime

from ..core.models import BYTES_PER_GB, BYTES_PER_MB


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human readable size string.
    """
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < BYTES_PER_MB:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < BYTES_PER_GB:
        return f"{size_bytes / BYTES_PER_MB:.1f}MB"
    else:
        return f"{size_bytes / BYTES_PER_GB:.2f}GB"


def format_size_mb(size_bytes: int) -> str:
    """Format a size in megabytes with two decimals."""
    return f"{size_bytes / BYTES_PER_MB:.2f} MB"


def format_date(dt: datetime, short: bool = False) -> str:
    """Format datetime for display.

    Args:
        dt: Datetime to format.
        short: If True, use short format.

    Returns:
        Formatted date string.
    """
    if short:
        return dt.strftime('%Y-%m-%d %H:%M')
    else:
        return dt.strftime('%Y-%m-%d %H:%M:%S')
