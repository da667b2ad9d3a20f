"""Utility modules for folder backup."""

from .formatters import format_file_size, format_size_mb, format_date

__all__ = ["format_file_size", "format_size_mb", "format_date"]
