"""
Folder Backup - dated archive backups of named folders.

This package measures configured folders, enforces size ceilings, compresses
each folder into a staging area and moves the finished archives to a backup
destination.
"""

__version__ = "1.0.0"

from .core.runner import BackupRunner
from .core.scanner import FolderSizer
from .config.config_manager import ConfigManager

__all__ = ["BackupRunner", "FolderSizer", "ConfigManager"]
