"""
Watcher package: format-on-save for editors that reload files from disk.
"""

from .facade import run_watcher
from .guard import PathLockRegistry
from .handler import FormatOnSaveHandler
from .config import WATCHER_CONFIG, MONITORING_CONFIG

__all__ = [
    "run_watcher",
    "PathLockRegistry",
    "FormatOnSaveHandler",
    "WATCHER_CONFIG",
    "MONITORING_CONFIG",
]
