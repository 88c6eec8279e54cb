"""
Format-on-save event handling using watchdog.

Mirrors what an editor integration does after the generic formatter ran:
format the saved file only if it mentions the marker, one pass per file at
a time, and let the editor pick the result up from disk.
"""

import time
from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler

from freezed_go_style.formatter import DartFormatter
from freezed_go_style.schemas import FileResult
from .config import MONITORING_CONFIG, WATCHER_CONFIG
from .guard import PathLockRegistry


class FormatOnSaveHandler(FileSystemEventHandler):
    """
    Collects save events and formats the affected files once they settle.
    """

    def __init__(
        self,
        formatter: DartFormatter,
        locks: Optional[PathLockRegistry] = None,
        debounce_delay: float = WATCHER_CONFIG["debounce_delay"],
        root: Optional[Path] = None,
    ):
        """
        Initialize the event handler.

        Args:
            formatter: Formatter used for every pass
            locks: Single-flight registry (a private one if omitted)
            debounce_delay: Seconds to wait after the last event for a path
            root: Watched directory; ignore patterns are matched below it
        """
        self.formatter = formatter
        self.locks = locks if locks is not None else PathLockRegistry()
        self.debounce_delay = debounce_delay
        self.root = Path(root) if root is not None else None

        # path -> time of the last event seen for it
        self.pending: Dict[Path, float] = {}

        # Statistics
        self.events_processed = 0
        self.files_formatted = 0

    @property
    def marker_token(self) -> str:
        return f"@{self.formatter.marker_name}"

    def on_any_event(self, event: FileSystemEvent):
        if event.is_directory or event.event_type not in MONITORING_CONFIG["event_types"]:
            return

        src = getattr(event, "dest_path", "") or event.src_path
        path = Path(src)
        if not self.formatter.is_target(path, self.root):
            return

        logger.debug(f"Event: {event.event_type} - {path}")
        if len(self.pending) < WATCHER_CONFIG["max_pending_paths"] or path in self.pending:
            self.pending[path] = time.monotonic()
        self.events_processed += 1

    def check_and_format(self, now: Optional[float] = None) -> int:
        """
        Format every pending path whose debounce window has passed.

        Returns:
            Number of files that were changed
        """
        now = time.monotonic() if now is None else now
        ready = [p for p, seen in self.pending.items() if now - seen >= self.debounce_delay]

        changed = 0
        for path in ready:
            del self.pending[path]
            result = self.format_saved_file(path)
            if result is not None and result.changed:
                changed += 1
        self.files_formatted += changed
        return changed

    def format_saved_file(self, path: Path) -> Optional[FileResult]:
        """
        Run one formatting pass for a saved file.

        Returns:
            FileResult, or None when the file was skipped (no marker,
            unreadable, or a pass already in flight for it)
        """
        try:
            text = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping {path}: {e}")
            return None

        if self.marker_token not in text:
            return None

        with self.locks.single_flight(path) as acquired:
            if not acquired:
                logger.debug(f"Formatting already in progress for {path}, skipping")
                return None
            result = self.formatter.format_file(path, self.root)

        if result.error:
            logger.warning(f"{path}: {result.error}")
        elif result.changed:
            logger.info(f"Formatted on save: {path}")
        return result
