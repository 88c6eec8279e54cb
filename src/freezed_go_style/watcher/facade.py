"""
Public API for the watcher subsystem.
"""

import threading
import time
from pathlib import Path
from typing import Optional

from loguru import logger
from watchdog.observers import Observer

from freezed_go_style.formatter import DartFormatter
from .config import MONITORING_CONFIG, WATCHER_CONFIG
from .handler import FormatOnSaveHandler


def run_watcher(
    directory: Path,
    formatter: Optional[DartFormatter] = None,
    stop_event: Optional[threading.Event] = None,
    debounce_delay: Optional[float] = None,
) -> FormatOnSaveHandler:
    """
    Watch a directory and format marked Dart files when they are saved.

    Blocks until stop_event is set or the process is interrupted.

    Args:
        directory: Directory to watch (recursively)
        formatter: Formatter to use (a default one if omitted)
        stop_event: Event that ends the loop when set
        debounce_delay: Override for the per-path debounce delay

    Returns:
        The handler, for its statistics
    """
    directory = Path(directory).resolve()
    formatter = formatter or DartFormatter()
    stop_event = stop_event or threading.Event()
    if debounce_delay is None:
        debounce_delay = formatter.config.get("watcher.debounce_delay", WATCHER_CONFIG["debounce_delay"])

    handler = FormatOnSaveHandler(formatter, debounce_delay=debounce_delay, root=directory)

    observer = Observer()
    observer.schedule(handler, str(directory), recursive=MONITORING_CONFIG["recursive"])
    observer.start()
    logger.info(f"Watching {directory} for saved Dart files...")

    try:
        while not stop_event.is_set():
            time.sleep(WATCHER_CONFIG["poll_interval"])
            handler.check_and_format()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        observer.stop()
        observer.join()
        logger.info(
            f"Watcher stopped. Processed {handler.events_processed} events, "
            f"formatted {handler.files_formatted} files"
        )

    return handler
