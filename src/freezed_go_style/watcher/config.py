"""
Configuration for the format-on-save watcher.
"""

WATCHER_CONFIG = {
    "debounce_delay": 0.5,  # Seconds to wait after the last save before formatting
    "poll_interval": 0.25,  # Main loop tick
    "max_pending_paths": 256,  # Limit paths queued per tick
}

MONITORING_CONFIG = {
    "event_types": ("created", "modified", "moved"),
    "recursive": True,
}
