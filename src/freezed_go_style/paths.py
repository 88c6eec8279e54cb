"""
freezed-go-style Path Configuration

Directory Structure:
.freezed_go_style/
├── config.json          # Project-local configuration
└── logs/                # Log files (opt-in)
"""

from pathlib import Path
from typing import Optional


class ToolPaths:
    """
    Centralized path configuration.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    TOOL_DIR = ".freezed_go_style"
    GLOBAL_DIR = Path.home() / ".freezed_go_style"

    CONFIG_NAME = "config.json"
    LOGS_DIR = "logs"

    def __init__(self, project_root: Optional[Path] = None):
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def tool_dir(self) -> Path:
        """Get the .freezed_go_style directory path."""
        return self.project_root / self.TOOL_DIR

    @property
    def local_config(self) -> Path:
        return self.tool_dir / self.CONFIG_NAME

    @property
    def global_config(self) -> Path:
        return self.GLOBAL_DIR / self.CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self.tool_dir / self.LOGS_DIR

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.tool_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


def get_paths(project_root: Optional[Path] = None) -> ToolPaths:
    """Get the paths configuration for a project root (defaults to CWD)."""
    return ToolPaths(project_root)
