"""
Settings management for gitlane
"""

import copy
import json
from pathlib import Path
from typing import Any

from gitlane.constants import (
    DEFAULT_BASE_X,
    DEFAULT_BASE_Y,
    DEFAULT_LANE_WIDTH,
    DEFAULT_MARKER_FILE,
    DEFAULT_NODE_RADIUS,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_TEXT_WIDTH,
)


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "base_x": DEFAULT_BASE_X,  # Left edge of the first lane (date column sits before it)
            "base_y": DEFAULT_BASE_Y,
            "lane_width": DEFAULT_LANE_WIDTH,
            "row_height": DEFAULT_ROW_HEIGHT,
            "text_width": DEFAULT_TEXT_WIDTH,  # Width of the commit message column
            "node_radius": DEFAULT_NODE_RADIUS,
        },
        "git": {
            "follow_branches": False,  # Attach HEAD to a branch when one points at the target
            "marker_file": DEFAULT_MARKER_FILE,
        },
        "logging": {"level": "INFO"},
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / ".config" / "gitlane" / "settings.json"

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.lane_width')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_log_level(self) -> str:
        """Get the logging level name, upper-cased (falls back to INFO)"""
        level = str(self.get("logging.level", "INFO")).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return level

    def get_follow_branches(self) -> bool:
        return bool(self.get("git.follow_branches", False))

    def get_marker_file(self) -> str:
        return str(self.get("git.marker_file", DEFAULT_MARKER_FILE))

    def get_graph_metric(self, name: str, default: int) -> int:
        """Get a non-negative graph geometry value (lane_width, row_height, ...)"""
        value = int(self.get(f"graph.{name}", default))
        return value if value >= 0 else default
