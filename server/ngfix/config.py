"""
Configuration management for the ng-codefix engine.

This module provides configuration loading with sensible defaults for
which code fixes are enabled and how rebuilt code is printed.
"""

import copy
import fnmatch
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .types import FormatOptions

logger = logging.getLogger(__name__)

NEW_LINE_SEQUENCES = {"lf": "\n", "crlf": "\r\n", "auto": None}

CONFIG_FILE_NAMES = [".ng-codefix.yml", ".ng-codefix.yaml", "ng-codefix.yml", "ng-codefix.yaml"]

DEFAULTS: Dict[str, Any] = {
    "enabled_fixes": ["*"],
    "format_options": {
        "indent_size": 4,
        "new_line": "auto",  # "auto" | "lf" | "crlf"
    },
}


@dataclass
class CodeFixConfig:
    """Configuration for the code-fix engine."""

    # Fix ids (glob patterns allowed) that may run
    enabled_fixes: List[str] = None

    # Printer settings
    format_options: Dict[str, Any] = None

    def __post_init__(self):
        if self.enabled_fixes is None:
            object.__setattr__(self, 'enabled_fixes', list(DEFAULTS["enabled_fixes"]))
        if self.format_options is None:
            object.__setattr__(self, 'format_options', dict(DEFAULTS["format_options"]))

    def is_fix_enabled(self, fix_id: str) -> bool:
        return any(fnmatch.fnmatch(fix_id, pattern) for pattern in self.enabled_fixes)

    def to_format_options(self) -> FormatOptions:
        """Build printer options; unknown ``new_line`` values fall back to "auto"."""
        new_line = str(self.format_options.get("new_line", "auto")).lower()
        if new_line not in NEW_LINE_SEQUENCES:
            logger.warning("Unknown new_line setting %r, using 'auto'", new_line)
            new_line = "auto"
        return FormatOptions(
            indent_size=int(self.format_options.get("indent_size", 4)),
            new_line_character=NEW_LINE_SEQUENCES[new_line],
        )


def load_config(config_path: Optional[str] = None) -> CodeFixConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        CodeFixConfig instance
    """
    merged_config = copy.deepcopy(DEFAULTS)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}

            if not isinstance(file_config, dict):
                raise ValueError("top-level YAML value must be a mapping")

            if "enabled_fixes" in file_config:
                merged_config["enabled_fixes"] = list(file_config["enabled_fixes"] or [])

            # Deep merge format options
            if "format_options" in file_config:
                merged_config["format_options"].update(file_config["format_options"] or {})

        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning("Failed to load config from %s: %s. Using default configuration.", config_path, e)
            merged_config = copy.deepcopy(DEFAULTS)

    return CodeFixConfig(**merged_config)


def get_default_config() -> CodeFixConfig:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: CodeFixConfig, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: CodeFixConfig to save
        config_path: Path where to save the config
    """
    config_dict = {
        "enabled_fixes": config.enabled_fixes,
        "format_options": config.format_options,
    }

    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.dump(config_dict, f, default_flow_style=False, indent=2)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for `.ng-codefix.yml`, `.ng-codefix.yaml`, `ng-codefix.yml` and
    `ng-codefix.yaml`, in that order, in each directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)

    while True:
        for config_name in CONFIG_FILE_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None
