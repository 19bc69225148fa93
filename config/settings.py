"""
Configuration settings for the error-pattern analytics system.

This module provides the Settings class that holds all configuration
parameters for the application, including file paths, snapshot loading
options and the analysis thresholds the engine runs with.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from emerge_analytics.data.models.analysis_model import AnalysisThresholds


class Settings:
    """
    Configuration settings for the error-pattern analytics system.

    This class provides centralized configuration management for file paths,
    snapshot loading and analysis parameters.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings with default values or from config file.

        Args:
            config_path: Optional path to configuration file
        """
        self._logger = logging.getLogger(self.__class__.__name__)

        # Default base paths
        self.BASE_DIR = Path(__file__).parent.parent  # Project root directory
        self.INPUT_DIR = self.BASE_DIR / "input"
        self.OUTPUT_DIR = self.BASE_DIR / "output"
        self.LOG_DIR = self.BASE_DIR / "logs"

        # File paths for data sources (one exported collection per file)
        self.ERROR_BANK_DATA_PATH = self.INPUT_DIR / "error_bank.json"
        self.SESSION_DATA_PATH = self.INPUT_DIR / "sessions.json"
        self.GROUP_DATA_PATH = self.INPUT_DIR / "groups.json"
        self.STUDENT_DATA_PATH = self.INPUT_DIR / "students.json"
        self.TRACKING_DATA_PATH = self.INPUT_DIR / "student_session_tracking.json"

        # Snapshot loading: the five collection reads run concurrently
        self.LOAD_WORKERS = 5

        # Analysis thresholds (see AnalysisThresholds for meaning)
        self.ANALYSIS_THRESHOLDS: Dict[str, Any] = AnalysisThresholds().model_dump()

        # Visualization defaults
        self.VISUALIZATION_THEME = "default"
        self.VISUALIZATION_FORMATS = ["png"]

        # Load additional settings from config file if provided
        if config_path:
            self._load_from_file(config_path)

        # Override with environment variables if set
        self._load_from_env()

    def create_directories(self) -> None:
        """Create input, output and log directories if they don't exist."""
        self.INPUT_DIR.mkdir(exist_ok=True, parents=True)
        self.OUTPUT_DIR.mkdir(exist_ok=True, parents=True)
        self.LOG_DIR.mkdir(exist_ok=True, parents=True)

    def set_data_dir(self, data_dir: str) -> None:
        """
        Point every collection path at a different input directory.

        Args:
            data_dir: Directory holding the exported JSON collections
        """
        self.INPUT_DIR = Path(data_dir)
        self.ERROR_BANK_DATA_PATH = self.INPUT_DIR / "error_bank.json"
        self.SESSION_DATA_PATH = self.INPUT_DIR / "sessions.json"
        self.GROUP_DATA_PATH = self.INPUT_DIR / "groups.json"
        self.STUDENT_DATA_PATH = self.INPUT_DIR / "students.json"
        self.TRACKING_DATA_PATH = self.INPUT_DIR / "student_session_tracking.json"

    def get_thresholds(self) -> AnalysisThresholds:
        """
        Build the validated threshold object for the analytics engine.

        Returns:
            AnalysisThresholds: Thresholds with any configured overrides applied
        """
        return AnalysisThresholds.model_validate(self.ANALYSIS_THRESHOLDS)

    def _load_from_file(self, config_path: str) -> None:
        """
        Load settings from a configuration file.

        Args:
            config_path: Path to configuration file
        """
        config_file = Path(config_path)
        if not config_file.exists():
            self._logger.warning(f"Config file not found: {config_path}")
            return

        suffix = config_file.suffix.lower()
        with open(config_file, "r", encoding="utf-8") as f:
            if suffix == ".json":
                config_data = json.load(f)
            elif suffix in [".yml", ".yaml"]:
                config_data = yaml.safe_load(f) or {}
            else:
                self._logger.warning(f"Unsupported config file format: {config_file.suffix}")
                return

        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Update known settings from a parsed config mapping.

        Threshold overrides are merged into the defaults rather than
        replacing the whole mapping.

        Args:
            config_data: Parsed configuration
        """
        for key, value in config_data.items():
            if not hasattr(self, key):
                self._logger.warning(f"Ignoring unknown setting: {key}")
                continue

            current = getattr(self, key)
            if key == "ANALYSIS_THRESHOLDS":
                merged = dict(current)
                merged.update(value or {})
                value = merged
            elif isinstance(current, Path):
                value = Path(value)
            setattr(self, key, value)

    def _load_from_env(self) -> None:
        """Load settings from environment variables."""
        # Define mappings from environment variable names to attributes
        env_mappings = {
            "EMERGE_ANALYTICS_ERROR_BANK_DATA": "ERROR_BANK_DATA_PATH",
            "EMERGE_ANALYTICS_SESSION_DATA": "SESSION_DATA_PATH",
            "EMERGE_ANALYTICS_GROUP_DATA": "GROUP_DATA_PATH",
            "EMERGE_ANALYTICS_STUDENT_DATA": "STUDENT_DATA_PATH",
            "EMERGE_ANALYTICS_TRACKING_DATA": "TRACKING_DATA_PATH",
            "EMERGE_ANALYTICS_OUTPUT_DIR": "OUTPUT_DIR",
            "EMERGE_ANALYTICS_LOG_DIR": "LOG_DIR",
            "EMERGE_ANALYTICS_LOAD_WORKERS": "LOAD_WORKERS",
            "EMERGE_ANALYTICS_THEME": "VISUALIZATION_THEME",
        }

        for env_name, attr_name in env_mappings.items():
            if env_name in os.environ:
                setattr(
                    self,
                    attr_name,
                    _coerce_env_value(os.environ[env_name], getattr(self, attr_name)),
                )

        # Individual thresholds: EMERGE_ANALYTICS_THRESHOLD_<NAME>=<value>
        prefix = "EMERGE_ANALYTICS_THRESHOLD_"
        for env_name, env_value in os.environ.items():
            if not env_name.startswith(prefix):
                continue
            key = env_name[len(prefix):].lower()
            if key not in self.ANALYSIS_THRESHOLDS:
                self._logger.warning(f"Ignoring unknown threshold override: {env_name}")
                continue
            self.ANALYSIS_THRESHOLDS[key] = _coerce_env_value(
                env_value, self.ANALYSIS_THRESHOLDS[key]
            )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert settings to a dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation of settings
        """
        return {
            key: str(value) if isinstance(value, Path) else value
            for key, value in self.__dict__.items()
            if not key.startswith("_")
        }


def _coerce_env_value(raw: str, current: Any) -> Any:
    """Convert an environment string to the type of the setting it replaces."""
    if isinstance(current, bool):
        return raw.strip().lower() in ("true", "1", "yes")
    if isinstance(current, Path):
        return Path(raw)
    if isinstance(current, (int, float)):
        return type(current)(raw)
    return raw
