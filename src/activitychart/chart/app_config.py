"""
App config for the activity chart (platformdirs + JSON).

Persisted items (schema v1):
- cohort_a_path / cohort_b_path: CSV paths or URLs for the two cohorts
- strict_load: abort on malformed CSV rows (True) or skip them (False)
- chart: ChartConfig dict representation

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded but update version
- Unknown keys in loaded JSON are ignored with warnings

Only configuration lives here. The visibility dropdown and brush selection
are never written back.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from activitychart.chart.chart_config import ChartConfig
from activitychart.series.errors import InvalidArgumentError
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

APP_NAME = "activitychart"
CONFIG_FILENAME = "activity_chart_config.json"


@dataclass
class AppConfigData:
    """JSON-serializable config payload (primitives, lists, dicts only)."""
    schema_version: int = SCHEMA_VERSION
    cohort_a_path: Optional[str] = None   # None -> bundled sample data
    cohort_b_path: Optional[str] = None
    strict_load: bool = True
    chart: Dict[str, Any] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "cohort_a_path": self.cohort_a_path,
            "cohort_b_path": self.cohort_b_path,
            "strict_load": self.strict_load,
            "chart": self.chart,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "AppConfigData":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing values
        """
        schema_version = int(d.get("schema_version", -1))

        def _opt_str(key: str) -> Optional[str]:
            v = d.get(key)
            if v is None:
                return None
            if not isinstance(v, str):
                logger.warning(f"{key} is not a string, ignoring")
                return None
            return v

        strict_load = d.get("strict_load", True)
        if not isinstance(strict_load, bool):
            logger.warning(f"strict_load is not a bool ({strict_load!r}), using True")
            strict_load = True

        chart = d.get("chart", {})
        if not isinstance(chart, dict):
            logger.warning("chart is not a dict, using defaults")
            chart = {}

        known_keys = {"schema_version", "cohort_a_path", "cohort_b_path", "strict_load", "chart"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in activity chart config, ignoring")

        return cls(
            schema_version=schema_version,
            cohort_a_path=_opt_str("cohort_a_path"),
            cohort_b_path=_opt_str("cohort_b_path"),
            strict_load=strict_load,
            chart=dict(chart),
        )


class AppConfig:
    """Manager for loading/saving AppConfigData to disk."""

    def __init__(self, *, path: Path, data: Optional[AppConfigData] = None):
        self.path = path
        self.data = data if data is not None else AppConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = APP_NAME,
        filename: str = CONFIG_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """
        OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/activitychart/activity_chart_config.json
        Linux:   ~/.config/activitychart/activity_chart_config.json
        Windows: %APPDATA%\\activitychart\\activity_chart_config.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "AppConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version

        If create_if_missing=True and file is missing -> immediately write defaults.
        """
        path = config_path or cls.default_config_path()
        default_data = AppConfigData(schema_version=schema_version)

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"Activity chart config not found at {path}, using defaults")
            cfg = cls(path=path, data=default_data)
            if create_if_missing:
                cfg.save()
            return cfg
        except OSError as e:
            logger.warning(f"Error reading activity chart config {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Activity chart config at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        if not isinstance(parsed, dict):
            logger.warning(f"Activity chart config at {path} does not contain a dict, using defaults")
            return cls(path=path, data=default_data)

        try:
            loaded = AppConfigData.from_json_dict(parsed)
        except (TypeError, ValueError) as e:
            logger.warning(f"Activity chart config at {path} is malformed: {e}, using defaults")
            return cls(path=path, data=default_data)

        if loaded.schema_version != int(schema_version):
            if reset_on_version_mismatch:
                logger.warning(
                    f"Activity chart config schema version mismatch: loaded={loaded.schema_version}, "
                    f"expected={schema_version}, resetting to defaults"
                )
                return cls(path=path, data=default_data)
            loaded.schema_version = int(schema_version)

        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write config to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved activity chart config to {self.path}")

    def get_chart_config(self) -> ChartConfig:
        """ChartConfig from the stored dict; invalid settings fall back to defaults."""
        try:
            return ChartConfig.from_dict(self.data.chart)
        except InvalidArgumentError as e:
            logger.warning(f"Invalid chart settings in {self.path}: {e}, using defaults")
            return ChartConfig()

    def set_chart_config(self, chart_config: ChartConfig) -> None:
        self.data.chart = chart_config.to_dict()

    def get_cohort_paths(self) -> tuple[Optional[str], Optional[str]]:
        return self.data.cohort_a_path, self.data.cohort_b_path

    def set_cohort_paths(self, path_a: Optional[str], path_b: Optional[str]) -> None:
        self.data.cohort_a_path = path_a
        self.data.cohort_b_path = path_b
