"""Data file discovery for the activity chart app.

Resolves which two cohort CSVs to load: paths from the user's app config if
set, else the bundled sample files in the project's data/ directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from activitychart.chart.app_config import AppConfig

# Bundled sample files (one per cohort)
DEFAULT_COHORT_A_CSV = "male_medians.csv"
DEFAULT_COHORT_B_CSV = "fem_medians.csv"


def get_data_dir() -> Path:
    """Resolve the project's data/ directory.

    Package layout: <project>/src/activitychart/app/schema.py
    Data: <project>/data/
    """
    # schema.py -> app -> activitychart -> src -> project root
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def resolve_cohort_paths(config: Optional[AppConfig] = None) -> tuple[str, str]:
    """Return (cohort_a, cohort_b) paths or URLs to load.

    Config values win; a missing value falls back to the bundled sample.
    Local paths are not checked here; the loader raises FileNotFoundError.
    """
    path_a, path_b = config.get_cohort_paths() if config is not None else (None, None)
    data_dir = get_data_dir()
    return (
        path_a or str(data_dir / DEFAULT_COHORT_A_CSV),
        path_b or str(data_dir / DEFAULT_COHORT_B_CSV),
    )
