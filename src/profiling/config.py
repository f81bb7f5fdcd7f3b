"""Profiling engine configuration helpers.

Values are read at call time so tests and long-running services pick up
environment overrides without a restart. Invalid overrides are logged and
fall back to the defaults.
"""

import logging
from typing import Optional

from common.config.env import get_env_float, get_env_int, get_env_str

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 10
DEFAULT_TYPE_THRESHOLD = 0.8
DEFAULT_MAX_KPI_COLUMNS = 4


def _positive_int(name: str, default: int) -> int:
    try:
        value = get_env_int(name, None)
    except ValueError as exc:
        logger.warning("Invalid %s: %s", name, exc)
        return default
    if value is None or value < 1:
        return default
    return value


def get_sample_size() -> int:
    """Number of leading records inspected when classifying a column."""
    return _positive_int("PROFILING_SAMPLE_SIZE", DEFAULT_SAMPLE_SIZE)


def get_type_threshold() -> float:
    """Share of sample values that must parse for numeric/temporal classification."""
    try:
        value = get_env_float("PROFILING_TYPE_THRESHOLD", None)
    except ValueError as exc:
        logger.warning("Invalid PROFILING_TYPE_THRESHOLD: %s", exc)
        return DEFAULT_TYPE_THRESHOLD
    if value is None or not 0.0 <= value < 1.0:
        return DEFAULT_TYPE_THRESHOLD
    return value


def get_max_kpi_columns() -> int:
    """Maximum number of numeric columns summarized as KPI cards."""
    return _positive_int("PROFILING_MAX_KPI_COLUMNS", DEFAULT_MAX_KPI_COLUMNS)


def get_date_format() -> Optional[str]:
    """Optional strftime pattern for time-series labels; None means US month/day/year."""
    value = (get_env_str("PROFILING_DATE_FORMAT", "") or "").strip()
    return value or None
