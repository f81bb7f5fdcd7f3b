"""Dataset profiling and auto-visualization engine."""

from profiling.classifier import classify
from profiling.engine import DatasetProfile, profile_dataset
from profiling.kpi import synthesize_kpis
from profiling.models import (
    KPI,
    ChartSpec,
    ChartType,
    ColumnClassification,
    ColumnType,
    append_chart,
)
from profiling.recommend import recommend_charts

__all__ = [
    "KPI",
    "ChartSpec",
    "ChartType",
    "ColumnClassification",
    "ColumnType",
    "DatasetProfile",
    "append_chart",
    "classify",
    "profile_dataset",
    "recommend_charts",
    "synthesize_kpis",
]
