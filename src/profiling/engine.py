"""Dataset profiling entry point: classification, KPIs and chart recommendations."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from opentelemetry import trace

from common.observability.metrics import profiling_metrics
from profiling.classifier import classify
from profiling.kpi import synthesize_kpis
from profiling.models import KPI, ChartSpec, ColumnClassification
from profiling.recommend import recommend_charts

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class DatasetProfile:
    """Profile produced for one ingested dataset."""

    classification: ColumnClassification = field(default_factory=ColumnClassification)
    kpis: List[KPI] = field(default_factory=list)
    charts: List[ChartSpec] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.kpis and not self.charts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classification": self.classification.to_dict(),
            "kpis": [kpi.to_dict() for kpi in self.kpis],
            "charts": [chart.to_dict() for chart in self.charts],
        }


def resolve_columns(
    records: Sequence[Mapping[str, Any]], columns: Optional[Iterable[str]] = None
) -> List[str]:
    """Explicit header order if given, else the first record's key order."""
    if columns is not None:
        return list(columns)
    if not records:
        return []
    return list(records[0].keys())


def profile_dataset(
    records: Sequence[Mapping[str, Any]], columns: Optional[Iterable[str]] = None
) -> DatasetProfile:
    """Classify columns, then derive KPIs and charts from the same classification.

    An empty dataset yields an empty profile rather than an error.
    """
    started = time.perf_counter()
    with tracer.start_as_current_span("profile_dataset") as span:
        span.set_attribute("dataset.row_count", len(records))
        if not records:
            span.set_attribute("profile.empty", True)
            return DatasetProfile()

        column_names = resolve_columns(records, columns)
        classification = classify(records, column_names)
        kpis = synthesize_kpis(records, classification.numeric)
        charts = recommend_charts(records, classification)

        span.set_attribute("profile.column_count", len(column_names))
        span.set_attribute("profile.kpi_count", len(kpis))
        span.set_attribute("profile.chart_count", len(charts))
        for chart in charts:
            profiling_metrics.add_counter(
                "profiling.charts_recommended",
                description="Charts emitted by recommendation rules",
                attributes={"chart_type": chart.type},
            )

        profiling_metrics.record_histogram(
            "profiling.duration_ms",
            (time.perf_counter() - started) * 1000,
            description="Wall time spent profiling one dataset",
            unit="ms",
        )

        logger.info(
            "Profiled dataset: %d rows, %d columns, %d KPIs, %d charts",
            len(records),
            len(column_names),
            len(kpis),
            len(charts),
        )
        return DatasetProfile(classification=classification, kpis=kpis, charts=charts)
