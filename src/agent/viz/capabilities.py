"""Rendering capability boundary.

Extraction accepts any chart type string; whether a chart can be drawn is
decided here, at the point where charts are handed to a renderer. Charts
with an unsupported type are skipped rather than treated as errors.
"""

import logging
from typing import FrozenSet, Iterable, List

from profiling.models import ChartSpec, ChartType

logger = logging.getLogger(__name__)

# "histogram" is drawn as a bar chart by renderers.
RENDERABLE_CHART_TYPES: FrozenSet[str] = frozenset(
    {chart_type.value for chart_type in ChartType} | {"histogram"}
)


def is_renderable(chart: ChartSpec, supported: FrozenSet[str] = RENDERABLE_CHART_TYPES) -> bool:
    return chart.type in supported


def renderable_charts(
    charts: Iterable[ChartSpec], supported: FrozenSet[str] = RENDERABLE_CHART_TYPES
) -> List[ChartSpec]:
    """Charts a renderer with the given capability set can draw, in input order."""
    drawable = []
    for chart in charts:
        if is_renderable(chart, supported):
            drawable.append(chart)
        else:
            logger.debug("Skipping chart '%s' with unsupported type '%s'", chart.title, chart.type)
    return drawable
