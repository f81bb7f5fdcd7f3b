"""Agent-facing chart helpers.

extraction    pulls one chart spec out of a free-form agent reply
capabilities  decides which chart types a renderer can draw
"""

from agent.viz.capabilities import RENDERABLE_CHART_TYPES, is_renderable, renderable_charts
from agent.viz.extraction import (
    ExtractionResult,
    ExtractionStatus,
    extract_chart_spec,
    find_chart_block,
)

__all__ = [
    "RENDERABLE_CHART_TYPES",
    "ExtractionResult",
    "ExtractionStatus",
    "extract_chart_spec",
    "find_chart_block",
    "is_renderable",
    "renderable_charts",
]
