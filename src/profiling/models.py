"""Profile output models consumed by the rendering and export collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field


class ColumnType(str, Enum):
    """Semantic column types assigned by the classifier."""

    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    CATEGORICAL = "categorical"


class ChartType(str, Enum):
    """Chart variants emitted by the recommendation rules."""

    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"
    MULTIBAR = "multibar"
    STACKED_AREA = "stackedarea"


@dataclass
class ColumnClassification:
    """Disjoint partition of a dataset's columns by semantic type.

    Columns whose sample is entirely empty land in ``unclassified`` and are
    ignored by every downstream consumer.
    """

    numeric: List[str] = field(default_factory=list)
    temporal: List[str] = field(default_factory=list)
    categorical: List[str] = field(default_factory=list)
    unclassified: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "numeric": list(self.numeric),
            "temporal": list(self.temporal),
            "categorical": list(self.categorical),
            "unclassified": list(self.unclassified),
        }


class KPI(BaseModel):
    """Single summary card."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Column name or synthetic card title")
    value: str = Field(..., description="Formatted headline value")
    subtitle: str = Field(..., description="Short label for the headline value")
    trend: str = Field(..., description="Static placeholder; not computed from data")
    max: Optional[str] = Field(None, description="Formatted maximum (numeric cards only)")
    min: Optional[str] = Field(None, description="Formatted minimum (numeric cards only)")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ChartSpec(BaseModel):
    """Declarative, renderer-agnostic chart description."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(..., description="Chart variant; see ChartType for engine output")
    title: str
    data: List[Dict[str, Any]] = Field(default_factory=list)
    x_key: Optional[str] = Field(None, alias="xKey")
    y_key: Optional[str] = Field(None, alias="yKey")
    keys: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def append_chart(charts: Sequence[ChartSpec], chart: ChartSpec) -> List[ChartSpec]:
    """Return a new chart list with ``chart`` at the end; ``charts`` is left untouched."""
    return [*charts, chart]
