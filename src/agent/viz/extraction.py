"""Chart-spec extraction from free-form agent replies.

The agent is asked to answer chart requests with a bare JSON object of the
shape ``{"chartType": ..., "title": ..., "data": [...]}``. In practice replies
arrive wrapped in markdown fences or surrounded by prose, so extraction works
in four steps:

  1. locate the first brace-delimited block containing the ``"chartType"`` key
  2. strip markdown fence markers from that block
  3. parse it as JSON and validate the payload shape
  4. normalize the chart type and build a ChartSpec

Replies without such a block are ordinary conversation and pass through
unchanged. The JSON payload itself is never part of the display text.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from common.observability.metrics import profiling_metrics
from common.sanitization.text import bounded_snippet
from profiling.models import ChartSpec

logger = logging.getLogger(__name__)

CHART_TYPE_KEY = '"chartType"'
DEFAULT_CHART_TITLE = "New Chart"
CHART_TYPE_ALIASES = {"histogram": "bar"}

MALFORMED_CHART_MESSAGE = (
    "I tried to create a chart but encountered an error parsing the data. "
    "Please try asking again with different details."
)
CHART_CREATED_TEMPLATE = (
    '✅ Chart created successfully! I\'ve added "{title}" to your dashboard. '
    "Scroll up to see it!"
)

_FENCE_PATTERN = re.compile(r"```json\s*|```\s*")


class ExtractionStatus(str, Enum):
    """Outcome of one extraction attempt."""

    NO_CHART_REQUESTED = "no_chart_requested"
    MALFORMED = "malformed"
    OK = "ok"


@dataclass(frozen=True)
class ExtractionResult:
    """Extraction outcome plus the text to show the end user."""

    status: ExtractionStatus
    display_text: str
    chart: Optional[ChartSpec] = None

    @property
    def success(self) -> bool:
        return self.status is ExtractionStatus.OK

    @property
    def chart_requested(self) -> bool:
        return self.status is not ExtractionStatus.NO_CHART_REQUESTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "success": self.success,
            "display_text": self.display_text,
            "chart": self.chart.to_dict() if self.chart else None,
        }


class AgentChartPayload(BaseModel):
    """JSON contract the agent is instructed to emit for chart requests."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    chart_type: StrictStr = Field(..., alias="chartType")
    title: Optional[StrictStr] = None
    data: Optional[List[Dict[str, Any]]] = None


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the brace closing the one at ``start``; string literals are skipped."""
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return idx
    return None


def find_chart_block(text: str) -> Optional[str]:
    """Return the first brace-delimited block containing the chartType key.

    Blocks are matched brace-for-brace so nested data records stay inside the
    candidate, and a key mentioned in prose outside any block is ignored. If
    no balanced block holds the key but an opening brace before a later key
    never closes, the candidate runs from that brace to the last closing brace
    (or the end of the text) and is left for the JSON parser to reject.
    """
    if not text or CHART_TYPE_KEY not in text:
        return None

    unbalanced_start = None
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is None:
            if unbalanced_start is None and text.find(CHART_TYPE_KEY, start) != -1:
                unbalanced_start = start
            start = text.find("{", start + 1)
            continue
        block = text[start : end + 1]
        if CHART_TYPE_KEY in block:
            return block
        start = text.find("{", end + 1)

    if unbalanced_start is None:
        return None
    key_at = text.find(CHART_TYPE_KEY, unbalanced_start)
    last_close = text.rfind("}")
    stop = last_close + 1 if last_close > key_at else len(text)
    return text[unbalanced_start:stop]


def strip_code_fences(text: str) -> str:
    return _FENCE_PATTERN.sub("", text)


def normalize_chart_type(chart_type: str) -> str:
    """Map agent aliases onto engine chart types; unknown types pass through."""
    return CHART_TYPE_ALIASES.get(chart_type, chart_type)


def _record_outcome(status: ExtractionStatus) -> None:
    profiling_metrics.add_counter(
        "profiling.chart_extraction",
        description="Chart-spec extraction outcomes",
        attributes={"status": status.value},
    )


def extract_chart_spec(reply_text: str) -> ExtractionResult:
    """Pull one chart spec out of an agent reply.

    Never raises: malformed payloads produce a MALFORMED result carrying a
    generic retry message, and replies without a chart block come back
    unchanged as NO_CHART_REQUESTED.
    """
    reply_text = reply_text or ""
    candidate = find_chart_block(reply_text)
    if candidate is None:
        _record_outcome(ExtractionStatus.NO_CHART_REQUESTED)
        return ExtractionResult(status=ExtractionStatus.NO_CHART_REQUESTED, display_text=reply_text)

    try:
        payload = AgentChartPayload.model_validate(json.loads(strip_code_fences(candidate)))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning(
            "Error parsing chart JSON: %s | candidate=%s",
            str(exc).splitlines()[0],
            bounded_snippet(candidate),
        )
        _record_outcome(ExtractionStatus.MALFORMED)
        return ExtractionResult(status=ExtractionStatus.MALFORMED, display_text=MALFORMED_CHART_MESSAGE)

    chart = ChartSpec(
        type=normalize_chart_type(payload.chart_type),
        title=payload.title or DEFAULT_CHART_TITLE,
        data=payload.data or [],
        x_key="name",
        y_key="value",
    )
    logger.info(f"Extracted '{chart.type}' chart '{chart.title}' with {len(chart.data)} points")
    _record_outcome(ExtractionStatus.OK)
    return ExtractionResult(
        status=ExtractionStatus.OK,
        display_text=CHART_CREATED_TEMPLATE.format(title=chart.title),
        chart=chart,
    )
