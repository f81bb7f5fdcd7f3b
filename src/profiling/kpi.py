"""KPI card synthesis."""

from typing import Any, List, Mapping, Sequence

from profiling.config import get_max_kpi_columns
from profiling.models import KPI
from profiling.values import parse_number

# Not derived from the data; kept so renderers relying on the field still work.
PLACEHOLDER_TREND = "+12%"

TOTAL_RECORDS_TITLE = "Total Records"


def _fixed(value: float) -> str:
    return f"{value:.2f}"


def total_records_kpi(records: Sequence[Mapping[str, Any]]) -> KPI:
    return KPI(
        title=TOTAL_RECORDS_TITLE,
        value=str(len(records)),
        subtitle="Dataset Size",
        trend="100%",
    )


def numeric_column_kpi(records: Sequence[Mapping[str, Any]], column: str) -> KPI | None:
    """Average/max/min card for one column; None if no cell parses as a number."""
    values = [parse_number(record.get(column)) for record in records]
    values = [value for value in values if value is not None]
    if not values:
        return None

    return KPI(
        title=column,
        value=_fixed(sum(values) / len(values)),
        subtitle="Average",
        trend=PLACEHOLDER_TREND,
        max=_fixed(max(values)),
        min=_fixed(min(values)),
    )


def synthesize_kpis(records: Sequence[Mapping[str, Any]], numeric_columns: Sequence[str]) -> List[KPI]:
    """Build the ordered KPI list: record count first, then per-column averages.

    Only the first few numeric columns (4 by default) get a card.
    """
    kpis = [total_records_kpi(records)]
    for column in list(numeric_columns)[: get_max_kpi_columns()]:
        card = numeric_column_kpi(records, column)
        if card is not None:
            kpis.append(card)
    return kpis
