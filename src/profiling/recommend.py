"""Rule-based chart recommendation.

Each rule inspects the column classification and either returns one chart or
None. Rules run in a fixed priority order and are independent of each other:
a dataset with several numeric columns commonly triggers the area, multibar
and stacked-area rules together, and no deduplication is applied.

Rule summary:
  1. bar          first categorical x first numeric, summed per group (10 groups)
  2. line         first temporal x first numeric, first 50 qualifying rows
  3. area         first two numeric columns, first 30 rows
  4. pie          value counts of first categorical (6 values)
  5. multibar     up to three numeric columns, first 15 rows
  6. stackedarea  first two numeric columns, first 20 rows
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from profiling.config import get_date_format
from profiling.models import ChartSpec, ChartType, ColumnClassification
from profiling.values import as_label, format_day, is_blank, number_or_zero, parse_number

logger = logging.getLogger(__name__)

Records = Sequence[Mapping[str, Any]]
Rule = Callable[[Records, ColumnClassification], Optional[ChartSpec]]

MAX_BAR_GROUPS = 10
MAX_LINE_POINTS = 50
MAX_AREA_POINTS = 30
MAX_PIE_SLICES = 6
MAX_MULTIBAR_ROWS = 15
MAX_MULTIBAR_SERIES = 3
MAX_STACKED_ROWS = 20


def category_vs_numeric_bar(records: Records, columns: ColumnClassification) -> Optional[ChartSpec]:
    if not columns.categorical or not columns.numeric:
        return None
    cat_col, num_col = columns.categorical[0], columns.numeric[0]

    totals: Dict[str, float] = {}
    for record in records:
        category = record.get(cat_col)
        value = parse_number(record.get(num_col))
        if is_blank(category) or value is None:
            continue
        key = as_label(category)
        totals[key] = totals.get(key, 0) + value

    data = [
        {"name": name, "value": round(total, 2)}
        for name, total in list(totals.items())[:MAX_BAR_GROUPS]
    ]
    return ChartSpec(
        type=ChartType.BAR.value,
        title=f"{num_col} by {cat_col}",
        data=data,
        x_key="name",
        y_key="value",
    )


def time_series_line(records: Records, columns: ColumnClassification) -> Optional[ChartSpec]:
    if not columns.temporal or not columns.numeric:
        return None
    date_col, num_col = columns.temporal[0], columns.numeric[0]
    pattern = get_date_format()

    data: List[Dict[str, Any]] = []
    for record in records:
        if len(data) >= MAX_LINE_POINTS:
            break
        stamp = record.get(date_col)
        value = parse_number(record.get(num_col))
        if is_blank(stamp) or value is None:
            continue
        data.append({"date": format_day(stamp, pattern), "value": value})

    if not data:
        return None
    return ChartSpec(
        type=ChartType.LINE.value,
        title=f"{num_col} Trend Over Time",
        data=data,
        x_key="date",
        y_key="value",
    )


def numeric_pair_area(records: Records, columns: ColumnClassification) -> Optional[ChartSpec]:
    if len(columns.numeric) < 2:
        return None
    first, second = columns.numeric[0], columns.numeric[1]

    data = [
        {
            "name": f"Point {idx}",
            "value1": number_or_zero(record.get(first)),
            "value2": number_or_zero(record.get(second)),
        }
        for idx, record in enumerate(records[:MAX_AREA_POINTS], start=1)
    ]
    return ChartSpec(
        type=ChartType.AREA.value,
        title=f"{first} vs {second}",
        data=data,
        keys=["value1", "value2"],
    )


def category_distribution_pie(
    records: Records, columns: ColumnClassification
) -> Optional[ChartSpec]:
    if not columns.categorical:
        return None
    cat_col = columns.categorical[0]

    counts: Dict[str, int] = {}
    for record in records:
        category = record.get(cat_col)
        if is_blank(category):
            continue
        key = as_label(category)
        counts[key] = counts.get(key, 0) + 1

    data = [{"name": name, "value": count} for name, count in list(counts.items())[:MAX_PIE_SLICES]]
    return ChartSpec(type=ChartType.PIE.value, title=f"Distribution of {cat_col}", data=data)


def multi_metric_bars(records: Records, columns: ColumnClassification) -> Optional[ChartSpec]:
    if len(columns.numeric) < 2:
        return None
    series = columns.numeric[:MAX_MULTIBAR_SERIES]

    data = []
    for idx, record in enumerate(records[:MAX_MULTIBAR_ROWS], start=1):
        row: Dict[str, Any] = {"name": f"Row {idx}"}
        for column in series:
            row[column] = number_or_zero(record.get(column))
        data.append(row)

    return ChartSpec(
        type=ChartType.MULTIBAR.value,
        title="Multi-Metric Analysis",
        data=data,
        keys=list(series),
    )


def cumulative_stacked_area(
    records: Records, columns: ColumnClassification
) -> Optional[ChartSpec]:
    if len(columns.numeric) < 2:
        return None
    series = columns.numeric[:2]

    data = []
    for idx, record in enumerate(records[:MAX_STACKED_ROWS], start=1):
        row: Dict[str, Any] = {"name": f"P{idx}"}
        for column in series:
            row[column] = number_or_zero(record.get(column))
        data.append(row)

    return ChartSpec(
        type=ChartType.STACKED_AREA.value,
        title="Cumulative Comparison",
        data=data,
        keys=list(series),
    )


RULES: tuple[Rule, ...] = (
    category_vs_numeric_bar,
    time_series_line,
    numeric_pair_area,
    category_distribution_pie,
    multi_metric_bars,
    cumulative_stacked_area,
)


def recommend_charts(records: Records, columns: ColumnClassification) -> List[ChartSpec]:
    """Apply every rule in priority order and collect the charts that fire."""
    charts = []
    for rule in RULES:
        chart = rule(records, columns)
        if chart is not None:
            charts.append(chart)

    logger.info(f"Recommended {len(charts)} chart(s): {[chart.type for chart in charts]}")
    return charts
