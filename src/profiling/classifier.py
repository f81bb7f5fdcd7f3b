"""Sample-based semantic type inference for dataset columns."""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from profiling.config import get_sample_size, get_type_threshold
from profiling.models import ColumnClassification, ColumnType
from profiling.values import is_blank, parse_datetime, parse_number

logger = logging.getLogger(__name__)


def column_sample(
    records: Sequence[Mapping[str, Any]], column: str, sample_size: Optional[int] = None
) -> List[Any]:
    """Non-empty values of ``column`` within the leading ``sample_size`` records."""
    size = sample_size or get_sample_size()
    values = (record.get(column) for record in records[:size])
    return [value for value in values if not is_blank(value)]


def infer_column_type(sample: Sequence[Any], threshold: Optional[float] = None) -> Optional[ColumnType]:
    """Classify a non-empty sample; returns None when the sample is empty.

    The numeric check runs first, so values that also parse as dates
    (bare years, for instance) stay numeric.
    """
    if not sample:
        return None
    cutoff = get_type_threshold() if threshold is None else threshold

    numeric_ratio = sum(1 for value in sample if parse_number(value) is not None) / len(sample)
    if numeric_ratio > cutoff:
        return ColumnType.NUMERIC

    temporal_ratio = sum(1 for value in sample if parse_datetime(value) is not None) / len(sample)
    if temporal_ratio > cutoff:
        return ColumnType.TEMPORAL

    return ColumnType.CATEGORICAL


def classify(
    records: Sequence[Mapping[str, Any]], columns: Iterable[str]
) -> ColumnClassification:
    """Partition ``columns`` into numeric, temporal and categorical lists."""
    classification = ColumnClassification()
    sample_size = get_sample_size()
    threshold = get_type_threshold()

    buckets = {
        ColumnType.NUMERIC: classification.numeric,
        ColumnType.TEMPORAL: classification.temporal,
        ColumnType.CATEGORICAL: classification.categorical,
    }

    for column in columns:
        column_type = infer_column_type(column_sample(records, column, sample_size), threshold)
        if column_type is None:
            classification.unclassified.append(column)
            continue
        buckets[column_type].append(column)

    logger.debug(
        "Classified columns: numeric=%s temporal=%s categorical=%s unclassified=%s",
        classification.numeric,
        classification.temporal,
        classification.categorical,
        classification.unclassified,
    )
    return classification
