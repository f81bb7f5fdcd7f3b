"""Upload decoding for the profiling engine."""

from ingestion.loader import Dataset, DatasetLoadError, load_records

__all__ = ["Dataset", "DatasetLoadError", "load_records"]
