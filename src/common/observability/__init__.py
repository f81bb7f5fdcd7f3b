"""Shared observability helpers."""

from common.observability.metrics import profiling_metrics

__all__ = ["profiling_metrics"]
