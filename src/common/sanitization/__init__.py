"""Sanitization utilities."""

from .text import bounded_snippet, redact_sensitive_info

__all__ = ["bounded_snippet", "redact_sensitive_info"]
