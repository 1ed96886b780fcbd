"""
StashIt — Observability Module

Structured logging and trace ids for cache operations.

Usage:
    from stashit.observability import setup_logging, generate_trace_id

    setup_logging("DEBUG", "json")
    generate_trace_id()
"""

from .logging import (
    JSONFormatter,
    generate_trace_id,
    get_trace_id,
    set_trace_id,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "get_trace_id",
    "set_trace_id",
    "generate_trace_id",
]
