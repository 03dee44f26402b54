"""
OpenTelemetry tracing helpers.

Only the OpenTelemetry API is used here. Without a configured SDK the
tracer is a no-op, so tests and local runs need nothing extra.
"""

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

__all__ = ["Status", "StatusCode", "get_tracer"]


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
