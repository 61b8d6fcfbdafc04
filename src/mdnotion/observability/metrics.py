"""Metrics hook protocol and no-op default implementation.

The converter reports counters and timings for every transform.  By
default a :class:`NoopMetricsHook` is used.  Pass any object satisfying
:class:`MetricsHook` as ``metrics=`` in the transform options to route
the data points to StatsD, Prometheus or similar.

Emitted metric names:

* ``mdnotion.blocks_created_total``      -- counter
* ``mdnotion.rich_text_created_total``   -- counter
* ``mdnotion.limit_exceeded_total``      -- counter (tag ``limit``)
* ``mdnotion.conversion_duration_ms``    -- timing (tag ``op``)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(metrics: Any | None) -> MetricsHook:
    """Return *metrics*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return metrics if metrics is not None else NoopMetricsHook()
