"""
Defines Prometheus metrics for the content extraction service.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Gauge as _OrigGauge
from prometheus_client import Histogram as _OrigHistogram
from prometheus_client import generate_latest

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Re-importing this module (the test suite does) must not trip the registry's
# duplicate name check, so an existing collector is reused.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Gauge = _duplicate_safe_factory(_OrigGauge)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "cache_hits": Counter(
            "sechub_extraction_cache_hits_total",
            "Extraction requests answered from the result cache",
        ),
        "cache_misses": Counter(
            "sechub_extraction_cache_misses_total",
            "Extraction requests that missed the result cache",
        ),
        "cache_entries": Gauge(
            "sechub_extraction_cache_entries",
            "Number of entries currently held in the result cache",
        ),
        "cache_evictions": Counter(
            "sechub_extraction_cache_evictions_total",
            "Cache entries removed because they expired",
            ["reason"],
        ),
        "extractions": Counter(
            "sechub_extractions_total",
            "Extraction outcomes returned to callers",
            ["outcome"],
        ),
        "strategy_attempts": Counter(
            "sechub_extraction_strategy_attempts_total",
            "Extraction strategy attempts by result",
            ["strategy", "status"],
        ),
        "fetch_latency_seconds": Histogram(
            "sechub_fetch_latency_seconds",
            "Time taken to fetch a source page",
            buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def export_prometheus() -> bytes:
    """Export metrics in Prometheus text format."""
    return generate_latest()
