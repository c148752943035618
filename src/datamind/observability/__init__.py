"""
DataMind Observability Module.

Provides in-process metrics collection for analysis engine calls and errors.
"""

from datamind.observability.metrics import MetricsStore, get_metrics_store

__all__ = ["MetricsStore", "get_metrics_store"]
