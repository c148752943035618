"""
DataMind Metrics Endpoint.

Exposes observability metrics for monitoring and debugging.
"""

from fastapi import APIRouter

from datamind.observability import get_metrics_store

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def get_metrics() -> dict:
    """
    Get current metrics summary.

    Example response:
    ```json
    {
      "uptime_seconds": 3600.5,
      "collected_at": "2026-10-19T19:00:00Z",
      "calls": {
        "initial_analysis": {"call_count": 4, "p50_ms": 2310.4, "errors": {}},
        "chat_turn": {"call_count": 31, "p50_ms": 1204.9, "errors": {"CHAT_TURN_FAILED": 1}}
      },
      "global_errors": {"INGESTION_FAILED": 2}
    }
    ```
    """
    return get_metrics_store().get_summary()
