"""
Posture Sentinel - Security posture KPI aggregation

This package reduces raw security datasets (asset inventory, endpoint
protection, antivirus, MFA and access governance data) into a flat snapshot
of percentage and duration KPIs for dashboards.

Main modules:
- assets: Asset & protection coverage and obsolescence metrics
- access: Access governance metrics (least privilege, reviews, revocation)
- snapshot: Metric assembly, formatting and the aggregation service
- ingest: Dataset loaders, record normalization and simulated datasets
- ui: HTTP API serving the latest snapshot
- cli: posturectl operational CLI
"""

__version__ = "0.1.0"
__author__ = "Posture Sentinel Team"

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_dir": "./data",
    "empty_ratio_value": 0.0,
    "log_level": "INFO",
}

__all__ = ["__version__", "__author__", "DEFAULT_CONFIG"]
