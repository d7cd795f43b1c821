"""
Access governance aggregation module.

Computes least privilege, generic account, inactive removal, privileged
review and revocation time KPIs.
"""

from posture_sentinel.access.calculator import AccessMetricsCalculator, compute_access_metrics

__all__ = [
    "AccessMetricsCalculator",
    "compute_access_metrics",
]
