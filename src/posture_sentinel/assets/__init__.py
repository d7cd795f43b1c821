"""
Asset & protection aggregation module.

Computes encryption coverage, obsolescence and protection coverage KPIs.
"""

from posture_sentinel.assets.calculator import AssetMetricsCalculator, compute_asset_metrics

__all__ = [
    "AssetMetricsCalculator",
    "compute_asset_metrics",
]
