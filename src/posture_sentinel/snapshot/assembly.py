"""
Merge of the aggregator outputs into one snapshot.
"""

from posture_sentinel.access.models import AccessMetrics
from posture_sentinel.assets.models import AssetMetrics

from .models import SNAPSHOT_KEYS, MetricsSnapshot


def assemble(asset_metrics: AssetMetrics, access_metrics: AccessMetrics) -> MetricsSnapshot:
    """
    Join asset and access metrics into a flat snapshot.

    Values are copied as-is. Every field of both inputs appears exactly
    once in the result.

    Raises:
        ValueError: If both inputs define the same key, or a produced key
            is not part of the documented snapshot keys
    """
    asset_fields = asset_metrics.model_dump()
    access_fields = access_metrics.model_dump()

    overlap = asset_fields.keys() & access_fields.keys()
    if overlap:
        raise ValueError(f"Metric keys produced by both aggregators: {sorted(overlap)}")

    merged = {**asset_fields, **access_fields}
    unknown = set(merged) - set(SNAPSHOT_KEYS)
    if unknown:
        raise ValueError(f"Undocumented metric keys: {sorted(unknown)}")

    return MetricsSnapshot(**merged)
