"""
Snapshot module.

Assembles aggregator outputs into the metrics snapshot, formats it for
display and runs the aggregation service.
"""

from posture_sentinel.snapshot.assembly import assemble
from posture_sentinel.snapshot.models import SNAPSHOT_KEYS, AggregationReport, MetricsSnapshot
from posture_sentinel.snapshot.service import PostureService

__all__ = [
    "assemble",
    "AggregationReport",
    "MetricsSnapshot",
    "PostureService",
    "SNAPSHOT_KEYS",
]
