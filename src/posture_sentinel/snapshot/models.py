"""
Metrics snapshot data models.
"""

from datetime import datetime
from typing import Dict, List, Tuple

from pydantic import BaseModel, Field

# Stable snapshot keys, in dashboard order. Presentation bindings rely on them.
ASSET_METRIC_KEYS: Tuple[str, ...] = (
    "encrypted_critical_coverage",
    "antivirus_coverage",
    "endpoint_protection_coverage",
    "obsolescence_rate",
    "critical_obsolescence_rate",
    "mfa_coverage",
)
ACCESS_METRIC_KEYS: Tuple[str, ...] = (
    "least_privilege_rate",
    "inactive_removal_rate",
    "privileged_review_rate",
    "generic_account_rate",
    "average_revocation_time_hours",
)
SNAPSHOT_KEYS: Tuple[str, ...] = ASSET_METRIC_KEYS + ACCESS_METRIC_KEYS

# Keys expressed in hours; every other key is a percentage
DURATION_KEYS: Tuple[str, ...] = ("average_revocation_time_hours",)


class MetricsSnapshot(BaseModel):
    """
    Flat record of every KPI, full precision.

    Percentages lie in [0, 100] and the duration is >= 0 for well-formed
    inputs. Rounding and unit suffixes belong to the formatters.
    """

    # Asset & protection
    encrypted_critical_coverage: float
    antivirus_coverage: float
    endpoint_protection_coverage: float
    obsolescence_rate: float
    critical_obsolescence_rate: float
    mfa_coverage: float

    # Access governance
    least_privilege_rate: float
    inactive_removal_rate: float
    privileged_review_rate: float
    generic_account_rate: float
    average_revocation_time_hours: float

    class Config:
        frozen = True


class AggregationReport(BaseModel):
    """
    Snapshot plus the data quality details of the run that produced it.
    """

    snapshot: MetricsSnapshot
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    skipped_records: Dict[str, int] = Field(
        default_factory=dict,
        description="Malformed records skipped, per dataset",
    )
    unavailable_datasets: List[str] = Field(
        default_factory=list,
        description="Datasets replaced by an empty collection",
    )

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped_records.values())

    class Config:
        json_schema_extra = {
            "example": {
                "snapshot": {
                    "encrypted_critical_coverage": 66.67,
                    "antivirus_coverage": 85.0,
                    "endpoint_protection_coverage": 80.0,
                    "obsolescence_rate": 10.0,
                    "critical_obsolescence_rate": 33.33,
                    "mfa_coverage": 75.0,
                    "least_privilege_rate": 70.0,
                    "inactive_removal_rate": 71.11,
                    "privileged_review_rate": 80.0,
                    "generic_account_rate": 15.0,
                    "average_revocation_time_hours": 4.0,
                },
                "generated_at": "2025-01-15T10:30:00Z",
                "skipped_records": {"assets": 2},
                "unavailable_datasets": ["mfa"],
            }
        }
