"""
Snapshot formatters - convert metrics to display cards and chart series.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from pydantic import BaseModel

from .models import ACCESS_METRIC_KEYS, ASSET_METRIC_KEYS, DURATION_KEYS, MetricsSnapshot


METRIC_TITLES: Dict[str, str] = {
    "encrypted_critical_coverage": "Encrypted Critical Assets",
    "antivirus_coverage": "Antivirus Coverage",
    "endpoint_protection_coverage": "EDR Coverage",
    "obsolescence_rate": "Obsolescence Rate",
    "critical_obsolescence_rate": "Obsolete Critical Systems",
    "mfa_coverage": "MFA Coverage",
    "least_privilege_rate": "Least Privilege Accounts",
    "inactive_removal_rate": "Inactive Accounts Removed",
    "privileged_review_rate": "Privileged Accounts Reviewed",
    "generic_account_rate": "Generic Accounts Rate",
    "average_revocation_time_hours": "Average Revocation Time (h)",
}

SECTION_TITLES: Dict[str, str] = {
    "systems": "Systems Security",
    "access": "Access Management",
}


class MetricCard(BaseModel):
    """One dashboard card."""

    key: str
    title: str
    section: str
    value: float
    display: str
    unit: str


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round half away from zero at ndigits decimals."""
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def format_percentage(value: float) -> str:
    """Format a percentage with 2 decimals, e.g. 66.67%."""
    return f"{round_half_up(value):.2f}%"


def format_hours(value: float) -> str:
    """Format a duration in hours with 2 decimals, e.g. 4.00h."""
    return f"{round_half_up(value):.2f}h"


def format_metric(key: str, value: float) -> str:
    """Format a snapshot value according to its unit."""
    if key in DURATION_KEYS:
        return format_hours(value)
    return format_percentage(value)


def snapshot_to_cards(snapshot: MetricsSnapshot) -> List[MetricCard]:
    """
    Build display cards for every snapshot key.

    Cards follow dashboard order: systems section first, then access.
    """
    values = snapshot.model_dump()
    cards = []
    for section, keys in (("systems", ASSET_METRIC_KEYS), ("access", ACCESS_METRIC_KEYS)):
        for key in keys:
            cards.append(
                MetricCard(
                    key=key,
                    title=METRIC_TITLES[key],
                    section=section,
                    value=round_half_up(values[key]),
                    display=format_metric(key, values[key]),
                    unit="h" if key in DURATION_KEYS else "%",
                )
            )
    return cards


def chart_series(snapshot: MetricsSnapshot) -> Dict[str, Dict[str, Any]]:
    """
    Chart data bound to snapshot keys: labels and values only, no styling.

    Returns:
        Mapping of chart name to {"labels": [...], "values": [...], "keys": [...]}
    """
    coverage_keys = [
        "encrypted_critical_coverage",
        "antivirus_coverage",
        "endpoint_protection_coverage",
        "mfa_coverage",
    ]
    access_keys = [
        "least_privilege_rate",
        "inactive_removal_rate",
        "privileged_review_rate",
        "generic_account_rate",
    ]
    values = snapshot.model_dump()

    return {
        "coverage": {
            "labels": ["Encrypted Assets", "Antivirus", "EDR", "MFA"],
            "keys": coverage_keys,
            "values": [values[k] for k in coverage_keys],
        },
        "obsolescence": {
            "labels": ["Obsolete", "Up to date"],
            "keys": ["obsolescence_rate", "obsolescence_rate"],
            "values": [snapshot.obsolescence_rate, 100 - snapshot.obsolescence_rate],
        },
        "access": {
            "labels": [METRIC_TITLES[k] for k in access_keys],
            "keys": access_keys,
            "values": [values[k] for k in access_keys],
        },
    }


def snapshot_summary(snapshot: MetricsSnapshot) -> str:
    """One-line summary of the snapshot for logs."""
    values = snapshot.model_dump()
    return ", ".join(f"{key}={format_metric(key, values[key])}" for key in values)
