"""
Tests for metric assembly and formatting.
"""

import pytest

from posture_sentinel.access.models import AccessMetrics
from posture_sentinel.assets.models import AssetMetrics
from posture_sentinel.snapshot.assembly import assemble
from posture_sentinel.snapshot.formatters import (
    chart_series,
    format_hours,
    format_metric,
    format_percentage,
    round_half_up,
    snapshot_to_cards,
)
from posture_sentinel.snapshot.models import SNAPSHOT_KEYS, AggregationReport, MetricsSnapshot


def _asset_metrics():
    return AssetMetrics(
        encrypted_critical_coverage=200 / 3,
        obsolescence_rate=20.0,
        critical_obsolescence_rate=100 / 3,
        endpoint_protection_coverage=80.0,
        antivirus_coverage=75.0,
        mfa_coverage=75.0,
    )


def _access_metrics():
    return AccessMetrics(
        least_privilege_rate=75.0,
        generic_account_rate=25.0,
        inactive_removal_rate=3200 / 45,
        privileged_review_rate=80.0,
        average_revocation_time_hours=4.0,
    )


class TestAssembly:
    """Test the snapshot merge."""

    def test_every_field_appears_once(self):
        asset_metrics = _asset_metrics()
        access_metrics = _access_metrics()

        snapshot = assemble(asset_metrics, access_metrics)
        values = snapshot.model_dump()

        expected = set(asset_metrics.model_dump()) | set(access_metrics.model_dump())
        assert set(values) == expected
        assert len(values) == len(asset_metrics.model_dump()) + len(access_metrics.model_dump())
        for key, value in {**asset_metrics.model_dump(), **access_metrics.model_dump()}.items():
            assert values[key] == value

    def test_documented_keys_match_model(self):
        assert set(SNAPSHOT_KEYS) == set(MetricsSnapshot.model_fields)
        assert len(SNAPSHOT_KEYS) == len(set(SNAPSHOT_KEYS))

    def test_full_precision_kept(self):
        snapshot = assemble(_asset_metrics(), _access_metrics())

        assert snapshot.encrypted_critical_coverage == 200 / 3
        assert snapshot.inactive_removal_rate == 3200 / 45

    def test_key_collision_rejected(self):
        asset_metrics = _asset_metrics()

        with pytest.raises(ValueError):
            assemble(asset_metrics, asset_metrics)


class TestFormatters:
    """Test presentation formatting."""

    def test_percentage(self):
        assert format_percentage(200 / 3) == "66.67%"
        assert format_percentage(100 / 3) == "33.33%"
        assert format_percentage(0) == "0.00%"

    def test_hours(self):
        assert format_hours(4) == "4.00h"
        assert format_metric("average_revocation_time_hours", 4.0) == "4.00h"
        assert format_metric("inactive_removal_rate", 3200 / 45) == "71.11%"

    def test_round_half_up(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(2.675) == 2.68

    def test_cards(self):
        snapshot = assemble(_asset_metrics(), _access_metrics())

        cards = snapshot_to_cards(snapshot)

        assert [card.key for card in cards] == list(SNAPSHOT_KEYS)
        assert cards[0].section == "systems"
        assert cards[-1].section == "access"
        revocation = cards[-1]
        assert revocation.unit == "h"
        assert revocation.display == "4.00h"
        assert cards[0].display == "66.67%"
        assert cards[0].value == 66.67

    def test_chart_series(self):
        snapshot = assemble(_asset_metrics(), _access_metrics())

        charts = chart_series(snapshot)

        assert charts["coverage"]["values"] == [200 / 3, 75.0, 80.0, 75.0]
        assert sum(charts["obsolescence"]["values"]) == 100.0
        assert len(charts["access"]["labels"]) == len(charts["access"]["values"]) == 4
        for chart in charts.values():
            assert set(chart["keys"]) <= set(SNAPSHOT_KEYS)


class TestAggregationReport:
    """Test the report wrapper."""

    def test_total_skipped(self):
        report = AggregationReport(
            snapshot=assemble(_asset_metrics(), _access_metrics()),
            skipped_records={"assets": 2, "antivirus": 1},
        )

        assert report.total_skipped == 3
        assert report.unavailable_datasets == []
