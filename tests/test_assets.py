"""
Tests for the asset & protection aggregator.
"""

import math

from conftest import make_asset

from posture_sentinel.assets.calculator import AssetMetricsCalculator, compute_asset_metrics
from posture_sentinel.assets.models import (
    AntivirusRecord,
    AntivirusStatus,
    EndpointProtectionRecord,
    MfaStatus,
    MfaUserRecord,
)


class TestEncryptionCoverage:
    """Test encrypted critical asset coverage."""

    def test_scenario_values(self, scenario_assets):
        metrics = compute_asset_metrics(scenario_assets, [], [])

        assert round(metrics.encrypted_critical_coverage, 2) == 66.67
        assert round(metrics.critical_obsolescence_rate, 2) == 33.33

    def test_all_critical_encrypted_is_100(self):
        assets = [
            make_asset("a", critical=True, encrypted=True),
            make_asset("b", critical=True, encrypted=True),
            make_asset("c", critical=False, encrypted=False),
        ]

        metrics = compute_asset_metrics(assets, [], [])

        assert metrics.encrypted_critical_coverage == 100.0

    def test_one_unencrypted_critical_is_below_100(self):
        assets = [
            make_asset("a", critical=True, encrypted=True),
            make_asset("b", critical=True, encrypted=False),
        ]

        metrics = compute_asset_metrics(assets, [], [])

        assert 0.0 <= metrics.encrypted_critical_coverage < 100.0
        assert metrics.encrypted_critical_coverage == 50.0

    def test_non_critical_assets_are_ignored(self):
        assets = [
            make_asset("a", critical=True, encrypted=True),
            make_asset("b", critical=False, encrypted=False),
            make_asset("c", critical=False, encrypted=False),
        ]

        metrics = compute_asset_metrics(assets, [], [])

        assert metrics.encrypted_critical_coverage == 100.0


class TestObsolescence:
    """Test end-of-support operating system detection."""

    def test_substring_match(self):
        calculator = AssetMetricsCalculator()

        assert calculator.is_obsolete(make_asset("a", os="Windows 7 Enterprise"))
        assert calculator.is_obsolete(make_asset("b", os="Windows Server 2012 R2"))
        assert not calculator.is_obsolete(make_asset("c", os="Windows 10"))

    def test_match_is_case_sensitive(self):
        calculator = AssetMetricsCalculator()

        assert not calculator.is_obsolete(make_asset("a", os="windows 7"))
        assert not calculator.is_obsolete(make_asset("b", os="SERVER 2012"))

    def test_obsolescence_rate(self, scenario_assets):
        metrics = compute_asset_metrics(scenario_assets, [], [])

        # Server 2012 R2 and Windows 7 Enterprise
        assert metrics.obsolescence_rate == 20.0

    def test_custom_markers(self):
        calculator = AssetMetricsCalculator(obsolete_os_markers=["Windows XP"])
        assets = [
            make_asset("a", os="Windows XP SP3"),
            make_asset("b", os="Windows 7"),
        ]

        metrics = calculator.compute_asset_metrics(assets, [], [])

        assert metrics.obsolescence_rate == 50.0

    def test_critical_obsolete_uses_single_classification(self):
        class FlakyCalculator(AssetMetricsCalculator):
            """Classifies an asset as obsolete only the first time it is asked."""

            def __init__(self):
                super().__init__()
                self.seen = set()

            def is_obsolete(self, asset):
                first_time = asset.id not in self.seen
                self.seen.add(asset.id)
                return first_time and super().is_obsolete(asset)

        assets = [
            make_asset("a", critical=True, os="Windows 7"),
            make_asset("b", critical=True, os="Windows 10"),
        ]

        metrics = FlakyCalculator().compute_asset_metrics(assets, [], [])

        assert metrics.obsolescence_rate == 50.0
        assert metrics.critical_obsolescence_rate == 50.0


class TestProtectionCoverage:
    """Test EDR, antivirus and MFA coverage."""

    def test_endpoint_protection_coverage(self):
        records = [EndpointProtectionRecord(installed=flag) for flag in (True, True, True, False)]

        metrics = compute_asset_metrics([], records, [])

        assert metrics.endpoint_protection_coverage == 75.0

    def test_antivirus_coverage(self):
        records = [
            AntivirusRecord(status=AntivirusStatus.PROTECTED),
            AntivirusRecord(status=AntivirusStatus.VULNERABLE),
        ]

        metrics = compute_asset_metrics([], [], records)

        assert metrics.antivirus_coverage == 50.0

    def test_mfa_coverage(self):
        records = [
            MfaUserRecord(mfa_status=MfaStatus.ENABLED),
            MfaUserRecord(mfa_status=MfaStatus.ENABLED),
            MfaUserRecord(mfa_status=MfaStatus.ENABLED),
            MfaUserRecord(mfa_status=MfaStatus.DISABLED),
        ]

        metrics = compute_asset_metrics([], [], [], records)

        assert metrics.mfa_coverage == 75.0


class TestEmptyPopulations:
    """Test the zero-denominator policy."""

    def test_no_critical_assets(self):
        assets = [make_asset("a", os="Windows 7"), make_asset("b")]

        metrics = compute_asset_metrics(assets, [], [])

        assert metrics.critical_obsolescence_rate == 0.0
        assert metrics.encrypted_critical_coverage == 0.0
        assert metrics.obsolescence_rate == 50.0

    def test_everything_empty(self):
        metrics = compute_asset_metrics([], [], [], None)

        for value in metrics.model_dump().values():
            assert value == 0.0
            assert not math.isnan(value)

    def test_custom_empty_value(self):
        calculator = AssetMetricsCalculator(empty_value=100.0)

        metrics = calculator.compute_asset_metrics([], [], [])

        assert metrics.antivirus_coverage == 100.0
        assert metrics.mfa_coverage == 100.0


class TestIdempotence:
    """Test that computation is pure."""

    def test_same_input_same_output(self, scenario_assets):
        edr = [EndpointProtectionRecord(installed=True), EndpointProtectionRecord(installed=False)]
        av = [AntivirusRecord(status=AntivirusStatus.PROTECTED)]
        snapshot_of_inputs = (list(scenario_assets), list(edr), list(av))

        first = compute_asset_metrics(scenario_assets, edr, av)
        second = compute_asset_metrics(scenario_assets, edr, av)

        assert first == second
        assert first.model_dump() == second.model_dump()
        assert (scenario_assets, edr, av) == snapshot_of_inputs

    def test_percentages_in_range(self, scenario_assets):
        metrics = compute_asset_metrics(scenario_assets, [], [])

        for value in metrics.model_dump().values():
            assert 0.0 <= value <= 100.0
