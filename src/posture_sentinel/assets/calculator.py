"""
Asset & protection KPI calculation logic.
"""

import logging
from typing import List, Optional, Sequence

from posture_sentinel.core.config import get_config
from posture_sentinel.core.ratios import percentage

from .models import (
    AntivirusRecord,
    AntivirusStatus,
    Asset,
    AssetMetrics,
    Criticality,
    EndpointProtectionRecord,
    MfaStatus,
    MfaUserRecord,
)

logger = logging.getLogger(__name__)


class AssetMetricsCalculator:
    """
    Reduces asset inventory, EDR, antivirus and MFA records into coverage
    and obsolescence percentages.

    An asset is obsolete when its operating system string contains one of
    the configured markers (case-sensitive substring match). Every ratio
    over an empty population reports empty_value.
    """

    def __init__(
        self,
        obsolete_os_markers: Optional[Sequence[str]] = None,
        empty_value: Optional[float] = None,
    ):
        """
        Initialize calculator.

        Args:
            obsolete_os_markers: OS name fragments marking end-of-support
                systems (default: from config)
            empty_value: Value for ratios over an empty population
                (default: from config)
        """
        config = get_config().metrics
        if obsolete_os_markers is None:
            obsolete_os_markers = config.obsolete_os_markers
        self.obsolete_os_markers = tuple(obsolete_os_markers)
        self.empty_value = config.empty_ratio_value if empty_value is None else empty_value

    def is_obsolete(self, asset: Asset) -> bool:
        """Check if an asset runs an end-of-support operating system."""
        return any(marker in asset.operating_system for marker in self.obsolete_os_markers)

    def compute_asset_metrics(
        self,
        assets: Sequence[Asset],
        endpoint_records: Sequence[EndpointProtectionRecord],
        antivirus_records: Sequence[AntivirusRecord],
        mfa_records: Optional[Sequence[MfaUserRecord]] = None,
    ) -> AssetMetrics:
        """
        Compute asset & protection metrics.

        Args:
            assets: Asset inventory
            endpoint_records: One EDR status per monitored endpoint
            antivirus_records: One antivirus status per monitored asset
            mfa_records: One MFA status per user (None counts as empty)

        Returns:
            Computed asset metrics
        """
        critical_assets = [a for a in assets if a.criticality == Criticality.CRITICAL]
        encrypted_critical = [a for a in critical_assets if a.encrypted]

        obsolete_assets = self._obsolete_assets(assets)
        # Membership against the single obsolete set, not a second predicate pass
        obsolete_refs = {id(a) for a in obsolete_assets}
        critical_obsolete = [a for a in critical_assets if id(a) in obsolete_refs]

        edr_installed = sum(1 for e in endpoint_records if e.installed)
        av_protected = sum(
            1 for r in antivirus_records if r.status == AntivirusStatus.PROTECTED
        )
        mfa_records = mfa_records or []
        mfa_enabled = sum(1 for u in mfa_records if u.mfa_status == MfaStatus.ENABLED)

        metrics = AssetMetrics(
            encrypted_critical_coverage=percentage(
                len(encrypted_critical), len(critical_assets), self.empty_value
            ),
            obsolescence_rate=percentage(
                len(obsolete_assets), len(assets), self.empty_value
            ),
            critical_obsolescence_rate=percentage(
                len(critical_obsolete), len(critical_assets), self.empty_value
            ),
            endpoint_protection_coverage=percentage(
                edr_installed, len(endpoint_records), self.empty_value
            ),
            antivirus_coverage=percentage(
                av_protected, len(antivirus_records), self.empty_value
            ),
            mfa_coverage=percentage(mfa_enabled, len(mfa_records), self.empty_value),
        )

        logger.debug(
            f"Asset metrics over {len(assets)} assets "
            f"({len(critical_assets)} critical, {len(obsolete_assets)} obsolete)"
        )
        return metrics

    def _obsolete_assets(self, assets: Sequence[Asset]) -> List[Asset]:
        """Select assets running an end-of-support operating system."""
        return [a for a in assets if self.is_obsolete(a)]


def compute_asset_metrics(
    assets: Sequence[Asset],
    endpoint_records: Sequence[EndpointProtectionRecord],
    antivirus_records: Sequence[AntivirusRecord],
    mfa_records: Optional[Sequence[MfaUserRecord]] = None,
) -> AssetMetrics:
    """Compute asset & protection metrics with the configured defaults."""
    return AssetMetricsCalculator().compute_asset_metrics(
        assets, endpoint_records, antivirus_records, mfa_records
    )
