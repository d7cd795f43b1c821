"""
Access governance KPI calculation logic.
"""

import logging
from typing import Optional, Sequence

from posture_sentinel.core.config import get_config
from posture_sentinel.core.ratios import mean, percentage

from .models import (
    AccessMetrics,
    Account,
    InactiveAccountSummary,
    PrivilegedAccountSummary,
    RevocationEvent,
)

logger = logging.getLogger(__name__)


class AccessMetricsCalculator:
    """
    Reduces account, inactive/privileged summaries and revocation events
    into access hygiene metrics.
    """

    def __init__(
        self,
        empty_value: Optional[float] = None,
        empty_duration_value: Optional[float] = None,
    ):
        """
        Initialize calculator.

        Args:
            empty_value: Percentage for ratios over an empty population
                (default: from config)
            empty_duration_value: Hours reported when there are no
                revocation events (default: from config)
        """
        config = get_config().metrics
        self.empty_value = config.empty_ratio_value if empty_value is None else empty_value
        if empty_duration_value is None:
            empty_duration_value = config.empty_duration_value
        self.empty_duration_value = empty_duration_value

    def compute_access_metrics(
        self,
        accounts: Sequence[Account],
        inactive_summary: InactiveAccountSummary,
        privileged_summary: PrivilegedAccountSummary,
        revocation_events: Sequence[RevocationEvent],
    ) -> AccessMetrics:
        """
        Compute access governance metrics.

        Args:
            accounts: Access-control accounts
            inactive_summary: Inactive account counters
            privileged_summary: Privileged account counters
            revocation_events: One entry per access revocation

        Returns:
            Computed access metrics
        """
        least_privilege = sum(1 for a in accounts if a.is_least_privilege)
        generic = sum(1 for a in accounts if a.is_generic)

        metrics = AccessMetrics(
            least_privilege_rate=percentage(least_privilege, len(accounts), self.empty_value),
            generic_account_rate=percentage(generic, len(accounts), self.empty_value),
            inactive_removal_rate=percentage(
                inactive_summary.removed_inactive,
                inactive_summary.total_inactive,
                self.empty_value,
            ),
            privileged_review_rate=percentage(
                privileged_summary.reviewed_privileged,
                privileged_summary.total_privileged,
                self.empty_value,
            ),
            average_revocation_time_hours=mean(
                [e.revocation_time_hours for e in revocation_events],
                self.empty_duration_value,
            ),
        )

        logger.debug(
            f"Access metrics over {len(accounts)} accounts "
            f"and {len(revocation_events)} revocation(s)"
        )
        return metrics


def compute_access_metrics(
    accounts: Sequence[Account],
    inactive_summary: InactiveAccountSummary,
    privileged_summary: PrivilegedAccountSummary,
    revocation_events: Sequence[RevocationEvent],
) -> AccessMetrics:
    """Compute access governance metrics with the configured defaults."""
    return AccessMetricsCalculator().compute_access_metrics(
        accounts, inactive_summary, privileged_summary, revocation_events
    )
