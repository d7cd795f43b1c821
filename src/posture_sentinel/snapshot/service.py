"""
Posture snapshot service.
"""

import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

from posture_sentinel.access.calculator import AccessMetricsCalculator
from posture_sentinel.assets.calculator import AssetMetricsCalculator
from posture_sentinel.core.config import get_config
from posture_sentinel.core.errors import DataUnavailableError, MissingDataError
from posture_sentinel.ingest.loader import DATASETS, DatasetLoader, create_loader
from posture_sentinel.ingest.normalizer import SUMMARY_MODELS, RecordNormalizer

from .assembly import assemble
from .formatters import snapshot_summary
from .models import AggregationReport

logger = logging.getLogger(__name__)


class PostureService:
    """
    Service producing posture snapshots.

    Each run:
    1. Loads every raw dataset
    2. Normalizes records, skipping malformed ones
    3. Runs both aggregators concurrently and assembles the snapshot

    Only the latest report is kept; every run builds a new one.
    """

    def __init__(
        self,
        loader: DatasetLoader,
        normalizer: Optional[RecordNormalizer] = None,
        asset_calculator: Optional[AssetMetricsCalculator] = None,
        access_calculator: Optional[AccessMetricsCalculator] = None,
        interval_minutes: int = 60,
    ):
        """
        Initialize posture service.

        Args:
            loader: Raw dataset source
            normalizer: Record normalizer
            asset_calculator: Asset & protection calculator
            access_calculator: Access governance calculator
            interval_minutes: How often run() recomputes the snapshot
        """
        self.loader = loader
        self.normalizer = normalizer or RecordNormalizer()
        self.asset_calculator = asset_calculator or AssetMetricsCalculator()
        self.access_calculator = access_calculator or AccessMetricsCalculator()
        self.interval_minutes = interval_minutes
        self.latest_report: Optional[AggregationReport] = None
        self.running = False

    async def collect_datasets(self) -> Tuple[Dict[str, Any], List[str]]:
        """
        Load every dataset.

        Returns:
            (datasets, unavailable) tuple; unavailable datasets map to None

        Raises:
            DataUnavailableError: If no dataset could be loaded at all
        """
        datasets: Dict[str, Any] = {}
        unavailable: List[str] = []

        for name in DATASETS:
            try:
                datasets[name] = await self.loader.load(name)
            except MissingDataError as e:
                logger.warning(f"Dataset {name} missing, using empty collection: {e}")
                datasets[name] = None
                unavailable.append(name)
            except DataUnavailableError as e:
                logger.error(f"Dataset {name} unavailable, using empty collection: {e}")
                datasets[name] = None
                unavailable.append(name)

        if len(unavailable) == len(DATASETS):
            raise DataUnavailableError("No posture dataset could be loaded")

        return datasets, unavailable

    async def compute(
        self,
        datasets: Dict[str, Any],
        unavailable: Sequence[str] = (),
    ) -> AggregationReport:
        """
        Normalize raw datasets and compute a report.

        Args:
            datasets: Raw payload per dataset name (missing names count as empty)
            unavailable: Datasets that could not be loaded

        Returns:
            Aggregation report wrapping the new snapshot
        """
        skipped: Dict[str, int] = {}
        records: Dict[str, Any] = {}

        for name in DATASETS:
            raw = datasets.get(name)
            if name in SUMMARY_MODELS:
                records[name], skipped[name] = self.normalizer.normalize_summary(name, raw)
            else:
                result = self.normalizer.normalize_dataset(name, raw)
                records[name], skipped[name] = result.records, result.skipped

        asset_metrics, access_metrics = await asyncio.gather(
            asyncio.to_thread(
                self.asset_calculator.compute_asset_metrics,
                records["assets"],
                records["endpoint_protection"],
                records["antivirus"],
                records["mfa"],
            ),
            asyncio.to_thread(
                self.access_calculator.compute_access_metrics,
                records["accounts"],
                records["inactive_accounts"],
                records["privileged_accounts"],
                records["revocations"],
            ),
        )

        return AggregationReport(
            snapshot=assemble(asset_metrics, access_metrics),
            skipped_records={name: count for name, count in skipped.items() if count},
            unavailable_datasets=list(unavailable),
        )

    async def run_once(self) -> AggregationReport:
        """
        Run one aggregation.

        Returns:
            The new report, also stored as latest_report

        Raises:
            DataUnavailableError: If no dataset could be loaded
        """
        logger.debug("Collecting datasets...")
        datasets, unavailable = await self.collect_datasets()

        logger.debug("Computing snapshot...")
        report = await self.compute(datasets, unavailable)
        self.latest_report = report

        logger.info(f"Posture snapshot: {snapshot_summary(report.snapshot)}")
        if report.total_skipped:
            logger.warning(f"Skipped records: {report.skipped_records}")
        if report.unavailable_datasets:
            logger.warning(f"Unavailable datasets: {', '.join(report.unavailable_datasets)}")

        return report

    async def run(self) -> None:
        """Run posture service continuously."""
        self.running = True
        logger.info(
            f"Starting posture service "
            f"(calculation interval: {self.interval_minutes}m)"
        )

        iteration = 0
        while self.running:
            iteration += 1
            logger.debug(f"Posture iteration {iteration}")

            try:
                await self.run_once()
            except DataUnavailableError as e:
                # Keep serving the previous snapshot
                logger.error(f"Posture data unavailable: {e}")

            logger.debug(f"Sleeping for {self.interval_minutes}m...")
            await asyncio.sleep(self.interval_minutes * 60)

    def stop(self) -> None:
        """Stop posture service."""
        logger.info("Stopping posture service")
        self.running = False


def build_service() -> PostureService:
    """Build a service from the global configuration."""
    config = get_config()
    loader = create_loader(
        data_dir=config.source.data_dir,
        base_url=config.source.base_url,
        timeout=config.source.timeout,
    )
    return PostureService(
        loader=loader,
        interval_minutes=config.service.interval_minutes,
    )


def main() -> None:
    """Main entry point for posture service."""
    config = get_config()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("=" * 60)
    logger.info("Posture Sentinel - Snapshot Service")
    logger.info("=" * 60)
    logger.info(f"Source: {config.source.base_url or config.source.data_dir}")
    logger.info(f"Calculation Interval: {config.service.interval_minutes}m")
    logger.info("=" * 60)

    service = build_service()

    try:
        asyncio.run(service.run())
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        service.stop()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
