"""
HTTP server for the posture dashboard.

Serves the latest metrics snapshot, display cards and chart series.
"""

import logging
import os
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from posture_sentinel import __version__
from posture_sentinel.core.config import get_config
from posture_sentinel.core.errors import DataUnavailableError
from posture_sentinel.snapshot.formatters import SECTION_TITLES, chart_series, snapshot_to_cards
from posture_sentinel.snapshot.models import AggregationReport
from posture_sentinel.snapshot.service import PostureService, build_service

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Posture Sentinel API",
    description="Security posture KPI dashboard API",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

_service: Optional[PostureService] = None


def get_service() -> PostureService:
    """Get the service backing the API, built from config on first use."""
    global _service
    if _service is None:
        _service = build_service()
    return _service


def set_service(service: Optional[PostureService]) -> None:
    """Replace the service backing the API."""
    global _service
    _service = service


@app.on_event("shutdown")
async def close_service() -> None:
    """Release the loader of the service backing the API."""
    if _service is not None:
        logger.info("Closing dataset loader")
        await _service.loader.close()


async def _latest_report(refresh: bool = False) -> AggregationReport:
    service = get_service()
    if refresh or service.latest_report is None:
        try:
            await service.run_once()
        except DataUnavailableError as e:
            logger.error(f"Snapshot request failed: {e}")
            raise HTTPException(status_code=503, detail="data unavailable")
    return service.latest_report


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Posture Sentinel API",
        "version": __version__,
        "endpoints": {
            "metrics": "/api/metrics",
            "cards": "/api/cards",
            "refresh": "/api/refresh",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/metrics", response_model=AggregationReport)
async def get_metrics():
    """Latest aggregation report (computed on first request)."""
    return await _latest_report()


@app.get("/api/cards")
async def get_cards() -> Dict[str, Any]:
    """Latest snapshot as display cards and chart series."""
    report = await _latest_report()
    return {
        "generated_at": report.generated_at,
        "sections": SECTION_TITLES,
        "cards": [card.model_dump() for card in snapshot_to_cards(report.snapshot)],
        "charts": chart_series(report.snapshot),
        "skipped_records": report.skipped_records,
        "unavailable_datasets": report.unavailable_datasets,
    }


@app.post("/api/refresh", response_model=AggregationReport)
async def refresh_metrics():
    """Recompute the snapshot from the data sources."""
    return await _latest_report(refresh=True)


def main():
    """Main entry point for HTTP server."""
    config = get_config()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host = config.service.api_host
    port = config.service.api_port

    logger.info("=" * 60)
    logger.info("Posture Sentinel - API Server")
    logger.info("=" * 60)
    logger.info(f"Host: {host}")
    logger.info(f"Port: {port}")
    logger.info(f"API Documentation: http://{host}:{port}/docs")
    logger.info("=" * 60)

    uvicorn.run(
        "posture_sentinel.ui.http_server:app",
        host=host,
        port=port,
        reload=os.getenv("API_RELOAD", "false").lower() == "true",
    )


if __name__ == "__main__":
    main()
