"""
Dataset loaders that hand raw records to the aggregation service.

Loaders only retrieve and decode data; records are validated later by
the normalizer.
"""

import asyncio
import csv
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import yaml

from posture_sentinel.core.errors import DataUnavailableError, MissingDataError

logger = logging.getLogger(__name__)

DATASETS = (
    "assets",
    "endpoint_protection",
    "antivirus",
    "mfa",
    "accounts",
    "inactive_accounts",
    "privileged_accounts",
    "revocations",
)

# Searched in order when several files exist for one dataset
FILE_EXTENSIONS = (".json", ".yaml", ".yml", ".csv", ".txt")


class DatasetLoader(ABC):
    """Base class for raw dataset sources."""

    @abstractmethod
    async def load(self, name: str) -> Any:
        """
        Load one raw dataset.

        Args:
            name: Dataset name (see DATASETS)

        Returns:
            Decoded payload: a list of records, or an object for summaries

        Raises:
            MissingDataError: If the dataset does not exist
            DataUnavailableError: If the dataset exists but cannot be read
        """

    async def close(self) -> None:
        """Release loader resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class InMemoryDatasetLoader(DatasetLoader):
    """Serves datasets from a dictionary."""

    def __init__(self, datasets: Dict[str, Any]):
        self.datasets = datasets

    async def load(self, name: str) -> Any:
        if name not in self.datasets:
            raise MissingDataError(name)
        return self.datasets[name]


class FileDatasetLoader(DatasetLoader):
    """
    Reads datasets from a directory.

    Each dataset is a file named after it: assets.json, antivirus.txt,
    inactive_accounts.yaml, accounts.csv, ...
    """

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def find_file(self, name: str) -> Optional[Path]:
        """Find the file holding a dataset, if any."""
        for extension in FILE_EXTENSIONS:
            path = self.data_dir / f"{name}{extension}"
            if path.is_file():
                return path
        return None

    async def load(self, name: str) -> Any:
        path = self.find_file(name)
        if path is None:
            raise MissingDataError(name, f"No file for dataset '{name}' in {self.data_dir}")
        return await asyncio.to_thread(self._read, name, path)

    def _read(self, name: str, path: Path) -> Any:
        logger.debug(f"Reading {name} from {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    return json.load(f)
                if path.suffix in (".yaml", ".yml"):
                    return yaml.safe_load(f)
                if path.suffix == ".csv":
                    return [dict(row) for row in csv.DictReader(f)]
                return [line.strip() for line in f if line.strip()]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError, csv.Error) as e:
            raise DataUnavailableError(f"Failed to read {path}: {e}", dataset=name) from e


class HttpDatasetLoader(DatasetLoader):
    """
    Fetches datasets as JSON from an HTTP API: GET {base_url}/{name}.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize HTTP loader.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (optional)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def load(self, name: str) -> Any:
        url = f"{self.base_url}/{name}"
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise DataUnavailableError(f"Timeout fetching {url}", dataset=name) from e
        except httpx.HTTPError as e:
            raise DataUnavailableError(f"Cannot fetch {url}: {e}", dataset=name) from e

        if response.status_code == 404:
            raise MissingDataError(name, f"Dataset '{name}' not found at {url}")
        if response.status_code != 200:
            raise DataUnavailableError(
                f"{url} returned status {response.status_code}", dataset=name
            )

        try:
            return response.json()
        except ValueError as e:
            raise DataUnavailableError(f"Invalid JSON from {url}", dataset=name) from e

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def create_loader(
    data_dir: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: float = 10.0,
) -> DatasetLoader:
    """Build the HTTP loader when a base URL is given, the file loader otherwise."""
    if base_url:
        logger.info(f"Loading datasets from {base_url}")
        return HttpDatasetLoader(base_url, timeout=timeout)
    logger.info(f"Loading datasets from {data_dir or '.'}")
    return FileDatasetLoader(data_dir or ".")


def list_available(loader: FileDatasetLoader) -> List[str]:
    """Dataset names with a file in the loader's directory."""
    return [name for name in DATASETS if loader.find_file(name) is not None]
