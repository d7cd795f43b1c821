"""
Error taxonomy for dataset handling.
"""

from typing import Optional


class PostureError(Exception):
    """Base class for Posture Sentinel errors."""


class MissingDataError(PostureError):
    """A dataset is absent or empty."""

    def __init__(self, dataset: str, message: Optional[str] = None):
        self.dataset = dataset
        super().__init__(message or f"Dataset '{dataset}' is missing")


class MalformedRecordError(PostureError):
    """
    A record is missing a required field or holds an out-of-domain value.

    Raised per record during normalization; the normalizer skips the
    record and counts it instead of failing the whole dataset.
    """

    def __init__(self, dataset: str, index: int, reason: str):
        self.dataset = dataset
        self.index = index
        self.reason = reason
        super().__init__(f"{dataset}[{index}]: {reason}")


class DataUnavailableError(PostureError):
    """Raw data could not be retrieved, or no usable dataset remains."""

    def __init__(self, message: str, dataset: Optional[str] = None):
        self.dataset = dataset
        super().__init__(message)
