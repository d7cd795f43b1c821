"""
Core module for Posture Sentinel.

Contains configuration, the error taxonomy and ratio helpers shared by all modules.
"""

from posture_sentinel.core.config import AppConfig, get_config, reload_config
from posture_sentinel.core.errors import (
    DataUnavailableError,
    MalformedRecordError,
    MissingDataError,
    PostureError,
)
from posture_sentinel.core.ratios import mean, percentage

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "PostureError",
    "MissingDataError",
    "MalformedRecordError",
    "DataUnavailableError",
    "percentage",
    "mean",
]
