"""
Ratio helpers with an explicit empty-population branch.
"""

import logging
from typing import Sequence

logger = logging.getLogger(__name__)


def percentage(part: int, whole: int, empty_value: float = 0.0) -> float:
    """
    Express part/whole as a percentage.

    Args:
        part: Size of the sub-population satisfying the condition
        whole: Size of the population
        empty_value: Value reported when the population is empty

    Returns:
        Percentage in full precision, or empty_value when whole is 0
    """
    if whole == 0:
        logger.debug(f"Empty population, reporting {empty_value}")
        return float(empty_value)
    return part * 100 / whole


def mean(values: Sequence[float], empty_value: float = 0.0) -> float:
    """Arithmetic mean, empty_value for an empty sequence."""
    if not values:
        logger.debug(f"Empty sequence, reporting {empty_value}")
        return float(empty_value)
    return sum(values) / len(values)
