"""
Dataset ingestion module.

Loads raw datasets (files, HTTP, memory, simulation) and normalizes them
into posture entities.
"""

__all__ = ["loader", "normalizer", "simulated"]
