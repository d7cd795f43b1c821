"""
Shared fixtures for Posture Sentinel tests.

Run with: pytest tests/
"""

import copy

import pytest

from posture_sentinel.assets.models import Asset, Criticality

SCENARIO_RAW_DATASETS = {
    "assets": [
        {"id": "a0", "criticality": "Critical", "encrypted": True, "operating_system": "Server 2012 R2"},
        {"id": "a1", "criticality": "Critical", "encrypted": True, "operating_system": "Windows 10"},
        {"id": "a2", "criticality": "Critical", "encrypted": False, "operating_system": "Windows 11"},
        {"id": "a3", "criticality": "Normal", "encrypted": False, "operating_system": "Windows 7 Enterprise"},
        {"id": "a4", "criticality": "Normal", "encrypted": True, "operating_system": "Windows 10"},
        {"id": "a5", "criticality": "Normal", "encrypted": False, "operating_system": "Windows 10"},
        {"id": "a6", "criticality": "Normal", "encrypted": True, "operating_system": "Ubuntu 22.04"},
        {"id": "a7", "criticality": "Normal", "encrypted": False, "operating_system": "Windows 10"},
        {"id": "a8", "criticality": "Normal", "encrypted": True, "operating_system": "macOS 14"},
        {"id": "a9", "criticality": "Normal", "encrypted": False, "operating_system": "Windows 11"},
    ],
    "endpoint_protection": [
        {"installed": True},
        {"installed": True},
        {"installed": True},
        {"installed": True},
        {"installed": False},
    ],
    "antivirus": ["Protected", "Protected", "Protected", "Vulnerable"],
    "mfa": [
        {"mfa_status": "enabled"},
        {"mfa_status": "enabled"},
        {"mfa_status": "enabled"},
        {"mfa_status": "disabled"},
    ],
    "accounts": [
        {"id": "u1", "is_least_privilege": True, "is_generic": False},
        {"id": "u2", "is_least_privilege": True, "is_generic": False},
        {"id": "u3", "is_least_privilege": True, "is_generic": True},
        {"id": "u4", "is_least_privilege": False, "is_generic": False},
    ],
    "inactive_accounts": {"total_inactive": 45, "removed_inactive": 32},
    "privileged_accounts": {"total_privileged": 25, "reviewed_privileged": 20},
    "revocations": [
        {"revocation_time_hours": 2},
        {"revocation_time_hours": 4},
        {"revocation_time_hours": 6},
    ],
}


@pytest.fixture
def raw_datasets():
    """Raw scenario datasets, a fresh copy per test."""
    return copy.deepcopy(SCENARIO_RAW_DATASETS)


@pytest.fixture
def scenario_assets():
    """10 assets: 3 critical, 2 of them encrypted, 1 critical on Server 2012 R2."""
    return [Asset(**raw) for raw in SCENARIO_RAW_DATASETS["assets"]]


def make_asset(asset_id: str, critical: bool = False, encrypted: bool = False, os: str = "Windows 10") -> Asset:
    return Asset(
        id=asset_id,
        criticality=Criticality.CRITICAL if critical else Criticality.NORMAL,
        encrypted=encrypted,
        operating_system=os,
    )
