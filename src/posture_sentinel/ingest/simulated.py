"""
Simulated raw datasets for demos and local development.

Record shapes and labels follow the legacy dashboard exports (French
labels, legacy field names), so they go through the normalizer like
real data.
"""

import random
from typing import Any, Dict, Optional


def generate_datasets(seed: Optional[int] = None) -> Dict[str, Any]:
    """
    Generate one raw record collection per dataset.

    Args:
        seed: Random seed; the same seed yields the same datasets

    Returns:
        Mapping of dataset name to raw payload
    """
    rng = random.Random(seed)

    assets = [
        {
            "id": f"asset_{i}",
            "criticality": "Critique" if rng.random() > 0.7 else "Normal",
            "encryption": rng.random() > 0.4,
            "os": _simulated_os(rng),
        }
        for i in range(500)
    ]

    endpoint_protection = [{"edr_installed": rng.random() > 0.2} for _ in range(450)]

    antivirus = [
        "Protected" if rng.random() > 0.15 else "Vulnerable" for _ in range(500)
    ]

    mfa = [
        {"status": "activé" if rng.random() > 0.25 else "désactivé"} for _ in range(200)
    ]

    accounts = [
        {
            "id": f"acc_{i}",
            "is_least_privilege": rng.random() > 0.3,
            "is_generic": rng.random() < 0.15,
        }
        for i in range(100)
    ]

    revocations = [
        {"revocation_time_hours": 2 + rng.random() * 24} for _ in range(30)
    ]

    return {
        "assets": assets,
        "endpoint_protection": endpoint_protection,
        "antivirus": antivirus,
        "mfa": mfa,
        "accounts": accounts,
        "inactive_accounts": {"total_inactive_accounts": 45, "removed_accounts": 32},
        "privileged_accounts": {"total_privileged_accounts": 25, "reviewed_accounts": 20},
        "revocations": revocations,
    }


def _simulated_os(rng: random.Random) -> str:
    if rng.random() > 0.85:
        return "Windows 7"
    if rng.random() > 0.9:
        return "Server 2012"
    return "Windows 10"
