"""
Asset & protection data models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Criticality(str, Enum):
    """Business criticality of an asset."""

    CRITICAL = "Critical"
    NORMAL = "Normal"


class AntivirusStatus(str, Enum):
    """Antivirus protection state of an asset."""

    PROTECTED = "Protected"
    VULNERABLE = "Vulnerable"


class MfaStatus(str, Enum):
    """MFA enrollment state of a user."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class Asset(BaseModel):
    """
    An IT asset from the inventory.

    Obsolescence is not stored on the asset; it is derived from the
    operating system string by the calculator.
    """

    id: str = Field(..., min_length=1, description="Asset identifier")
    criticality: Criticality = Field(..., description="Critical or Normal")
    encrypted: bool = Field(..., description="Whether the asset disk is encrypted")
    operating_system: str = Field(..., description="Operating system name and edition")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "asset_42",
                "criticality": "Critical",
                "encrypted": True,
                "operating_system": "Server 2012 R2",
            }
        }


class EndpointProtectionRecord(BaseModel):
    """EDR agent status for one monitored endpoint."""

    installed: bool

    class Config:
        frozen = True


class AntivirusRecord(BaseModel):
    """Antivirus status for one monitored asset."""

    status: AntivirusStatus

    class Config:
        frozen = True


class MfaUserRecord(BaseModel):
    """MFA status for one user."""

    mfa_status: MfaStatus

    class Config:
        frozen = True


class AssetMetrics(BaseModel):
    """
    Coverage and obsolescence KPIs, in percent (0-100), full precision.
    """

    encrypted_critical_coverage: float = Field(
        ..., description="Share of critical assets that are encrypted"
    )
    obsolescence_rate: float = Field(
        ..., description="Share of assets running an end-of-support OS"
    )
    critical_obsolescence_rate: float = Field(
        ..., description="Share of critical assets running an end-of-support OS"
    )
    endpoint_protection_coverage: float = Field(
        ..., description="Share of endpoints with an EDR agent installed"
    )
    antivirus_coverage: float = Field(
        ..., description="Share of assets reported Protected by antivirus"
    )
    mfa_coverage: float = Field(
        ..., description="Share of users with MFA enabled"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "encrypted_critical_coverage": 66.66666666666667,
                "obsolescence_rate": 10.0,
                "critical_obsolescence_rate": 33.333333333333336,
                "endpoint_protection_coverage": 80.0,
                "antivirus_coverage": 85.2,
                "mfa_coverage": 75.5,
            }
        }
