"""
Access governance data models.
"""

from pydantic import BaseModel, Field, model_validator


class Account(BaseModel):
    """
    An access-control account.

    Least-privilege and generic classifications arrive pre-labeled from
    the identity source.
    """

    id: str = Field(..., min_length=1, description="Account identifier")
    is_least_privilege: bool = Field(
        ..., description="Account holds only the permissions its function requires"
    )
    is_generic: bool = Field(
        ..., description="Shared account, not attributable to one person"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "acc_17",
                "is_least_privilege": True,
                "is_generic": False,
            }
        }


class InactiveAccountSummary(BaseModel):
    """Aggregate counters for inactive account cleanup."""

    total_inactive: int = Field(0, ge=0)
    removed_inactive: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "InactiveAccountSummary":
        if self.removed_inactive > self.total_inactive:
            raise ValueError("removed_inactive cannot exceed total_inactive")
        return self

    class Config:
        frozen = True


class PrivilegedAccountSummary(BaseModel):
    """Aggregate counters for privileged account reviews."""

    total_privileged: int = Field(0, ge=0)
    reviewed_privileged: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "PrivilegedAccountSummary":
        if self.reviewed_privileged > self.total_privileged:
            raise ValueError("reviewed_privileged cannot exceed total_privileged")
        return self

    class Config:
        frozen = True


class RevocationEvent(BaseModel):
    """Elapsed hours between an access-removal request and its completion."""

    revocation_time_hours: float = Field(..., ge=0, allow_inf_nan=False)

    class Config:
        frozen = True


class AccessMetrics(BaseModel):
    """
    Access hygiene KPIs: rates in percent (0-100), revocation time in hours.
    """

    least_privilege_rate: float = Field(
        ..., description="Share of accounts following least privilege"
    )
    generic_account_rate: float = Field(
        ..., description="Share of generic (shared) accounts"
    )
    inactive_removal_rate: float = Field(
        ..., description="Share of inactive accounts that were removed"
    )
    privileged_review_rate: float = Field(
        ..., description="Share of privileged accounts that were reviewed"
    )
    average_revocation_time_hours: float = Field(
        ..., description="Mean access revocation time in hours"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "least_privilege_rate": 70.0,
                "generic_account_rate": 15.0,
                "inactive_removal_rate": 71.11111111111111,
                "privileged_review_rate": 80.0,
                "average_revocation_time_hours": 4.0,
            }
        }
