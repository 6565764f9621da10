"""Request models and error labels for the SDK clients."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class ErrorKind(str, Enum):
    """Labels carried by AptoPlayError.kind, one per public operation."""

    REGISTER_WITH_EMAIL = "PLAYFAB_REGISTER_WITH_EMAIL_ERROR"
    LOGIN_WITH_EMAIL = "PLAYFAB_LOGIN_WITH_EMAIL_ERROR"
    GOOGLE_PROFILE = "GOOGLE_PROFILE_ERROR"
    GOOGLE_SOCIAL_REGISTER = "PLAYFAB_GOOGLE_SOCIAL_REGISTER_ERROR"
    VALIDATE_SESSION = "PLAYFAB_VALIDATE_SESSION_ERROR"
    GET_STATISTICS = "PLAYFAB_GET_STATISTICS_ERROR"
    GET_STATISTIC_VERSIONS = "PLAYFAB_GET_STATISTIC_VERSIONS_ERROR"
    UPDATE_STATISTICS = "PLAYFAB_UPDATE_STATISTICS_ERROR"
    APTOS_MINT = "APTOS_MINT_ERROR"
    APTOS_GET_BALANCE = "APTOS_GET_BALANCE_ERROR"


class PlayFabModel(BaseModel):
    """Base for request payloads; serializes with PlayFab's PascalCase names."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    def to_request(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class StatisticVersion(PlayFabModel):
    """A statistic name pinned to a reset version."""

    statistic_name: str = Field(..., min_length=1, description="Statistic name")
    version: int = Field(..., ge=0, description="Statistic reset version")


class StatisticUpdate(PlayFabModel):
    """A new value for one player statistic.

    Leaving ``version`` unset targets the statistic's current version.
    """

    statistic_name: str = Field(..., min_length=1, description="Statistic name")
    value: int = Field(..., description="New statistic value")
    version: Optional[int] = Field(None, ge=0, description="Statistic reset version")

    @field_validator("statistic_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the statistic name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("statistic_name cannot be empty or whitespace-only")
        return stripped
