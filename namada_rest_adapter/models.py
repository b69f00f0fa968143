"""Response models for the Cosmos-compatible REST surface."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error: str = Field(..., description="High-level error message")
    detail: str | None = Field(None, description="Additional context for debugging")


class ValidatorPathParams(BaseModel):
    """Path parameters for the validator query."""

    address: str = Field(..., min_length=1, max_length=90, description="Validator address.")


class Description(BaseModel):
    model_config = ConfigDict(frozen=True)

    moniker: str | None = None
    identity: None = None
    website: str | None = None
    security_contact: str | None = None
    details: str | None = None


class CommissionRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: str | None = None
    max_rate: None = None
    max_change_rate: str | None = None


class Commission(BaseModel):
    model_config = ConfigDict(frozen=True)

    commission_rates: CommissionRates
    update_time: None = None


class Validator(BaseModel):
    """Validator entry in the Cosmos staking schema."""

    model_config = ConfigDict(frozen=True)

    operator_address: str
    jailed: bool | None = None
    status: str | None = None
    tokens: str
    description: Description
    commission: Commission


class ValidatorResponse(BaseModel):
    """Response body of GET /cosmos/staking/v1beta1/validators/{address}."""

    model_config = ConfigDict(frozen=True)

    validator: Validator
