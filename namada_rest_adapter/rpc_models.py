"""Records returned by the chain client."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ValidatorState(Enum):
    """Proof-of-stake validator state, in on-chain tag order."""

    CONSENSUS = 0
    BELOW_CAPACITY = 1
    BELOW_THRESHOLD = 2
    INACTIVE = 3
    JAILED = 4


class ValidatorMetadata(BaseModel):
    """Self-reported validator metadata."""

    model_config = ConfigDict(frozen=True)

    email: str | None = None
    description: str | None = None
    website: str | None = None
    discord_handle: str | None = None
    avatar: str | None = None


class CommissionInfo(BaseModel):
    """Validator commission parameters."""

    model_config = ConfigDict(frozen=True)

    commission_rate: Decimal
    max_commission_change_per_epoch: Decimal
