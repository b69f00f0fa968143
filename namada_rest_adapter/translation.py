"""Translation of Namada validator records into the Cosmos staking schema."""

from decimal import Decimal
from typing import NamedTuple

from .models import Commission, CommissionRates, Description, Validator, ValidatorResponse
from .rpc_models import CommissionInfo, ValidatorMetadata, ValidatorState


class StatusFields(NamedTuple):
    """The ``status`` and ``jailed`` output fields, always derived together."""

    status: str | None
    jailed: bool | None


_STATUS_BY_STATE: dict[ValidatorState, StatusFields] = {
    ValidatorState.CONSENSUS: StatusFields("CONSENSUS", False),
    ValidatorState.BELOW_CAPACITY: StatusFields("BELOW_CAPACITY", False),
    ValidatorState.BELOW_THRESHOLD: StatusFields("BELOW_THRESHOLD", False),
    ValidatorState.INACTIVE: StatusFields("INACTIVE", False),
    ValidatorState.JAILED: StatusFields("JAILED", True),
}

_unmapped = set(ValidatorState) - set(_STATUS_BY_STATE)
if _unmapped:
    raise RuntimeError(f"No status mapping for validator states: {sorted(s.name for s in _unmapped)}")

NOT_FOUND = StatusFields(None, None)


def map_state(state: ValidatorState | None) -> StatusFields:
    """Map a validator state (or its absence) to Cosmos ``status``/``jailed``."""
    if state is None:
        return NOT_FOUND
    return _STATUS_BY_STATE[state]


def render_decimal(value: Decimal) -> str:
    """Render a decimal in plain positional notation without losing digits."""
    return format(value, "f")


def build_description(metadata: ValidatorMetadata | None) -> Description:
    if metadata is None:
        return Description()
    return Description(
        moniker=metadata.discord_handle,
        website=metadata.website,
        security_contact=metadata.email,
        details=metadata.description,
    )


def build_commission(commission: CommissionInfo | None) -> Commission:
    if commission is None:
        return Commission(commission_rates=CommissionRates())
    return Commission(
        commission_rates=CommissionRates(
            rate=render_decimal(commission.commission_rate),
            max_change_rate=render_decimal(commission.max_commission_change_per_epoch),
        )
    )


def build_validator_response(
    address: str,
    state: ValidatorState | None,
    stake: Decimal,
    metadata: ValidatorMetadata | None,
    commission: CommissionInfo | None,
) -> ValidatorResponse:
    """
    Merge the results of the upstream queries into one response document.

    Args:
        address: Canonical validator address, echoed as ``operator_address``
        state: Validator state, None when the validator was not found
        stake: Bonded stake in native token units
        metadata: Validator metadata, None when not set
        commission: Commission parameters, None when not set
    """
    status = map_state(state)
    return ValidatorResponse(
        validator=Validator(
            operator_address=address,
            jailed=status.jailed,
            status=status.status,
            tokens=render_decimal(stake),
            description=build_description(metadata),
            commission=build_commission(commission),
        )
    )
