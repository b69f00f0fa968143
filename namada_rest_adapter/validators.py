"""Processor answering Cosmos staking validator queries from a Namada node."""

import asyncio
import logging
from typing import List

from . import __version__
from .address import parse_address
from .models import ValidatorPathParams, ValidatorResponse
from .processor import BaseProcessor, StatelessAction
from .rpc import ChainClient
from .translation import build_validator_response

logger = logging.getLogger(__name__)

VALIDATOR_PATH = "/cosmos/staking/v1beta1/validators/{address}"


class ValidatorProcessor(BaseProcessor):
    """Aggregates epoch, metadata, state and stake queries into one validator document."""

    def __init__(
        self,
        chain: ChainClient,
        address_hrp: str = "tnam",
        height_consistent: bool = False,
    ):
        """
        Args:
            chain: Shared client used for all upstream queries
            address_hrp: Human-readable part accepted in validator addresses
            height_consistent: Query metadata, commission and state at the
                fetched epoch instead of the latest height
        """
        self.chain = chain
        self.address_hrp = address_hrp
        self.height_consistent = height_consistent

    @property
    def name(self) -> str:
        return "namada-rest-adapter"

    @property
    def version(self) -> str:
        return __version__

    def get_stateless_actions(self) -> List[StatelessAction]:
        return [
            StatelessAction(
                name="validator",
                path=VALIDATOR_PATH,
                path_params_model=ValidatorPathParams,
                response_model=ValidatorResponse,
                handler=self.handle_validator,
                methods=("GET",),
                summary="Query a validator by address.",
                description=(
                    "Returns the validator in the Cosmos staking schema, built from the "
                    "current epoch, the validator metadata and commission, its state and "
                    "its bonded stake."
                ),
                tags=("staking",),
            ),
        ]

    async def handle_validator(self, path_params: ValidatorPathParams) -> ValidatorResponse:
        address = parse_address(path_params.address, self.address_hrp)

        if self.height_consistent:
            epoch = await self.chain.query_epoch()
            (metadata, commission), state, stake = await asyncio.gather(
                self.chain.query_metadata(address, epoch),
                self.chain.get_validator_state(address, epoch),
                self.chain.get_validator_stake(address, epoch),
            )
        else:
            epoch, (metadata, commission), state = await asyncio.gather(
                self.chain.query_epoch(),
                self.chain.query_metadata(address),
                self.chain.get_validator_state(address),
            )
            stake = await self.chain.get_validator_stake(address, epoch)

        logger.debug("Validator %s at epoch %s: state=%s", address, epoch, state)
        return build_validator_response(address, state, stake, metadata, commission)

    async def aclose(self) -> None:
        await self.chain.aclose()
