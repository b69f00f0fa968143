"""Shared fixtures for the adapter tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from namada_rest_adapter import ServiceConfig, ValidatorProcessor, create_app
from namada_rest_adapter.address import encode_address
from namada_rest_adapter.rpc import ChainClient
from namada_rest_adapter.rpc_models import CommissionInfo, ValidatorMetadata, ValidatorState

VALIDATOR = encode_address("tnam", bytes([0]) + bytes(range(1, 21)))
OTHER_VALIDATOR = encode_address("tnam", bytes([0]) + bytes(range(101, 121)))


class FakeChainClient(ChainClient):
    """In-memory chain client recording the queries it receives."""

    def __init__(
        self,
        epoch: int = 42,
        state: ValidatorState | None = ValidatorState.CONSENSUS,
        stake: Decimal = Decimal("0"),
        metadata: ValidatorMetadata | None = None,
        commission: CommissionInfo | None = None,
    ):
        self.epoch = epoch
        self.state = state
        self.stake = stake
        self.metadata = metadata
        self.commission = commission
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self.closed = False

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    async def query_epoch(self) -> int:
        self._record("epoch")
        return self.epoch

    async def query_metadata(self, address, epoch=None):
        self._record("metadata", address, epoch)
        return self.metadata, self.commission

    async def get_validator_state(self, address, epoch=None):
        self._record("state", address, epoch)
        return self.state

    async def get_validator_stake(self, address, epoch):
        self._record("stake", address, epoch)
        return self.stake

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def chain() -> FakeChainClient:
    return FakeChainClient(
        metadata=ValidatorMetadata(
            email="ops@example.org",
            description="Reliable validator",
            website="https://validator.example.org",
            discord_handle="validator#0001",
        ),
        commission=CommissionInfo(
            commission_rate=Decimal("0.05"),
            max_commission_change_per_epoch=Decimal("0.01"),
        ),
    )


@pytest.fixture
def make_client():
    """Build a TestClient around a processor backed by the given chain client."""

    def _make(chain: ChainClient, **processor_kwargs) -> TestClient:
        processor = ValidatorProcessor(chain, **processor_kwargs)
        app = create_app(processor, ServiceConfig(cors_origins=["http://localhost:1317"]))
        return TestClient(app)

    return _make
