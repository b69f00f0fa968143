"""Cosmos staking REST endpoints backed by a Namada node."""

__version__ = "1.0.0"

from .api import create_app, ServiceConfig
from .config import Settings
from .errors import AdapterError, InvalidAddressError, UpstreamDecodeError, UpstreamError, UpstreamTimeoutError
from .processor import BaseProcessor, StatelessAction
from .rpc import ChainClient, NamadaRpcClient
from .rpc_models import CommissionInfo, ValidatorMetadata, ValidatorState
from .validators import ValidatorProcessor


__all__ = [
    "BaseProcessor",
    "StatelessAction",
    "create_app",
    "ServiceConfig",
    "Settings",
    "AdapterError",
    "InvalidAddressError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamDecodeError",
    "ChainClient",
    "NamadaRpcClient",
    "CommissionInfo",
    "ValidatorMetadata",
    "ValidatorState",
    "ValidatorProcessor",
]
