"""Chain query clients."""

import asyncio
import base64
import binascii
import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

import httpx
from construct import ConstructError

from . import codec
from .errors import UpstreamDecodeError, UpstreamError, UpstreamTimeoutError
from .rpc_models import CommissionInfo, ValidatorMetadata, ValidatorState

logger = logging.getLogger(__name__)


class ChainClient(ABC):
    """Read-only queries the adapter needs from a Namada node."""

    @abstractmethod
    async def query_epoch(self) -> int:
        """Return the current epoch."""

    @abstractmethod
    async def query_metadata(
        self, address: str, epoch: int | None = None
    ) -> tuple[ValidatorMetadata | None, CommissionInfo | None]:
        """Return the validator metadata and commission, each None when unset."""

    @abstractmethod
    async def get_validator_state(
        self, address: str, epoch: int | None = None
    ) -> ValidatorState | None:
        """Return the validator state, None when the validator is unknown."""

    @abstractmethod
    async def get_validator_stake(self, address: str, epoch: int) -> Decimal:
        """Return the bonded stake of the validator at the given epoch."""

    async def aclose(self) -> None:
        """Release any resources held by the client."""


class NamadaRpcClient(ChainClient):
    """
    Namada query client speaking CometBFT JSON-RPC ``abci_query``.

    Usage:
        client = NamadaRpcClient("http://localhost:26657", timeout=5.0)
        epoch = await client.query_epoch()
        await client.aclose()
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            rpc_url: CometBFT RPC endpoint of the node (e.g. "http://localhost:26657")
            timeout: Timeout for each upstream query in seconds
            http_client: Optional preconfigured HTTP client

        Raises:
            ValueError: If rpc_url is empty
        """
        if not rpc_url:
            raise ValueError("RPC URL cannot be empty")

        self.rpc_url = str(rpc_url)
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def abci_query(self, path: str) -> bytes:
        """
        Run an ABCI query against the node's query router.

        Returns:
            The raw Borsh-encoded response value

        Raises:
            UpstreamTimeoutError: If the node does not answer in time
            UpstreamError: On transport failures, HTTP errors or node-side query errors
            UpstreamDecodeError: If the JSON-RPC envelope is malformed
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "abci_query",
            "params": {"path": path, "data": "", "height": "0", "prove": False},
        }

        try:
            response = await self._client.post(self.rpc_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            logger.error("Upstream timeout querying %s", path)
            raise UpstreamTimeoutError(f"Timed out querying {path}", path) from exc
        except httpx.HTTPStatusError as exc:
            logger.error("Upstream returned %s for %s", exc.response.status_code, path)
            raise UpstreamError(
                f"Node returned HTTP {exc.response.status_code} for {path}", path
            ) from exc
        except httpx.RequestError as exc:
            logger.error(f"Upstream connection error querying {path}: {exc}")
            raise UpstreamError(f"Node unreachable while querying {path}: {exc}", path) from exc
        except ValueError as exc:
            raise UpstreamDecodeError(f"Node returned invalid JSON for {path}", path) from exc

        if not isinstance(body, dict):
            raise UpstreamDecodeError(f"Unexpected JSON-RPC response for {path}", path)
        if body.get("error"):
            logger.error("RPC error querying %s: %s", path, body["error"])
            raise UpstreamError(f"RPC error for {path}: {body['error']}", path)

        envelope = body.get("result")
        result: Any = envelope.get("response") if isinstance(envelope, dict) else None
        if not isinstance(result, dict):
            raise UpstreamDecodeError(f"Missing ABCI response for {path}", path)

        try:
            code = int(result.get("code") or 0)
        except (TypeError, ValueError) as exc:
            raise UpstreamDecodeError(f"Invalid ABCI response code for {path}", path) from exc
        if code != 0:
            logger.error("Query %s failed with code %d: %s", path, code, result.get("log", ""))
            raise UpstreamError(
                f"Query {path} failed with code {code}: {result.get('log', '')}", path
            )

        try:
            return base64.b64decode(result.get("value") or "", validate=True)
        except binascii.Error as exc:
            raise UpstreamDecodeError(f"Invalid base64 value for {path}", path) from exc

    async def _query(self, path: str, layout) -> Any:
        raw = await self.abci_query(path)
        try:
            return layout.parse(raw)
        except (ConstructError, UnicodeDecodeError) as exc:
            logger.error("Failed to decode response of %s: %s", path, exc)
            raise UpstreamDecodeError(f"Failed to decode response of {path}: {exc}", path) from exc

    async def query_epoch(self) -> int:
        return await self._query("/shell/epoch", codec.Epoch)

    async def query_metadata(
        self, address: str, epoch: int | None = None
    ) -> tuple[ValidatorMetadata | None, CommissionInfo | None]:
        # Metadata is not epoched on chain; only commission takes the epoch segment.
        raw_metadata, raw_commission = await asyncio.gather(
            self._query(f"/vp/pos/validator/metadata/{address}", codec.MaybeValidatorMetaData),
            self._query(
                _with_epoch(f"/vp/pos/validator/commission/{address}", epoch),
                codec.MaybeCommissionPair,
            ),
        )

        metadata = None
        if raw_metadata is not None:
            metadata = ValidatorMetadata(
                email=raw_metadata.email,
                description=raw_metadata.description,
                website=raw_metadata.website,
                discord_handle=raw_metadata.discord_handle,
                avatar=raw_metadata.avatar,
            )

        commission = None
        if raw_commission is not None:
            commission = CommissionInfo(
                commission_rate=codec.dec_value(raw_commission.commission_rate),
                max_commission_change_per_epoch=codec.dec_value(
                    raw_commission.max_commission_change_per_epoch
                ),
            )

        return metadata, commission

    async def get_validator_state(
        self, address: str, epoch: int | None = None
    ) -> ValidatorState | None:
        path = _with_epoch(f"/vp/pos/validator/state/{address}", epoch)
        tag = await self._query(path, codec.MaybeValidatorStateTag)
        if tag is None:
            return None
        try:
            return ValidatorState(tag)
        except ValueError as exc:
            raise UpstreamDecodeError(f"Unknown validator state tag {tag} from {path}", path) from exc

    async def get_validator_stake(self, address: str, epoch: int) -> Decimal:
        limbs = await self._query(f"/vp/pos/validator/stake/{address}/{epoch}", codec.MaybeAmount)
        return codec.native_amount(limbs or (0,))

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _with_epoch(path: str, epoch: int | None) -> str:
    return path if epoch is None else f"{path}/{epoch}"
