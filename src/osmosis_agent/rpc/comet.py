"""CometBFT / Tendermint JSON-RPC clients.

Three node protocol generations are in use across Cosmos chains:
- Tendermint 0.34: event attribute keys and values are base64-encoded
- Tendermint 0.37: plain-text event attributes
- CometBFT 0.38: plain-text event attributes, FinalizeBlock-based results

All three speak JSON-RPC 2.0 over HTTP POST. A client is "connected" once a
`status` probe has succeeded against the endpoint.
"""

import base64
import binascii
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

import httpx

from osmosis_agent.errors import NodeError, NodeUnreachableError

logger = logging.getLogger(__name__)


class ConsensusGeneration(str, Enum):
    """Node wire-protocol generation."""

    TENDERMINT_34 = "tendermint34"
    TENDERMINT_37 = "tendermint37"
    COMET_38 = "comet38"


@dataclass
class AbciQueryResult:
    """Result of an ABCI query."""

    code: int
    value: bytes
    log: str = ""
    codespace: str = ""
    height: int = 0


@dataclass
class BroadcastTxResult:
    """Result of a sync broadcast (CheckTx only)."""

    code: int
    hash: str
    log: str = ""
    codespace: str = ""


@dataclass
class TxEvent:
    """An ABCI event with decoded attributes."""

    type: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class TxResult:
    """An included transaction."""

    hash: str
    height: int
    code: int
    log: str = ""
    gas_wanted: int = 0
    gas_used: int = 0
    events: list[TxEvent] = field(default_factory=list)


class CometClient:
    """JSON-RPC client for one node protocol generation."""

    generation: ClassVar[ConsensusGeneration]

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)
        self._closed = False

    @classmethod
    async def connect(
        cls,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CometClient":
        """Open a client and verify the node answers.

        Raises:
            NodeUnreachableError: If the endpoint cannot be reached
        """
        client = cls(endpoint, timeout=timeout, transport=transport)
        try:
            status = await client.status()
        except Exception:
            await client.disconnect()
            raise

        version = status.get("node_info", {}).get("version", "unknown")
        logger.debug(f"Connected {cls.__name__} to {endpoint} (node version {version})")
        return client

    @property
    def is_connected(self) -> bool:
        return not self._closed

    async def disconnect(self) -> None:
        """Close the underlying HTTP connection pool."""
        if not self._closed:
            self._closed = True
            await self._http.aclose()
            logger.debug(f"Disconnected {self.__class__.__name__} from {self.endpoint}")

    async def __aenter__(self) -> "CometClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
        return False

    async def _call(self, method: str, params: Optional[dict] = None) -> Any:
        if self._closed:
            raise NodeError(f"{self.__class__.__name__} is disconnected")

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }

        try:
            response = await self._http.post(self.endpoint, json=payload)
        except httpx.TransportError as e:
            raise NodeUnreachableError(f"Node {self.endpoint} unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise NodeError(
                f"Invalid JSON-RPC response from {self.endpoint} (HTTP {response.status_code})"
            ) from e

        error = data.get("error")
        if error:
            message = error.get("data") or error.get("message") or str(error)
            raise NodeError(f"{method} failed: {message}")

        return data.get("result", {})

    async def status(self) -> dict:
        """Get node status (node info, sync info, validator info)."""
        return await self._call("status")

    async def abci_query(
        self, path: str, data: bytes, height: Optional[int] = None
    ) -> AbciQueryResult:
        """Run an ABCI query, e.g. a gRPC method path with protobuf-encoded data."""
        params = {"path": path, "data": data.hex(), "prove": False}
        if height is not None:
            params["height"] = str(height)

        result = await self._call("abci_query", params)
        response = result.get("response", {})
        value = response.get("value") or ""

        return AbciQueryResult(
            code=int(response.get("code", 0)),
            value=base64.b64decode(value),
            log=response.get("log", ""),
            codespace=response.get("codespace", ""),
            height=int(response.get("height", 0) or 0),
        )

    async def broadcast_tx_sync(self, tx: bytes) -> BroadcastTxResult:
        """Submit a signed transaction and return after CheckTx."""
        result = await self._call(
            "broadcast_tx_sync", {"tx": base64.b64encode(tx).decode()}
        )
        return BroadcastTxResult(
            code=int(result.get("code", 0)),
            hash=result.get("hash", ""),
            log=result.get("log", ""),
            codespace=result.get("codespace", ""),
        )

    async def get_tx(self, tx_hash: str) -> Optional[TxResult]:
        """Look up an included transaction by hash.

        Returns None while the transaction is not yet in a block.
        """
        try:
            result = await self._call(
                "tx",
                {"hash": base64.b64encode(bytes.fromhex(tx_hash)).decode(), "prove": False},
            )
        except NodeError as e:
            if "not found" in str(e).lower():
                return None
            raise

        tx_result = result.get("tx_result", {})
        return TxResult(
            hash=result.get("hash", tx_hash),
            height=int(result.get("height", 0)),
            code=int(tx_result.get("code", 0)),
            log=tx_result.get("log", ""),
            gas_wanted=int(tx_result.get("gas_wanted", 0) or 0),
            gas_used=int(tx_result.get("gas_used", 0) or 0),
            events=self.decode_events(tx_result.get("events") or []),
        )

    @classmethod
    def decode_events(cls, raw_events: list[dict]) -> list[TxEvent]:
        """Decode raw ABCI events into TxEvent objects."""
        events = []
        for raw in raw_events:
            attributes = {}
            for attr in raw.get("attributes") or []:
                key = cls._decode_attribute(attr.get("key"))
                attributes[key] = cls._decode_attribute(attr.get("value"))
            events.append(TxEvent(type=raw.get("type", ""), attributes=attributes))
        return events

    @classmethod
    def _decode_attribute(cls, value: Optional[str]) -> str:
        return value or ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint!r})"


class Tendermint34Client(CometClient):
    """Client for Tendermint 0.34 nodes."""

    generation = ConsensusGeneration.TENDERMINT_34

    @classmethod
    def _decode_attribute(cls, value: Optional[str]) -> str:
        # 0.34 encodes event attributes as base64
        if not value:
            return ""
        try:
            return base64.b64decode(value, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return value


class Tendermint37Client(CometClient):
    """Client for Tendermint 0.37 nodes."""

    generation = ConsensusGeneration.TENDERMINT_37


class Comet38Client(CometClient):
    """Client for CometBFT 0.38 nodes."""

    generation = ConsensusGeneration.COMET_38


CLIENT_CLASSES: dict[ConsensusGeneration, type[CometClient]] = {
    ConsensusGeneration.TENDERMINT_34: Tendermint34Client,
    ConsensusGeneration.TENDERMINT_37: Tendermint37Client,
    ConsensusGeneration.COMET_38: Comet38Client,
}
