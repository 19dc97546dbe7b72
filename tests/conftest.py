"""Pytest configuration and fixtures."""

import base64
import json
import os
from typing import Callable, Optional

import httpx
import pytest

# Keep tests independent of a developer's .env / shell
for _key in list(os.environ):
    if _key.startswith("OSMOSIS_"):
        del os.environ[_key]

from cosmpy.protos.cosmos.auth.v1beta1.auth_pb2 import BaseAccount
from cosmpy.protos.cosmos.auth.v1beta1.query_pb2 import QueryAccountResponse
from cosmpy.protos.cosmos.base.abci.v1beta1.abci_pb2 import GasInfo
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2 import SimulateResponse

from osmosis_agent.config import Settings
from osmosis_agent.routing.models import InGivenOutQuote, OutGivenInQuote
from osmosis_agent.signing.signer import pack_any

TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)

ATOM_DENOM = "ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2"
USDC_DENOM = "ibc/498A0751C798A0D9A389AA3691123DADA57DAA4FE165D5C75894505B876BA6E4"


# ======================
# Quotes
# ======================


def make_out_given_in_quote(
    amount_in: str = "1000000",
    amount_out: str = "4500000",
    routes: Optional[list[dict]] = None,
) -> OutGivenInQuote:
    """Build an exact-in quote as SQS returns it."""
    if routes is None:
        routes = [
            {
                "pools": [
                    {"id": 1, "type": 0, "spread_factor": "0.002", "token_out_denom": ATOM_DENOM, "taker_fee": "0.001"},
                ],
                "has-cw-pool": False,
                "out_amount": amount_out,
                "in_amount": amount_in,
            }
        ]
    return OutGivenInQuote.model_validate(
        {
            "amount_in": {"denom": "uosmo", "amount": amount_in},
            "amount_out": amount_out,
            "route": routes,
            "effective_fee": "0.003",
            "price_impact": "-0.0001",
            "in_base_out_quote_spot_price": "0.22",
        }
    )


def make_in_given_out_quote(
    amount_out: str = "1000000",
    amount_in: str = "4500000",
    routes: Optional[list[dict]] = None,
) -> InGivenOutQuote:
    """Build an exact-out quote as SQS returns it."""
    if routes is None:
        routes = [
            {
                "pools": [
                    {"id": 1, "type": 0, "spread_factor": "0.002", "token_in_denom": "uosmo", "taker_fee": "0.001"},
                ],
                "has-cw-pool": False,
                "out_amount": amount_out,
                "in_amount": amount_in,
            }
        ]
    return InGivenOutQuote.model_validate(
        {
            "amount_out": {"denom": ATOM_DENOM, "amount": amount_out},
            "amount_in": amount_in,
            "route": routes,
            "effective_fee": "0.003",
            "price_impact": "-0.0001",
            "in_base_out_quote_spot_price": "4.5",
        }
    )


@pytest.fixture
def out_given_in_quote() -> OutGivenInQuote:
    return make_out_given_in_quote()


@pytest.fixture
def in_given_out_quote() -> InGivenOutQuote:
    return make_in_given_out_quote()


# ======================
# Fake CometBFT node
# ======================


class FakeNode:
    """In-memory CometBFT JSON-RPC node for httpx.MockTransport.

    Records every JSON-RPC call; answers status, abci_query (account and
    simulate paths) and broadcast_tx_sync.
    """

    def __init__(
        self,
        version: str = "0.38.17",
        account_number: int = 7,
        sequence: int = 3,
        gas_used: int = 100_000,
        simulate_code: int = 0,
        broadcast_code: int = 0,
        broadcast_log: str = "",
        tx_hash: str = "A1B2C3D4E5F6",
    ):
        self.version = version
        self.account_number = account_number
        self.sequence = sequence
        self.gas_used = gas_used
        self.simulate_code = simulate_code
        self.broadcast_code = broadcast_code
        self.broadcast_log = broadcast_log
        self.tx_hash = tx_hash
        self.calls: list[dict] = []
        self.broadcast_txs: list[bytes] = []

    def methods(self) -> list[str]:
        return [call["method"] for call in self.calls]

    def _abci(self, params: dict) -> dict:
        path = params["path"]
        if path == "/cosmos.auth.v1beta1.Query/Account":
            account = BaseAccount(
                address="osmo1test",
                account_number=self.account_number,
                sequence=self.sequence,
            )
            value = QueryAccountResponse(account=pack_any(account)).SerializeToString()
            return {"response": {"code": 0, "value": base64.b64encode(value).decode()}}

        if path == "/cosmos.tx.v1beta1.Service/Simulate":
            if self.simulate_code:
                return {"response": {"code": self.simulate_code, "log": "insufficient funds"}}
            value = SimulateResponse(gas_info=GasInfo(gas_used=self.gas_used)).SerializeToString()
            return {"response": {"code": 0, "value": base64.b64encode(value).decode()}}

        return {"response": {"code": 6, "log": f"unknown query path {path}"}}

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)
        method = payload["method"]
        params = payload.get("params", {})

        if method == "status":
            result = {"node_info": {"version": self.version}}
        elif method == "abci_query":
            result = self._abci(params)
        elif method == "broadcast_tx_sync":
            self.broadcast_txs.append(base64.b64decode(params["tx"]))
            result = {
                "code": self.broadcast_code,
                "hash": self.tx_hash,
                "log": self.broadcast_log,
                "codespace": "sdk" if self.broadcast_code else "",
            }
        else:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": payload["id"], "error": {"code": -32601, "message": "Method not found"}},
            )

        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_node() -> FakeNode:
    return FakeNode()


def json_transport(routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
    """MockTransport dispatching on URL path."""

    def handler(request: httpx.Request) -> httpx.Response:
        for path, respond in routes.items():
            if request.url.path == path or request.url.path.startswith(path):
                return respond(request)
        return httpx.Response(404, json={"message": "not found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, mnemonic=TEST_MNEMONIC)
