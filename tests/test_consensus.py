"""Tests for node client selection and the JSON-RPC clients."""

import base64
import json
from dataclasses import replace

import httpx
import pytest

from conftest import FakeNode
from osmosis_agent.chains import get_chain
from osmosis_agent.errors import NodeError, NodeUnreachableError
from osmosis_agent.rpc import (
    Comet38Client,
    ConsensusGeneration,
    Tendermint34Client,
    Tendermint37Client,
    connect_chain_client,
    connect_consensus_client,
    select_generation,
)

ENDPOINT = "https://rpc.example.zone"


class TestSelectGeneration:
    """Tests for the version/type decision table."""

    def test_no_version_is_comet38(self):
        assert select_generation(None, None) == ConsensusGeneration.COMET_38
        assert select_generation(None, "tendermint") == ConsensusGeneration.COMET_38
        assert select_generation("", "tendermint") == ConsensusGeneration.COMET_38

    def test_cometbft_type_is_comet38(self):
        """Test the engine type wins over the version number."""
        assert select_generation("0.38.17", "cometbft") == ConsensusGeneration.COMET_38
        assert select_generation("0.37.2", "cometbft") == ConsensusGeneration.COMET_38

    def test_037_is_tendermint37(self):
        assert select_generation("0.37.4", "tendermint") == ConsensusGeneration.TENDERMINT_37
        assert select_generation("0.37.0", None) == ConsensusGeneration.TENDERMINT_37

    def test_v_prefix_accepted(self):
        assert select_generation("v0.37.1", "tendermint") == ConsensusGeneration.TENDERMINT_37

    def test_older_is_tendermint34(self):
        assert select_generation("0.34.29", "tendermint") == ConsensusGeneration.TENDERMINT_34
        assert select_generation("0.34.27", None) == ConsensusGeneration.TENDERMINT_34

    def test_registry_chains(self):
        """Test the chain registry's consensus metadata maps as expected."""
        for chain_id, expected in [
            ("osmosis-1", ConsensusGeneration.COMET_38),
            ("juno-1", ConsensusGeneration.COMET_38),
            ("akashnet-2", ConsensusGeneration.TENDERMINT_37),
            ("stargaze-1", ConsensusGeneration.TENDERMINT_34),
            ("celestia", ConsensusGeneration.COMET_38),
        ]:
            chain = get_chain(chain_id)
            assert select_generation(chain.consensus_version, chain.consensus_type) == expected


class TestConnectConsensusClient:
    """Tests for provisional connection and replacement."""

    @pytest.mark.asyncio
    async def test_keeps_provisional_for_037(self):
        """Test a 0.37 node is served by the provisional client, probed once."""
        node = FakeNode(version="0.37.4")
        client = await connect_consensus_client(
            ENDPOINT, "0.37.4", "tendermint", transport=node.transport
        )

        assert isinstance(client, Tendermint37Client)
        assert client.is_connected
        assert node.methods() == ["status"]
        await client.disconnect()

    @pytest.mark.asyncio
    async def test_replaces_with_comet38(self):
        """Test the provisional client is closed and a 0.38 client opened."""
        node = FakeNode()
        client = await connect_consensus_client(
            ENDPOINT, "0.38.17", "cometbft", transport=node.transport
        )

        assert isinstance(client, Comet38Client)
        assert node.methods() == ["status", "status"]
        await client.disconnect()

    @pytest.mark.asyncio
    async def test_replaces_with_tendermint34(self):
        node = FakeNode(version="0.34.29")
        client = await connect_consensus_client(
            ENDPOINT, "0.34.29", "tendermint", transport=node.transport
        )

        assert isinstance(client, Tendermint34Client)
        await client.disconnect()

    @pytest.mark.asyncio
    async def test_provisional_disconnected_before_replacement(self, monkeypatch):
        """Test the provisional client is closed before the replacement connects."""
        events = []
        original_disconnect = Tendermint37Client.disconnect
        original_connect = Comet38Client.connect.__func__

        async def tracking_disconnect(self):
            events.append(("disconnect", type(self).__name__))
            await original_disconnect(self)

        async def tracking_connect(cls, *args, **kwargs):
            events.append(("connect", cls.__name__))
            return await original_connect(cls, *args, **kwargs)

        monkeypatch.setattr(Tendermint37Client, "disconnect", tracking_disconnect)
        monkeypatch.setattr(Comet38Client, "connect", classmethod(tracking_connect))

        node = FakeNode()
        client = await connect_consensus_client(ENDPOINT, None, None, transport=node.transport)

        assert events == [("disconnect", "Tendermint37Client"), ("connect", "Comet38Client")]
        await client.disconnect()

    @pytest.mark.asyncio
    async def test_unreachable(self):
        """Test a transport failure raises NodeUnreachableError."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NodeUnreachableError):
            await connect_consensus_client(
                ENDPOINT, "0.38.17", "cometbft", transport=httpx.MockTransport(refuse)
            )

    @pytest.mark.asyncio
    async def test_chain_without_endpoint(self):
        chain = get_chain("osmosis-1")

        with pytest.raises(NodeUnreachableError):
            await connect_chain_client(replace(chain, rpc_endpoints=()))

    @pytest.mark.asyncio
    async def test_chain_rpc_override(self):
        """Test an explicit RPC URL replaces the registry endpoint."""
        seen = []

        node = FakeNode()

        def handler(request):
            seen.append(str(request.url))
            return node.handler(request)

        client = await connect_chain_client(
            get_chain("osmosis-1"), rpc_url=ENDPOINT, transport=httpx.MockTransport(handler)
        )
        await client.disconnect()

        assert seen and all(url.startswith(ENDPOINT) for url in seen)


class TestCometClient:
    """Tests for JSON-RPC calls and event decoding."""

    @pytest.mark.asyncio
    async def test_rpc_error_raises_node_error(self):
        node = FakeNode()
        async with Comet38Client(ENDPOINT, transport=node.transport) as client:
            with pytest.raises(NodeError):
                await client._call("unknown_method")

    @pytest.mark.asyncio
    async def test_calls_after_disconnect_fail(self):
        node = FakeNode()
        client = await Comet38Client.connect(ENDPOINT, transport=node.transport)
        await client.disconnect()

        assert not client.is_connected
        with pytest.raises(NodeError):
            await client.status()

    @pytest.mark.asyncio
    async def test_abci_query_encodes_hex_and_decodes_base64(self):
        captured = {}

        def handler(request):
            payload = json.loads(request.content)
            captured.update(payload["params"])
            value = base64.b64encode(b"\x01\x02").decode()
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": payload["id"], "result": {"response": {"code": 0, "value": value}}},
            )

        async with Comet38Client(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
            result = await client.abci_query("/some.Query/Path", b"\xab\xcd")

        assert captured["data"] == "abcd"
        assert captured["path"] == "/some.Query/Path"
        assert result.value == b"\x01\x02"
        assert result.code == 0

    @pytest.mark.asyncio
    async def test_get_tx_not_found_returns_none(self):
        def handler(request):
            payload = json.loads(request.content)
            error = {"code": -32603, "message": "Internal error", "data": "tx (ABCD) not found"}
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": error})

        async with Comet38Client(ENDPOINT, transport=httpx.MockTransport(handler)) as client:
            assert await client.get_tx("ABCD") is None

    def test_tendermint34_decodes_base64_attributes(self):
        """Test 0.34 event attributes are base64-decoded."""
        raw = [
            {
                "type": "transfer",
                "attributes": [
                    {"key": base64.b64encode(b"amount").decode(), "value": base64.b64encode(b"10uosmo").decode()},
                ],
            }
        ]
        events = Tendermint34Client.decode_events(raw)

        assert events[0].type == "transfer"
        assert events[0].attributes == {"amount": "10uosmo"}

    def test_comet38_keeps_plain_attributes(self):
        raw = [{"type": "transfer", "attributes": [{"key": "amount", "value": "10uosmo"}]}]
        events = Comet38Client.decode_events(raw)

        assert events[0].attributes == {"amount": "10uosmo"}
