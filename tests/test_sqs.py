"""Tests for the SQS client and the bank balance query."""

from decimal import Decimal

import httpx
import pytest

from conftest import ATOM_DENOM, USDC_DENOM, json_transport
from osmosis_agent.errors import NodeUnreachableError
from osmosis_agent.queries.bank import query_balances
from osmosis_agent.routing.models import Coin
from osmosis_agent.routing.sqs import PRICE_BATCH_SIZE, QUOTE_COIN_MINIMAL_DENOM, SqsClient

QUOTE_RESPONSE = {
    "amount_in": {"denom": "uosmo", "amount": "1000000"},
    "amount_out": "4500000",
    "route": [
        {
            "pools": [
                {
                    "id": 1,
                    "type": 0,
                    "balances": [],
                    "spread_factor": "0.002000000000000000",
                    "token_out_denom": ATOM_DENOM,
                    "taker_fee": "0.001000000000000000",
                }
            ],
            "has-cw-pool": False,
            "out_amount": "4500000",
            "in_amount": "1000000",
        }
    ],
    "effective_fee": "0.003000000000000000",
    "price_impact": "-0.000123",
    "in_base_out_quote_spot_price": "0.222",
}


def price_map(denoms, price="1.25"):
    return {denom: {QUOTE_COIN_MINIMAL_DENOM: price} for denom in denoms}


class TestQuotes:
    """Tests for /router/quote."""

    @pytest.mark.asyncio
    async def test_out_given_in_request(self):
        """Test query parameters and response parsing for exact-in quotes."""
        seen = {}

        def respond(request):
            seen.update(dict(request.url.params))
            return httpx.Response(200, json=QUOTE_RESPONSE)

        client = SqsClient(transport=json_transport({"/router/quote": respond}))
        quote = await client.get_out_given_in_quote(Coin(denom="uosmo", amount="1000000"), ATOM_DENOM)

        assert seen == {"tokenIn": "1000000uosmo", "tokenOutDenom": ATOM_DENOM, "humanDenoms": "false"}
        assert quote.amount_out == "4500000"
        assert quote.route[0].has_cw_pool is False
        assert quote.route[0].pools[0].token_out_denom == ATOM_DENOM

    @pytest.mark.asyncio
    async def test_in_given_out_request(self):
        seen = {}
        response = {
            "amount_out": {"denom": ATOM_DENOM, "amount": "1000000"},
            "amount_in": "4500000",
            "route": [
                {
                    "pools": [{"id": 1, "token_in_denom": "uosmo"}],
                    "has-cw-pool": True,
                    "out_amount": "1000000",
                    "in_amount": "4500000",
                }
            ],
            "price_impact": "-0.01",
            "in_base_out_quote_spot_price": "4.5",
        }

        def respond(request):
            seen.update(dict(request.url.params))
            return httpx.Response(200, json=response)

        client = SqsClient(transport=json_transport({"/router/quote": respond}))
        quote = await client.get_in_given_out_quote(Coin(denom=ATOM_DENOM, amount="1000000"), "uosmo")

        assert seen == {"tokenOut": f"1000000{ATOM_DENOM}", "tokenInDenom": "uosmo", "humanDenoms": "false"}
        assert quote.amount_in == "4500000"
        assert quote.route[0].has_cw_pool is True

    @pytest.mark.asyncio
    async def test_no_route_raises(self):
        def respond(request):
            return httpx.Response(400, json={"message": "no routes were provided"})

        client = SqsClient(transport=json_transport({"/router/quote": respond}))
        with pytest.raises(httpx.HTTPStatusError):
            await client.get_out_given_in_quote(Coin(denom="uosmo", amount="1"), "uion")


class TestPrices:
    """Tests for batched /tokens/prices."""

    @pytest.mark.asyncio
    async def test_prices(self):
        def respond(request):
            denoms = request.url.params["base"].split(",")
            return httpx.Response(200, json=price_map(denoms))

        client = SqsClient(transport=json_transport({"/tokens/prices": respond}))
        prices = await client.get_prices(["uosmo", ATOM_DENOM])

        assert prices == {"uosmo": Decimal("1.25"), ATOM_DENOM: Decimal("1.25")}

    @pytest.mark.asyncio
    async def test_batches_of_one_hundred(self):
        """Test more than 100 denoms are split across requests."""
        batches = []

        def respond(request):
            denoms = request.url.params["base"].split(",")
            batches.append(len(denoms))
            return httpx.Response(200, json=price_map(denoms))

        client = SqsClient(transport=json_transport({"/tokens/prices": respond}))
        denoms = [f"factory/osmo1x/t{i}" for i in range(250)]
        prices = await client.get_prices(denoms)

        assert PRICE_BATCH_SIZE == 100
        assert batches == [100, 100, 50]
        assert len(prices) == 250

    @pytest.mark.asyncio
    async def test_missing_and_zero_prices_are_none(self):
        """Test a bad price affects only its own denom."""

        def respond(request):
            return httpx.Response(
                200,
                json={
                    "uosmo": {QUOTE_COIN_MINIMAL_DENOM: "0.5"},
                    "uion": {QUOTE_COIN_MINIMAL_DENOM: "0"},
                    "ubad": {QUOTE_COIN_MINIMAL_DENOM: "garbage"},
                },
            )

        client = SqsClient(transport=json_transport({"/tokens/prices": respond}))
        prices = await client.get_prices(["uosmo", "uion", "ubad", "umissing"])

        assert prices == {"uosmo": Decimal("0.5"), "uion": None, "ubad": None, "umissing": None}

    @pytest.mark.asyncio
    async def test_failed_batch_is_none(self):
        def respond(request):
            return httpx.Response(500, text="upstream error")

        client = SqsClient(transport=json_transport({"/tokens/prices": respond}))
        prices = await client.get_prices(["uosmo", USDC_DENOM])

        assert prices == {"uosmo": None, USDC_DENOM: None}

    @pytest.mark.asyncio
    async def test_get_price(self):
        def respond(request):
            return httpx.Response(200, json=price_map(["uosmo"], "0.45"))

        client = SqsClient(transport=json_transport({"/tokens/prices": respond}))

        assert await client.get_price("uosmo") == Decimal("0.45")


class TestBankBalances:
    """Tests for the REST balance query."""

    @pytest.mark.asyncio
    async def test_query_balances(self):
        seen = {}

        def respond(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={
                    "balances": [{"denom": "uosmo", "amount": "1500000"}],
                    "pagination": {"next_key": None, "total": "1"},
                },
            )

        balances = await query_balances(
            "osmo1abc",
            transport=json_transport({"/cosmos/bank/v1beta1/balances/": respond}),
        )

        assert balances == [Coin(denom="uosmo", amount="1500000")]
        assert seen["path"] == "/cosmos/bank/v1beta1/balances/osmo1abc"
        assert seen["params"] == {"pagination.limit": "1000"}

    @pytest.mark.asyncio
    async def test_unknown_chain(self):
        with pytest.raises(ValueError):
            await query_balances("osmo1abc", chain_id="unknown-1")

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NodeUnreachableError):
            await query_balances("osmo1abc", transport=httpx.MockTransport(refuse))
