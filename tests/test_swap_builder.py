"""Tests for swap message construction."""

from decimal import Decimal

import pytest

from conftest import ATOM_DENOM, USDC_DENOM, make_in_given_out_quote, make_out_given_in_quote
from osmosis_agent.tx.msg import send_msg
from osmosis_agent.tx.protos import type_url
from osmosis_agent.tx.swap import (
    DEFAULT_SLIPPAGE_PERCENT,
    make_swap_exact_amount_in_encode_object,
    make_swap_exact_amount_out_encode_object,
    token_in_max_amount,
    token_out_min_amount,
)

SENDER = "osmo1sender"


def split_routes_in():
    return [
        {
            "pools": [
                {"id": 1, "token_out_denom": USDC_DENOM},
                {"id": 1464, "token_out_denom": ATOM_DENOM},
            ],
            "in_amount": "600000",
            "out_amount": "2700000",
        },
        {
            "pools": [{"id": 1135, "token_out_denom": ATOM_DENOM}],
            "in_amount": "400000",
            "out_amount": "1800000",
        },
    ]


def split_routes_out():
    return [
        {
            "pools": [{"id": 1, "token_in_denom": "uosmo"}],
            "in_amount": "2700000",
            "out_amount": "600000",
        },
        {
            "pools": [
                {"id": 1464, "token_in_denom": USDC_DENOM},
                {"id": 678, "token_in_denom": "uosmo"},
            ],
            "in_amount": "1800000",
            "out_amount": "400000",
        },
    ]


class TestSlippageBounds:
    """Tests for min-out / max-in computation."""

    def test_default_slippage(self):
        assert DEFAULT_SLIPPAGE_PERCENT == Decimal("0.5")
        assert token_out_min_amount("4500000") == 4_477_500
        assert token_in_max_amount("4500000") == 4_522_500

    def test_half_percent_of_one_thousand(self):
        assert token_out_min_amount("1000", 0.5) == 995
        assert token_in_max_amount("1000", 0.5) == 1005

    def test_min_out_floors(self):
        """Test exact-in bound rounds down."""
        assert token_out_min_amount("999", 0.5) == 994

    def test_max_in_ceils(self):
        """Test exact-out bound rounds up."""
        assert token_in_max_amount("999", 0.5) == 1004

    def test_zero_slippage_is_identity(self):
        assert token_out_min_amount("123456789", 0) == 123456789
        assert token_in_max_amount("123456789", 0) == 123456789

    def test_bounds_are_monotonic_in_slippage(self):
        """Test more slippage never tightens the bound."""
        mins = [token_out_min_amount("1000000", s) for s in ("0.1", "0.5", "1", "5")]
        maxes = [token_in_max_amount("1000000", s) for s in ("0.1", "0.5", "1", "5")]

        assert mins == sorted(mins, reverse=True)
        assert maxes == sorted(maxes)

    def test_exact_at_large_amounts(self):
        """Test 18-decimal sized amounts are bounded without float error."""
        amount = "123456789012345678901234567890"
        assert token_out_min_amount(amount, "0.5") == int(amount) * 995 // 1000
        assert token_in_max_amount(amount, "0.5") == -(-int(amount) * 1005 // 1000)

    @pytest.mark.parametrize("slippage", [-0.1, 100, 150])
    def test_out_of_range_slippage_rejected(self, slippage):
        with pytest.raises(ValueError):
            token_out_min_amount("1000", slippage)
        with pytest.raises(ValueError):
            token_in_max_amount("1000", slippage)


class TestExactAmountIn:
    """Tests for out-given-in quotes."""

    def test_single_route(self):
        """Test a one-route quote becomes MsgSwapExactAmountIn."""
        quote = make_out_given_in_quote(amount_in="1000000", amount_out="4500000")
        msg = make_swap_exact_amount_in_encode_object(SENDER, quote)

        assert type_url(msg) == "/osmosis.poolmanager.v1beta1.MsgSwapExactAmountIn"
        assert msg.sender == SENDER
        assert msg.token_in.denom == "uosmo"
        assert msg.token_in.amount == "1000000"
        assert msg.token_out_min_amount == "4477500"
        assert [(r.pool_id, r.token_out_denom) for r in msg.routes] == [(1, ATOM_DENOM)]

    def test_split_route(self):
        """Test a multi-route quote becomes MsgSplitRouteSwapExactAmountIn."""
        quote = make_out_given_in_quote(
            amount_in="1000000", amount_out="4500000", routes=split_routes_in()
        )
        msg = make_swap_exact_amount_in_encode_object(SENDER, quote, 1)

        assert type_url(msg) == "/osmosis.poolmanager.v1beta1.MsgSplitRouteSwapExactAmountIn"
        assert msg.token_in_denom == "uosmo"
        assert msg.token_out_min_amount == "4455000"
        assert len(msg.routes) == 2
        assert msg.routes[0].token_in_amount == "600000"
        assert [(p.pool_id, p.token_out_denom) for p in msg.routes[0].pools] == [
            (1, USDC_DENOM),
            (1464, ATOM_DENOM),
        ]
        assert msg.routes[1].token_in_amount == "400000"

    def test_missing_counter_denom_rejected(self):
        quote = make_out_given_in_quote(routes=[{"pools": [{"id": 1}], "in_amount": "1", "out_amount": "1"}])
        with pytest.raises(ValueError):
            make_swap_exact_amount_in_encode_object(SENDER, quote)

    def test_no_routes_rejected(self):
        quote = make_out_given_in_quote(routes=[])
        with pytest.raises(ValueError):
            make_swap_exact_amount_in_encode_object(SENDER, quote)

    def test_serializes(self):
        """Test the message encodes to protobuf bytes."""
        msg = make_swap_exact_amount_in_encode_object(SENDER, make_out_given_in_quote())
        assert len(msg.SerializeToString()) > 0


class TestExactAmountOut:
    """Tests for in-given-out quotes."""

    def test_single_route(self):
        """Test a one-route quote becomes MsgSwapExactAmountOut."""
        quote = make_in_given_out_quote(amount_out="1000000", amount_in="4500000")
        msg = make_swap_exact_amount_out_encode_object(SENDER, quote)

        assert type_url(msg) == "/osmosis.poolmanager.v1beta1.MsgSwapExactAmountOut"
        assert msg.token_out.denom == ATOM_DENOM
        assert msg.token_out.amount == "1000000"
        assert msg.token_in_max_amount == "4522500"
        assert [(r.pool_id, r.token_in_denom) for r in msg.routes] == [(1, "uosmo")]

    def test_split_route(self):
        """Test a multi-route quote becomes MsgSplitRouteSwapExactAmountOut."""
        quote = make_in_given_out_quote(
            amount_out="1000000", amount_in="4500000", routes=split_routes_out()
        )
        msg = make_swap_exact_amount_out_encode_object(SENDER, quote, "2")

        assert type_url(msg) == "/osmosis.poolmanager.v1beta1.MsgSplitRouteSwapExactAmountOut"
        assert msg.token_out_denom == ATOM_DENOM
        assert msg.token_in_max_amount == "4590000"
        assert [r.token_out_amount for r in msg.routes] == ["600000", "400000"]
        assert [(p.pool_id, p.token_in_denom) for p in msg.routes[1].pools] == [
            (1464, USDC_DENOM),
            (678, "uosmo"),
        ]


class TestSendMsg:
    """Tests for the bank send constructor."""

    def test_send_msg(self):
        msg = send_msg("osmo1from", "osmo1to", "uosmo", 1500)

        assert type_url(msg) == "/cosmos.bank.v1beta1.MsgSend"
        assert msg.from_address == "osmo1from"
        assert msg.amount[0].denom == "uosmo"
        assert msg.amount[0].amount == "1500"
