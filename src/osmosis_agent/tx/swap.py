"""Build a slippage-bounded swap message from an SQS quote.

Exact-in quotes bound the output from below:
    token_out_min_amount = floor(amount_out * (1 - slippage / 100))

Exact-out quotes bound the input from above:
    token_in_max_amount = ceil(amount_in * (1 + slippage / 100))

A quote with one route becomes a plain swap message listing its hops; a
quote with several routes becomes a split-route message carrying each
route's share of the amount.
"""

from decimal import Decimal
from typing import Optional

from osmosis_agent.routing.models import InGivenOutQuote, OutGivenInQuote, QuoteRoute
from osmosis_agent.tx.msg import (
    PoolHop,
    make_split_routes_swap_exact_amount_in_msg,
    make_split_routes_swap_exact_amount_out_msg,
    make_swap_exact_amount_in_msg,
    make_swap_exact_amount_out_msg,
)
from osmosis_agent.utils.number import Number, mul_ceil, mul_floor, to_decimal

DEFAULT_SLIPPAGE_PERCENT = Decimal("0.5")


def validate_slippage(slippage_percent: Optional[Number] = None) -> Decimal:
    """Parse a slippage percentage, defaulting to 0.5.

    Raises:
        ValueError: If slippage is outside [0, 100)
    """
    if slippage_percent is None:
        return DEFAULT_SLIPPAGE_PERCENT

    value = to_decimal(slippage_percent)
    if value < 0 or value >= 100:
        raise ValueError(f"Slippage must be in [0, 100), got {slippage_percent}")
    return value


def token_out_min_amount(amount_out: str, slippage_percent: Optional[Number] = None) -> int:
    """Minimum acceptable output for an exact-in swap (floored)."""
    slippage = validate_slippage(slippage_percent)
    return mul_floor(amount_out, 1 - slippage.scaleb(-2))


def token_in_max_amount(amount_in: str, slippage_percent: Optional[Number] = None) -> int:
    """Maximum acceptable input for an exact-out swap (ceiled)."""
    slippage = validate_slippage(slippage_percent)
    return mul_ceil(amount_in, 1 + slippage.scaleb(-2))


def _hops_out(route: QuoteRoute) -> list[PoolHop]:
    hops = []
    for pool in route.pools:
        if not pool.token_out_denom:
            raise ValueError(f"Pool {pool.id} has no token_out_denom")
        hops.append((pool.id, pool.token_out_denom))
    return hops


def _hops_in(route: QuoteRoute) -> list[PoolHop]:
    hops = []
    for pool in route.pools:
        if not pool.token_in_denom:
            raise ValueError(f"Pool {pool.id} has no token_in_denom")
        hops.append((pool.id, pool.token_in_denom))
    return hops


def make_swap_exact_amount_in_encode_object(
    address: str,
    quote: OutGivenInQuote,
    slippage_percent: Optional[Number] = None,
):
    """Build the message executing an exact-in quote.

    Args:
        address: Sender (osmo1...) address
        quote: Out-given-in quote from SQS
        slippage_percent: Tolerance on the quoted output (default 0.5)

    Returns:
        MsgSwapExactAmountIn for one route, MsgSplitRouteSwapExactAmountIn otherwise
    """
    if not quote.route:
        raise ValueError("Quote has no routes")

    min_out = token_out_min_amount(quote.amount_out, slippage_percent)

    if len(quote.route) == 1:
        return make_swap_exact_amount_in_msg(
            address,
            _hops_out(quote.route[0]),
            (quote.amount_in.denom, quote.amount_in.amount),
            min_out,
        )

    return make_split_routes_swap_exact_amount_in_msg(
        address,
        [(_hops_out(route), route.in_amount) for route in quote.route],
        quote.amount_in.denom,
        min_out,
    )


def make_swap_exact_amount_out_encode_object(
    address: str,
    quote: InGivenOutQuote,
    slippage_percent: Optional[Number] = None,
):
    """Build the message executing an exact-out quote.

    Args:
        address: Sender (osmo1...) address
        quote: In-given-out quote from SQS
        slippage_percent: Tolerance on the quoted input (default 0.5)

    Returns:
        MsgSwapExactAmountOut for one route, MsgSplitRouteSwapExactAmountOut otherwise
    """
    if not quote.route:
        raise ValueError("Quote has no routes")

    max_in = token_in_max_amount(quote.amount_in, slippage_percent)

    if len(quote.route) == 1:
        return make_swap_exact_amount_out_msg(
            address,
            _hops_in(quote.route[0]),
            (quote.amount_out.denom, quote.amount_out.amount),
            max_in,
        )

    return make_split_routes_swap_exact_amount_out_msg(
        address,
        [(_hops_in(route), route.out_amount) for route in quote.route],
        quote.amount_out.denom,
        max_in,
    )
