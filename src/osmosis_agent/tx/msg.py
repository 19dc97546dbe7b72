"""Constructors for on-chain messages.

Each returns a protobuf message ready to be packed into a transaction body.
"""

from typing import Union

from cosmpy.protos.cosmos.bank.v1beta1.tx_pb2 import MsgSend
from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin

from osmosis_agent.tx.protos import (
    MsgSplitRouteSwapExactAmountIn,
    MsgSplitRouteSwapExactAmountOut,
    MsgSwapExactAmountIn,
    MsgSwapExactAmountOut,
    SwapAmountInRoute,
    SwapAmountInSplitRoute,
    SwapAmountOutRoute,
    SwapAmountOutSplitRoute,
)

# (pool_id, counter_denom)
PoolHop = tuple[int, str]


def send_msg(from_address: str, to_address: str, denom: str, amount: int) -> MsgSend:
    """Bank transfer of `amount` base units of `denom`."""
    return MsgSend(
        from_address=from_address,
        to_address=to_address,
        amount=[Coin(denom=denom, amount=str(amount))],
    )


def make_swap_exact_amount_in_msg(
    sender: str,
    pools: list[PoolHop],
    token_in: tuple[str, Union[int, str]],
    token_out_min_amount: Union[int, str],
):
    """Single-route swap of an exact input; hops carry the denom leaving each pool."""
    denom, amount = token_in
    return MsgSwapExactAmountIn(
        sender=sender,
        routes=[SwapAmountInRoute(pool_id=pool_id, token_out_denom=d) for pool_id, d in pools],
        token_in=Coin(denom=denom, amount=str(amount)),
        token_out_min_amount=str(token_out_min_amount),
    )


def make_swap_exact_amount_out_msg(
    sender: str,
    pools: list[PoolHop],
    token_out: tuple[str, Union[int, str]],
    token_in_max_amount: Union[int, str],
):
    """Single-route swap for an exact output; hops carry the denom entering each pool."""
    denom, amount = token_out
    return MsgSwapExactAmountOut(
        sender=sender,
        routes=[SwapAmountOutRoute(pool_id=pool_id, token_in_denom=d) for pool_id, d in pools],
        token_in_max_amount=str(token_in_max_amount),
        token_out=Coin(denom=denom, amount=str(amount)),
    )


def make_split_routes_swap_exact_amount_in_msg(
    sender: str,
    routes: list[tuple[list[PoolHop], Union[int, str]]],
    token_in_denom: str,
    token_out_min_amount: Union[int, str],
):
    """Split-route exact-in swap; each route is (hops, token_in_amount)."""
    return MsgSplitRouteSwapExactAmountIn(
        sender=sender,
        routes=[
            SwapAmountInSplitRoute(
                pools=[SwapAmountInRoute(pool_id=pool_id, token_out_denom=d) for pool_id, d in hops],
                token_in_amount=str(amount),
            )
            for hops, amount in routes
        ],
        token_in_denom=token_in_denom,
        token_out_min_amount=str(token_out_min_amount),
    )


def make_split_routes_swap_exact_amount_out_msg(
    sender: str,
    routes: list[tuple[list[PoolHop], Union[int, str]]],
    token_out_denom: str,
    token_in_max_amount: Union[int, str],
):
    """Split-route exact-out swap; each route is (hops, token_out_amount)."""
    return MsgSplitRouteSwapExactAmountOut(
        sender=sender,
        routes=[
            SwapAmountOutSplitRoute(
                pools=[SwapAmountOutRoute(pool_id=pool_id, token_in_denom=d) for pool_id, d in hops],
                token_out_amount=str(amount),
            )
            for hops, amount in routes
        ],
        token_out_denom=token_out_denom,
        token_in_max_amount=str(token_in_max_amount),
    )
