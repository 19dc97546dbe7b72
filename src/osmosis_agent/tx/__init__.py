"""Transaction message construction."""

from osmosis_agent.tx.msg import send_msg
from osmosis_agent.tx.protos import type_url
from osmosis_agent.tx.swap import (
    DEFAULT_SLIPPAGE_PERCENT,
    make_swap_exact_amount_in_encode_object,
    make_swap_exact_amount_out_encode_object,
    token_in_max_amount,
    token_out_min_amount,
)

__all__ = [
    "DEFAULT_SLIPPAGE_PERCENT",
    "make_swap_exact_amount_in_encode_object",
    "make_swap_exact_amount_out_encode_object",
    "send_msg",
    "token_in_max_amount",
    "token_out_min_amount",
    "type_url",
]
