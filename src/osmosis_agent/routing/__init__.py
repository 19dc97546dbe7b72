"""Swap routing via the Osmosis Sidecar Query Server."""

from osmosis_agent.routing.models import (
    Coin,
    InGivenOutQuote,
    OutGivenInQuote,
    QuotePool,
    QuoteRoute,
    SwapQuote,
)
from osmosis_agent.routing.sqs import QUOTE_COIN_MINIMAL_DENOM, SqsClient

__all__ = [
    "Coin",
    "InGivenOutQuote",
    "OutGivenInQuote",
    "QUOTE_COIN_MINIMAL_DENOM",
    "QuotePool",
    "QuoteRoute",
    "SqsClient",
    "SwapQuote",
]
