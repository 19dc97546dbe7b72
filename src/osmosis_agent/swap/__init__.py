"""Swap execution from cached quotes.

Provides:
- QuoteCache: bounded single-use quote store
- SwapExecutor: redeem, build, sign and broadcast
"""

from osmosis_agent.swap.cache import QuoteCache
from osmosis_agent.swap.executor import SignedTxResult, SwapExecutor

__all__ = [
    "QuoteCache",
    "SignedTxResult",
    "SwapExecutor",
]
