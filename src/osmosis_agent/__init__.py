"""Osmosis agent toolkit.

Lets an automated agent inspect an Osmosis account and execute swaps:
balances and prices, SQS swap quotes, and slippage-bounded swap
transactions signed from a seed phrase.
"""

__version__ = "0.1.0"

from osmosis_agent.account import Account
from osmosis_agent.toolkit import OsmosisAgentToolkit

__all__ = ["Account", "OsmosisAgentToolkit", "__version__"]
