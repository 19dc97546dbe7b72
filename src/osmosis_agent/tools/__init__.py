"""Agent tools over an Osmosis account."""

from osmosis_agent.tools.account import AccountTool
from osmosis_agent.tools.assets import AssetsTool
from osmosis_agent.tools.balances import BalancesTool
from osmosis_agent.tools.base import Tool, dump_output
from osmosis_agent.tools.swap import (
    SendSwapInGivenOutTxTool,
    SendSwapOutGivenInTxTool,
    SwapQuoteInGivenOutTool,
    SwapQuoteOutGivenInTool,
)

__all__ = [
    "AccountTool",
    "AssetsTool",
    "BalancesTool",
    "SendSwapInGivenOutTxTool",
    "SendSwapOutGivenInTxTool",
    "SwapQuoteInGivenOutTool",
    "SwapQuoteOutGivenInTool",
    "Tool",
    "dump_output",
]
