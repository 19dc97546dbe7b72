"""MCP server exposing the toolkit's tools over stdio.

Every tool result is returned as JSON text. Exceptions raised by a tool are
reported back to the client as tool errors by FastMCP.
"""

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from osmosis_agent.toolkit import OsmosisAgentToolkit
from osmosis_agent.tools import dump_output
from osmosis_agent.tools.assets import GetAssetsParams
from osmosis_agent.tools.swap import (
    SendSwapTxParams,
    SwapQuoteInGivenOutParams,
    SwapQuoteOutGivenInParams,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "Osmosis"


def _text(result) -> str:
    return json.dumps(dump_output(result))


def create_server(toolkit: OsmosisAgentToolkit) -> FastMCP:
    """Build a FastMCP server with one MCP tool per toolkit tool."""
    mcp = FastMCP(SERVER_NAME)

    account_tool = toolkit.account_tool
    balances_tool = toolkit.balances_tool
    assets_tool = toolkit.assets_tool
    quote_out_tool = toolkit.swap_quote_out_given_in_tool
    quote_in_tool = toolkit.swap_quote_in_given_out_tool
    send_out_tool = toolkit.send_swap_out_given_in_tx_tool
    send_in_tool = toolkit.send_swap_in_given_out_tx_tool

    @mcp.tool(name=account_tool.name, description=account_tool.description)
    async def get_account() -> str:
        return _text(await account_tool.call())

    @mcp.tool(name=balances_tool.name, description=balances_tool.description)
    async def get_balances() -> str:
        return _text(await balances_tool.call())

    @mcp.tool(name=assets_tool.name, description=assets_tool.description)
    async def get_assets(ticker: Optional[str] = None) -> str:
        return _text(await assets_tool.call(GetAssetsParams(ticker=ticker)))

    @mcp.tool(name=quote_out_tool.name, description=quote_out_tool.description)
    async def get_swap_quote_out_given_in(tickerIn: str, amountIn: str, tickerOut: str) -> str:
        params = SwapQuoteOutGivenInParams(
            ticker_in=tickerIn, amount_in=amountIn, ticker_out=tickerOut
        )
        return _text(await quote_out_tool.call(params))

    @mcp.tool(name=quote_in_tool.name, description=quote_in_tool.description)
    async def get_swap_quote_in_given_out(tickerIn: str, amountOut: str, tickerOut: str) -> str:
        params = SwapQuoteInGivenOutParams(
            ticker_in=tickerIn, amount_out=amountOut, ticker_out=tickerOut
        )
        return _text(await quote_in_tool.call(params))

    @mcp.tool(name=send_out_tool.name, description=send_out_tool.description)
    async def send_swap_out_given_in_tx(
        quoteId: str, slippageTolerancePercent: Optional[float] = None
    ) -> str:
        params = SendSwapTxParams(
            quote_id=quoteId, slippage_tolerance_percent=slippageTolerancePercent
        )
        return _text(await send_out_tool.call(params))

    @mcp.tool(name=send_in_tool.name, description=send_in_tool.description)
    async def send_swap_in_given_out_tx(
        quoteId: str, slippageTolerancePercent: Optional[float] = None
    ) -> str:
        params = SendSwapTxParams(
            quote_id=quoteId, slippage_tolerance_percent=slippageTolerancePercent
        )
        return _text(await send_in_tool.call(params))

    logger.debug(f"Registered {len(toolkit.tools)} tools on MCP server {SERVER_NAME}")
    return mcp
