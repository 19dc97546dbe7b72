"""Toolkit: one account, one SQS client, shared quote caches and every tool."""

import logging
from typing import Optional

import httpx

from osmosis_agent.account import Account
from osmosis_agent.config import Settings, get_settings
from osmosis_agent.routing.models import InGivenOutQuote, OutGivenInQuote
from osmosis_agent.routing.sqs import SqsClient
from osmosis_agent.swap import QuoteCache, SwapExecutor
from osmosis_agent.tools import (
    AccountTool,
    AssetsTool,
    BalancesTool,
    SendSwapInGivenOutTxTool,
    SendSwapOutGivenInTxTool,
    SwapQuoteInGivenOutTool,
    SwapQuoteOutGivenInTool,
    Tool,
)

logger = logging.getLogger(__name__)


class OsmosisAgentToolkit:
    """Wires the tools to a single account and shared quote caches.

    Quote tools write to the cache of their flavor; the matching send tool
    redeems from the same cache.
    """

    def __init__(
        self,
        mnemonic: str,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        s = self.settings

        self.account = Account(
            mnemonic,
            chain_id=s.chain_id,
            rpc_url=s.rpc_url,
            timeout=s.http_timeout,
            fee_multiplier=s.fee_multiplier,
            transport=transport,
        )
        self.sqs_client = SqsClient(s.sqs_url, timeout=s.http_timeout, transport=transport)

        self.out_given_in_quotes: QuoteCache[OutGivenInQuote] = QuoteCache(s.quote_cache_size)
        self.in_given_out_quotes: QuoteCache[InGivenOutQuote] = QuoteCache(s.quote_cache_size)

        self.executor = SwapExecutor(
            self.account,
            self.out_given_in_quotes,
            self.in_given_out_quotes,
            default_slippage_percent=s.default_slippage_percent,
        )

        self.account_tool = AccountTool(
            self.account, self.sqs_client, rest_url=s.rest_url, transport=transport
        )
        self.balances_tool = BalancesTool(
            self.account.address,
            self.sqs_client,
            chain_id=s.chain_id,
            rest_url=s.rest_url,
            transport=transport,
        )
        self.assets_tool = AssetsTool(self.sqs_client)
        self.swap_quote_out_given_in_tool = SwapQuoteOutGivenInTool(
            self.sqs_client, self.out_given_in_quotes
        )
        self.swap_quote_in_given_out_tool = SwapQuoteInGivenOutTool(
            self.sqs_client, self.in_given_out_quotes
        )
        self.send_swap_out_given_in_tx_tool = SendSwapOutGivenInTxTool(self.executor)
        self.send_swap_in_given_out_tx_tool = SendSwapInGivenOutTxTool(self.executor)

        logger.info(f"Toolkit ready for {self.account.address} on {s.chain_id}")

    @property
    def tools(self) -> list[Tool]:
        return [
            self.account_tool,
            self.balances_tool,
            self.assets_tool,
            self.swap_quote_out_given_in_tool,
            self.swap_quote_in_given_out_tool,
            self.send_swap_out_given_in_tx_tool,
            self.send_swap_in_given_out_tx_tool,
        ]

    def get_tool(self, name: str) -> Tool:
        for tool in self.tools:
            if tool.name == name:
                return tool
        raise KeyError(f"Unknown tool: {name}")
