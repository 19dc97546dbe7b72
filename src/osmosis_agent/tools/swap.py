"""Swap tools: quote with SQS, execute a cached quote.

Quote tools store each quote under "{tickerIn}-{tickerOut}-{amount}" so the
matching send tool can execute it exactly once.
"""

import logging
from typing import Optional

from pydantic import Field

from osmosis_agent.assets import Asset, get_asset
from osmosis_agent.routing.models import Coin, InGivenOutQuote, OutGivenInQuote
from osmosis_agent.routing.sqs import SqsClient
from osmosis_agent.swap.cache import QuoteCache
from osmosis_agent.swap.executor import SwapExecutor
from osmosis_agent.tools.base import ToolModel
from osmosis_agent.utils.number import limit_decimals, to_base_units, to_display_units

logger = logging.getLogger(__name__)

TICKER_IN_DESCRIPTION = (
    "The ticker symbol of the token you want to swap from (e.g., BTC, ETH, OSMO)"
)
TICKER_OUT_DESCRIPTION = (
    "The ticker symbol of the token you want to receive (e.g., BTC, ETH, OSMO)"
)


def quote_id(ticker_in: str, ticker_out: str, amount: str) -> str:
    return f"{ticker_in}-{ticker_out}-{amount}"


def _base_amount(amount: str, asset: Asset) -> int:
    base = to_base_units(amount, asset.decimals)
    if base <= 0:
        raise ValueError(f"Amount must be positive in {asset.symbol} base units, got {amount}")
    return base


def _display(amount: str, asset: Asset) -> str:
    value = to_display_units(amount, asset.decimals)
    return f"{limit_decimals(value, asset.decimals)} {asset.symbol}"


# ======================
# Quotes
# ======================


class SwapQuoteInGivenOutParams(ToolModel):
    ticker_in: str = Field(..., description=TICKER_IN_DESCRIPTION)
    amount_out: str = Field(..., description="The amount of the output token you want to receive")
    ticker_out: str = Field(..., description=TICKER_OUT_DESCRIPTION)


class SwapQuoteInGivenOut(ToolModel):
    id: str
    required_token_in: str
    rate: str
    price_impact: str


class SwapQuoteInGivenOutTool:
    name = "getSwapQuoteInGivenOut"
    description = (
        "Get a swap quote for a desired amount out with decimals identified "
        "with tickers like BTC, ETH, OSMO, etc."
    )
    parameters = SwapQuoteInGivenOutParams
    output = SwapQuoteInGivenOut

    def __init__(
        self,
        sqs_client: SqsClient,
        quotes: Optional[QuoteCache[InGivenOutQuote]] = None,
    ):
        self.sqs_client = sqs_client
        # Without a cache, quotes are informational only
        self.quotes = quotes

    async def call(self, params: SwapQuoteInGivenOutParams) -> SwapQuoteInGivenOut:
        asset_in = get_asset(params.ticker_in)
        asset_out = get_asset(params.ticker_out)
        amount_out = _base_amount(params.amount_out, asset_out)

        quote = await self.sqs_client.get_in_given_out_quote(
            Coin(denom=asset_out.base, amount=str(amount_out)), asset_in.base
        )

        id_ = quote_id(params.ticker_in, params.ticker_out, params.amount_out)
        if self.quotes is not None:
            self.quotes.set(id_, quote)
        logger.info(f"Quoted {id_}: requires {quote.amount_in}{asset_in.base}")

        return SwapQuoteInGivenOut(
            id=id_,
            required_token_in=_display(quote.amount_in, asset_in),
            rate=quote.in_base_out_quote_spot_price,
            price_impact=quote.price_impact,
        )


class SwapQuoteOutGivenInParams(ToolModel):
    ticker_in: str = Field(..., description=TICKER_IN_DESCRIPTION)
    amount_in: str = Field(..., description="The amount of the input token you want to swap")
    ticker_out: str = Field(..., description=TICKER_OUT_DESCRIPTION)


class SwapQuoteOutGivenIn(ToolModel):
    id: str
    expected_token_out: str
    rate: str
    price_impact: str


class SwapQuoteOutGivenInTool:
    name = "getSwapQuoteOutGivenIn"
    description = (
        "Get a swap quote for a specified amount in with decimals identified "
        "with tickers like BTC, ETH, OSMO, etc."
    )
    parameters = SwapQuoteOutGivenInParams
    output = SwapQuoteOutGivenIn

    def __init__(
        self,
        sqs_client: SqsClient,
        quotes: Optional[QuoteCache[OutGivenInQuote]] = None,
    ):
        self.sqs_client = sqs_client
        self.quotes = quotes

    async def call(self, params: SwapQuoteOutGivenInParams) -> SwapQuoteOutGivenIn:
        asset_in = get_asset(params.ticker_in)
        asset_out = get_asset(params.ticker_out)
        amount_in = _base_amount(params.amount_in, asset_in)

        quote = await self.sqs_client.get_out_given_in_quote(
            Coin(denom=asset_in.base, amount=str(amount_in)), asset_out.base
        )

        id_ = quote_id(params.ticker_in, params.ticker_out, params.amount_in)
        if self.quotes is not None:
            self.quotes.set(id_, quote)
        logger.info(f"Quoted {id_}: expects {quote.amount_out}{asset_out.base}")

        return SwapQuoteOutGivenIn(
            id=id_,
            expected_token_out=_display(quote.amount_out, asset_out),
            rate=quote.in_base_out_quote_spot_price,
            price_impact=quote.price_impact,
        )


# ======================
# Execution
# ======================


class SendSwapTxParams(ToolModel):
    quote_id: str = Field(..., description="The id of the quote to send")
    slippage_tolerance_percent: Optional[float] = Field(
        None,
        ge=0,
        lt=100,
        description="The percentage of slippage tolerance for the quote. Default is 0.5%",
    )


class SendSwapTxOutput(ToolModel):
    tx_hash: str


class SendSwapInGivenOutTxTool:
    name = "sendSwapInGivenOutTx"
    description = (
        "Execute a token in given out amount swap quote transaction by ID. "
        "Use getSwapQuoteInGivenOut tool to get quotes."
    )
    parameters = SendSwapTxParams
    output = SendSwapTxOutput

    def __init__(self, executor: SwapExecutor):
        self.executor = executor

    async def call(self, params: SendSwapTxParams) -> SendSwapTxOutput:
        result = await self.executor.send_swap_in_given_out(
            params.quote_id, params.slippage_tolerance_percent
        )
        return SendSwapTxOutput(tx_hash=result["txHash"])


class SendSwapOutGivenInTxTool:
    name = "sendSwapOutGivenInTx"
    description = (
        "Execute a token out given in amount swap quote transaction by ID. "
        "Use getSwapQuoteOutGivenIn tool to get quotes."
    )
    parameters = SendSwapTxParams
    output = SendSwapTxOutput

    def __init__(self, executor: SwapExecutor):
        self.executor = executor

    async def call(self, params: SendSwapTxParams) -> SendSwapTxOutput:
        result = await self.executor.send_swap_out_given_in(
            params.quote_id, params.slippage_tolerance_percent
        )
        return SendSwapTxOutput(tx_hash=result["txHash"])
