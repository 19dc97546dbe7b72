"""Balance tools: account balances valued in USD."""

import logging
from typing import Optional

import httpx
from pydantic import Field

from osmosis_agent.assets import find_asset_by_denom
from osmosis_agent.chains import OSMOSIS_CHAIN_ID
from osmosis_agent.queries.bank import query_balances
from osmosis_agent.routing.sqs import SqsClient
from osmosis_agent.tools.base import ToolModel
from osmosis_agent.utils.number import limit_decimals, to_display_units

logger = logging.getLogger(__name__)


class Balance(ToolModel):
    amount: str = Field(..., description="Amount in display units")
    ticker: str = Field(..., description="Asset ticker (e.g. OSMO, ATOM)")
    value_usd: Optional[float] = Field(None, description="Total value in USD")
    price_usd: Optional[float] = Field(None, description="Price per unit in USD")


class BalancesOutput(ToolModel):
    balances: list[Balance]


async def fetch_balances(
    address: str,
    sqs_client: SqsClient,
    chain_id: str = OSMOSIS_CHAIN_ID,
    rest_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Balance]:
    """Query bank balances and value them with SQS prices.

    Denoms missing from the asset list are skipped. A balance whose price is
    unavailable keeps its amount with no USD value.
    """
    coins = await query_balances(address, chain_id, rest_url=rest_url, transport=transport)
    prices = await sqs_client.get_prices(coin.denom for coin in coins)

    balances = []
    for coin in coins:
        asset = find_asset_by_denom(coin.denom)
        if asset is None:
            logger.debug(f"Skipping balance of unlisted denom {coin.denom}")
            continue

        amount = to_display_units(coin.amount, asset.decimals)
        price = prices.get(coin.denom)
        balances.append(
            Balance(
                amount=limit_decimals(amount, asset.decimals),
                ticker=asset.symbol,
                value_usd=float(amount * price) if price is not None else None,
                price_usd=float(price) if price is not None else None,
            )
        )
    return balances


def total_value_usd(balances: list[Balance]) -> float:
    return sum(b.value_usd for b in balances if b.value_usd is not None)


class BalancesTool:
    """getBalances: the account's balances with prices."""

    name = "getBalances"
    description = "Get the accounts balances"
    parameters = None
    output = BalancesOutput

    def __init__(
        self,
        address: str,
        sqs_client: SqsClient,
        chain_id: str = OSMOSIS_CHAIN_ID,
        rest_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.address = address
        self.sqs_client = sqs_client
        self.chain_id = chain_id
        self.rest_url = rest_url
        self._transport = transport

    async def call(self, params=None) -> BalancesOutput:
        balances = await fetch_balances(
            self.address,
            self.sqs_client,
            chain_id=self.chain_id,
            rest_url=self.rest_url,
            transport=self._transport,
        )
        return BalancesOutput(balances=balances)
