"""getAccount tool: address plus valued balances."""

from typing import Optional

import httpx
from pydantic import Field

from osmosis_agent.account import Account
from osmosis_agent.routing.sqs import SqsClient
from osmosis_agent.tools.balances import Balance, fetch_balances, total_value_usd
from osmosis_agent.tools.base import ToolModel


class AccountBalances(ToolModel):
    value_usd: float = Field(..., description="Sum of priced balances in USD")
    balances: list[Balance]


class AccountOutput(ToolModel):
    address: str
    balances: AccountBalances


class AccountTool:
    name = "getAccount"
    description = "Get Osmosis blockchain account info. Includes balances and address."
    parameters = None
    output = AccountOutput

    def __init__(
        self,
        account: Account,
        sqs_client: SqsClient,
        rest_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account = account
        self.sqs_client = sqs_client
        self.rest_url = rest_url
        self._transport = transport

    async def call(self, params=None) -> AccountOutput:
        balances = await fetch_balances(
            self.account.address,
            self.sqs_client,
            chain_id=self.account.chain_id,
            rest_url=self.rest_url,
            transport=self._transport,
        )
        return AccountOutput(
            address=self.account.address,
            balances=AccountBalances(value_usd=total_value_usd(balances), balances=balances),
        )
