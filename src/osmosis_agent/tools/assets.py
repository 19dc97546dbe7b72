"""getAssets tool: listed Osmosis assets with USD prices."""

from typing import Optional

from pydantic import Field

from osmosis_agent.assets import list_assets
from osmosis_agent.routing.sqs import SqsClient
from osmosis_agent.tools.base import ToolModel


class GetAssetsParams(ToolModel):
    ticker: Optional[str] = Field(
        None, description="Optional ticker symbol to filter assets (e.g., BTC, ETH, OSMO)"
    )


class AssetPrice(ToolModel):
    ticker: str
    name: str
    price_usd: float


class AssetsOutput(ToolModel):
    assets: list[AssetPrice]


class AssetsTool:
    name = "getAssets"
    description = (
        "Get information about assets available on Osmosis, "
        "including their current prices in USD."
    )
    parameters = GetAssetsParams
    output = AssetsOutput

    def __init__(self, sqs_client: SqsClient):
        self.sqs_client = sqs_client

    async def call(self, params: Optional[GetAssetsParams] = None) -> AssetsOutput:
        params = params or GetAssetsParams()
        assets = list_assets(params.ticker)
        prices = await self.sqs_client.get_prices(asset.base for asset in assets)

        # Assets without a positive price are not tradable right now
        return AssetsOutput(
            assets=[
                AssetPrice(ticker=asset.symbol, name=asset.name, price_usd=float(prices[asset.base]))
                for asset in assets
                if prices.get(asset.base) is not None
            ]
        )
