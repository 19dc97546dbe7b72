"""Osmosis Sidecar Query Server (SQS) client.

SQS runs the Osmosis router off-chain. Two endpoints are used:
- /router/quote: best route for an exact-in or exact-out swap
- /tokens/prices: spot prices, quoted in Noble USDC

Denoms are always sent and returned in base form (humanDenoms=false);
display conversion happens against the asset list.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

import httpx

from osmosis_agent.routing.models import Coin, InGivenOutQuote, OutGivenInQuote

logger = logging.getLogger(__name__)

SQS_API = "https://sqsprod.osmosis.zone"

# Quote denom of /tokens/prices results (Noble USDC)
QUOTE_COIN_MINIMAL_DENOM = (
    "ibc/498A0751C798A0D9A389AA3691123DADA57DAA4FE165D5C75894505B876BA6E4"
)

# Keeps the comma-joined ?base= list under URL length limits
PRICE_BATCH_SIZE = 100


class SqsClient:
    """Async client for the Osmosis SQS API."""

    def __init__(
        self,
        base_url: str = SQS_API,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    async def _get(self, path: str, params: dict) -> dict:
        params = {**params, "humanDenoms": "false"}
        async with self._client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()

    async def get_out_given_in_quote(
        self, token_in: Coin, token_out_denom: str
    ) -> OutGivenInQuote:
        """Quote swapping an exact `token_in` into `token_out_denom`.

        Raises:
            httpx.HTTPStatusError: If SQS cannot route the swap
        """
        data = await self._get(
            "/router/quote",
            {"tokenIn": f"{token_in.amount}{token_in.denom}", "tokenOutDenom": token_out_denom},
        )
        quote = OutGivenInQuote.model_validate(data)
        logger.debug(
            f"SQS out-given-in {token_in.amount}{token_in.denom} -> "
            f"{quote.amount_out}{token_out_denom} over {len(quote.route)} route(s)"
        )
        return quote

    async def get_in_given_out_quote(
        self, token_out: Coin, token_in_denom: str
    ) -> InGivenOutQuote:
        """Quote the input of `token_in_denom` needed for an exact `token_out`.

        Raises:
            httpx.HTTPStatusError: If SQS cannot route the swap
        """
        data = await self._get(
            "/router/quote",
            {"tokenOut": f"{token_out.amount}{token_out.denom}", "tokenInDenom": token_in_denom},
        )
        quote = InGivenOutQuote.model_validate(data)
        logger.debug(
            f"SQS in-given-out {quote.amount_in}{token_in_denom} -> "
            f"{token_out.amount}{token_out.denom} over {len(quote.route)} route(s)"
        )
        return quote

    async def get_prices(self, denoms: Iterable[str]) -> dict[str, Optional[Decimal]]:
        """Get USDC prices for many denoms, in batches.

        A denom whose price is missing, zero or unparsable maps to None; a
        failed batch maps all of its denoms to None. Other denoms are
        unaffected.
        """
        unique = list(dict.fromkeys(denoms))
        prices: dict[str, Optional[Decimal]] = {}

        for start in range(0, len(unique), PRICE_BATCH_SIZE):
            batch = unique[start:start + PRICE_BATCH_SIZE]
            try:
                price_map = await self._get("/tokens/prices", {"base": ",".join(batch)})
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(f"SQS price batch of {len(batch)} failed: {e}")
                prices.update({denom: None for denom in batch})
                continue

            for denom in batch:
                prices[denom] = _parse_price(price_map, denom)

        return prices

    async def get_price(self, denom: str) -> Optional[Decimal]:
        """Get the USDC price of one denom, or None if unavailable."""
        prices = await self.get_prices([denom])
        return prices.get(denom)


def _parse_price(price_map: dict, denom: str) -> Optional[Decimal]:
    raw = (price_map.get(denom) or {}).get(QUOTE_COIN_MINIMAL_DENOM)
    if raw is None:
        logger.debug(f"No SQS price result for {denom}")
        return None

    try:
        price = Decimal(str(raw))
    except InvalidOperation:
        logger.warning(f"Invalid SQS price for {denom}: {raw!r}")
        return None

    if not price.is_finite() or price <= 0:
        logger.debug(f"Zero price result for {denom}")
        return None
    return price
