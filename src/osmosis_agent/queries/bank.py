"""Bank module balance queries."""

import logging
from typing import Optional

import httpx

from osmosis_agent.chains import OSMOSIS_CHAIN_ID, get_chain
from osmosis_agent.errors import NodeUnreachableError
from osmosis_agent.routing.models import Coin

logger = logging.getLogger(__name__)


async def query_balances(
    address: str,
    chain_id: str = OSMOSIS_CHAIN_ID,
    rest_url: Optional[str] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Coin]:
    """Get all bank balances of an address.

    Args:
        address: Bech32 account address
        chain_id: Chain to query (default osmosis-1)
        rest_url: REST endpoint override (default: chain's first REST endpoint)
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests)

    Returns:
        Balances in base denomination, as returned by the node

    Raises:
        ValueError: If the chain is unknown
        NodeUnreachableError: If no REST endpoint is known or it cannot be reached
    """
    endpoint = rest_url or get_chain(chain_id).rest_url
    if not endpoint:
        raise NodeUnreachableError(f"No REST endpoint found for {chain_id}")

    url = f"{endpoint.rstrip('/')}/cosmos/bank/v1beta1/balances/{address}"

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url, params={"pagination.limit": "1000"})
            response.raise_for_status()
            data = response.json()
    except httpx.TransportError as e:
        logger.error(f"Balance query to {endpoint} failed: {e}")
        raise NodeUnreachableError(f"REST endpoint {endpoint} unreachable: {e}") from e

    balances = [Coin.model_validate(coin) for coin in data.get("balances", [])]
    logger.debug(f"{address} holds {len(balances)} denom(s) on {chain_id}")
    return balances
