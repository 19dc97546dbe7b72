"""Pick and connect the right node client for a chain.

Chain metadata declares the consensus engine as `{type, version}`. The
decision table:

    no version                     -> CometBFT 0.38
    type == "cometbft"             -> CometBFT 0.38
    version starts with "0.37."    -> Tendermint 0.37
    any other version              -> Tendermint 0.34

A Tendermint 0.37 connection is always opened first as a reachability
probe; it is kept when it is the right generation, otherwise it is closed
before the replacement is opened.
"""

import logging
from typing import Optional

import httpx

from osmosis_agent.chains import ChainConfig
from osmosis_agent.errors import NodeUnreachableError
from osmosis_agent.rpc.comet import (
    CLIENT_CLASSES,
    CometClient,
    ConsensusGeneration,
    Tendermint37Client,
)

logger = logging.getLogger(__name__)

PROVISIONAL_GENERATION = ConsensusGeneration.TENDERMINT_37


def select_generation(
    version: Optional[str] = None,
    consensus_type: Optional[str] = None,
) -> ConsensusGeneration:
    """Map declared consensus metadata to a client generation."""
    if not version:
        return ConsensusGeneration.COMET_38
    if consensus_type == "cometbft":
        return ConsensusGeneration.COMET_38
    if version.lstrip("v").startswith("0.37."):
        return ConsensusGeneration.TENDERMINT_37
    return ConsensusGeneration.TENDERMINT_34


async def connect_consensus_client(
    endpoint: str,
    version: Optional[str] = None,
    consensus_type: Optional[str] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CometClient:
    """Connect a client compatible with the node's protocol generation.

    Args:
        endpoint: Node RPC URL
        version: Declared consensus version (e.g. "0.37.2")
        consensus_type: Declared consensus engine ("tendermint", "cometbft")
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests)

    Returns:
        Connected CometClient; the caller owns it and must disconnect it

    Raises:
        NodeUnreachableError: If the endpoint cannot be reached
    """
    provisional = await Tendermint37Client.connect(
        endpoint, timeout=timeout, transport=transport
    )

    generation = select_generation(version, consensus_type)
    if generation == PROVISIONAL_GENERATION:
        return provisional

    await provisional.disconnect()

    logger.debug(
        f"Node {endpoint} declares {consensus_type or 'unknown'} {version or '(no version)'}, "
        f"reconnecting as {generation.value}"
    )
    return await CLIENT_CLASSES[generation].connect(
        endpoint, timeout=timeout, transport=transport
    )


async def connect_chain_client(
    chain: ChainConfig,
    rpc_url: Optional[str] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CometClient:
    """Connect to a chain's first RPC endpoint (or an explicit override).

    Raises:
        NodeUnreachableError: If no endpoint is known or it cannot be reached
    """
    endpoint = rpc_url or chain.rpc_url
    if not endpoint:
        raise NodeUnreachableError(f"No RPC endpoint found for {chain.chain_id}")

    return await connect_consensus_client(
        endpoint,
        version=chain.consensus_version,
        consensus_type=chain.consensus_type,
        timeout=timeout,
        transport=transport,
    )
