"""Node RPC clients and protocol-generation resolution."""

from osmosis_agent.rpc.comet import (
    Comet38Client,
    CometClient,
    ConsensusGeneration,
    Tendermint34Client,
    Tendermint37Client,
)
from osmosis_agent.rpc.resolver import (
    connect_chain_client,
    connect_consensus_client,
    select_generation,
)

__all__ = [
    "CometClient",
    "Comet38Client",
    "ConsensusGeneration",
    "Tendermint34Client",
    "Tendermint37Client",
    "connect_chain_client",
    "connect_consensus_client",
    "select_generation",
]
