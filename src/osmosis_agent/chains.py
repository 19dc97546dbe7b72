"""Static registry of Cosmos chains the toolkit can sign for.

Mirrors the subset of chain-registry metadata the signer needs:
- SLIP-44 coin type and bech32 prefix (address derivation)
- Fee tokens and gas prices (fee estimation)
- RPC/REST endpoints and consensus metadata (node connection)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

DEFAULT_CHAIN_ID = "cosmoshub-4"
OSMOSIS_CHAIN_ID = "osmosis-1"


@dataclass(frozen=True)
class FeeToken:
    """A denom accepted for fees, with its published gas prices."""

    denom: str
    low_gas_price: Optional[Decimal] = None
    average_gas_price: Optional[Decimal] = None
    high_gas_price: Optional[Decimal] = None


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a Cosmos SDK chain."""

    # Required fields (no defaults) - must come first
    chain_id: str
    chain_name: str
    bech32_prefix: str
    slip44: int  # BIP44 coin type (SLIP-44)

    # Optional fields (with defaults)
    fee_tokens: tuple[FeeToken, ...] = ()
    rpc_endpoints: tuple[str, ...] = ()
    rest_endpoints: tuple[str, ...] = ()
    consensus_type: Optional[str] = None  # "tendermint" or "cometbft"
    consensus_version: Optional[str] = None
    explorer_url: Optional[str] = None

    @property
    def rpc_url(self) -> Optional[str]:
        """First listed RPC endpoint, if any."""
        return self.rpc_endpoints[0] if self.rpc_endpoints else None

    @property
    def rest_url(self) -> Optional[str]:
        """First listed REST endpoint, if any."""
        return self.rest_endpoints[0] if self.rest_endpoints else None


# ======================
# Chain Configurations
# ======================

CHAINS: dict[str, ChainConfig] = {
    # Osmosis - DEX chain the swap tools trade on
    "osmosis-1": ChainConfig(
        chain_id="osmosis-1",
        chain_name="osmosis",
        bech32_prefix="osmo",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="uosmo",
                low_gas_price=Decimal("0.0025"),
                average_gas_price=Decimal("0.025"),
                high_gas_price=Decimal("0.04"),
            ),
        ),
        rpc_endpoints=("https://rpc.osmosis.zone", "https://osmosis-rpc.publicnode.com:443"),
        rest_endpoints=("https://lcd.osmosis.zone", "https://osmosis-rest.publicnode.com"),
        consensus_type="cometbft",
        consensus_version="0.38.17",
        explorer_url="https://www.mintscan.io/osmosis",
    ),

    # Cosmos Hub - default chain for address derivation
    "cosmoshub-4": ChainConfig(
        chain_id="cosmoshub-4",
        chain_name="cosmoshub",
        bech32_prefix="cosmos",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="uatom",
                low_gas_price=Decimal("0.005"),
                average_gas_price=Decimal("0.025"),
                high_gas_price=Decimal("0.03"),
            ),
        ),
        rpc_endpoints=("https://cosmos-rpc.publicnode.com:443",),
        rest_endpoints=("https://cosmos-rest.publicnode.com",),
        consensus_type="cometbft",
        consensus_version="0.38.12",
        explorer_url="https://www.mintscan.io/cosmos",
    ),

    "juno-1": ChainConfig(
        chain_id="juno-1",
        chain_name="juno",
        bech32_prefix="juno",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="ujuno",
                low_gas_price=Decimal("0.075"),
                average_gas_price=Decimal("0.1"),
                high_gas_price=Decimal("0.125"),
            ),
        ),
        rpc_endpoints=("https://juno-rpc.publicnode.com:443",),
        rest_endpoints=("https://juno-rest.publicnode.com",),
        consensus_type="cometbft",
        consensus_version="0.37.2",
    ),

    "stargaze-1": ChainConfig(
        chain_id="stargaze-1",
        chain_name="stargaze",
        bech32_prefix="stars",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="ustars",
                low_gas_price=Decimal("1"),
                average_gas_price=Decimal("1.1"),
                high_gas_price=Decimal("1.2"),
            ),
        ),
        rpc_endpoints=("https://stargaze-rpc.publicnode.com:443",),
        rest_endpoints=("https://stargaze-rest.publicnode.com",),
        consensus_type="tendermint",
        consensus_version="0.34.29",
    ),

    "akashnet-2": ChainConfig(
        chain_id="akashnet-2",
        chain_name="akash",
        bech32_prefix="akash",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="uakt",
                low_gas_price=Decimal("0.0025"),
                average_gas_price=Decimal("0.025"),
                high_gas_price=Decimal("0.04"),
            ),
        ),
        rpc_endpoints=("https://akash-rpc.publicnode.com:443",),
        rest_endpoints=("https://akash-rest.publicnode.com",),
        consensus_type="tendermint",
        consensus_version="0.37.4",
    ),

    "celestia": ChainConfig(
        chain_id="celestia",
        chain_name="celestia",
        bech32_prefix="celestia",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="utia",
                low_gas_price=Decimal("0.01"),
                average_gas_price=Decimal("0.02"),
                high_gas_price=Decimal("0.1"),
            ),
        ),
        rpc_endpoints=("https://celestia-rpc.publicnode.com:443",),
        rest_endpoints=("https://celestia-rest.publicnode.com",),
    ),

    # Injective uses the EVM coin type
    "injective-1": ChainConfig(
        chain_id="injective-1",
        chain_name="injective",
        bech32_prefix="inj",
        slip44=60,
        fee_tokens=(
            FeeToken(
                denom="inj",
                low_gas_price=Decimal("500000000"),
                average_gas_price=Decimal("700000000"),
                high_gas_price=Decimal("900000000"),
            ),
        ),
        rpc_endpoints=("https://injective-rpc.publicnode.com:443",),
        rest_endpoints=("https://injective-rest.publicnode.com",),
    ),

    "secret-4": ChainConfig(
        chain_id="secret-4",
        chain_name="secretnetwork",
        bech32_prefix="secret",
        slip44=529,
        fee_tokens=(
            FeeToken(
                denom="uscrt",
                low_gas_price=Decimal("0.1"),
                average_gas_price=Decimal("0.25"),
                high_gas_price=Decimal("0.25"),
            ),
        ),
        rpc_endpoints=("https://secret-rpc-sentry.publicnode.com:443",),
        rest_endpoints=("https://secret-rest-sentry.publicnode.com",),
    ),

    # Noble pays fees in USDC
    "noble-1": ChainConfig(
        chain_id="noble-1",
        chain_name="noble",
        bech32_prefix="noble",
        slip44=118,
        fee_tokens=(
            FeeToken(
                denom="uusdc",
                low_gas_price=Decimal("0.1"),
                average_gas_price=Decimal("0.1"),
                high_gas_price=Decimal("0.2"),
            ),
        ),
        rpc_endpoints=("https://noble-rpc.polkachu.com",),
        rest_endpoints=("https://noble-api.polkachu.com",),
        consensus_type="cometbft",
        consensus_version="0.38.12",
    ),
}


def get_chain(chain_id: str) -> ChainConfig:
    """Get configuration for a chain.

    Raises:
        ValueError: If the chain is not in the registry
    """
    chain = CHAINS.get(chain_id)
    if chain is None:
        raise ValueError(f"Unsupported chain: {chain_id}")
    return chain


def get_supported_chains() -> list[str]:
    """Get list of supported chain IDs."""
    return list(CHAINS.keys())
