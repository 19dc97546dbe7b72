"""Osmosis asset list.

Maps ticker symbols to on-chain denoms and display exponents. IBC assets are
identified by their `ibc/<hash>` denom on Osmosis.
"""

from dataclasses import dataclass
from typing import Optional

from osmosis_agent.errors import AssetNotFoundError


@dataclass(frozen=True)
class Asset:
    """An asset tradable on Osmosis."""

    symbol: str
    name: str
    base: str  # base (minimal) denom
    display: str  # display denom
    decimals: int  # exponent of the display denom unit


OSMOSIS_ASSETS: tuple[Asset, ...] = (
    Asset("OSMO", "Osmosis", "uosmo", "osmo", 6),
    Asset("ION", "Ion", "uion", "ion", 6),
    Asset(
        "ATOM",
        "Cosmos Hub",
        "ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2",
        "atom",
        6,
    ),
    # Noble USDC (also the quote denom for SQS prices)
    Asset(
        "USDC",
        "USD Coin",
        "ibc/498A0751C798A0D9A389AA3691123DADA57DAA4FE165D5C75894505B876BA6E4",
        "usdc",
        6,
    ),
    Asset(
        "USDC.axl",
        "Axelar Wrapped USDC",
        "ibc/D189335C6E4A68B513C10AB227BF1C1D38C746766278BA3EEB4FB14124F1D858",
        "axlusdc",
        6,
    ),
    Asset(
        "TIA",
        "Celestia",
        "ibc/D79E7D83AB399BFFF93433E54FAA480C191248FC556924A2A8351AE2638B3877",
        "tia",
        6,
    ),
    Asset(
        "JUNO",
        "Juno",
        "ibc/46B44899322F3CD854D2D46DEEF881958467CDD4B3B10086DA49296BBED94BED",
        "juno",
        6,
    ),
    Asset(
        "INJ",
        "Injective",
        "ibc/64BA6E31FE887D66C6F8F31C7B1A80C7CA179239677B4088BB55F5EA07DBE273",
        "inj",
        18,
    ),
    Asset(
        "SCRT",
        "Secret Network",
        "ibc/0954E1C28EB7AF5B72D24F3BC2B47BBB2FDF91BDDFD57B74B99E133AED40972A",
        "scrt",
        6,
    ),
    Asset(
        "STARS",
        "Stargaze",
        "ibc/987C17B11ABC2B20019178ACE62929FE9840202CE79498E29FE8E5CB02B7C0A4",
        "stars",
        6,
    ),
    Asset(
        "AKT",
        "Akash",
        "ibc/1480B8FD20AD5FCAE81EA87584D269547DD4D436843C1D20F15E00EB64743EF4",
        "akt",
        6,
    ),
    # Alloyed assets pool every bridged variant into one denom
    Asset(
        "BTC",
        "Bitcoin",
        "factory/osmo1z6r6qdknhgsc0zeracktgpcxf43j6sekq07nw8sxduc9lg0qjjlqfu25e3/alloyed/allBTC",
        "btc",
        8,
    ),
    Asset(
        "ETH",
        "Ethereum",
        "factory/osmo1k6c8jln7ejuqwtqmay3yvzrg3kueaczl96pk067ldg8u835w0yhsw27twm/alloyed/allETH",
        "eth",
        18,
    ),
    Asset(
        "SOL",
        "Solana",
        "factory/osmo1n3n75av8awcnw4jl62n3l48e6e4sxqmaf97w5ua6ddu4s475q5qq9udvx4/alloyed/allSOL",
        "sol",
        9,
    ),
    Asset(
        "USDT",
        "Tether USD",
        "factory/osmo1em6xs47hd82806f5cxgyufguxrrc7l0aqx7nzzptjuqgswczk8csavdxek/alloyed/allUSDT",
        "usdt",
        6,
    ),
    Asset(
        "WBTC",
        "Wrapped Bitcoin (Axelar)",
        "ibc/D1542AA8762DB13087D8364F3EA6509FD6F009A34F00426AF9E4F9FA85CBBF1F",
        "wbtc",
        8,
    ),
    Asset(
        "WETH.axl",
        "Wrapped Ether (Axelar)",
        "ibc/EA1D43981D5C9A1C4AAEA9C23BB1D4FA126BA9BC7020A25E0AE4AA841EA25DC5",
        "weth",
        18,
    ),
    Asset(
        "DYDX",
        "dYdX",
        "ibc/831F0B1BBB1D08A2B75311892876D71565478C532967545476DF4C2D7492E48C",
        "dydx",
        18,
    ),
    Asset(
        "stOSMO",
        "Stride Staked OSMO",
        "ibc/D176154B0C63D1F9C6DCFB4F70349EBF2E2B5A87A05902F57A6AE92B863E9AEC",
        "stosmo",
        6,
    ),
)


def list_assets(ticker: Optional[str] = None) -> list[Asset]:
    """List assets, optionally filtered by ticker (case-insensitive)."""
    if not ticker:
        return list(OSMOSIS_ASSETS)
    return [a for a in OSMOSIS_ASSETS if a.symbol.lower() == ticker.lower()]


def get_asset(ticker: str) -> Asset:
    """Get asset by ticker symbol.

    Raises:
        AssetNotFoundError: If no asset has that ticker
    """
    matches = list_assets(ticker)
    if not matches:
        raise AssetNotFoundError(f"Asset not found: {ticker}")
    return matches[0]


def find_asset_by_denom(denom: str) -> Optional[Asset]:
    """Get asset by its base denom, or None if unknown."""
    for asset in OSMOSIS_ASSETS:
        if asset.base == denom:
            return asset
    return None
