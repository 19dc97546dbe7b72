"""Fee estimation, signing and broadcast."""

from osmosis_agent.signing.fees import (
    FeeEstimate,
    GasPrice,
    StdFee,
    calculate_fee,
    get_gas_price,
)
from osmosis_agent.signing.signer import CosmosSigner

__all__ = [
    "CosmosSigner",
    "FeeEstimate",
    "GasPrice",
    "StdFee",
    "calculate_fee",
    "get_gas_price",
]
