"""HD wallet module for deterministic Cosmos key and address derivation."""

from osmosis_agent.hdwallet.cosmos import (
    DerivationPath,
    derive_address,
    derive_private_key,
    derive_public_key,
    get_derivation_path,
    get_derivation_paths,
)

__all__ = [
    "DerivationPath",
    "derive_address",
    "derive_private_key",
    "derive_public_key",
    "get_derivation_path",
    "get_derivation_paths",
]
