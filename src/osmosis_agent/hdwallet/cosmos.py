"""Cosmos HD key derivation from a BIP-39 seed phrase.

Cosmos chains use:
- secp256k1 keys on the BIP-44 path m/44'/{slip44}'/0'/0/0
- Bech32 addresses of RIPEMD160(SHA256(compressed pubkey)) with a
  chain-specific prefix (cosmos1..., osmo1..., juno1...)

Key bytes returned here are meant to be used for a single signing operation
and dropped; nothing in this module caches them.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from bip_utils import AtomAddrEncoder, Bip32Secp256k1, Bip39SeedGenerator

from osmosis_agent.chains import CHAINS, DEFAULT_CHAIN_ID
from osmosis_agent.errors import KeyDerivationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivationPath:
    """HD path and address prefix for one chain."""

    path: str
    prefix: str


@lru_cache
def get_derivation_paths() -> dict[str, DerivationPath]:
    """Build the chain ID -> derivation path table from the chain registry."""
    return {
        chain_id: DerivationPath(
            path=f"m/44'/{chain.slip44}'/0'/0/0",
            prefix=chain.bech32_prefix,
        )
        for chain_id, chain in CHAINS.items()
    }


def get_derivation_path(chain_id: Optional[str] = None) -> DerivationPath:
    """Get the derivation path for a chain, defaulting to the Cosmos Hub.

    Raises:
        KeyDerivationError: If the chain has no registered path
    """
    chain_id = chain_id or DEFAULT_CHAIN_ID
    path = get_derivation_paths().get(chain_id)
    if path is None:
        raise KeyDerivationError(f"No derivation path for chain: {chain_id}")
    return path


def _derive_context(mnemonic: str, path: str):
    """Derive the BIP-32 context for a path."""
    try:
        seed = Bip39SeedGenerator(mnemonic).Generate()
        return Bip32Secp256k1.FromSeed(seed).DerivePath(path)
    except Exception as e:
        raise KeyDerivationError(f"Failed to derive key for {path}: {e}") from e


def derive_private_key(mnemonic: str, path: str) -> bytes:
    """Derive raw secp256k1 private key bytes."""
    return _derive_context(mnemonic, path).PrivateKey().Raw().ToBytes()


def derive_public_key(mnemonic: str, path: str) -> bytes:
    """Derive the 33-byte compressed public key."""
    return _derive_context(mnemonic, path).PublicKey().RawCompressed().ToBytes()


def public_key_to_address(public_key: bytes, prefix: str) -> str:
    """Encode a compressed public key as a bech32 account address.

    The address payload is RIPEMD160(SHA256(public_key)).
    """
    try:
        return AtomAddrEncoder.EncodeKey(public_key, hrp=prefix)
    except Exception as e:
        raise KeyDerivationError(f"Failed to encode address with prefix {prefix}: {e}") from e


def derive_address(mnemonic: str, chain_id: Optional[str] = None) -> str:
    """Derive the account address of a seed phrase on a chain.

    Args:
        mnemonic: BIP-39 seed phrase
        chain_id: Chain ID from the registry (default: cosmoshub-4)

    Returns:
        Bech32 address with the chain's prefix
    """
    derivation_path = get_derivation_path(chain_id)
    public_key = derive_public_key(mnemonic, derivation_path.path)
    address = public_key_to_address(public_key, derivation_path.prefix)
    logger.debug(f"Derived {derivation_path.prefix} address at {derivation_path.path}")
    return address
