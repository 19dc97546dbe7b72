"""A signer bound to one chain."""

from functools import cached_property
from typing import Optional, Sequence

import httpx

from osmosis_agent.chains import OSMOSIS_CHAIN_ID
from osmosis_agent.signing import CosmosSigner, FeeEstimate, StdFee
from osmosis_agent.utils.number import Number


class Account:
    """Osmosis (by default) account derived from a seed phrase.

    Wraps CosmosSigner with the chain fixed, so callers only pass messages.
    """

    def __init__(
        self,
        mnemonic: str,
        chain_id: str = OSMOSIS_CHAIN_ID,
        rpc_url: Optional[str] = None,
        timeout: float = 30.0,
        fee_multiplier: Number = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.chain_id = chain_id
        self._signer = CosmosSigner(
            mnemonic,
            rpc_url=rpc_url,
            timeout=timeout,
            fee_multiplier=fee_multiplier,
            transport=transport,
        )

    @cached_property
    def address(self) -> str:
        """Bech32 address on this account's chain."""
        return self._signer.derive_address(self.chain_id)

    async def estimate_fees(
        self,
        messages: Sequence,
        memo: Optional[str] = None,
        fee_multiplier: Optional[Number] = None,
    ) -> FeeEstimate:
        return await self._signer.estimate_fees(
            messages, chain_id=self.chain_id, memo=memo, fee_multiplier=fee_multiplier
        )

    async def sign_and_broadcast(
        self,
        messages: Sequence,
        fee: Optional[StdFee] = None,
        memo: Optional[str] = None,
    ) -> str:
        return await self._signer.sign_and_broadcast(
            messages, fee=fee, memo=memo, chain_id=self.chain_id
        )

    def sign_message(self, message: str) -> str:
        return self._signer.sign_message(message, chain_id=self.chain_id)

    def __repr__(self) -> str:
        return f"Account(chain_id={self.chain_id!r}, address={self.address!r})"
