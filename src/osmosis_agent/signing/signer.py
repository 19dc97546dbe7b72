"""Transaction signer for Cosmos SDK chains.

Derives the secp256k1 key from a seed phrase, estimates fees by simulation,
signs in SIGN_MODE_DIRECT and broadcasts with broadcast_tx_sync (CheckTx
only, no wait for block inclusion).

Private key bytes are derived inside each call and never stored on the
signer.
"""

import base64
import logging
from typing import Optional, Sequence

import httpx
from cosmpy.crypto.keypairs import PrivateKey
from cosmpy.protos.cosmos.auth.v1beta1.auth_pb2 import BaseAccount
from cosmpy.protos.cosmos.auth.v1beta1.query_pb2 import (
    QueryAccountRequest,
    QueryAccountResponse,
)
from cosmpy.protos.cosmos.crypto.secp256k1.keys_pb2 import PubKey
from cosmpy.protos.cosmos.tx.signing.v1beta1.signing_pb2 import SignMode
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2 import SimulateRequest, SimulateResponse
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import (
    AuthInfo,
    Fee,
    ModeInfo,
    SignDoc,
    SignerInfo,
    TxBody,
    TxRaw,
)
from google.protobuf.any_pb2 import Any
from google.protobuf.message import DecodeError

from osmosis_agent.chains import DEFAULT_CHAIN_ID, ChainConfig, get_chain
from osmosis_agent.errors import BroadcastError, NodeError, SimulationError
from osmosis_agent.hdwallet import (
    derive_address,
    derive_private_key,
    derive_public_key,
    get_derivation_path,
)
from osmosis_agent.rpc import CometClient, connect_chain_client
from osmosis_agent.signing.fees import (
    FeeEstimate,
    StdFee,
    apply_gas_multiplier,
    calculate_fee,
    get_gas_price,
)
from osmosis_agent.tx.protos import type_url
from osmosis_agent.utils.number import Number

logger = logging.getLogger(__name__)

ACCOUNT_QUERY_PATH = "/cosmos.auth.v1beta1.Query/Account"
SIMULATE_QUERY_PATH = "/cosmos.tx.v1beta1.Service/Simulate"

DEFAULT_FEE_MULTIPLIER = 2


def pack_any(message) -> Any:
    """Wrap a protobuf message in google.protobuf.Any."""
    return Any(type_url=type_url(message), value=message.SerializeToString())


class CosmosSigner:
    """Signer for Cosmos/Osmosis transactions."""

    def __init__(
        self,
        mnemonic: str,
        rpc_url: Optional[str] = None,
        timeout: float = 30.0,
        fee_multiplier: Number = DEFAULT_FEE_MULTIPLIER,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._mnemonic = mnemonic
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.fee_multiplier = fee_multiplier
        self._transport = transport

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rpc_url={self.rpc_url!r})"

    # ======================
    # Keys
    # ======================

    def derive_address(self, chain_id: Optional[str] = None) -> str:
        """Get the account address as represented on a chain.

        Defaults to the Cosmos Hub (cosmos1...) when no chain is given.

        Raises:
            KeyDerivationError: If the mnemonic or chain is invalid
        """
        return derive_address(self._mnemonic, chain_id)

    def _public_key(self, chain_id: str) -> bytes:
        return derive_public_key(self._mnemonic, get_derivation_path(chain_id).path)

    def _sign(self, chain_id: str, sign_bytes: bytes) -> bytes:
        private_key = PrivateKey(
            derive_private_key(self._mnemonic, get_derivation_path(chain_id).path)
        )
        return private_key.sign(sign_bytes, deterministic=True)

    def sign_message(self, message: str, chain_id: Optional[str] = None) -> str:
        """Sign an arbitrary message off-chain.

        The signature covers a direct SignDoc whose body bytes are the UTF-8
        message, with an empty chain ID, account number 0 and empty auth info.

        Returns:
            Base64-encoded 64-byte signature
        """
        sign_doc = SignDoc(
            body_bytes=message.encode("utf-8"),
            auth_info_bytes=b"",
            chain_id="",
            account_number=0,
        )
        signature = self._sign(chain_id or DEFAULT_CHAIN_ID, sign_doc.SerializeToString())
        return base64.b64encode(signature).decode()

    # ======================
    # Node access
    # ======================

    async def _connect(self, chain: ChainConfig) -> CometClient:
        return await connect_chain_client(
            chain, rpc_url=self.rpc_url, timeout=self.timeout, transport=self._transport
        )

    async def _get_account(self, client: CometClient, address: str) -> tuple[int, int]:
        """Get (account_number, sequence) for an address.

        Raises:
            NodeError: If the account does not exist on chain
        """
        result = await client.abci_query(
            ACCOUNT_QUERY_PATH, QueryAccountRequest(address=address).SerializeToString()
        )
        if result.code != 0:
            raise NodeError(f"Account {address} does not exist on chain: {result.log}")

        response = QueryAccountResponse()
        response.ParseFromString(result.value)

        account = BaseAccount()
        if not response.account.Unpack(account):
            raise NodeError(f"Unsupported account type for {address}: {response.account.type_url}")

        return account.account_number, account.sequence

    def _build_body(self, messages: Sequence, memo: Optional[str]) -> bytes:
        body = TxBody(messages=[pack_any(m) for m in messages], memo=memo or "")
        return body.SerializeToString()

    def _build_auth_info(self, public_key: bytes, sequence: int, fee: Fee) -> bytes:
        signer_info = SignerInfo(
            public_key=pack_any(PubKey(key=public_key)),
            mode_info=ModeInfo(single=ModeInfo.Single(mode=SignMode.SIGN_MODE_DIRECT)),
            sequence=sequence,
        )
        return AuthInfo(signer_infos=[signer_info], fee=fee).SerializeToString()

    async def _simulate(
        self,
        client: CometClient,
        chain_id: str,
        messages: Sequence,
        memo: Optional[str],
        sequence: int,
    ) -> int:
        """Simulate an unsigned transaction and return gas used.

        Raises:
            SimulationError: If the node rejects the simulation
        """
        tx = TxRaw(
            body_bytes=self._build_body(messages, memo),
            auth_info_bytes=self._build_auth_info(self._public_key(chain_id), sequence, Fee()),
            signatures=[b""],
        )
        result = await client.abci_query(
            SIMULATE_QUERY_PATH, SimulateRequest(tx_bytes=tx.SerializeToString()).SerializeToString()
        )
        if result.code != 0:
            logger.error(f"Simulation failed on {chain_id} (code {result.code}): {result.log}")
            raise SimulationError(f"Simulation failed: {result.log or f'code {result.code}'}")

        response = SimulateResponse()
        try:
            response.ParseFromString(result.value)
        except DecodeError as e:
            raise SimulationError(f"Invalid simulation response: {e}") from e

        return response.gas_info.gas_used

    # ======================
    # Fees
    # ======================

    async def estimate_fees(
        self,
        messages: Sequence,
        chain_id: Optional[str] = None,
        memo: Optional[str] = None,
        fee_multiplier: Optional[Number] = None,
    ) -> FeeEstimate:
        """Estimate the fee for a set of messages by simulation.

        Args:
            messages: Protobuf messages to include
            chain_id: Chain to estimate on (default cosmoshub-4)
            memo: Optional memo
            fee_multiplier: Factor applied to simulated gas (default: the
                signer's multiplier, 2 unless configured)

        Returns:
            FeeEstimate with the fee and the gas price used

        Raises:
            NodeUnreachableError: If the chain has no RPC endpoint or it is down
            SimulationError: If the node rejects the simulation
        """
        chain = get_chain(chain_id or DEFAULT_CHAIN_ID)
        if fee_multiplier is None:
            fee_multiplier = self.fee_multiplier

        async with await self._connect(chain) as client:
            _, sequence = await self._get_account(client, self.derive_address(chain.chain_id))
            return await self._estimate_with_client(
                client, chain, messages, memo, fee_multiplier, sequence
            )

    async def _estimate_with_client(
        self,
        client: CometClient,
        chain: ChainConfig,
        messages: Sequence,
        memo: Optional[str],
        fee_multiplier: Number,
        sequence: int,
    ) -> FeeEstimate:
        gas_price = get_gas_price(chain)
        if gas_price is None:
            raise SimulationError(f"No fee token configured for {chain.chain_id}")

        gas_used = await self._simulate(client, chain.chain_id, messages, memo, sequence)
        gas_limit = apply_gas_multiplier(gas_used, fee_multiplier)
        fee = calculate_fee(gas_limit, gas_price)

        logger.debug(
            f"Estimated fee on {chain.chain_id}: gas_used={gas_used} gas_limit={gas_limit} "
            f"fee={fee.amount[0].amount}{gas_price.denom}"
        )
        return FeeEstimate(fee=fee, gas_price=gas_price)

    # ======================
    # Broadcast
    # ======================

    async def sign_and_broadcast(
        self,
        messages: Sequence,
        fee: Optional[StdFee] = None,
        memo: Optional[str] = None,
        chain_id: Optional[str] = None,
    ) -> str:
        """Sign a transaction and submit it with broadcast_tx_sync.

        Args:
            messages: Protobuf messages to include
            fee: Explicit fee; estimated by simulation when omitted
            memo: Optional memo
            chain_id: Chain to sign for (default cosmoshub-4)

        Returns:
            Transaction hash (uppercase hex)

        Raises:
            NodeUnreachableError: If the chain has no RPC endpoint or it is down
            SimulationError: If fee estimation fails
            BroadcastError: If the node rejects the transaction in CheckTx
        """
        chain = get_chain(chain_id or DEFAULT_CHAIN_ID)
        address = self.derive_address(chain.chain_id)

        async with await self._connect(chain) as client:
            account_number, sequence = await self._get_account(client, address)

            if fee is None:
                estimate = await self._estimate_with_client(
                    client, chain, messages, memo, self.fee_multiplier, sequence
                )
                fee = estimate.fee

            body_bytes = self._build_body(messages, memo)
            auth_info_bytes = self._build_auth_info(
                self._public_key(chain.chain_id), sequence, fee.to_proto()
            )
            sign_doc = SignDoc(
                body_bytes=body_bytes,
                auth_info_bytes=auth_info_bytes,
                chain_id=chain.chain_id,
                account_number=account_number,
            )
            signature = self._sign(chain.chain_id, sign_doc.SerializeToString())

            tx = TxRaw(
                body_bytes=body_bytes,
                auth_info_bytes=auth_info_bytes,
                signatures=[signature],
            )
            result = await client.broadcast_tx_sync(tx.SerializeToString())

        if result.code != 0:
            logger.error(
                f"Broadcast rejected on {chain.chain_id} (code {result.code}): {result.log}"
            )
            raise BroadcastError(
                f"Broadcasting transaction failed with code {result.code} "
                f"(codespace: {result.codespace}). Log: {result.log}",
                code=result.code,
                tx_hash=result.hash,
            )

        logger.info(f"Broadcast {len(messages)} message(s) on {chain.chain_id}: {result.hash}")
        return result.hash
