"""Quote-to-transaction execution.

Each send consumes its quote before anything touches the network: the quote
is redeemed from the cache, turned into one slippage-bounded swap message,
signed and broadcast. A failed broadcast does not put the quote back; the
caller fetches a fresh one.
"""

import logging
from typing import Optional, TypedDict

from osmosis_agent.account import Account
from osmosis_agent.routing.models import InGivenOutQuote, OutGivenInQuote
from osmosis_agent.swap.cache import QuoteCache
from osmosis_agent.tx.swap import (
    make_swap_exact_amount_in_encode_object,
    make_swap_exact_amount_out_encode_object,
)
from osmosis_agent.utils.number import Number

logger = logging.getLogger(__name__)


class SignedTxResult(TypedDict):
    txHash: str


class SwapExecutor:
    """Executes cached SQS quotes from one account."""

    def __init__(
        self,
        account: Account,
        out_given_in_quotes: QuoteCache[OutGivenInQuote],
        in_given_out_quotes: QuoteCache[InGivenOutQuote],
        default_slippage_percent: Optional[Number] = None,
    ):
        self.account = account
        self.out_given_in_quotes = out_given_in_quotes
        self.in_given_out_quotes = in_given_out_quotes
        self.default_slippage_percent = default_slippage_percent

    def _slippage(self, slippage_percent: Optional[Number]) -> Optional[Number]:
        if slippage_percent is None:
            return self.default_slippage_percent
        return slippage_percent

    async def send_swap_out_given_in(
        self, quote_id: str, slippage_percent: Optional[Number] = None
    ) -> SignedTxResult:
        """Execute an exact-in quote.

        Raises:
            QuoteNotFoundError: If the quote is unknown or already used
            ValueError: If slippage is outside [0, 100)
            SimulationError, BroadcastError, NodeUnreachableError: From the signer
        """
        quote = self.out_given_in_quotes.redeem(quote_id)
        msg = make_swap_exact_amount_in_encode_object(
            self.account.address, quote, self._slippage(slippage_percent)
        )

        logger.info(
            f"Executing quote {quote_id}: {quote.amount_in.amount}{quote.amount_in.denom} "
            f"for min {msg.token_out_min_amount} ({len(quote.route)} route(s))"
        )
        tx_hash = await self.account.sign_and_broadcast([msg])
        return {"txHash": tx_hash}

    async def send_swap_in_given_out(
        self, quote_id: str, slippage_percent: Optional[Number] = None
    ) -> SignedTxResult:
        """Execute an exact-out quote.

        Raises:
            QuoteNotFoundError: If the quote is unknown or already used
            ValueError: If slippage is outside [0, 100)
            SimulationError, BroadcastError, NodeUnreachableError: From the signer
        """
        quote = self.in_given_out_quotes.redeem(quote_id)
        msg = make_swap_exact_amount_out_encode_object(
            self.account.address, quote, self._slippage(slippage_percent)
        )

        logger.info(
            f"Executing quote {quote_id}: {quote.amount_out.amount}{quote.amount_out.denom} "
            f"for max {msg.token_in_max_amount} ({len(quote.route)} route(s))"
        )
        tx_hash = await self.account.sign_and_broadcast([msg])
        return {"txHash": tx_hash}
