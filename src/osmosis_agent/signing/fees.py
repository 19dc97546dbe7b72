"""Gas pricing and fee calculation for Cosmos transactions."""

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Optional

from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin as CoinProto
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import Fee

from osmosis_agent.chains import ChainConfig
from osmosis_agent.routing.models import Coin
from osmosis_agent.utils.number import Number, to_decimal


@dataclass(frozen=True)
class GasPrice:
    """Price of one unit of gas in a fee denom."""

    amount: Decimal
    denom: str

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass
class StdFee:
    """Fee attached to a transaction: coins paid and gas limit."""

    amount: list[Coin]
    gas: str

    def to_proto(self) -> Fee:
        return Fee(
            amount=[CoinProto(denom=c.denom, amount=c.amount) for c in self.amount],
            gas_limit=int(self.gas),
        )


@dataclass
class FeeEstimate:
    """Result of fee estimation."""

    fee: StdFee
    gas_price: Optional[GasPrice]


def get_gas_price(chain: ChainConfig) -> Optional[GasPrice]:
    """Gas price of a chain's first fee token.

    Uses the token's average gas price, except when none is published or the
    denom is an IBC denom; then a price of 1 of that denom is used.

    Returns:
        GasPrice, or None if the chain lists no fee tokens
    """
    if not chain.fee_tokens:
        return None

    token = chain.fee_tokens[0]
    if token.average_gas_price and not token.denom.startswith("ibc/"):
        return GasPrice(amount=token.average_gas_price, denom=token.denom)
    return GasPrice(amount=Decimal(1), denom=token.denom)


def apply_gas_multiplier(gas_used: int, multiplier: Number) -> int:
    """Scale simulated gas, rounding half up."""
    scaled = Decimal(gas_used) * to_decimal(multiplier)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))


def calculate_fee(gas_limit: int, gas_price: GasPrice) -> StdFee:
    """Fee for a gas limit: ceil(gas_price * gas_limit) of the price denom."""
    total = (gas_price.amount * gas_limit).to_integral_value(rounding=ROUND_CEILING)
    return StdFee(
        amount=[Coin(denom=gas_price.denom, amount=str(int(total)))],
        gas=str(gas_limit),
    )
