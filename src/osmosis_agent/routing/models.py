"""Quote models for Osmosis Sidecar Query Server (SQS) router responses.

Amounts are base-denomination integers carried as strings, exactly as SQS
returns them.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Coin(BaseModel):
    """A denom and an integer amount."""

    denom: str
    amount: str


class QuotePool(BaseModel):
    """One pool hop of a route."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Pool ID")
    type: int = Field(default=0, description="0 weighted, 1 stable, 2 concentrated, 3 cosmwasm")
    spread_factor: str = "0"
    taker_fee: str = "0"
    token_out_denom: Optional[str] = Field(None, description="Denom leaving this pool (exact-in)")
    token_in_denom: Optional[str] = Field(None, description="Denom entering this pool (exact-out)")
    code_id: Optional[int] = Field(None, description="Code ID, if a CosmWasm pool")


class QuoteRoute(BaseModel):
    """An ordered path through pools filling part (or all) of a swap."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    in_amount: str
    out_amount: str
    has_cw_pool: bool = Field(default=False, alias="has-cw-pool")
    pools: list[QuotePool] = Field(default_factory=list)


class OutGivenInQuote(BaseModel):
    """Quote for an exact input amount (how much comes out)."""

    model_config = ConfigDict(extra="ignore")

    amount_in: Coin
    amount_out: str
    route: list[QuoteRoute]
    effective_fee: str = "0"
    price_impact: str = "0"
    in_base_out_quote_spot_price: str = "0"


class InGivenOutQuote(BaseModel):
    """Quote for an exact output amount (how much must go in)."""

    model_config = ConfigDict(extra="ignore")

    amount_out: Coin
    amount_in: str
    route: list[QuoteRoute]
    effective_fee: str = "0"
    price_impact: str = "0"
    in_base_out_quote_spot_price: str = "0"


SwapQuote = Union[OutGivenInQuote, InGivenOutQuote]
