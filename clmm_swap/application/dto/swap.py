from __future__ import annotations

from dataclasses import dataclass, field

from clmm_swap.domain.entities.swap import PostSwapUpdate, TokenTransfer
from clmm_swap.domain.entities.whirlpool import Whirlpool


@dataclass(frozen=True)
class SwapInput:
    whirlpool_address: str
    amount: int
    other_amount_threshold: int
    amount_specified_is_input: bool
    a_to_b: bool
    token_owner_account_a: str
    token_owner_account_b: str
    sqrt_price_limit: int | None = None
    timestamp: int | None = None


@dataclass(frozen=True)
class QuoteSwapInput:
    whirlpool_address: str
    amount: int
    amount_specified_is_input: bool
    a_to_b: bool
    sqrt_price_limit: int | None = None


@dataclass(frozen=True)
class SwapOutput:
    whirlpool_address: str
    a_to_b: bool
    amount_a: int
    amount_b: int
    amount_in: int
    amount_out: int
    sqrt_price: int
    tick_current_index: int
    liquidity: int
    transfers: list[TokenTransfer] = field(default_factory=list)


@dataclass(frozen=True)
class SwapCommit:
    """Pool state read before the swap, the engine result and its settlement legs."""

    whirlpool: Whirlpool
    update: PostSwapUpdate
    transfers: list[TokenTransfer]
