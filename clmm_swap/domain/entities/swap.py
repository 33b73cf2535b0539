from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SwapStepComputation:
    amount_in: int
    amount_out: int
    next_price: int
    fee_amount: int


@dataclass(frozen=True)
class PostSwapUpdate:
    amount_a: int
    amount_b: int
    next_liquidity: int
    next_tick_index: int
    next_sqrt_price: int

    def amount_in(self, *, a_to_b: bool) -> int:
        return self.amount_a if a_to_b else self.amount_b

    def amount_out(self, *, a_to_b: bool) -> int:
        return self.amount_b if a_to_b else self.amount_a


@dataclass(frozen=True)
class TokenTransfer:
    """One settlement leg of a swap."""

    whirlpool: str
    mint: str
    source: str
    destination: str
    amount: int
