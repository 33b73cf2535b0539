from __future__ import annotations

from dataclasses import dataclass

from clmm_swap.application.dto.swap import SwapOutput


@dataclass(frozen=True)
class TwoHopSwapInput:
    whirlpool_one: str
    whirlpool_two: str
    amount: int
    other_amount_threshold: int
    amount_specified_is_input: bool
    a_to_b_one: bool
    a_to_b_two: bool
    token_owner_account_one_a: str
    token_owner_account_one_b: str
    token_owner_account_two_a: str
    token_owner_account_two_b: str
    sqrt_price_limit_one: int | None = None
    sqrt_price_limit_two: int | None = None
    timestamp: int | None = None


@dataclass(frozen=True)
class TwoHopSwapOutput:
    hop_one: SwapOutput
    hop_two: SwapOutput
    amount_in: int
    amount_out: int
