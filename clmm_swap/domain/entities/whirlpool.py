from __future__ import annotations

from dataclasses import dataclass, replace

from clmm_swap.domain.entities.swap import PostSwapUpdate


@dataclass(frozen=True)
class Whirlpool:
    """Read-only pool snapshot consumed by the swap engine.

    `sqrt_price` is Q64.64, `fee_rate` is in hundredths of a basis point.
    """

    address: str
    token_mint_a: str
    token_mint_b: str
    token_vault_a: str
    token_vault_b: str
    tick_spacing: int
    fee_rate: int
    sqrt_price: int
    tick_current_index: int
    liquidity: int

    def with_swap_update(self, update: PostSwapUpdate) -> "Whirlpool":
        return replace(
            self,
            sqrt_price=update.next_sqrt_price,
            tick_current_index=update.next_tick_index,
            liquidity=update.next_liquidity,
        )

    def input_mint(self, *, a_to_b: bool) -> str:
        return self.token_mint_a if a_to_b else self.token_mint_b

    def output_mint(self, *, a_to_b: bool) -> str:
        return self.token_mint_b if a_to_b else self.token_mint_a
