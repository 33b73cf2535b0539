from __future__ import annotations

from clmm_swap.domain.exceptions import LiquidityOverflowError
from clmm_swap.domain.services.token_math import U128_MAX


I128_MAX = (1 << 127) - 1
I128_MIN = -(1 << 127)


def add_liquidity_delta(liquidity: int, delta: int) -> int:
    """Apply a signed 128-bit delta to an unsigned 128-bit liquidity."""
    if delta < I128_MIN or delta > I128_MAX:
        raise LiquidityOverflowError("liquidity delta does not fit in 128 signed bits.")
    next_liquidity = liquidity + delta
    if next_liquidity < 0 or next_liquidity > U128_MAX:
        raise LiquidityOverflowError(
            "liquidity is outside 128 unsigned bits after applying the delta.",
            context={"liquidity": liquidity, "delta": delta},
        )
    return next_liquidity
