from __future__ import annotations

from typing import Any, Mapping

from clmm_swap.domain.entities.tick_array import TickArray
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.infrastructure.codec.tick_array_layout import decode_tick_array


def _as_int(value: Any) -> int:
    # NUMERIC columns come back as Decimal
    return int(value)


def map_row_to_whirlpool(row: Mapping[str, Any]) -> Whirlpool:
    return Whirlpool(
        address=row["address"],
        token_mint_a=row["token_mint_a"],
        token_mint_b=row["token_mint_b"],
        token_vault_a=row["token_vault_a"],
        token_vault_b=row["token_vault_b"],
        tick_spacing=_as_int(row["tick_spacing"]),
        fee_rate=_as_int(row["fee_rate"]),
        sqrt_price=_as_int(row["sqrt_price"]),
        tick_current_index=_as_int(row["tick_current_index"]),
        liquidity=_as_int(row["liquidity"]),
    )


def map_row_to_tick_array(row: Mapping[str, Any]) -> TickArray:
    tick_array = decode_tick_array(bytes(row["data"]))
    if tick_array.start_tick_index != _as_int(row["start_tick_index"]):
        raise ValueError(
            f"tick array data start {tick_array.start_tick_index} does not match row start {row['start_tick_index']}"
        )
    return tick_array
