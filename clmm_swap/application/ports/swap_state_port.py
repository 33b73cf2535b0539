from __future__ import annotations

from typing import Protocol

from clmm_swap.application.dto.swap import SwapCommit
from clmm_swap.domain.entities.tick_array import TickArray
from clmm_swap.domain.entities.whirlpool import Whirlpool


class SwapStatePort(Protocol):
    def get_whirlpool(self, *, address: str) -> Whirlpool | None:
        ...

    def get_tick_arrays(self, *, whirlpool: str, start_tick_indices: list[int]) -> list[TickArray | None]:
        ...

    def commit_swaps(self, *, commits: list[SwapCommit]) -> None:
        """Persist every commit or none of them."""
        ...
