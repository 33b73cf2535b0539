from __future__ import annotations

from fastapi import HTTPException

from clmm_swap.application.use_cases.quote_swap import QuoteSwapUseCase
from clmm_swap.application.use_cases.swap import SwapUseCase
from clmm_swap.application.use_cases.two_hop_swap import TwoHopSwapUseCase
from clmm_swap.infrastructure.db.engine import get_engine
from clmm_swap.infrastructure.db.repositories.swap_state_repository import SqlSwapStateRepository
from clmm_swap.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_swap_state_repository() -> SqlSwapStateRepository:
    return SqlSwapStateRepository(_get_db_engine())


def get_swap_use_case() -> SwapUseCase:
    return SwapUseCase(
        swap_state_port=_get_swap_state_repository(),
        tick_arrays_per_swap=get_settings().tick_arrays_per_swap,
    )


def get_two_hop_swap_use_case() -> TwoHopSwapUseCase:
    return TwoHopSwapUseCase(
        swap_state_port=_get_swap_state_repository(),
        tick_arrays_per_swap=get_settings().tick_arrays_per_swap,
    )


def get_quote_swap_use_case() -> QuoteSwapUseCase:
    return QuoteSwapUseCase(
        swap_state_port=_get_swap_state_repository(),
        tick_arrays_per_swap=get_settings().tick_arrays_per_swap,
    )
