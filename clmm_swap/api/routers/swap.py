from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from clmm_swap.api.deps import get_quote_swap_use_case, get_swap_use_case, get_two_hop_swap_use_case
from clmm_swap.api.schemas.swap import (
    QuoteSwapRequest,
    SwapRequest,
    SwapResponse,
    TokenTransferResponse,
    TwoHopSwapRequest,
    TwoHopSwapResponse,
)
from clmm_swap.application.dto.swap import QuoteSwapInput, SwapInput, SwapOutput
from clmm_swap.application.dto.two_hop_swap import TwoHopSwapInput
from clmm_swap.application.use_cases.quote_swap import QuoteSwapUseCase
from clmm_swap.application.use_cases.swap import SwapUseCase
from clmm_swap.application.use_cases.two_hop_swap import TwoHopSwapUseCase
from clmm_swap.domain.exceptions import (
    DomainError,
    TickArrayNotFoundError,
    WhirlpoolNotFoundError,
    WhirlpoolStateConflictError,
)
from clmm_swap.domain.services.tick_math import sqrt_price_x64_to_price

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(exc: DomainError, *, route: str, whirlpool: str) -> HTTPException:
    if isinstance(exc, (WhirlpoolNotFoundError, TickArrayNotFoundError)):
        status_code = 404
        event = "not_found"
    elif isinstance(exc, WhirlpoolStateConflictError):
        status_code = 409
        event = "state_conflict"
    else:
        status_code = 422
        event = "rejected"
    logger.warning(
        "%s: %s whirlpool=%s code=%s context=%s detail=%s",
        route,
        event,
        whirlpool,
        exc.code,
        exc.context,
        exc,
    )
    return HTTPException(
        status_code=status_code,
        detail={
            "message": str(exc),
            "code": exc.code,
            "context": exc.context,
        },
    )


def _to_response(result: SwapOutput) -> SwapResponse:
    return SwapResponse(
        whirlpool=result.whirlpool_address,
        a_to_b=result.a_to_b,
        amount_a=result.amount_a,
        amount_b=result.amount_b,
        amount_in=result.amount_in,
        amount_out=result.amount_out,
        sqrt_price=result.sqrt_price,
        price=sqrt_price_x64_to_price(result.sqrt_price),
        tick_current_index=result.tick_current_index,
        liquidity=result.liquidity,
        transfers=[
            TokenTransferResponse(
                mint=transfer.mint,
                source=transfer.source,
                destination=transfer.destination,
                amount=transfer.amount,
            )
            for transfer in result.transfers
        ],
    )


@router.post("/v1/swap", response_model=SwapResponse)
def swap(
    req: SwapRequest,
    use_case: SwapUseCase = Depends(get_swap_use_case),
):
    try:
        result = use_case.execute(
            SwapInput(
                whirlpool_address=req.whirlpool,
                amount=req.amount,
                other_amount_threshold=req.other_amount_threshold,
                amount_specified_is_input=req.amount_specified_is_input,
                a_to_b=req.a_to_b,
                token_owner_account_a=req.token_owner_account_a,
                token_owner_account_b=req.token_owner_account_b,
                sqrt_price_limit=req.sqrt_price_limit,
                timestamp=req.timestamp,
            )
        )
    except DomainError as exc:
        raise _http_error(exc, route="swap_router", whirlpool=req.whirlpool) from exc
    return _to_response(result)


@router.post("/v1/quote/swap", response_model=SwapResponse)
def quote_swap(
    req: QuoteSwapRequest,
    use_case: QuoteSwapUseCase = Depends(get_quote_swap_use_case),
):
    try:
        result = use_case.execute(
            QuoteSwapInput(
                whirlpool_address=req.whirlpool,
                amount=req.amount,
                amount_specified_is_input=req.amount_specified_is_input,
                a_to_b=req.a_to_b,
                sqrt_price_limit=req.sqrt_price_limit,
            )
        )
    except DomainError as exc:
        raise _http_error(exc, route="quote_swap_router", whirlpool=req.whirlpool) from exc
    return _to_response(result)


@router.post("/v1/two-hop-swap", response_model=TwoHopSwapResponse)
def two_hop_swap(
    req: TwoHopSwapRequest,
    use_case: TwoHopSwapUseCase = Depends(get_two_hop_swap_use_case),
):
    try:
        result = use_case.execute(
            TwoHopSwapInput(
                whirlpool_one=req.whirlpool_one,
                whirlpool_two=req.whirlpool_two,
                amount=req.amount,
                other_amount_threshold=req.other_amount_threshold,
                amount_specified_is_input=req.amount_specified_is_input,
                a_to_b_one=req.a_to_b_one,
                a_to_b_two=req.a_to_b_two,
                token_owner_account_one_a=req.token_owner_account_one_a,
                token_owner_account_one_b=req.token_owner_account_one_b,
                token_owner_account_two_a=req.token_owner_account_two_a,
                token_owner_account_two_b=req.token_owner_account_two_b,
                sqrt_price_limit_one=req.sqrt_price_limit_one,
                sqrt_price_limit_two=req.sqrt_price_limit_two,
                timestamp=req.timestamp,
            )
        )
    except DomainError as exc:
        raise _http_error(
            exc,
            route="two_hop_swap_router",
            whirlpool=f"{req.whirlpool_one},{req.whirlpool_two}",
        ) from exc
    return TwoHopSwapResponse(
        amount_in=result.amount_in,
        amount_out=result.amount_out,
        hop_one=_to_response(result.hop_one),
        hop_two=_to_response(result.hop_two),
    )
