from __future__ import annotations

from pydantic import BaseModel, Field

from clmm_swap.domain.services.token_math import U64_MAX


class SwapRequest(BaseModel):
    whirlpool: str = Field(..., min_length=32, max_length=44, description="Endereco base58 da whirlpool.")
    amount: int = Field(..., ge=0, le=U64_MAX, description="Quantidade especificada (u64).")
    other_amount_threshold: int = Field(
        ...,
        ge=0,
        le=U64_MAX,
        description="Minimo de saida (input fixo) ou maximo de entrada (output fixo).",
    )
    sqrt_price_limit: int | None = Field(
        None,
        description="Limite de sqrt price Q64.64; vazio usa o limite da direcao.",
    )
    amount_specified_is_input: bool = Field(..., description="Quando true, amount e a entrada do swap.")
    a_to_b: bool = Field(..., description="Quando true, entra token A e sai token B.")
    token_owner_account_a: str = Field(..., min_length=32, max_length=44)
    token_owner_account_b: str = Field(..., min_length=32, max_length=44)
    timestamp: int | None = Field(None, ge=0, description="Unix timestamp do swap.")


class QuoteSwapRequest(BaseModel):
    whirlpool: str = Field(..., min_length=32, max_length=44)
    amount: int = Field(..., ge=0, le=U64_MAX)
    sqrt_price_limit: int | None = None
    amount_specified_is_input: bool = True
    a_to_b: bool


class TwoHopSwapRequest(BaseModel):
    whirlpool_one: str = Field(..., min_length=32, max_length=44)
    whirlpool_two: str = Field(..., min_length=32, max_length=44)
    amount: int = Field(..., ge=0, le=U64_MAX)
    other_amount_threshold: int = Field(..., ge=0, le=U64_MAX)
    amount_specified_is_input: bool
    a_to_b_one: bool
    a_to_b_two: bool
    sqrt_price_limit_one: int | None = None
    sqrt_price_limit_two: int | None = None
    token_owner_account_one_a: str = Field(..., min_length=32, max_length=44)
    token_owner_account_one_b: str = Field(..., min_length=32, max_length=44)
    token_owner_account_two_a: str = Field(..., min_length=32, max_length=44)
    token_owner_account_two_b: str = Field(..., min_length=32, max_length=44)
    timestamp: int | None = Field(None, ge=0)


class TokenTransferResponse(BaseModel):
    mint: str
    source: str
    destination: str
    amount: int


class SwapResponse(BaseModel):
    whirlpool: str
    a_to_b: bool
    amount_a: int
    amount_b: int
    amount_in: int
    amount_out: int
    sqrt_price: int
    price: float
    tick_current_index: int
    liquidity: int
    transfers: list[TokenTransferResponse] = Field(default_factory=list)


class TwoHopSwapResponse(BaseModel):
    amount_in: int
    amount_out: int
    hop_one: SwapResponse
    hop_two: SwapResponse
