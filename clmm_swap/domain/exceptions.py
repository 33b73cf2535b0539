from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base para erros de dominio."""

    code = "DomainError"

    def __init__(self, message: str | None = None, *, context: dict[str, Any] | None = None):
        super().__init__(message or self.code)
        self.context = context or {}


class WhirlpoolNotFoundError(DomainError):
    """Pool solicitada nao existe."""

    code = "WhirlpoolNotFound"


class TickArrayNotFoundError(DomainError):
    """Tick array necessario para o swap nao existe."""

    code = "TickArrayNotFound"


class WhirlpoolStateConflictError(DomainError):
    """Estado da pool mudou entre a leitura e o commit do swap."""

    code = "WhirlpoolStateConflict"


# Bounds / validation


class SqrtPriceOutOfBoundsError(DomainError):
    """Sqrt price fora dos limites suportados."""

    code = "SqrtPriceOutOfBounds"


class InvalidSqrtPriceLimitDirectionError(DomainError):
    """Limite de preco do lado errado do preco atual para a direcao do swap."""

    code = "InvalidSqrtPriceLimitDirection"


class ZeroTradableAmountError(DomainError):
    """Quantidade do swap igual a zero."""

    code = "ZeroTradableAmount"


class InvalidTickSpacingError(DomainError):
    """Tick spacing igual a zero."""

    code = "InvalidTickSpacing"


class InvalidStartTickError(DomainError):
    """Start tick index invalido para o tick spacing da pool."""

    code = "InvalidStartTick"


class TickNotFoundError(DomainError):
    """Tick fora do tick array ou nao utilizavel para o tick spacing."""

    code = "TickNotFound"


class TickIndexOutOfBoundsError(DomainError):
    """Tick index fora do intervalo suportado."""

    code = "TickIndexOutOfBounds"


# Sequencing


class InvalidTickArraySequenceError(DomainError):
    """Tick arrays fora da ordem exigida pela direcao do swap."""

    code = "InvalidTickArraySequence"


class TickArraySequenceInvalidIndexError(DomainError):
    """Busca do proximo tick inicializado passou do fim da sequencia."""

    code = "TickArraySequenceInvalidIndex"


class TickArrayIndexOutofBoundsError(DomainError):
    """Indice de tick array invalido durante o cruzamento de tick."""

    code = "TickArrayIndexOutofBounds"


# Arithmetic


class AmountRemainingOverflowError(DomainError):
    """Underflow na quantidade restante do swap."""

    code = "AmountRemainingOverflow"


class AmountCalcOverflowError(DomainError):
    """Overflow na quantidade calculada do swap."""

    code = "AmountCalcOverflow"


class LiquidityOverflowError(DomainError):
    """Liquidez fora de 128 bits ao cruzar um tick."""

    code = "LiquidityOverflow"


class MultiplicationOverflowError(DomainError):
    """Overflow em multiplicacao de ponto fixo."""

    code = "MultiplicationOverflow"


class MultiplicationShiftRightOverflowError(DomainError):
    """Overflow em multiplicacao seguida de shift para a direita."""

    code = "MultiplicationShiftRightOverflow"


class NumberDownCastError(DomainError):
    """Valor nao cabe no tipo de destino."""

    code = "NumberDownCastError"


class DivideByZeroError(DomainError):
    """Divisao por zero."""

    code = "DivideByZero"


class TokenMaxExceededError(DomainError):
    """Quantidade ou preco acima do maximo suportado."""

    code = "TokenMaxExceeded"


class TokenMinSubceededError(DomainError):
    """Preco abaixo do minimo suportado."""

    code = "TokenMinSubceeded"


# Entry points / composition


class AmountOutBelowMinimumError(DomainError):
    """Quantidade de saida abaixo do minimo aceito."""

    code = "AmountOutBelowMinimum"


class AmountInAboveMaximumError(DomainError):
    """Quantidade de entrada acima do maximo aceito."""

    code = "AmountInAboveMaximum"


class InvalidIntermediaryMintError(DomainError):
    """Mint de saida do primeiro hop difere do mint de entrada do segundo."""

    code = "InvalidIntermediaryMint"


class DuplicateTwoHopPoolError(DomainError):
    """Os dois hops usam a mesma pool."""

    code = "DuplicateTwoHopPool"
