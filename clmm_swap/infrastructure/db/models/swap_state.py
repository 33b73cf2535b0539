from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, LargeBinary, Numeric, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from clmm_swap.infrastructure.db.engine import Base


# u128 fits in 39 decimal digits
U128_NUMERIC = Numeric(39, 0)


class WhirlpoolModel(Base):
    __tablename__ = "whirlpools"
    __table_args__ = ({"schema": "public"},)

    address: Mapped[str] = mapped_column(Text, primary_key=True)
    token_mint_a: Mapped[str] = mapped_column(Text, nullable=False)
    token_mint_b: Mapped[str] = mapped_column(Text, nullable=False)
    token_vault_a: Mapped[str] = mapped_column(Text, nullable=False)
    token_vault_b: Mapped[str] = mapped_column(Text, nullable=False)
    tick_spacing: Mapped[int] = mapped_column(Integer, nullable=False)
    fee_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    sqrt_price: Mapped[Decimal] = mapped_column(U128_NUMERIC, nullable=False)
    tick_current_index: Mapped[int] = mapped_column(Integer, nullable=False)
    liquidity: Mapped[Decimal] = mapped_column(U128_NUMERIC, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))


class TickArrayModel(Base):
    __tablename__ = "tick_arrays"
    __table_args__ = ({"schema": "public"},)

    whirlpool: Mapped[str] = mapped_column(Text, ForeignKey("public.whirlpools.address"), primary_key=True)
    start_tick_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class TokenTransferModel(Base):
    __tablename__ = "token_transfers"
    __table_args__ = ({"schema": "public"},)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    whirlpool: Mapped[str] = mapped_column(Text, ForeignKey("public.whirlpools.address"), nullable=False)
    mint: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(Text, nullable=False)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 0), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
