from __future__ import annotations

import pytest
from construct import ConstError

from clmm_swap.domain.entities.tick import Tick
from clmm_swap.domain.entities.tick_array import DEFAULT_PUBKEY, TickArray
from clmm_swap.infrastructure.codec.tick_array_layout import (
    TICK_ARRAY_DISCRIMINATOR,
    TICK_ARRAY_LAYOUT,
    TICK_LAYOUT,
    decode_tick_array,
    encode_tick_array,
    pubkey_from_bytes,
    pubkey_to_bytes,
)


WHIRLPOOL = "So11111111111111111111111111111111111111112"


def test_layout_sizes():
    assert TICK_LAYOUT.sizeof() == 113
    assert TICK_ARRAY_LAYOUT.sizeof() == 9988


def test_encode_writes_discriminator_start_and_owner():
    data = encode_tick_array(TickArray(start_tick_index=-704, whirlpool=WHIRLPOOL))

    assert len(data) == 9988
    assert data[:8] == TICK_ARRAY_DISCRIMINATOR
    assert int.from_bytes(data[8:12], "little", signed=True) == -704
    assert data[-32:] == pubkey_to_bytes(WHIRLPOOL)


def test_decode_restores_signed_and_wide_fields():
    tick_array = TickArray(start_tick_index=704, whirlpool=WHIRLPOOL)
    tick_array.ticks[3] = Tick(
        initialized=True,
        liquidity_net=-(1 << 100),
        liquidity_gross=1 << 100,
        fee_growth_outside_a=(1 << 128) - 1,
        fee_growth_outside_b=7,
        reward_growths_outside=(1, 2, 3),
    )

    decoded = decode_tick_array(encode_tick_array(tick_array))

    assert decoded == tick_array


def test_tick_fields_are_little_endian():
    tick = TICK_LAYOUT.build(
        {
            "initialized": True,
            "liquidity_net": -1,
            "liquidity_gross": 1,
            "fee_growth_outside_a": 0,
            "fee_growth_outside_b": 0,
            "reward_growths_outside": [0, 0, 0],
        }
    )
    assert tick[0] == 1
    assert tick[1:17] == b"\xff" * 16
    assert tick[17:33] == b"\x01" + b"\x00" * 15


def test_decode_rejects_foreign_account():
    data = b"\x00" * 8 + encode_tick_array(TickArray())[8:]
    with pytest.raises(ConstError):
        decode_tick_array(data)


def test_pubkey_conversion():
    assert pubkey_to_bytes(DEFAULT_PUBKEY) == b"\x00" * 32
    assert pubkey_from_bytes(b"\x00" * 32) == DEFAULT_PUBKEY
    with pytest.raises(ValueError):
        pubkey_to_bytes("abc")
