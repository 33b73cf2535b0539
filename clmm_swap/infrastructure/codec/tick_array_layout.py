from __future__ import annotations

import hashlib

import base58
from construct import Array, Bytes, BytesInteger, Const, Flag, Int32sl, Struct

from clmm_swap.domain.entities.tick import NUM_REWARDS, TICK_ARRAY_SIZE, Tick
from clmm_swap.domain.entities.tick_array import TickArray


PUBKEY_LENGTH = 32

# anchor account discriminator: sha256("account:<Name>")[:8]
TICK_ARRAY_DISCRIMINATOR = hashlib.sha256(b"account:TickArray").digest()[:8]

U128 = BytesInteger(16, signed=False, swapped=True)
I128 = BytesInteger(16, signed=True, swapped=True)

TICK_LAYOUT = Struct(
    "initialized" / Flag,
    "liquidity_net" / I128,
    "liquidity_gross" / U128,
    "fee_growth_outside_a" / U128,
    "fee_growth_outside_b" / U128,
    "reward_growths_outside" / Array(NUM_REWARDS, U128),
)

TICK_ARRAY_LAYOUT = Struct(
    "discriminator" / Const(TICK_ARRAY_DISCRIMINATOR),
    "start_tick_index" / Int32sl,
    "ticks" / Array(TICK_ARRAY_SIZE, TICK_LAYOUT),
    "whirlpool" / Bytes(PUBKEY_LENGTH),
)


def pubkey_to_bytes(pubkey: str) -> bytes:
    raw = base58.b58decode(pubkey)
    if len(raw) != PUBKEY_LENGTH:
        raise ValueError(f"Public key must decode to {PUBKEY_LENGTH} bytes: {pubkey}")
    return raw


def pubkey_from_bytes(raw: bytes) -> str:
    return base58.b58encode(raw).decode("ascii")


def encode_tick_array(tick_array: TickArray) -> bytes:
    return TICK_ARRAY_LAYOUT.build(
        {
            "start_tick_index": tick_array.start_tick_index,
            "ticks": [
                {
                    "initialized": tick.initialized,
                    "liquidity_net": tick.liquidity_net,
                    "liquidity_gross": tick.liquidity_gross,
                    "fee_growth_outside_a": tick.fee_growth_outside_a,
                    "fee_growth_outside_b": tick.fee_growth_outside_b,
                    "reward_growths_outside": list(tick.reward_growths_outside),
                }
                for tick in tick_array.ticks
            ],
            "whirlpool": pubkey_to_bytes(tick_array.whirlpool),
        }
    )


def decode_tick_array(data: bytes) -> TickArray:
    parsed = TICK_ARRAY_LAYOUT.parse(data)
    return TickArray(
        start_tick_index=parsed.start_tick_index,
        ticks=[
            Tick(
                initialized=bool(tick.initialized),
                liquidity_net=tick.liquidity_net,
                liquidity_gross=tick.liquidity_gross,
                fee_growth_outside_a=tick.fee_growth_outside_a,
                fee_growth_outside_b=tick.fee_growth_outside_b,
                reward_growths_outside=tuple(tick.reward_growths_outside),
            )
            for tick in parsed.ticks
        ],
        whirlpool=pubkey_from_bytes(parsed.whirlpool),
    )
