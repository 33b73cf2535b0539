from __future__ import annotations

import math

from clmm_swap.domain.entities.tick import MAX_TICK_INDEX, MIN_TICK_INDEX
from clmm_swap.domain.exceptions import SqrtPriceOutOfBoundsError, TickIndexOutOfBoundsError


Q64 = 1 << 64
MIN_SQRT_PRICE_X64 = 4295048016
MAX_SQRT_PRICE_X64 = 79226673515401279992447579055

LOG_BASE_SQRT = math.log(1.0001) / 2.0

# Q96 values of sqrt(1.0001) ** (2 ** i)
_POSITIVE_TICK_RATIOS = (
    79232123823359799118286999567,
    79236085330515764027303304731,
    79244008939048815603706035061,
    79259858533276714757314932305,
    79291567232598584799939703904,
    79355022692464371645785046466,
    79482085999252804386437311141,
    79736823300114093921829183326,
    80248749790819932309965073892,
    81282483887344747381513967011,
    83390072131320151908154831281,
    87770609709833776024991924138,
    97234110755111693312479820773,
    119332217159966728226237229890,
    179736315981702064433883588727,
    407748233172238350107850275304,
    2098478828474011932436660412517,
    55581415166113811149459800483533,
    38992368544603139932233054999993535,
    19190206568837448476620805525116361302669,
)

# Q64 values of 1 / sqrt(1.0001) ** (2 ** i)
_NEGATIVE_TICK_RATIOS = (
    18445821805675392311,
    18444899583751176498,
    18443055278223354162,
    18439367220385604838,
    18431993317065449817,
    18417254355718160513,
    18387811781193591352,
    18329067761203520168,
    18212142134806087854,
    17980523815641551639,
    17526086738831147013,
    16651378430235024244,
    15030750278693429944,
    12247334978882834399,
    8131365268884726200,
    3584323654723342297,
    696457651847595233,
    26294789957452057,
    37481735321082,
    76158723,
)


def sqrt_price_from_tick_index(tick: int) -> int:
    if tick < MIN_TICK_INDEX or tick > MAX_TICK_INDEX:
        raise TickIndexOutOfBoundsError(f"tick {tick} is outside [{MIN_TICK_INDEX}, {MAX_TICK_INDEX}].")
    if tick >= 0:
        return _sqrt_price_positive_tick(tick)
    return _sqrt_price_negative_tick(tick)


def _sqrt_price_positive_tick(tick: int) -> int:
    ratio = _POSITIVE_TICK_RATIOS[0] if tick & 1 else 1 << 96
    for bit, factor in enumerate(_POSITIVE_TICK_RATIOS[1:], start=1):
        if tick & (1 << bit):
            ratio = (ratio * factor) >> 96
    return ratio >> 32


def _sqrt_price_negative_tick(tick: int) -> int:
    abs_tick = abs(tick)
    ratio = _NEGATIVE_TICK_RATIOS[0] if abs_tick & 1 else Q64
    for bit, factor in enumerate(_NEGATIVE_TICK_RATIOS[1:], start=1):
        if abs_tick & (1 << bit):
            ratio = (ratio * factor) >> 64
    return ratio


def tick_index_from_sqrt_price(sqrt_price_x64: int) -> int:
    """Greatest tick whose sqrt price is <= `sqrt_price_x64`."""
    if sqrt_price_x64 < MIN_SQRT_PRICE_X64 or sqrt_price_x64 > MAX_SQRT_PRICE_X64:
        raise SqrtPriceOutOfBoundsError(
            "sqrt_price is outside the supported range.",
            context={"sqrt_price": sqrt_price_x64},
        )

    estimate = math.floor((math.log(sqrt_price_x64) - math.log(Q64)) / LOG_BASE_SQRT)
    tick = max(MIN_TICK_INDEX, min(MAX_TICK_INDEX, estimate))
    while tick > MIN_TICK_INDEX and sqrt_price_from_tick_index(tick) > sqrt_price_x64:
        tick -= 1
    while tick < MAX_TICK_INDEX and sqrt_price_from_tick_index(tick + 1) <= sqrt_price_x64:
        tick += 1
    return tick


def sqrt_price_x64_to_price(sqrt_price_x64: int) -> float:
    sqrt_price = sqrt_price_x64 / Q64
    return sqrt_price * sqrt_price
