from __future__ import annotations

import logging

from sqlalchemy import bindparam, text

from clmm_swap.application.dto.swap import SwapCommit
from clmm_swap.application.ports.swap_state_port import SwapStatePort
from clmm_swap.domain.entities.tick_array import TickArray
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import WhirlpoolStateConflictError
from clmm_swap.infrastructure.db.mappers.swap_state_mapper import map_row_to_tick_array, map_row_to_whirlpool


logger = logging.getLogger(__name__)


class SqlSwapStateRepository(SwapStatePort):
    def __init__(self, engine):
        self._engine = engine

    def get_whirlpool(self, *, address: str) -> Whirlpool | None:
        sql = """
            SELECT
                address,
                token_mint_a,
                token_mint_b,
                token_vault_a,
                token_vault_b,
                tick_spacing,
                fee_rate,
                sqrt_price,
                tick_current_index,
                liquidity
            FROM public.whirlpools
            WHERE address = :address
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"address": address}).mappings().first()
        if row is None:
            return None
        return map_row_to_whirlpool(row)

    def get_tick_arrays(self, *, whirlpool: str, start_tick_indices: list[int]) -> list[TickArray | None]:
        if not start_tick_indices:
            return []

        sql = text(
            """
            SELECT start_tick_index, data
            FROM public.tick_arrays
            WHERE whirlpool = :whirlpool
              AND start_tick_index IN :start_tick_indices
            """
        ).bindparams(bindparam("start_tick_indices", expanding=True))

        with self._engine.connect() as conn:
            rows = conn.execute(
                sql,
                {"whirlpool": whirlpool, "start_tick_indices": list(start_tick_indices)},
            ).mappings().all()

        by_start = {int(row["start_tick_index"]): map_row_to_tick_array(row) for row in rows}
        if len(by_start) < len(set(start_tick_indices)):
            logger.debug(
                "swap_state_repo: missing_tick_arrays whirlpool=%s requested=%s found=%s",
                whirlpool,
                list(start_tick_indices),
                sorted(by_start),
            )
        return [by_start.get(start) for start in start_tick_indices]

    def commit_swaps(self, *, commits: list[SwapCommit]) -> None:
        update_sql = text(
            """
            UPDATE public.whirlpools
            SET sqrt_price = :next_sqrt_price,
                tick_current_index = :next_tick_index,
                liquidity = :next_liquidity,
                updated_at = now()
            WHERE address = :address
              AND sqrt_price = :sqrt_price
              AND tick_current_index = :tick_current_index
              AND liquidity = :liquidity
            """
        )
        transfer_sql = text(
            """
            INSERT INTO public.token_transfers (whirlpool, mint, source, destination, amount)
            VALUES (:whirlpool, :mint, :source, :destination, :amount)
            """
        )

        with self._engine.begin() as conn:
            for commit in commits:
                whirlpool = commit.whirlpool
                result = conn.execute(
                    update_sql,
                    {
                        "address": whirlpool.address,
                        "sqrt_price": whirlpool.sqrt_price,
                        "tick_current_index": whirlpool.tick_current_index,
                        "liquidity": whirlpool.liquidity,
                        "next_sqrt_price": commit.update.next_sqrt_price,
                        "next_tick_index": commit.update.next_tick_index,
                        "next_liquidity": commit.update.next_liquidity,
                    },
                )
                if result.rowcount != 1:
                    # raising inside begin() rolls back every statement of this call
                    raise WhirlpoolStateConflictError(
                        "Whirlpool state changed since it was read.",
                        context={"whirlpool": whirlpool.address},
                    )

                if commit.transfers:
                    conn.execute(
                        transfer_sql,
                        [
                            {
                                "whirlpool": transfer.whirlpool,
                                "mint": transfer.mint,
                                "source": transfer.source,
                                "destination": transfer.destination,
                                "amount": transfer.amount,
                            }
                            for transfer in commit.transfers
                        ],
                    )

        logger.debug(
            "swap_state_repo: commit_swaps whirlpools=%s",
            [commit.whirlpool.address for commit in commits],
        )
