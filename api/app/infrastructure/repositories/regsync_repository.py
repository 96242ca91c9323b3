"""
Repositorio del ledger de corridas de sincronización (tabla regsyncs).

Mantiene como máximo una fila INPROCESS por cod_sync. Una corrida nueva
reutiliza la fila INPROCESS abandonada en vez de crear un duplicado.
No hay lock: el scheduler debe garantizar una sola corrida a la vez.
"""
from datetime import date
from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import RegSyncModel
from app.shared.constants.sync_constants import (
    OBSERVATION_FINISHED,
    OBSERVATION_IN_PROCESS,
    RegSyncState,
)

# Límite de la observación para no guardar trazas enormes
_MAX_OBSERVATION = 2000


class RegSyncRepository:
    """Transiciones de estado del registro de corrida."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_in_process(self, cod_sync: str) -> Optional[RegSyncModel]:
        result = await self.db.execute(
            select(RegSyncModel)
            .where(RegSyncModel.state == RegSyncState.INPROCESS.value)
            .where(RegSyncModel.cod_sync == cod_sync)
            .order_by(RegSyncModel.id)
        )
        return result.scalars().first()

    async def start_run(self, cod_sync: str, credits_count: int, day: date) -> RegSyncModel:
        """
        Crea la fila INPROCESS de la corrida o reutiliza la existente
        reseteando sus contadores.
        """
        record = await self.get_in_process(cod_sync)

        if record:
            logger.info(f"Reutilizando regsync INPROCESS id={record.id} cod_sync={cod_sync}")
            record.nro_credits = credits_count
            record.nro_syncs = 0
            record.nro_credits_new = 0
            record.observation = OBSERVATION_IN_PROCESS
            record.state = RegSyncState.INPROCESS.value
        else:
            record = RegSyncModel(
                daily=day,
                nro_credits=credits_count,
                nro_syncs=0,
                nro_credits_new=0,
                observation=OBSERVATION_IN_PROCESS,
                state=RegSyncState.INPROCESS.value,
                cod_sync=cod_sync,
            )
            self.db.add(record)

        await self.db.flush()
        return record

    async def finish_run(self, record_id: int, total: int, new: int) -> None:
        """INPROCESS -> SYNC con los contadores finales."""
        record = await self.db.get(RegSyncModel, record_id)
        if record is None:
            logger.warning(f"regsync id={record_id} no existe al finalizar la corrida")
            return
        record.state = RegSyncState.SYNC.value
        record.observation = OBSERVATION_FINISHED
        record.nro_syncs = total
        record.nro_credits_new = new
        await self.db.flush()

    async def record_null_stream(self, cod_sync: str, day: date, observation: str) -> RegSyncModel:
        """
        El feed de créditos vino nulo: INPROCESS -> ERROR - NULL, o fila
        nueva en ERROR - NULL si no había corrida abierta.
        """
        record = await self.get_in_process(cod_sync)
        if record is None:
            record = RegSyncModel(daily=day, nro_credits_new=0, cod_sync=cod_sync)
            self.db.add(record)

        record.nro_credits = 0
        record.nro_syncs = 0
        record.observation = observation[:_MAX_OBSERVATION]
        record.state = RegSyncState.ERROR_NULL.value
        await self.db.flush()
        return record

    async def record_failure(self, cod_sync: str, day: date, error: str) -> RegSyncModel:
        """
        Error no controlado en la corrida: INPROCESS -> STREAM FAIL, o fila
        nueva en ERROR si la corrida no llegó a crearse.
        """
        record = await self.get_in_process(cod_sync)

        if record:
            record.observation = f"STREAM FAIL: {error}"[:_MAX_OBSERVATION]
            record.state = RegSyncState.STREAM_FAIL.value
        else:
            record = RegSyncModel(
                daily=day,
                nro_credits=0,
                nro_syncs=0,
                nro_credits_new=0,
                observation=f"SYNC CREATE ERROR: {error}"[:_MAX_OBSERVATION],
                state=RegSyncState.ERROR.value,
                cod_sync=cod_sync,
            )
            self.db.add(record)

        await self.db.flush()
        return record
