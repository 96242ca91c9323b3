"""
Repositorio de créditos (tabla syncs).
Maneja las operaciones de base de datos para la entidad SyncModel.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import SyncModel
from app.shared.constants.sync_constants import CreditStatus, UNASSIGNED_USER_ID

# Tamaño de lote para UPDATE ... WHERE sync_id IN (...)
_IN_CLAUSE_CHUNK = 500


def _chunks(values: Sequence[str], size: int = _IN_CLAUSE_CHUNK) -> Iterable[Sequence[str]]:
    for start in range(0, len(values), size):
        yield values[start:start + size]


class CreditRepository:
    """Repositorio para gestionar créditos sincronizados."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_sync_id(self, sync_id: str) -> Optional[SyncModel]:
        result = await self.db.execute(
            select(SyncModel).where(SyncModel.sync_id == sync_id)
        )
        return result.scalars().first()

    async def get_processed_since(self, minimum_date: datetime) -> List[SyncModel]:
        """
        Créditos con fecha_proceso >= minimum_date (universo del sync de pagos).
        """
        result = await self.db.execute(
            select(SyncModel)
            .where(SyncModel.fecha_proceso >= minimum_date)
            .order_by(SyncModel.id)
        )
        return list(result.scalars().all())

    async def get_active_sync_ids(self) -> Set[str]:
        result = await self.db.execute(
            select(SyncModel.sync_id).where(SyncModel.status == CreditStatus.ACTIVE.value)
        )
        return {row[0] for row in result.all()}

    async def deactivate(self, sync_ids: Iterable[str]) -> int:
        """
        Marca como INACTIVE los créditos indicados.

        Returns:
            int: Filas actualizadas
        """
        ids = sorted(set(sync_ids))
        total = 0
        for chunk in _chunks(ids):
            result = await self.db.execute(
                update(SyncModel)
                .where(SyncModel.sync_id.in_(chunk))
                .values(status=CreditStatus.INACTIVE.value)
            )
            total += result.rowcount or 0
        return total

    async def upsert(self, data: Dict[str, Any], insert_only: Dict[str, Any]) -> bool:
        """
        Inserta o actualiza un crédito por sync_id.

        Args:
            data: Columnas que se escriben siempre
            insert_only: Columnas que solo se escriben al insertar (asignación)

        Returns:
            bool: True si el crédito es nuevo
        """
        existing = await self.get_by_sync_id(data["sync_id"])

        if existing:
            for column, value in data.items():
                if column != "sync_id":
                    setattr(existing, column, value)
            await self.db.flush()
            return False

        self.db.add(SyncModel(**data, **insert_only))
        await self.db.flush()
        return True

    async def get_unassigned_sync_ids(self, agencies: Sequence[str]) -> List[str]:
        """
        Créditos ACTIVE sin usuario asignado en las agencias indicadas.
        """
        result = await self.db.execute(
            select(SyncModel.sync_id)
            .where(SyncModel.user_id == UNASSIGNED_USER_ID)
            .where(SyncModel.status == CreditStatus.ACTIVE.value)
            .where(SyncModel.agencia.in_(list(agencies)))
            .order_by(SyncModel.sync_id)
        )
        return [row[0] for row in result.all()]

    async def assign_agent(self, sync_ids: Sequence[str], agent_id: int) -> int:
        """
        Asigna un agente a los créditos indicados que sigan sin asignar.
        """
        total = 0
        for chunk in _chunks(list(sync_ids)):
            result = await self.db.execute(
                update(SyncModel)
                .where(SyncModel.sync_id.in_(chunk))
                .where(SyncModel.user_id == UNASSIGNED_USER_ID)
                .values(user_id=agent_id)
            )
            total += result.rowcount or 0
        return total
