"""
Repositorio de contactos de créditos (tabla contactosyncs).
"""
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import ContactSyncModel


class ContactRepository:
    """Repositorio para contactos por clave natural (documento, sync_id)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_for_credit(self, sync_id: str) -> bool:
        result = await self.db.execute(
            select(ContactSyncModel.id).where(ContactSyncModel.sync_id == sync_id).limit(1)
        )
        return result.first() is not None

    async def get_by_key(self, documento: str, sync_id: str) -> Optional[ContactSyncModel]:
        result = await self.db.execute(
            select(ContactSyncModel)
            .where(ContactSyncModel.documento == documento)
            .where(ContactSyncModel.sync_id == sync_id)
        )
        return result.scalars().first()

    async def upsert(self, data: Dict[str, Any], sync_id: str, refresh_existing: bool) -> Optional[str]:
        """
        Inserta el contacto si no existe; si existe solo se refresca cuando
        refresh_existing es True (primer día del mes).

        Returns:
            Optional[str]: "inserted", "updated" o None si no hubo cambios
        """
        existing = await self.get_by_key(data["documento"], sync_id)

        if existing is None:
            self.db.add(ContactSyncModel(**{**data, "sync_id": sync_id}))
            await self.db.flush()
            return "inserted"

        if not refresh_existing:
            return None

        for column, value in data.items():
            if column not in ("documento", "sync_id"):
                setattr(existing, column, value)
        await self.db.flush()
        return "updated"
