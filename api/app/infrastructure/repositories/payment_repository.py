"""
Repositorio de pagos de cobranza (tabla collection_payments).
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import CollectionPaymentModel
from app.shared.constants.sync_constants import PaymentStatus

_KEY_COLUMNS = ("sync_id", "fee_id", "payment_id")


class PaymentRepository:
    """Repositorio para gestionar pagos por clave natural (sync_id, fee_id, payment_id)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_key(self, sync_id: str, fee_id: str, payment_id: str) -> Optional[CollectionPaymentModel]:
        result = await self.db.execute(
            select(CollectionPaymentModel)
            .where(CollectionPaymentModel.sync_id == sync_id)
            .where(CollectionPaymentModel.fee_id == fee_id)
            .where(CollectionPaymentModel.payment_id == payment_id)
        )
        return result.scalars().first()

    async def upsert(self, data: Dict[str, Any], campaign_id: int) -> PaymentStatus:
        """
        Inserta el pago (status NEW) o actualiza el existente (status UPDATED).

        Args:
            data: Columnas mapeadas desde el feed, incluida la clave natural
            campaign_id: Campaña activa al momento del sync (0 si no hay)

        Returns:
            PaymentStatus: NEW o UPDATED
        """
        existing = await self.get_by_key(data["sync_id"], data["fee_id"], data["payment_id"])

        if existing:
            for column, value in data.items():
                if column not in _KEY_COLUMNS:
                    setattr(existing, column, value)
            existing.status = PaymentStatus.UPDATED.value
            existing.campaign_id = campaign_id
            await self.db.flush()
            return PaymentStatus.UPDATED

        self.db.add(CollectionPaymentModel(
            **data,
            status=PaymentStatus.NEW.value,
            campaign_id=campaign_id,
        ))
        await self.db.flush()
        return PaymentStatus.NEW

    async def list_paginated(
        self,
        *,
        page: int,
        per_page: int,
        sync_id: Optional[str] = None,
        status: Optional[str] = None,
        campaign_id: Optional[int] = None,
    ) -> Tuple[List[CollectionPaymentModel], int]:
        """
        Lista pagos con filtros opcionales, más recientes primero.

        Returns:
            Tuple: (pagos de la página, total que cumple los filtros)
        """
        filters = []
        if sync_id:
            filters.append(CollectionPaymentModel.sync_id == sync_id)
        if status:
            filters.append(CollectionPaymentModel.status == status)
        if campaign_id is not None:
            filters.append(CollectionPaymentModel.campaign_id == campaign_id)

        count_query = select(func.count()).select_from(CollectionPaymentModel)
        page_query = select(CollectionPaymentModel)
        for condition in filters:
            count_query = count_query.where(condition)
            page_query = page_query.where(condition)

        total = await self.db.scalar(count_query)

        result = await self.db.execute(
            page_query
            .order_by(CollectionPaymentModel.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        return list(result.scalars().all()), int(total or 0)
