"""
Repositorio de campañas (tabla campains, solo lectura).
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models import CampaignModel
from app.shared.constants.sync_constants import CAMPAIGN_STATE_ACTIVE, CAMPAIGN_TYPE_API


class CampaignRepository:
    """Consulta de campañas de cobranza."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_api_campaign(self) -> Optional[CampaignModel]:
        """
        Campaña de tipo API en estado ACTIVA.

        Se espera como máximo una; si hubiera varias se toma la de menor id.
        """
        result = await self.db.execute(
            select(CampaignModel)
            .where(CampaignModel.type_assign == CAMPAIGN_TYPE_API)
            .where(CampaignModel.state == CAMPAIGN_STATE_ACTIVE)
            .order_by(CampaignModel.id)
        )
        return result.scalars().first()
