"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.sync_use_cases import CreditSyncUseCases, PaymentSyncUseCases
from app.infrastructure.database.session import get_db
from app.infrastructure.external.sefil.sefil_client import SefilClient


def get_sefil_client() -> SefilClient:
    """
    Dependencia para obtener el cliente del feed SEFIL.

    Returns:
        SefilClient: Cliente configurado desde settings
    """
    return SefilClient.from_settings()


async def get_credit_sync_use_cases(
    db: AsyncSession = Depends(get_db),
    client: SefilClient = Depends(get_sefil_client),
) -> CreditSyncUseCases:
    """
    Dependencia para obtener el caso de uso de sincronizacion de creditos.

    Args:
        db: Sesion de base de datos
        client: Cliente del feed SEFIL

    Returns:
        CreditSyncUseCases: Orquestador del sync completo
    """
    return CreditSyncUseCases(db, client)


async def get_payment_sync_use_cases(
    db: AsyncSession = Depends(get_db),
    client: SefilClient = Depends(get_sefil_client),
) -> PaymentSyncUseCases:
    """
    Dependencia para obtener el caso de uso de sincronizacion de pagos.
    """
    return PaymentSyncUseCases(db, client)
