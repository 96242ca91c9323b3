"""
Dependencias para inyección de repositorios.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.session import get_db
from app.infrastructure.repositories.payment_repository import PaymentRepository


async def get_payment_repository(
    session: AsyncSession = Depends(get_db)
) -> PaymentRepository:
    """
    Dependencia para obtener el repositorio de pagos.

    Args:
        session: Sesión de base de datos

    Returns:
        PaymentRepository: Instancia del repositorio de pagos
    """
    return PaymentRepository(session)
