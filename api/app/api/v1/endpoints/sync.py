"""
Endpoints de sincronizacion con el core de cobranzas SEFIL.
Los invoca un scheduler externo; no son de uso interactivo.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.v1.dependencies.repository_deps import get_payment_repository
from app.api.v1.dependencies.use_case_deps import (
    get_credit_sync_use_cases,
    get_payment_sync_use_cases,
)
from app.application.dto.sync_dto import (
    CreditSyncResultDTO,
    PaymentItemDTO,
    PaymentListRequestDTO,
    PaymentListResponseDTO,
    PaymentSyncResultDTO,
)
from app.application.use_cases.sync_use_cases import CreditSyncUseCases, PaymentSyncUseCases
from app.infrastructure.repositories.payment_repository import PaymentRepository


router = APIRouter(prefix="/syncs", tags=["Sync"])


@router.get(
    "/credits",
    response_model=CreditSyncResultDTO,
    summary="Sincronizar cartera completa de creditos"
)
async def sync_credits(
    use_cases: CreditSyncUseCases = Depends(get_credit_sync_use_cases),
) -> JSONResponse:
    """
    Ejecuta la sincronizacion completa de creditos, contactos y asignacion.

    Responde con el status del resultado (200 o 400).
    """
    result = await use_cases.exec_sync()
    return JSONResponse(
        status_code=result.status,
        content=result.model_dump(exclude_none=True),
    )


@router.get(
    "/pays",
    response_model=PaymentSyncResultDTO,
    summary="Sincronizar pagos de creditos"
)
async def sync_pays(
    use_cases: PaymentSyncUseCases = Depends(get_payment_sync_use_cases),
) -> JSONResponse:
    """
    Ejecuta la sincronizacion de pagos.

    Returns:
        {success, message, processed, errors} o, ante error fatal,
        {success: false, message, error} con status 500
    """
    result = await use_cases.sync_payments()
    status_code = status.HTTP_200_OK if result.success else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(exclude_none=True),
    )


@router.post(
    "/pays/list",
    response_model=PaymentListResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Listar pagos sincronizados"
)
async def list_pays(
    request: PaymentListRequestDTO,
    repository: PaymentRepository = Depends(get_payment_repository),
) -> PaymentListResponseDTO:
    """Listado paginado de pagos, mas recientes primero."""
    items, total = await repository.list_paginated(
        page=request.page,
        per_page=request.per_page,
        sync_id=request.sync_id,
        status=request.status,
        campaign_id=request.campaign_id,
    )
    logger.debug(f"Listado de pagos: pagina {request.page}, {len(items)} de {total}")
    return PaymentListResponseDTO(
        items=[PaymentItemDTO.model_validate(item) for item in items],
        total=total,
        page=request.page,
        per_page=request.per_page,
    )
