"""
DTOs para los jobs de sincronización con SEFIL.

Los jobs no lanzan excepciones hacia el endpoint: siempre devuelven un
resultado estructurado (status HTTP + mensaje + detalle opcional).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreditSyncResultDTO(BaseModel):
    """Resultado de la sincronización completa de créditos."""

    status: int = Field(..., description="Código HTTP equivalente (200 o 400)")
    message: str
    processed: Optional[int] = None
    new: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == 200


class PaymentSyncResultDTO(BaseModel):
    """Resultado de la sincronización de pagos."""

    success: bool
    message: str
    processed: Optional[int] = None
    errors: Optional[int] = None
    error: Optional[str] = None


class PaymentListRequestDTO(BaseModel):
    """Filtros y paginación del listado de pagos."""

    page: int = Field(1, ge=1)
    per_page: int = Field(50, ge=1, le=500)
    sync_id: Optional[str] = Field(None, description="Filtra por crédito")
    status: Optional[str] = Field(None, pattern="^(NEW|UPDATED)$")
    campaign_id: Optional[int] = Field(None, ge=0)


class PaymentItemDTO(BaseModel):
    """Pago almacenado."""

    model_config = ConfigDict(from_attributes=True)

    sync_id: str
    fee_id: str
    payment_id: str
    payment_type: Optional[str] = None
    payment_value: Optional[Decimal] = None
    payment_date: Optional[str] = None
    capital: Optional[Decimal] = None
    interes: Optional[Decimal] = None
    mora: Optional[Decimal] = None
    otros: Optional[Decimal] = None
    status: str
    campaign_id: int


class PaymentListResponseDTO(BaseModel):
    """Página de pagos."""

    items: List[PaymentItemDTO]
    total: int
    page: int
    per_page: int
