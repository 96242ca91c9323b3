"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import (
    CreditSyncResultDTO,
    PaymentSyncResultDTO,
    PaymentListRequestDTO,
    PaymentItemDTO,
    PaymentListResponseDTO,
)

__all__ = [
    "CreditSyncResultDTO",
    "PaymentSyncResultDTO",
    "PaymentListRequestDTO",
    "PaymentItemDTO",
    "PaymentListResponseDTO",
]
