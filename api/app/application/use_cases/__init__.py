"""
Casos de uso de la aplicacion.
"""
from .sync_use_cases import CreditSyncUseCases, PaymentSyncUseCases

__all__ = ["CreditSyncUseCases", "PaymentSyncUseCases"]
