"""
Integración one-way con el core de cobranzas SEFIL.

Este paquete no escribe en la base local: solo consulta los feeds de
créditos, pagos y contactos y los normaliza a FeedResult y a filas
listas para upsert.
"""
from .sefil_client import SefilClient
from .types import FeedResult, FeedStatus, FieldMapping

__all__ = ["SefilClient", "FeedResult", "FeedStatus", "FieldMapping"]
