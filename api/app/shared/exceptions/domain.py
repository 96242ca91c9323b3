"""
Errores de la sincronización con el core SEFIL.

Los jobs los capturan por registro: el registro cuenta como error y el
lote sigue. No se traducen a respuestas HTTP; los endpoints de sync
devuelven siempre el resultado estructurado del job.
"""
from typing import Any, Dict, Optional


class SyncException(Exception):
    """Base de los errores de sincronización."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class FeedUnavailableError(SyncException):
    """
    El feed respondió con error HTTP, JSON inválido o no fue alcanzable.

    Args:
        feed: creditos | pagos | contactos
        reason: motivo devuelto por el cliente SEFIL
        key: clave natural del registro consultado, si aplica
    """

    def __init__(self, feed: str, reason: str, key: Optional[str] = None):
        details = {"feed": feed, "reason": reason}
        if key:
            details["key"] = key
        super().__init__(f"Feed '{feed}' no disponible: {reason}", details)


class InvalidFeedRecordError(SyncException):
    """Registro del feed sin un campo de su clave natural."""

    def __init__(self, feed: str, field: str):
        super().__init__(
            f"Registro de '{feed}' sin campo obligatorio '{field}'",
            {"feed": feed, "field": field},
        )
