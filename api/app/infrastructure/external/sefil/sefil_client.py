"""
Cliente del core de cobranzas SEFIL.

Tres feeds, todos POST form-encoded con respuesta JSON:
- créditos:  {credFechaConsulta}                      -> {ListaCreditosSEFIL: [...] | null}
- pagos:     {credNumeroOperacion, credFechaConsulta} -> {ListaPagosSEFIL: [...] | null}
- contactos: {credNumeroOperacion}                    -> {ListaContactosSEFIL: [...] | null}

Ningún método lanza excepciones de transporte: todo se normaliza a
FeedResult (OK / NO_DATA / FAILED). El caso de uso decide qué hacer con
cada estado.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

import httpx
from loguru import logger

from app.core.config import settings
from app.shared.utils.datetime_utils import DateTimeUtils

from .types import FeedRecord, FeedResult

CREDITS_LIST_FIELD = "ListaCreditosSEFIL"
PAYMENTS_LIST_FIELD = "ListaPagosSEFIL"
CONTACTS_LIST_FIELD = "ListaContactosSEFIL"


class SefilClient:
    """
    Cliente HTTP del feed SEFIL.

    Abre un httpx.AsyncClient por llamada. `transport` permite inyectar
    un httpx.MockTransport en tests.
    """

    def __init__(
        self,
        *,
        credits_url: str,
        payments_url: str,
        contacts_url: str,
        timeout_s: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.credits_url = credits_url
        self.payments_url = payments_url
        self.contacts_url = contacts_url
        self._timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "SefilClient":
        return cls(
            credits_url=settings.SEFIL_CREDITS_URL,
            payments_url=settings.SEFIL_PAYMENTS_URL,
            contacts_url=settings.SEFIL_CONTACTS_URL,
            timeout_s=settings.SEFIL_TIMEOUT_S,
            transport=transport,
        )

    async def fetch_credits(self, as_of: date) -> FeedResult[FeedRecord]:
        """
        Descarga la cartera completa vigente a la fecha indicada.

        Args:
            as_of: Fecha de consulta (calendario de negocio)
        """
        return await self._post_list(
            self.credits_url,
            {"credFechaConsulta": DateTimeUtils.to_feed_date(as_of)},
            list_field=CREDITS_LIST_FIELD,
            context={"feed": "creditos"},
        )

    async def fetch_payments(self, sync_id: str, as_of: date) -> FeedResult[FeedRecord]:
        """Pagos de un crédito a la fecha indicada."""
        return await self._post_list(
            self.payments_url,
            {
                "credNumeroOperacion": sync_id,
                "credFechaConsulta": DateTimeUtils.to_feed_date(as_of),
            },
            list_field=PAYMENTS_LIST_FIELD,
            context={"feed": "pagos", "sync_id": sync_id},
        )

    async def fetch_contacts(self, sync_id: str) -> FeedResult[FeedRecord]:
        """Contactos (titular, garantes, referencias) de un crédito."""
        return await self._post_list(
            self.contacts_url,
            {"credNumeroOperacion": sync_id},
            list_field=CONTACTS_LIST_FIELD,
            context={"feed": "contactos", "sync_id": sync_id},
        )

    async def _post_list(
        self,
        url: str,
        form: dict[str, Any],
        *,
        list_field: str,
        context: dict[str, Any],
    ) -> FeedResult[FeedRecord]:
        """
        POST form-encoded y extracción del campo lista.

        - 2xx con lista     -> OK
        - 2xx sin campo/null -> NO_DATA
        - no-2xx, error de red o JSON inválido -> FAILED
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                response = await client.post(url, data=form)
        except httpx.HTTPError as e:
            logger.error(f"Excepción consultando SEFIL {context}: {e}")
            return FeedResult.failed(f"{type(e).__name__}: {e}")

        if not response.is_success:
            logger.error(f"Error en respuesta SEFIL {context}: status={response.status_code}")
            return FeedResult.failed(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Respuesta SEFIL no es JSON válido {context}: {e}")
            return FeedResult.failed("Respuesta no es JSON válido")

        items = payload.get(list_field) if isinstance(payload, dict) else None
        if items is None:
            logger.info(f"SEFIL no devolvió '{list_field}' {context}")
            return FeedResult.no_data()

        if not isinstance(items, list):
            logger.error(f"'{list_field}' no es una lista {context}: {type(items).__name__}")
            return FeedResult.failed(f"'{list_field}' no es una lista")

        return FeedResult.ok(items)
