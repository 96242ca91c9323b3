"""
Mapeos feed SEFIL -> columnas locales, uno por feed.

Aquí se decide:
- qué campos del JSON se persisten y en qué columna
- cómo se transforman (decimales, enteros, JSON opaco)
- qué campos forman la clave natural (required=True)

Los nombres de campo del feed se respetan tal cual llegan, incluidos
los errores de tipeo del upstream (p.ej. "collertion_state").
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from app.shared.exceptions.domain import InvalidFeedRecordError

from .types import FeedRecord, FieldMapping


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convierte montos del feed (num o texto) a Decimal; vacío -> None."""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return None


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Convierte a entero de forma tolerante ("12", 12.0, " 3 ").

    Valores no numéricos devuelven default.
    """
    if value is None or value == "":
        return default
    try:
        return int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return default


def to_text(value: Any) -> Optional[str]:
    """Claves y códigos siempre como texto (el feed mezcla int y str)."""
    if value is None:
        return None
    return str(value).strip()


def to_json_text(value: Any) -> Optional[str]:
    """Serializa estructuras (direcciones, listas de teléfonos) como texto opaco."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _days_past_due(value: Any) -> int:
    return to_int(value, default=0)


CREDIT_MAPPINGS: list[FieldMapping] = [
    FieldMapping("sync_id", "sync_id", transform=to_text, required=True),
    FieldMapping("collection_group", "collection_group", transform=to_text),
    FieldMapping("collection_order", "collection_order", transform=to_text),
    FieldMapping("monthly_fee_amount", "monthly_fee_amount", transform=to_decimal),
    FieldMapping("total_amount", "total_amount", transform=to_decimal),
    FieldMapping("paid_fees", "paid_fees", transform=to_int),
    FieldMapping("pending_fees", "pending_fees", transform=to_int),
    FieldMapping("total_fees", "total_fees", transform=to_int),
    FieldMapping("Agencia", "agencia", transform=to_text),
    FieldMapping("Cod_agencia", "cod_agencia", transform=to_text),
    FieldMapping("debit", "debit", transform=to_text),
    FieldMapping("collertion_state", "collection_state", transform=to_text),
    FieldMapping("days_past_due", "days_past_due", transform=_days_past_due),
    FieldMapping("payment_date", "payment_date", transform=to_text),
    FieldMapping("award_date", "award_date", transform=to_text),
    FieldMapping("due_date", "due_date", transform=to_text),
    FieldMapping("frequency", "frequency", transform=to_text),
    FieldMapping("valor_org", "valor_org", transform=to_decimal),
    FieldMapping("saldo_capital", "saldo_capital", transform=to_decimal),
    FieldMapping("interes", "interes", transform=to_decimal),
    FieldMapping("mora", "mora", transform=to_decimal),
    FieldMapping("seguro_desgravamen", "seguro_desgravamen", transform=to_decimal),
    FieldMapping("gastos_cobranza", "gastos_cobranza", transform=to_decimal),
    FieldMapping("gastos_judiciales", "gastos_judiciales", transform=to_decimal),
    FieldMapping("otros_valores", "otros_valores", transform=to_decimal),
    FieldMapping("oferta", "oferta", transform=to_text),
    FieldMapping("compromiso", "compromiso", transform=to_text),
    FieldMapping("notificacion", "notificacion", transform=to_text),
]

PAYMENT_MAPPINGS: list[FieldMapping] = [
    FieldMapping("sync_id", "sync_id", transform=to_text, required=True),
    FieldMapping("fee_id", "fee_id", transform=to_text, required=True),
    FieldMapping("payment_id", "payment_id", transform=to_text, required=True),
    FieldMapping("payment_type", "payment_type", transform=to_text),
    FieldMapping("payment_value", "payment_value", transform=to_decimal),
    FieldMapping("payment_date", "payment_date", transform=to_text),
    FieldMapping("capital", "capital", transform=to_decimal),
    FieldMapping("interes", "interes", transform=to_decimal),
    FieldMapping("interes_mora", "mora", transform=to_decimal),
    FieldMapping("otros", "otros", transform=to_decimal),
]

CONTACT_MAPPINGS: list[FieldMapping] = [
    FieldMapping("documento", "documento", transform=to_text, required=True),
    FieldMapping("sync_client_id", "sync_client_id", transform=to_text),
    FieldMapping("fullName", "full_name", transform=to_text),
    FieldMapping("type", "type", transform=to_text),
    FieldMapping("Sexo", "sexo", transform=to_text),
    FieldMapping("Estado_civil", "estado_civil", transform=to_text),
    FieldMapping("sector_economico", "sector_economico", transform=to_text),
    FieldMapping("mobile_phones", "mobile_phones", transform=to_json_text),
    FieldMapping("landline_phones", "landline_phones", transform=to_json_text),
    FieldMapping("email", "email", transform=to_text),
    FieldMapping("direccion_domicilio", "direccion_domicilio", transform=to_json_text),
    FieldMapping("direccion_trabajo", "direccion_trabajo", transform=to_json_text),
]


def map_feed_record(
    record: FeedRecord,
    *,
    mappings: list[FieldMapping],
    feed: str,
) -> dict[str, Any]:
    """
    Mapea un registro del feed a un dict de columnas listo para upsert.

    Reglas:
    - Campo ausente o null -> None (o error si required)
    - Cada FieldMapping decide cómo transformar el valor
    """
    row: dict[str, Any] = {}

    for m in mappings:
        raw = record.get(m.feed_field)
        if m.required and (raw is None or raw == ""):
            raise InvalidFeedRecordError(feed, m.feed_field)
        row[m.column] = m.transform(raw) if m.transform else raw

    return row
