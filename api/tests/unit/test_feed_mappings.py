from __future__ import annotations

import json
from decimal import Decimal

import pytest

from app.infrastructure.external.sefil.feed_mappings import (
    CONTACT_MAPPINGS,
    CREDIT_MAPPINGS,
    PAYMENT_MAPPINGS,
    map_feed_record,
    to_decimal,
    to_int,
)
from app.shared.exceptions.domain import InvalidFeedRecordError

from sefil_fakes import make_contact, make_credit, make_payment


def test_credit_mapping_renames_upstream_fields() -> None:
    row = map_feed_record(make_credit(12345, days_past_due="16"), mappings=CREDIT_MAPPINGS, feed="creditos")

    assert row["sync_id"] == "12345"
    assert row["agencia"] == "LOJA"
    assert row["cod_agencia"] == "001"
    assert row["collection_state"] == "VENCIDO"
    assert row["days_past_due"] == 16
    assert row["paid_fees"] == 3
    assert row["monthly_fee_amount"] == Decimal("120.50")
    assert row["otros_valores"] is None


def test_credit_mapping_days_past_due_defaults_to_zero() -> None:
    row = map_feed_record(make_credit("C1", days_past_due=None), mappings=CREDIT_MAPPINGS, feed="creditos")
    assert row["days_past_due"] == 0


def test_credit_without_sync_id_is_rejected() -> None:
    record = make_credit("C1")
    record["sync_id"] = None
    with pytest.raises(InvalidFeedRecordError):
        map_feed_record(record, mappings=CREDIT_MAPPINGS, feed="creditos")


def test_payment_mapping_moves_interes_mora_to_mora() -> None:
    row = map_feed_record(make_payment("C1"), mappings=PAYMENT_MAPPINGS, feed="pagos")
    assert row["mora"] == Decimal("2.00")
    assert "interes_mora" not in row
    assert (row["sync_id"], row["fee_id"], row["payment_id"]) == ("C1", "1", "P1")


def test_contact_mapping_serializes_structures_as_text() -> None:
    row = map_feed_record(make_contact("C1"), mappings=CONTACT_MAPPINGS, feed="contactos")

    assert row["full_name"] == "ANA TORRES"
    assert json.loads(row["direccion_domicilio"]) == {"calle": "Bolivar 12", "ciudad": "Loja"}
    assert row["direccion_trabajo"] is None
    assert json.loads(row["mobile_phones"]) == ["0991234567"]
    assert "sync_id" not in row


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), ("", None), ("1,250.40", Decimal("1250.40")), (3, Decimal("3")), ("abc", None)],
)
def test_to_decimal(value, expected) -> None:
    assert to_decimal(value) == expected


def test_to_int_is_tolerant() -> None:
    assert to_int(" 7 ") == 7
    assert to_int(7.0) == 7
    assert to_int("x", default=0) == 0
    assert to_int(None) is None
