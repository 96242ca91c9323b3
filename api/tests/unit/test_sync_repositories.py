"""
Tests de los repositorios de sincronización sobre SQLite en memoria.
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.infrastructure.database.models import (
    CampaignModel,
    CollectionPaymentModel,
    RegSyncModel,
    SyncModel,
)
from app.infrastructure.repositories.campaign_repository import CampaignRepository
from app.infrastructure.repositories.contact_repository import ContactRepository
from app.infrastructure.repositories.credit_repository import CreditRepository
from app.infrastructure.repositories.payment_repository import PaymentRepository
from app.infrastructure.repositories.regsync_repository import RegSyncRepository
from app.shared.constants.sync_constants import PaymentStatus, RegSyncState


DAY = date(2025, 10, 15)


def _payment(payment_id="P1", value="50.00", sync_id="C1", fee_id="1"):
    return {
        "sync_id": sync_id,
        "fee_id": fee_id,
        "payment_id": payment_id,
        "payment_value": Decimal(value),
    }


async def _count(db, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


# --- créditos ---


@pytest.mark.asyncio
async def test_credit_upsert_keeps_assignment_on_update(db_session):
    repo = CreditRepository(db_session)

    is_new = await repo.upsert(
        {"sync_id": "C1", "days_past_due": 0},
        insert_only={"user_id": 9, "tray": "PENDIENTE", "status_management": "PENDIENTE"},
    )
    assert is_new is True

    credit = await repo.get_by_sync_id("C1")
    credit.user_id = 44
    credit.tray = "GESTIONADO"
    await db_session.commit()

    is_new = await repo.upsert(
        {"sync_id": "C1", "days_past_due": 30},
        insert_only={"user_id": 15, "tray": "PENDIENTE", "status_management": "PENDIENTE"},
    )
    await db_session.commit()

    credit = await repo.get_by_sync_id("C1")
    assert is_new is False
    assert credit.days_past_due == 30
    assert credit.user_id == 44
    assert credit.tray == "GESTIONADO"
    assert await _count(db_session, SyncModel) == 1


@pytest.mark.asyncio
async def test_credit_deactivate_and_active_ids(db_session):
    db_session.add_all([
        SyncModel(sync_id="A", status="ACTIVE"),
        SyncModel(sync_id="B", status="ACTIVE"),
        SyncModel(sync_id="Z", status="INACTIVE"),
    ])
    await db_session.commit()
    repo = CreditRepository(db_session)

    assert await repo.get_active_sync_ids() == {"A", "B"}

    assert await repo.deactivate(["B"]) == 1
    await db_session.commit()

    assert await repo.get_active_sync_ids() == {"A"}


@pytest.mark.asyncio
async def test_credit_unassigned_filters_agency_status_and_user(db_session):
    db_session.add_all([
        SyncModel(sync_id="1", agencia="ZAMORA", user_id=0, status="ACTIVE"),
        SyncModel(sync_id="2", agencia="ZAMORA", user_id=15, status="ACTIVE"),
        SyncModel(sync_id="3", agencia="ZAMORA", user_id=0, status="INACTIVE"),
        SyncModel(sync_id="4", agencia="LOJA", user_id=0, status="ACTIVE"),
        SyncModel(sync_id="5", agencia="MILAGRO", user_id=0, status="ACTIVE"),
    ])
    await db_session.commit()
    repo = CreditRepository(db_session)

    assert await repo.get_unassigned_sync_ids(["ZAMORA", "MILAGRO"]) == ["1", "5"]


@pytest.mark.asyncio
async def test_credit_assign_agent_only_touches_unassigned(db_session):
    db_session.add_all([
        SyncModel(sync_id="1", user_id=0),
        SyncModel(sync_id="2", user_id=15),
    ])
    await db_session.commit()
    repo = CreditRepository(db_session)

    assert await repo.assign_agent(["1", "2"], 22) == 1
    await db_session.commit()

    assert (await repo.get_by_sync_id("1")).user_id == 22
    assert (await repo.get_by_sync_id("2")).user_id == 15


# --- pagos ---


@pytest.mark.asyncio
async def test_payment_upsert_new_then_updated_single_row(db_session):
    repo = PaymentRepository(db_session)

    assert await repo.upsert(_payment(value="50.00"), campaign_id=7) is PaymentStatus.NEW
    await db_session.commit()
    assert await repo.upsert(_payment(value="75.00"), campaign_id=8) is PaymentStatus.UPDATED
    await db_session.commit()

    payment = await repo.get_by_key("C1", "1", "P1")
    assert payment.status == "UPDATED"
    assert payment.payment_value == Decimal("75.00")
    assert payment.campaign_id == 8
    assert await _count(db_session, CollectionPaymentModel) == 1


@pytest.mark.asyncio
async def test_payment_list_paginated_filters_and_orders(db_session):
    repo = PaymentRepository(db_session)
    for i in range(5):
        await repo.upsert(_payment(payment_id=f"P{i}"), campaign_id=7)
    await repo.upsert(_payment(payment_id="X", sync_id="C2"), campaign_id=0)
    await db_session.commit()
    await repo.upsert(_payment(payment_id="P0"), campaign_id=7)
    await db_session.commit()

    items, total = await repo.list_paginated(page=1, per_page=2, sync_id="C1")
    assert total == 5
    assert [p.payment_id for p in items] == ["P4", "P3"]

    items, total = await repo.list_paginated(page=3, per_page=2, sync_id="C1")
    assert [p.payment_id for p in items] == ["P0"]

    items, total = await repo.list_paginated(page=1, per_page=50, status="UPDATED")
    assert total == 1
    assert items[0].payment_id == "P0"

    items, total = await repo.list_paginated(page=1, per_page=50, campaign_id=0)
    assert total == 1
    assert items[0].sync_id == "C2"

    items, total = await repo.list_paginated(page=1, per_page=50)
    assert total == 6


# --- contactos ---


@pytest.mark.asyncio
async def test_contact_upsert_respects_refresh_flag(db_session):
    repo = ContactRepository(db_session)
    data = {"documento": "110", "full_name": "ANA"}

    assert await repo.exists_for_credit("C1") is False
    assert await repo.upsert(data, "C1", refresh_existing=False) == "inserted"
    await db_session.commit()
    assert await repo.exists_for_credit("C1") is True

    assert await repo.upsert({**data, "full_name": "ANA MARIA"}, "C1", refresh_existing=False) is None
    assert (await repo.get_by_key("110", "C1")).full_name == "ANA"

    assert await repo.upsert({**data, "full_name": "ANA MARIA"}, "C1", refresh_existing=True) == "updated"
    await db_session.commit()
    assert (await repo.get_by_key("110", "C1")).full_name == "ANA MARIA"


@pytest.mark.asyncio
async def test_same_document_on_two_credits_is_two_contacts(db_session):
    repo = ContactRepository(db_session)
    await repo.upsert({"documento": "110"}, "C1", refresh_existing=False)
    await repo.upsert({"documento": "110"}, "C2", refresh_existing=False)
    await db_session.commit()

    assert await repo.exists_for_credit("C1")
    assert await repo.exists_for_credit("C2")


# --- campañas ---


@pytest.mark.asyncio
async def test_active_api_campaign_lookup(db_session):
    db_session.add_all([
        CampaignModel(id=1, type_assign="manual", state="ACTIVA", cod_sync="M"),
        CampaignModel(id=2, type_assign="api", state="CERRADA", cod_sync="OLD"),
    ])
    await db_session.commit()
    repo = CampaignRepository(db_session)

    assert await repo.get_active_api_campaign() is None

    db_session.add(CampaignModel(id=3, type_assign="api", state="ACTIVA", cod_sync="SEFIL01"))
    await db_session.commit()

    campaign = await repo.get_active_api_campaign()
    assert campaign.id == 3


# --- ledger ---


@pytest.mark.asyncio
async def test_start_run_reuses_in_process_row(db_session):
    ledger = RegSyncRepository(db_session)

    first = await ledger.start_run("SEFIL01", 10, DAY)
    first.nro_syncs = 4
    first.nro_credits_new = 2
    await db_session.commit()

    second = await ledger.start_run("SEFIL01", 12, DAY)
    await db_session.commit()

    assert second.id == first.id
    assert second.nro_credits == 12
    assert second.nro_syncs == 0
    assert second.nro_credits_new == 0
    assert second.state == "INPROCESS"
    assert await _count(db_session, RegSyncModel) == 1


@pytest.mark.asyncio
async def test_finish_run_closes_in_sync(db_session):
    ledger = RegSyncRepository(db_session)
    run = await ledger.start_run("SEFIL01", 3, DAY)
    await db_session.commit()

    await ledger.finish_run(run.id, total=3, new=1)
    await db_session.commit()

    record = await db_session.get(RegSyncModel, run.id)
    assert record.state == RegSyncState.SYNC.value
    assert record.observation == "PROCESS FINISH"
    assert (record.nro_syncs, record.nro_credits_new) == (3, 1)
    assert await ledger.get_in_process("SEFIL01") is None


@pytest.mark.asyncio
async def test_record_null_stream_with_and_without_open_run(db_session):
    ledger = RegSyncRepository(db_session)

    created = await ledger.record_null_stream("SEFIL01", DAY, "LLEGO UN STREAM NULO - ERROR FACES")
    await db_session.commit()
    assert created.state == "ERROR - NULL"
    assert created.nro_credits == 0

    run = await ledger.start_run("SEFIL01", 8, DAY)
    await db_session.commit()
    updated = await ledger.record_null_stream("SEFIL01", DAY, "ERROR FACES: HTTP 500")
    await db_session.commit()

    assert updated.id == run.id
    assert updated.state == "ERROR - NULL"
    assert updated.observation == "ERROR FACES: HTTP 500"
    assert await _count(db_session, RegSyncModel) == 2


@pytest.mark.asyncio
async def test_record_failure_branches(db_session):
    ledger = RegSyncRepository(db_session)

    created = await ledger.record_failure("SEFIL01", DAY, "boom")
    await db_session.commit()
    assert created.state == "ERROR"
    assert created.observation == "SYNC CREATE ERROR: boom"

    run = await ledger.start_run("SEFIL01", 8, DAY)
    await db_session.commit()
    failed = await ledger.record_failure("SEFIL01", DAY, "x" * 5000)
    await db_session.commit()

    assert failed.id == run.id
    assert failed.state == "STREAM FAIL"
    assert failed.observation.startswith("STREAM FAIL: x")
    assert len(failed.observation) == 2000
