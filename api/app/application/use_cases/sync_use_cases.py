"""
Casos de uso de sincronización con el core de cobranzas SEFIL.

Dos jobs, invocados por un scheduler externo (HTTP o CLI):
- PaymentSyncUseCases.sync_payments: pagos de los créditos procesados
  desde la fecha de corte.
- CreditSyncUseCases.exec_sync: cartera completa + contactos + asignación
  + distribución, con registro de la corrida en regsyncs.

Procesamiento secuencial y commit por registro: un registro que falla se
revierte, se registra con su clave natural y el lote continúa. No hay
atomicidad de la corrida completa.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dto.sync_dto import CreditSyncResultDTO, PaymentSyncResultDTO
from app.application.services.assignment import assign_by_days_past_due, plan_distribution
from app.core.config import settings
from app.infrastructure.external.sefil.feed_mappings import (
    CONTACT_MAPPINGS,
    CREDIT_MAPPINGS,
    PAYMENT_MAPPINGS,
    map_feed_record,
)
from app.infrastructure.external.sefil.sefil_client import SefilClient
from app.infrastructure.external.sefil.types import FeedRecord, FeedResult, FeedStatus
from app.infrastructure.repositories.campaign_repository import CampaignRepository
from app.infrastructure.repositories.contact_repository import ContactRepository
from app.infrastructure.repositories.credit_repository import CreditRepository
from app.infrastructure.repositories.payment_repository import PaymentRepository
from app.infrastructure.repositories.regsync_repository import RegSyncRepository
from app.shared.constants.sync_constants import (
    DISTRIBUTION_AGENCIES,
    OBSERVATION_NULL_STREAM,
    CreditStatus,
)
from app.shared.exceptions.domain import FeedUnavailableError
from app.shared.utils.datetime_utils import DateTimeUtils

Clock = Callable[[], datetime]


class PaymentSyncUseCases:
    """
    Sincroniza los pagos de cada crédito con fecha_proceso >= fecha de corte.
    """

    def __init__(
        self,
        db: AsyncSession,
        client: SefilClient,
        *,
        minimum_date: Optional[datetime] = None,
        clock: Clock = DateTimeUtils.now_utc,
    ):
        self.db = db
        self.client = client
        self.credits = CreditRepository(db)
        self.payments = PaymentRepository(db)
        self.campaigns = CampaignRepository(db)
        self.minimum_date = minimum_date or settings.PAYMENTS_MINIMUM_DATE
        self._clock = clock

    async def sync_payments(self) -> PaymentSyncResultDTO:
        """
        Ejecuta el job de pagos.

        Returns:
            PaymentSyncResultDTO: contadores de créditos procesados y con error
        """
        try:
            credits = await self.credits.get_processed_since(self.minimum_date)
            sync_ids = [credit.sync_id for credit in credits]

            campaign = await self.campaigns.get_active_api_campaign()
            campaign_id = campaign.id if campaign else 0
            if campaign is None:
                logger.warning("Sin campaña API activa: los pagos se registran con campaña 0")

            as_of = DateTimeUtils.business_today(self._clock())
            logger.info(f"Sincronizando pagos de {len(sync_ids)} créditos (corte {self.minimum_date})")

            processed_count = 0
            error_count = 0

            for sync_id in sync_ids:
                try:
                    await self._process_credit_payments(sync_id, campaign_id, as_of)
                    await self.db.commit()
                    processed_count += 1
                except Exception as e:
                    await self.db.rollback()
                    error_count += 1
                    logger.error(f"Error procesando pagos del crédito sync_id={sync_id}: {e}")

            logger.success(
                f"Sincronización de pagos completada: {processed_count} procesados, {error_count} con error"
            )
            return PaymentSyncResultDTO(
                success=True,
                message="Sincronización completada",
                processed=processed_count,
                errors=error_count,
            )

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error en sincronización de pagos: {e}")
            return PaymentSyncResultDTO(
                success=False,
                message="Error en la sincronización",
                error=str(e),
            )

    async def _process_credit_payments(self, sync_id: str, campaign_id: int, as_of: date) -> int:
        """
        Descarga y guarda los pagos de un crédito.

        Raises:
            FeedUnavailableError: si el feed de pagos falla (cuenta como error)
        """
        result = await self.client.fetch_payments(sync_id, as_of)

        if result.is_failed:
            raise FeedUnavailableError("pagos", result.reason or "desconocido", key=sync_id)

        if not result.is_ok:
            logger.info(f"No se encontraron pagos sync_id={sync_id}")
            return 0

        for record in result.items:
            data = map_feed_record(
                {**record, "sync_id": record.get("sync_id") or sync_id},
                mappings=PAYMENT_MAPPINGS,
                feed="pagos",
            )
            status = await self.payments.upsert(data, campaign_id)
            logger.debug(
                f"Pago {status.value} sync_id={sync_id} fee_id={data['fee_id']} payment_id={data['payment_id']}"
            )

        return len(result.items)


@dataclass
class _SyncCounts:
    """Contadores de la corrida de créditos."""

    total: int = 0
    new: int = 0
    failed: List[str] = field(default_factory=list)


class CreditSyncUseCases:
    """
    Orquestador de la sincronización completa de créditos.

    Pasos:
    1. Descarga el feed completo (nulo o fallido -> ERROR - NULL y 400)
    2. Exige una campaña API activa (sin campaña -> 400)
    3. Crea o reutiliza la corrida INPROCESS en regsyncs
    4. Desactiva los créditos activos que no vinieron en el feed
    5. Por crédito: contactos (primera vez o día 1 del mes) y upsert con
       asignación inicial si es nuevo
    6. Distribuye los créditos sin asignar de las agencias objetivo
    7. Cierra la corrida en SYNC con los contadores
    Cualquier excepción no controlada pasa por el camino de error del ledger.
    """

    def __init__(
        self,
        db: AsyncSession,
        client: SefilClient,
        *,
        agent_ids: Optional[Sequence[int]] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = DateTimeUtils.now_utc,
    ):
        self.db = db
        self.client = client
        self.credits = CreditRepository(db)
        self.contacts = ContactRepository(db)
        self.campaigns = CampaignRepository(db)
        self.ledger = RegSyncRepository(db)
        self.agent_ids = list(agent_ids if agent_ids is not None else settings.DISTRIBUTION_AGENT_IDS)
        self._rng = rng
        self._clock = clock

    async def exec_sync(self) -> CreditSyncResultDTO:
        """
        Ejecuta la sincronización completa de créditos.

        Returns:
            CreditSyncResultDTO: status 200 con contadores, o 400 con el error
        """
        logger.info("Iniciando sincronización de créditos")
        now = self._clock()
        today = DateTimeUtils.business_today(now)

        try:
            feed = await self.client.fetch_credits(today)
            if not feed.is_ok:
                return await self._handle_null_credits(feed, today)

            campaign = await self.campaigns.get_active_api_campaign()
            if campaign is None:
                logger.warning("Sincronización abortada: no hay campaña API activa")
                return CreditSyncResultDTO(status=400, message="No hay campaña activa")
            cod_sync = campaign.cod_sync

            run = await self.ledger.start_run(cod_sync, len(feed.items), today)
            run_id = run.id
            await self.db.commit()
            logger.info(f"Corrida regsync id={run_id} cod_sync={cod_sync}: {len(feed.items)} créditos en el feed")

            rows = self._map_credits(feed.items)
            await self._deactivate_missing_credits({row["sync_id"] for row in rows})

            counts = await self._process_credits(rows, now, today)

            await self._distribute_credits_to_agents()

            await self.ledger.finish_run(run_id, counts.total, counts.new)
            await self.db.commit()

            logger.success(
                f"Sincronización de créditos correcta: {counts.total} procesados, "
                f"{counts.new} nuevos, {len(counts.failed)} con error"
            )
            return CreditSyncResultDTO(
                status=200,
                message="Sincronización correcta",
                processed=counts.total,
                new=counts.new,
            )

        except Exception as e:
            logger.error(f"Error en exec_sync: {e}")
            await self.db.rollback()
            await self._handle_sync_error(e, today)
            return CreditSyncResultDTO(
                status=400,
                message="Error en sincronización",
                error=str(e),
            )

    def _map_credits(self, records: List[FeedRecord]) -> List[Dict[str, Any]]:
        """Mapea el feed a filas; los registros sin sync_id se descartan con log."""
        rows = []
        for index, record in enumerate(records):
            try:
                rows.append(map_feed_record(record, mappings=CREDIT_MAPPINGS, feed="creditos"))
            except Exception as e:
                logger.error(f"Crédito descartado (posición {index} del feed): {e}")
        return rows

    async def _deactivate_missing_credits(self, incoming_ids: set) -> int:
        """
        Marca INACTIVE solo los créditos activos que no vinieron en el feed.
        """
        active_ids = await self.credits.get_active_sync_ids()
        missing = active_ids - incoming_ids
        deactivated = await self.credits.deactivate(missing) if missing else 0
        await self.db.commit()
        logger.info(f"Créditos desactivados por no venir en el feed: {deactivated}")
        return deactivated

    async def _process_credits(self, rows: List[Dict[str, Any]], now: datetime, today: date) -> _SyncCounts:
        counts = _SyncCounts()
        process_ts = DateTimeUtils.process_timestamp(now)

        for data in rows:
            sync_id = data["sync_id"]
            try:
                await self._sync_credit_contacts(sync_id, today)

                assignment = assign_by_days_past_due(data["days_past_due"])
                is_new = await self.credits.upsert(
                    {
                        **data,
                        "status": CreditStatus.ACTIVE.value,
                        "nro_tried": 0,
                        "fecha_proceso": process_ts,
                    },
                    insert_only=assignment.as_columns(),
                )
                await self.db.commit()

                counts.total += 1
                if is_new:
                    counts.new += 1
                    logger.debug(f"Crédito nuevo sync_id={sync_id} asignado a user_id={assignment.user_id}")

            except Exception as e:
                await self.db.rollback()
                counts.failed.append(sync_id)
                logger.error(f"Error procesando crédito en sync sync_id={sync_id}: {e}")

        if counts.failed:
            # Un crédito del feed que no se pudo guardar no debe quedar ACTIVE con datos viejos
            await self.credits.deactivate(counts.failed)
            await self.db.commit()

        return counts

    async def _sync_credit_contacts(self, sync_id: str, today: date) -> None:
        """
        Descarga contactos solo si el crédito no tiene ninguno o si es el
        primer día del mes (refresco mensual).
        """
        first_of_month = today.day == 1
        if not first_of_month and await self.contacts.exists_for_credit(sync_id):
            return

        result = await self.client.fetch_contacts(sync_id)
        if result.is_failed:
            logger.warning(f"No se pudieron consultar contactos sync_id={sync_id}: {result.reason}")
            return
        if not result.items:
            return

        for record in result.items:
            data = map_feed_record(record, mappings=CONTACT_MAPPINGS, feed="contactos")
            await self.contacts.upsert(data, sync_id, refresh_existing=first_of_month)

    async def _distribute_credits_to_agents(self) -> int:
        """
        Reparte aleatoriamente los créditos ACTIVE sin asignar de las
        agencias objetivo entre los agentes configurados.
        """
        eligible = await self.credits.get_unassigned_sync_ids(DISTRIBUTION_AGENCIES)
        plan = plan_distribution(eligible, self.agent_ids, self._rng)

        assigned = 0
        for agent_id, sync_ids in plan.items():
            assigned += await self.credits.assign_agent(sync_ids, agent_id)
        await self.db.commit()

        logger.info(f"Distribución de créditos: {assigned} de {len(eligible)} asignados a {self.agent_ids}")
        return assigned

    async def _handle_null_credits(self, feed: FeedResult, today: date) -> CreditSyncResultDTO:
        """
        El feed de créditos no trajo lista (null o fallo de transporte).
        No toca la tabla syncs.
        """
        if feed.status is FeedStatus.NO_DATA:
            observation = OBSERVATION_NULL_STREAM
        else:
            observation = f"ERROR FACES: {feed.reason}"

        campaign = await self.campaigns.get_active_api_campaign()
        if campaign:
            await self.ledger.record_null_stream(campaign.cod_sync, today, observation)
            await self.db.commit()

        logger.error(f"Lista de créditos NULL: {observation}")
        return CreditSyncResultDTO(
            status=400,
            message="Se ha recibido Lista de créditos NULL",
            error=feed.reason,
        )

    async def _handle_sync_error(self, exception: Exception, today: date) -> None:
        """Registra el error de la corrida en regsyncs si hay campaña activa."""
        try:
            campaign = await self.campaigns.get_active_api_campaign()
            if campaign is None:
                return
            await self.ledger.record_failure(campaign.cod_sync, today, str(exception))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"No se pudo registrar el error de la corrida en regsyncs: {e}")
