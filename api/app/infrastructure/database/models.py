"""
Modelos de base de datos (ORM).

Las tablas y varios nombres de columna ("Agencia", "fullName", "campaing")
vienen del esquema heredado que consumen otros sistemas de cobranza; se
mapean a atributos snake_case.
"""
from sqlalchemy import Column, String, Integer, DateTime, Date, Text, Numeric, UniqueConstraint
from sqlalchemy.sql import func

from app.infrastructure.database.session import Base
from app.shared.constants.sync_constants import (
    CreditStatus,
    PaymentStatus,
    RegSyncState,
    UNASSIGNED_USER_ID,
)


Money = Numeric(14, 2)


class SyncModel(Base):
    """
    Credito en cobranza sincronizado desde SEFIL.

    Una fila por sync_id. status indica si el credito vino en el ultimo
    feed completo; user_id/tray/status_management se asignan solo al
    insertar y se conservan en las actualizaciones.
    """

    __tablename__ = "syncs"

    id = Column(Integer, primary_key=True, index=True)
    sync_id = Column(String(50), nullable=False, unique=True, index=True)
    collection_group = Column(String(100), nullable=True)
    collection_order = Column(String(100), nullable=True)
    monthly_fee_amount = Column(Money, nullable=True)
    total_amount = Column(Money, nullable=True)
    paid_fees = Column(Integer, nullable=True)
    pending_fees = Column(Integer, nullable=True)
    total_fees = Column(Integer, nullable=True)
    agencia = Column("Agencia", String(150), nullable=True, index=True)
    cod_agencia = Column("Cod_agencia", String(50), nullable=True)
    debit = Column(String(50), nullable=True)
    collection_state = Column(String(100), nullable=True)
    days_past_due = Column(Integer, nullable=False, default=0)
    payment_date = Column(String(30), nullable=True)
    award_date = Column(String(30), nullable=True)
    due_date = Column(String(30), nullable=True)
    frequency = Column(String(50), nullable=True)

    # Desglose monetario
    valor_org = Column(Money, nullable=True)
    saldo_capital = Column(Money, nullable=True)
    interes = Column(Money, nullable=True)
    mora = Column(Money, nullable=True)
    seguro_desgravamen = Column(Money, nullable=True)
    gastos_cobranza = Column(Money, nullable=True)
    gastos_judiciales = Column(Money, nullable=True)
    otros_valores = Column(Money, nullable=True)

    status = Column(String(20), nullable=False, default=CreditStatus.ACTIVE.value, index=True)
    nro_tried = Column(Integer, nullable=False, default=0)
    fecha_proceso = Column(DateTime, nullable=True, index=True)
    oferta = Column(String(255), nullable=True)
    compromiso = Column(String(255), nullable=True)
    notificacion = Column(String(255), nullable=True)

    # Asignacion de gestion
    user_id = Column(Integer, nullable=False, default=UNASSIGNED_USER_ID, index=True)
    tray = Column(String(50), nullable=True)
    status_management = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Sync(sync_id={self.sync_id}, status={self.status}, user_id={self.user_id})>"


class CollectionPaymentModel(Base):
    """Pago de un credito (clave natural sync_id + fee_id + payment_id)."""

    __tablename__ = "collection_payments"
    __table_args__ = (
        UniqueConstraint("sync_id", "fee_id", "payment_id", name="uq_collection_payments_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sync_id = Column(String(50), nullable=False, index=True)
    fee_id = Column(String(50), nullable=False)
    payment_id = Column(String(50), nullable=False)
    payment_type = Column(String(50), nullable=True)
    payment_value = Column(Money, nullable=True)
    payment_date = Column(String(30), nullable=True)
    capital = Column(Money, nullable=True)
    interes = Column(Money, nullable=True)
    mora = Column(Money, nullable=True)
    otros = Column(Money, nullable=True)
    status = Column(String(20), nullable=False, default=PaymentStatus.NEW.value)
    campaign_id = Column("campaing", Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return (
            f"<CollectionPayment(sync_id={self.sync_id}, fee_id={self.fee_id}, "
            f"payment_id={self.payment_id}, status={self.status})>"
        )


class ContactSyncModel(Base):
    """
    Contacto de un credito (clave natural documento + sync_id).

    Direcciones y telefonos se guardan como texto JSON opaco.
    """

    __tablename__ = "contactosyncs"
    __table_args__ = (
        UniqueConstraint("documento", "sync_id", name="uq_contactosyncs_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sync_id = Column(String(50), nullable=False, index=True)
    sync_client_id = Column(String(50), nullable=True)
    full_name = Column("fullName", String(255), nullable=True)
    type = Column(String(50), nullable=True)
    documento = Column(String(30), nullable=False)
    sexo = Column(String(20), nullable=True)
    estado_civil = Column(String(50), nullable=True)
    sector_economico = Column(String(150), nullable=True)
    mobile_phones = Column(Text, nullable=True)
    landline_phones = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    direccion_domicilio = Column(Text, nullable=True)
    direccion_trabajo = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<ContactoSync(documento={self.documento}, sync_id={self.sync_id})>"


class CampaignModel(Base):
    """Campaña de cobranza (solo lectura para el sync)."""

    __tablename__ = "campains"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    type_assign = Column(String(20), nullable=True, index=True)
    state = Column(String(20), nullable=True, index=True)
    cod_sync = Column(String(50), nullable=True)

    def __repr__(self):
        return f"<Campaign(id={self.id}, cod_sync={self.cod_sync}, state={self.state})>"


class RegSyncModel(Base):
    """
    Registro de una corrida de sincronizacion completa.

    Estados: INPROCESS -> SYNC | ERROR | ERROR - NULL | STREAM FAIL.
    """

    __tablename__ = "regsyncs"

    id = Column(Integer, primary_key=True, index=True)
    daily = Column(Date, nullable=True)
    nro_credits = Column(Integer, nullable=False, default=0)
    nro_syncs = Column(Integer, nullable=False, default=0)
    nro_credits_new = Column(Integer, nullable=False, default=0)
    observation = Column(Text, nullable=True)
    state = Column(String(30), nullable=False, default=RegSyncState.INPROCESS.value, index=True)
    cod_sync = Column(String(50), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<RegSync(id={self.id}, cod_sync={self.cod_sync}, state={self.state})>"
