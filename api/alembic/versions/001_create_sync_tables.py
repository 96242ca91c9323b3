"""create_sync_tables

Revision ID: 001
Revises:
Create Date: 2025-09-01 08:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(14, 2), nullable=True)


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # campains lo administra otro sistema; solo se crea si falta (entornos de desarrollo)
    if not inspector.has_table('campains'):
        op.create_table('campains',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('type_assign', sa.String(length=20), nullable=True),
        sa.Column('state', sa.String(length=20), nullable=True),
        sa.Column('cod_sync', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_campains_type_assign'), 'campains', ['type_assign'], unique=False)
        op.create_index(op.f('ix_campains_state'), 'campains', ['state'], unique=False)

    if not inspector.has_table('syncs'):
        op.create_table('syncs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sync_id', sa.String(length=50), nullable=False),
        sa.Column('collection_group', sa.String(length=100), nullable=True),
        sa.Column('collection_order', sa.String(length=100), nullable=True),
        _money('monthly_fee_amount'),
        _money('total_amount'),
        sa.Column('paid_fees', sa.Integer(), nullable=True),
        sa.Column('pending_fees', sa.Integer(), nullable=True),
        sa.Column('total_fees', sa.Integer(), nullable=True),
        sa.Column('Agencia', sa.String(length=150), nullable=True),
        sa.Column('Cod_agencia', sa.String(length=50), nullable=True),
        sa.Column('debit', sa.String(length=50), nullable=True),
        sa.Column('collection_state', sa.String(length=100), nullable=True),
        sa.Column('days_past_due', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('payment_date', sa.String(length=30), nullable=True),
        sa.Column('award_date', sa.String(length=30), nullable=True),
        sa.Column('due_date', sa.String(length=30), nullable=True),
        sa.Column('frequency', sa.String(length=50), nullable=True),
        _money('valor_org'),
        _money('saldo_capital'),
        _money('interes'),
        _money('mora'),
        _money('seguro_desgravamen'),
        _money('gastos_cobranza'),
        _money('gastos_judiciales'),
        _money('otros_valores'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('nro_tried', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('fecha_proceso', sa.DateTime(), nullable=True),
        sa.Column('oferta', sa.String(length=255), nullable=True),
        sa.Column('compromiso', sa.String(length=255), nullable=True),
        sa.Column('notificacion', sa.String(length=255), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tray', sa.String(length=50), nullable=True),
        sa.Column('status_management', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_syncs_sync_id'), 'syncs', ['sync_id'], unique=True)
        op.create_index(op.f('ix_syncs_Agencia'), 'syncs', ['Agencia'], unique=False)
        op.create_index(op.f('ix_syncs_status'), 'syncs', ['status'], unique=False)
        op.create_index(op.f('ix_syncs_fecha_proceso'), 'syncs', ['fecha_proceso'], unique=False)
        op.create_index(op.f('ix_syncs_user_id'), 'syncs', ['user_id'], unique=False)

    if not inspector.has_table('collection_payments'):
        op.create_table('collection_payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sync_id', sa.String(length=50), nullable=False),
        sa.Column('fee_id', sa.String(length=50), nullable=False),
        sa.Column('payment_id', sa.String(length=50), nullable=False),
        sa.Column('payment_type', sa.String(length=50), nullable=True),
        _money('payment_value'),
        sa.Column('payment_date', sa.String(length=30), nullable=True),
        _money('capital'),
        _money('interes'),
        _money('mora'),
        _money('otros'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='NEW'),
        sa.Column('campaing', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sync_id', 'fee_id', 'payment_id', name='uq_collection_payments_key')
        )
        op.create_index(op.f('ix_collection_payments_sync_id'), 'collection_payments', ['sync_id'], unique=False)

    if not inspector.has_table('contactosyncs'):
        op.create_table('contactosyncs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sync_id', sa.String(length=50), nullable=False),
        sa.Column('sync_client_id', sa.String(length=50), nullable=True),
        sa.Column('fullName', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=True),
        sa.Column('documento', sa.String(length=30), nullable=False),
        sa.Column('sexo', sa.String(length=20), nullable=True),
        sa.Column('estado_civil', sa.String(length=50), nullable=True),
        sa.Column('sector_economico', sa.String(length=150), nullable=True),
        sa.Column('mobile_phones', sa.Text(), nullable=True),
        sa.Column('landline_phones', sa.Text(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('direccion_domicilio', sa.Text(), nullable=True),
        sa.Column('direccion_trabajo', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('documento', 'sync_id', name='uq_contactosyncs_key')
        )
        op.create_index(op.f('ix_contactosyncs_sync_id'), 'contactosyncs', ['sync_id'], unique=False)

    if not inspector.has_table('regsyncs'):
        op.create_table('regsyncs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('daily', sa.Date(), nullable=True),
        sa.Column('nro_credits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('nro_syncs', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('nro_credits_new', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('observation', sa.Text(), nullable=True),
        sa.Column('state', sa.String(length=30), nullable=False, server_default='INPROCESS'),
        sa.Column('cod_sync', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_regsyncs_state'), 'regsyncs', ['state'], unique=False)
        op.create_index(op.f('ix_regsyncs_cod_sync'), 'regsyncs', ['cod_sync'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in ('regsyncs', 'contactosyncs', 'collection_payments', 'syncs'):
        if inspector.has_table(table):
            op.drop_table(table)
