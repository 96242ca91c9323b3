"""
Entorno de Alembic para el esquema de sincronización.

- La URL sale de settings (la misma que usa el API) con el driver async
  cambiado a psycopg, porque Alembic migra en modo síncrono.
- campains es de solo lectura para este servicio: la migración inicial
  solo la crea si no existe.
"""
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# alembic se ejecuta desde api/; el paquete app vive ahí
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.config import settings  # noqa: E402
from app.infrastructure.database.session import Base  # noqa: E402
import app.infrastructure.database  # noqa: E402,F401  (registra los cinco modelos)

config = context.config
config.set_main_option(
    "sqlalchemy.url",
    settings.effective_database_url.replace("+asyncpg", "+psycopg"),
)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Genera el SQL sin conectarse (alembic upgrade --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
