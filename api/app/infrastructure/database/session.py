"""
Engine y sesiones async de la base de cobranzas.

Los jobs de sync abren una sesión por corrida (via get_db o
AsyncSessionLocal en el CLI) y hacen commit registro por registro.
"""
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings


Base = declarative_base()


def _create_engine_args(database_url: str) -> Dict[str, Any]:
    """
    Argumentos del engine; el pool solo aplica a PostgreSQL (SQLite en
    tests no lo admite).
    """
    args: Dict[str, Any] = {"echo": settings.DEBUG}
    if database_url.startswith("postgresql"):
        args["pool_size"] = settings.DB_POOL_SIZE
        args["max_overflow"] = settings.DB_MAX_OVERFLOW
        args["pool_pre_ping"] = True
    return args


engine = create_async_engine(
    settings.effective_database_url,
    **_create_engine_args(settings.effective_database_url),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesión por request para FastAPI.

    Los casos de uso hacen commit por registro; el commit final solo
    cierra lo que haya quedado pendiente (p.ej. lecturas del listado).
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Crea las tablas que falten (desarrollo; en producción manda Alembic)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
