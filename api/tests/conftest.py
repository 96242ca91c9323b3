"""
Fixtures compartidas: base SQLite en memoria con el esquema de sync
y una campaña API activa.
"""
from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.infrastructure.database  # noqa: F401  (registra los modelos en Base)
from app.infrastructure.database.models import CampaignModel
from app.infrastructure.database.session import Base


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesión sobre una base en memoria nueva por test.

    StaticPool mantiene una sola conexión: con :memory: cada conexión
    nueva sería una base vacía.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def active_campaign(db_session: AsyncSession) -> CampaignModel:
    """Campaña API activa con cod_sync SEFIL01."""
    campaign = CampaignModel(
        id=7, name="Cartera SEFIL", type_assign="api", state="ACTIVA", cod_sync="SEFIL01"
    )
    db_session.add(campaign)
    await db_session.commit()
    return campaign
