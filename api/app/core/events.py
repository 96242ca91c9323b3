"""
Ciclo de vida del servicio: logging a archivo, chequeo de configuración
del feed SEFIL y apertura/cierre del engine de base de datos.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import FastAPI
from loguru import logger

from app.core.config import settings
from app.infrastructure.database.session import close_db, init_db

_SEFIL_URL_SETTINGS = ("SEFIL_CREDITS_URL", "SEFIL_PAYMENTS_URL", "SEFIL_CONTACTS_URL")


def configure_logging() -> None:
    """Sink de archivo rotativo; lo usan el API y el CLI de sync."""
    logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        level=settings.LOG_LEVEL,
    )


def config_warnings() -> List[str]:
    """Configuración que deja algún job inoperante o incompleto."""
    warnings = [
        f"{name} no configurada - el sync fallara"
        for name in _SEFIL_URL_SETTINGS
        if not getattr(settings, name)
    ]
    if not settings.DISTRIBUTION_AGENT_IDS:
        warnings.append("DISTRIBUTION_AGENT_IDS vacia - no se distribuiran creditos sin asignar")
    return warnings


async def startup() -> None:
    """Arranque: logging a archivo, chequeo de configuración y tablas."""
    try:
        configure_logging()
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

        for warning in config_warnings():
            logger.warning(f"CONFIG: {warning}")

        await init_db()
        logger.success("Base de datos lista; servicio de sync iniciado")
    except Exception:
        logger.exception("Error durante startup")
        raise


async def shutdown() -> None:
    """Cierre: libera el pool de conexiones."""
    await close_db()
    logger.info("Conexiones de base de datos cerradas; servicio detenido")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ciclo de vida de la app FastAPI: startup al entrar, shutdown al salir."""
    await startup()
    try:
        yield
    finally:
        await shutdown()
