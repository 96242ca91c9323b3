"""
Servicio HTTP de sincronizacion de cartera SEFIL.

Expone los disparadores de los jobs (/api/syncs/...) para el scheduler
externo y un health check. Los mismos jobs se pueden correr sin HTTP con
scripts/run_sync.py.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.middlewares.error_handler import ErrorHandlerMiddleware
from app.api.v1.router import api_router
from app.core.config import get_cors_origins, settings
from app.core.events import lifespan


def create_application() -> FastAPI:
    """
    Construye la aplicacion: CORS, middleware de errores, lifespan
    (logging, base de datos) y rutas de sincronizacion bajo /api.
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sincronización de créditos, pagos y contactos desde el core SEFIL",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings.CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.add_middleware(ErrorHandlerMiddleware)

    application.include_router(api_router, prefix="/api")

    @application.get("/health", tags=["Health"])
    async def health_check():
        """Estado del servicio para el monitoreo del scheduler."""
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn
    from loguru import logger

    host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    base_url = f"http://{host}:{settings.PORT}"

    logger.info(f"Sync de créditos: GET  {base_url}/api/syncs/credits")
    logger.info(f"Sync de pagos:    GET  {base_url}/api/syncs/pays")
    logger.info(f"Listado de pagos: POST {base_url}/api/syncs/pays/list")
    logger.info(f"Documentación:         {base_url}/docs")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
