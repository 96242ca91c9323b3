"""
Ultima red de seguridad HTTP: cualquier excepcion que escape de un
endpoint se registra con su traza y se responde como 500 JSON.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger

INTERNAL_ERROR_BODY = {
    "error": "INTERNAL_SERVER_ERROR",
    "message": "Ha ocurrido un error interno del servidor",
    "details": {},
}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Los jobs de sync ya devuelven resultados estructurados; esto cubre
    fallos fuera de ellos (p.ej. base de datos caída al abrir la sesión).
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.opt(exception=exc).error(
                "Error no manejado en {} {}: {}", request.method, request.url.path, exc
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=INTERNAL_ERROR_BODY,
            )
