"""
Router principal de la API.
Agrupa todos los endpoints del servicio.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import sync


# Sin prefijo de version: el scheduler invoca /api/syncs/...
api_router = APIRouter()

# Incluir routers de endpoints especificos
api_router.include_router(sync.router)
