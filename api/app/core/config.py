"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from datetime import datetime
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    - ENVIRONMENT: 'development' o 'production'
    - DATABASE_URL se puede especificar completa o por componentes
    - SEFIL_*: endpoints del core de cobranzas (feed de creditos, pagos y contactos)
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Sincronizacion de Cartera SEFIL")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Base de datos - Componentes separados (recomendado para flexibilidad)
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="cobranzas_user")
    DATABASE_PASSWORD: str = Field(default="cobranzas_pass")
    DATABASE_NAME: str = Field(default="cobranzas_db")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Feed externo SEFIL (POST form-encoded, respuesta JSON)
    SEFIL_CREDITS_URL: str = Field(
        default="http://10.10.0.5:81/api/SBK_Sefil/ConsultarCreditosSEFIL_V2"
    )
    SEFIL_PAYMENTS_URL: str = Field(
        default="http://10.10.0.5:81/api/SBK_Sefil/ConsultarPagosSEFIL_V2"
    )
    SEFIL_CONTACTS_URL: str = Field(
        default="http://10.10.0.5:81/api/SBK_Sefil/ConsultarContactosSEFIL_V2"
    )
    # El feed de creditos es una descarga completa; el default de httpx (5s) no alcanza.
    SEFIL_TIMEOUT_S: float = Field(default=120.0)

    # Sync de pagos: solo creditos procesados desde esta fecha
    PAYMENTS_MINIMUM_DATE: datetime = Field(default=datetime(2025, 9, 1, 0, 0, 0))

    # Agentes que reciben la distribucion aleatoria de creditos sin asignar
    DISTRIBUTION_AGENT_IDS: List[int] = Field(default=[22])

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
