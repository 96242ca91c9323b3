"""
Constantes de negocio de la sincronizacion de cartera.
"""
from enum import Enum
from zoneinfo import ZoneInfo


# Zona horaria de negocio (Ecuador, UTC-5 sin horario de verano)
BUSINESS_TIMEZONE = ZoneInfo("America/Guayaquil")

# Formato de fecha que espera el feed SEFIL en credFechaConsulta
FEED_DATE_FORMAT = "%d/%m/%Y"


class CreditStatus(str, Enum):
    """Presencia del credito en el ultimo feed completo."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class PaymentStatus(str, Enum):
    """Marca de auditoria del upsert de pagos."""
    NEW = "NEW"
    UPDATED = "UPDATED"


class RegSyncState(str, Enum):
    """Estados del registro de corrida (regsyncs)."""
    INPROCESS = "INPROCESS"
    SYNC = "SYNC"
    ERROR = "ERROR"
    ERROR_NULL = "ERROR - NULL"
    STREAM_FAIL = "STREAM FAIL"


# Campañas elegibles para el sync via API
CAMPAIGN_TYPE_API = "api"
CAMPAIGN_STATE_ACTIVE = "ACTIVA"

# Bandeja y estado de gestion iniciales para creditos nuevos
TRAY_PENDING = "PENDIENTE"
STATUS_MANAGEMENT_PENDING = "PENDIENTE"

# Usuario 0 = credito sin asignar
UNASSIGNED_USER_ID = 0

# Observaciones del ledger
OBSERVATION_IN_PROCESS = "INPROCESS"
OBSERVATION_FINISHED = "PROCESS FINISH"
OBSERVATION_NULL_STREAM = "LLEGO UN STREAM NULO - ERROR FACES"

# Agencias cuyos creditos sin asignar entran en la distribucion aleatoria
DISTRIBUTION_AGENCIES = (
    "CATACOCHA",
    "PALANDA",
    "CARIAMANGA",
    "ZAMORA",
    "ZUMBA",
    "PIÑAS",
    "CELICA",
    "CATAMAYO",
    "MALACATOS",
    "SANTA ROSA",
    "OFICINA LAS PITAS",
    "OFICINA CENTRO",
    "OFICINA NORTE",
    "SAN MIGUEL DE LOS BANCOS",
    "MILAGRO",
    "SANTO DOMINGO",
    "EL CARMEN",
    "CAYAMBE",
    "PASAJE",
    "TUMBACO",
    "LA TRONCAL",
    "AMAGUAÑA",
    "NARANJAL",
    "QUINCHE",
    "QUININDE",
)
