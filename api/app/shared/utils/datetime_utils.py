"""
Utilidades para manejo de fechas y horas en la zona horaria de negocio.
"""
from datetime import date, datetime, timezone
from typing import Optional

from app.shared.constants.sync_constants import BUSINESS_TIMEZONE, FEED_DATE_FORMAT


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def now_utc() -> datetime:
        """
        Obtiene la fecha y hora actual en UTC.

        Returns:
            datetime: Fecha y hora actual en UTC
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def now_business(now: Optional[datetime] = None) -> datetime:
        """
        Convierte el instante actual (o el indicado) a la zona horaria de negocio.

        Args:
            now: Instante a convertir; naive se interpreta como UTC

        Returns:
            datetime: Fecha y hora aware en America/Guayaquil
        """
        instant = now or DateTimeUtils.now_utc()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(BUSINESS_TIMEZONE)

    @staticmethod
    def business_today(now: Optional[datetime] = None) -> date:
        """Fecha calendario de negocio."""
        return DateTimeUtils.now_business(now).date()

    @staticmethod
    def process_timestamp(now: Optional[datetime] = None) -> datetime:
        """
        Marca de proceso que se guarda en syncs.fecha_proceso.

        Se persiste como hora local de negocio sin tzinfo, igual que las
        columnas DATETIME que consulta el sync de pagos.
        """
        return DateTimeUtils.now_business(now).replace(tzinfo=None, microsecond=0)

    @staticmethod
    def to_feed_date(day: date) -> str:
        """
        Formatea una fecha como la espera el feed (dd/mm/yyyy).

        Args:
            day: Fecha a formatear

        Returns:
            str: Fecha en formato dd/mm/yyyy
        """
        return day.strftime(FEED_DATE_FORMAT)
