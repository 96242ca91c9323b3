"""
Tipos y utilidades puras para el feed SEFIL -> base local.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

FeedRecord = dict[str, Any]


class FeedStatus(str, Enum):
    """Resultado de una consulta al feed."""

    OK = "ok"
    NO_DATA = "no_data"
    FAILED = "failed"


@dataclass(frozen=True)
class FeedResult(Generic[T]):
    """
    Resultado explícito de una consulta al feed.

    - OK: la lista vino en la respuesta (puede ser vacía)
    - NO_DATA: el campo de lista vino ausente o null
    - FAILED: error HTTP, de transporte o JSON inválido; reason lo describe
    """

    status: FeedStatus
    items: list[T] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def ok(cls, items: list[T]) -> "FeedResult[T]":
        return cls(status=FeedStatus.OK, items=list(items))

    @classmethod
    def no_data(cls) -> "FeedResult[T]":
        return cls(status=FeedStatus.NO_DATA)

    @classmethod
    def failed(cls, reason: str) -> "FeedResult[T]":
        return cls(status=FeedStatus.FAILED, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status is FeedStatus.OK

    @property
    def is_failed(self) -> bool:
        return self.status is FeedStatus.FAILED


Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo del feed a una columna local.

    - feed_field: nombre del campo en el JSON de SEFIL
    - column: atributo del modelo ORM
    - transform: función opcional para transformar el valor antes de persistir
    - required: si True, el valor debe existir (si falta se levanta error)
    """

    feed_field: str
    column: str
    transform: Optional[Transform] = None
    required: bool = False
