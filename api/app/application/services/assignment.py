"""
Reglas de asignación de créditos a gestores.

Funciones puras (sin I/O): la persistencia la hace el caso de uso.
"""
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from app.shared.constants.sync_constants import (
    STATUS_MANAGEMENT_PENDING,
    TRAY_PENDING,
    UNASSIGNED_USER_ID,
)

# Gestores de la asignación inicial por días de mora
PREVENTIVE_AGENT_ID = 9
DEFAULT_AGENT_ID = 15

# Rango (inclusive) que queda sin asignar para la distribución por agencia
UNASSIGNED_RANGE = (3, 15)


@dataclass(frozen=True)
class Assignment:
    """Asignación inicial de un crédito nuevo."""

    user_id: int
    tray: str = TRAY_PENDING
    status_management: str = STATUS_MANAGEMENT_PENDING

    def as_columns(self) -> Dict[str, object]:
        return {
            "user_id": self.user_id,
            "tray": self.tray,
            "status_management": self.status_management,
        }


def assign_by_days_past_due(days_past_due: int) -> Assignment:
    """
    Asigna gestor según días de mora.

    | días   | user_id |
    |--------|---------|
    | 0      | 9       |
    | 2      | 15      |
    | 3..15  | 0       |
    | resto  | 15      |  (incluye 1, >= 16 y negativos)
    """
    low, high = UNASSIGNED_RANGE
    if days_past_due == 0:
        return Assignment(user_id=PREVENTIVE_AGENT_ID)
    if days_past_due == 2:
        return Assignment(user_id=DEFAULT_AGENT_ID)
    if low <= days_past_due <= high:
        return Assignment(user_id=UNASSIGNED_USER_ID)
    return Assignment(user_id=DEFAULT_AGENT_ID)


def plan_distribution(
    eligible_ids: Sequence[str],
    agent_ids: Sequence[int],
    rng: Optional[random.Random] = None,
) -> Dict[int, List[str]]:
    """
    Reparte aleatoriamente los créditos elegibles entre los agentes.

    Se baraja el conjunto y se entrega en bloques contiguos de
    ceil(N / agentes); con un solo agente recibe todos.

    Returns:
        Dict[int, List[str]]: agent_id -> sync_ids asignados
    """
    if not eligible_ids or not agent_ids:
        return {}

    shuffled = list(eligible_ids)
    (rng or random).shuffle(shuffled)

    per_agent = math.ceil(len(shuffled) / len(agent_ids))
    plan: Dict[int, List[str]] = {}
    for index, agent_id in enumerate(agent_ids):
        chunk = shuffled[index * per_agent:(index + 1) * per_agent]
        if chunk:
            plan[agent_id] = chunk
    return plan
