"""
Servicios de aplicacion.

Contiene la logica de negocio reutilizable que no pertenece
a un caso de uso especifico.
"""
from app.application.services.assignment import (
    Assignment,
    assign_by_days_past_due,
    plan_distribution,
)

__all__ = [
    # Asignacion inicial por dias de mora
    "Assignment",
    "assign_by_days_past_due",
    # Distribucion por agencia
    "plan_distribution",
]
