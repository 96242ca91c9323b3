"""
Tests de las reglas de asignación por días de mora y de la distribución.
"""
import random

import pytest

from app.application.services.assignment import (
    Assignment,
    assign_by_days_past_due,
    plan_distribution,
)


@pytest.mark.parametrize(
    "days, expected_user",
    [
        (0, 9),
        (1, 15),
        (2, 15),
        (3, 0),
        (10, 0),
        (15, 0),
        (16, 15),
        (120, 15),
        (-4, 15),
    ],
)
def test_assign_by_days_past_due_table(days: int, expected_user: int) -> None:
    assignment = assign_by_days_past_due(days)
    assert assignment.user_id == expected_user
    assert assignment.tray == "PENDIENTE"
    assert assignment.status_management == "PENDIENTE"


def test_assignment_as_columns() -> None:
    assert Assignment(user_id=9).as_columns() == {
        "user_id": 9,
        "tray": "PENDIENTE",
        "status_management": "PENDIENTE",
    }


def test_plan_distribution_single_agent_gets_everything() -> None:
    eligible = [f"C{i}" for i in range(7)]
    plan = plan_distribution(eligible, [22], random.Random(1))

    assert list(plan) == [22]
    assert sorted(plan[22]) == sorted(eligible)


def test_plan_distribution_splits_between_agents_without_overlap() -> None:
    eligible = [f"C{i}" for i in range(7)]
    plan = plan_distribution(eligible, [22, 23, 24], random.Random(3))

    assigned = [sync_id for ids in plan.values() for sync_id in ids]
    assert sorted(assigned) == sorted(eligible)
    assert len(set(assigned)) == len(eligible)
    # bloques de ceil(7/3) = 3
    assert [len(plan[a]) for a in (22, 23, 24)] == [3, 3, 1]


def test_plan_distribution_is_reproducible_with_seed() -> None:
    eligible = [f"C{i}" for i in range(20)]
    first = plan_distribution(eligible, [22, 23], random.Random(42))
    second = plan_distribution(eligible, [22, 23], random.Random(42))
    assert first == second


def test_plan_distribution_empty_inputs() -> None:
    assert plan_distribution([], [22]) == {}
    assert plan_distribution(["C1"], []) == {}


def test_plan_distribution_does_not_mutate_input() -> None:
    eligible = ["A", "B", "C"]
    plan_distribution(eligible, [22], random.Random(0))
    assert eligible == ["A", "B", "C"]
