"""
Effort roll-up for generated tasks.

Each task contributes its PERT expected hours (O + 4M + P) / 6; completed
tasks contribute nothing. The sum is converted to whole weeks at a fixed
40-hour working week.
"""

import math
from typing import Iterable

from ..schemas.generated_task import GeneratedTask


WORKING_HOURS_PER_WEEK = 40


def pert_expected_hours(task: GeneratedTask) -> float:
    loe = task.loe
    return (loe.optimistic_hours + 4 * loe.most_likely_hours + loe.pessimistic_hours) / 6


def pending_hours(tasks: Iterable[GeneratedTask]) -> float:
    return sum(pert_expected_hours(t) for t in tasks if not t.is_completed)


def estimate_project_duration(tasks: Iterable[GeneratedTask]) -> int:
    """Remaining effort in whole weeks, rounded up."""
    # Float noise must not add a week
    weeks = round(pending_hours(tasks) / WORKING_HOURS_PER_WEEK, 6)
    return math.ceil(weeks)


def summarize_effort(tasks: Iterable[GeneratedTask]) -> dict:
    task_list = list(tasks)
    completed = [t for t in task_list if t.is_completed]
    return {
        "task_count": len(task_list),
        "completed_count": len(completed),
        "pending_count": len(task_list) - len(completed),
        "estimated_hours": round(sum(t.estimated_hours for t in task_list), 2),
        "pending_pert_hours": round(pending_hours(task_list), 2),
        "estimated_weeks": estimate_project_duration(task_list),
    }
