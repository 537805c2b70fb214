"""
Task planning: generation, ranking, effort estimation and selection.
"""

from .task_generator import (
    generate_base_tasks,
    generate_recurring_tasks,
    generate_milestone_tasks,
    get_suggested_tasks_by_phase,
    analyze_project
)
from .ranker import rank_tasks, merge_generated
from .estimator import estimate_project_duration, pert_expected_hours, summarize_effort
from .selection import SelectionModel, CommitResult

__all__ = [
    "generate_base_tasks",
    "generate_recurring_tasks",
    "generate_milestone_tasks",
    "get_suggested_tasks_by_phase",
    "analyze_project",
    "rank_tasks",
    "merge_generated",
    "estimate_project_duration",
    "pert_expected_hours",
    "summarize_effort",
    "SelectionModel",
    "CommitResult"
]
