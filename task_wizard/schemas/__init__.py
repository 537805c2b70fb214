"""
Schema definitions for the construction task wizard.
"""

from .answers import Answers, Message, MessageRole, ProjectType, TopPriority
from .generated_task import (
    GeneratedTask,
    EffortEstimate,
    TaskDependency,
    TaskRisk,
    TaskPriority,
    TaskStatus,
    PRIORITY_RANK
)
from .slot_schema import Slot, INTAKE_SLOTS, next_slot, get_slot, get_total_slots

__all__ = [
    "Answers",
    "Message",
    "MessageRole",
    "ProjectType",
    "TopPriority",
    "GeneratedTask",
    "EffortEstimate",
    "TaskDependency",
    "TaskRisk",
    "TaskPriority",
    "TaskStatus",
    "PRIORITY_RANK",
    "Slot",
    "INTAKE_SLOTS",
    "next_slot",
    "get_slot",
    "get_total_slots"
]
