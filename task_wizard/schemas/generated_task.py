"""
Generated task schema.

A GeneratedTask is a candidate produced by the task generators. It lives
only in the wizard session until the user commits it, at which point its
``to_dict()`` payload is handed to the task store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TaskPriority(str, Enum):
    """Task priority levels, most urgent first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK = {
    TaskPriority.CRITICAL.value: 0,
    TaskPriority.HIGH.value: 1,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 3,
}


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    COMPLETED = "completed"


@dataclass
class EffortEstimate:
    """Three-point level-of-effort estimate in hours."""
    optimistic_hours: float
    most_likely_hours: float
    pessimistic_hours: float
    confidence_level: int = 75
    complexity_factor: str = "moderate"  # low, moderate, complex
    skill_level_required: str = "intermediate"  # basic, intermediate, senior

    def to_dict(self) -> dict:
        return {
            "optimistic_hours": self.optimistic_hours,
            "most_likely_hours": self.most_likely_hours,
            "pessimistic_hours": self.pessimistic_hours,
            "confidence_level": self.confidence_level,
            "complexity_factor": self.complexity_factor,
            "skill_level_required": self.skill_level_required,
        }


@dataclass
class TaskRisk:
    level: str
    type: str  # weather, technical, safety, quality, schedule
    description: str
    mitigation: str
    probability: int  # percent
    impact: str

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "type": self.type,
            "description": self.description,
            "mitigation": self.mitigation,
            "probability": self.probability,
            "impact": self.impact,
        }


@dataclass
class TaskDependency:
    """Soft reference to another generated task, by title."""
    title: str
    status: str = TaskStatus.NOT_STARTED.value
    completion_percentage: int = 0

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "status": self.status,
            "completion_percentage": self.completion_percentage,
        }


@dataclass
class GeneratedTask:
    """A candidate task produced by the wizard."""
    title: str
    description: str
    priority: str
    phase_name: str
    estimated_hours: float
    loe: EffortEstimate
    generation_index: int = 0
    status: str = TaskStatus.NOT_STARTED.value
    completion_percentage: int = 0  # 0 or 100 before commit
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    weather_dependent: bool = False
    requires_inspection: bool = False
    dependencies: list[TaskDependency] = field(default_factory=list)
    safety_requirements: list[str] = field(default_factory=list)
    equipment_needed: list[str] = field(default_factory=list)
    materials_needed: list[str] = field(default_factory=list)
    subtasks: list[str] = field(default_factory=list)
    risks: list[TaskRisk] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.completion_percentage == 100

    def to_dict(self) -> dict:
        """Full field set, as sent to the task store."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "completion_percentage": self.completion_percentage,
            "phase_name": self.phase_name,
            "start_date": self.start_date,
            "due_date": self.due_date,
            "estimated_hours": self.estimated_hours,
            "actual_hours": 0,
            "weather_dependent": self.weather_dependent,
            "requires_inspection": self.requires_inspection,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "safety_requirements": list(self.safety_requirements),
            "equipment_needed": list(self.equipment_needed),
            "materials_needed": list(self.materials_needed),
            "subtasks": list(self.subtasks),
            "loe": self.loe.to_dict(),
            "risks": [r.to_dict() for r in self.risks],
        }
