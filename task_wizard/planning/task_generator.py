"""
Task generation from finalized intake answers.

Two deterministic generators feed the ranking step:
- generate_base_tasks: the domain catalog for the project type, scaled to
  the project size and laid out end to end from the start date
- generate_recurring_tasks: phase reviews and repeating site tasks spread
  across the start-end span

Neither function touches anything outside its arguments, so identical
answers always yield identical task lists in the same order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Iterable, Optional

from ..schemas.answers import ProjectType
from ..schemas.generated_task import (
    GeneratedTask,
    EffortEstimate,
    TaskDependency,
    TaskRisk,
)
from .catalog import (
    TaskTemplate,
    PROJECT_TASK_CATALOG,
    RECURRING_TASK_TEMPLATES,
    MILESTONE_TASK_TEMPLATES,
    RECURRENCE_INTERVAL_DAYS,
    MAX_RECURRING_INSTANCES,
    DEFAULT_PHASES,
    get_catalog,
)


HOURS_PER_WORKDAY = 8

SCALE_FACTORS = {
    "small": 0.7,
    "medium": 1.0,
    "large": 1.5,
}

_SMALL_MARKERS = ("small", "minor")
_LARGE_MARKERS = ("large", "major", "complex")


def _default_schedule_risk() -> TaskRisk:
    return TaskRisk(
        level="medium",
        type="schedule",
        description="Task may experience delays due to dependencies",
        mitigation="Monitor dependencies and adjust schedule as needed",
        probability=30,
        impact="medium",
    )


@dataclass
class ProjectAnalysis:
    """What can be inferred about a project from its free text."""
    project_type: str
    scale: str
    keywords: list[str]


def estimate_project_scale(description: str) -> str:
    text = (description or "").lower()
    if any(marker in text for marker in _SMALL_MARKERS) or len(description or "") < 100:
        return "small"
    if any(marker in text for marker in _LARGE_MARKERS) or len(description or "") > 300:
        return "large"
    return "medium"


def analyze_project(title: str, description: str) -> ProjectAnalysis:
    """Infer project type and scale when the user has not stated them."""
    text = f"{title or ''} {description or ''}".lower()
    keywords = [w for w in "".join(c if c.isalnum() else " " for c in text).split() if len(w) > 2]

    project_type = ProjectType.RESIDENTIAL.value
    if any(k in text for k in ("commercial", "office", "retail", "warehouse")):
        project_type = ProjectType.COMMERCIAL.value
    elif any(k in text for k in ("renovation", "remodel", "upgrade", "retrofit")):
        project_type = ProjectType.RENOVATION.value
    elif any(k in text for k in ("factory", "plant", "industrial")):
        project_type = ProjectType.INDUSTRIAL.value
    elif any(k in text for k in ("school", "hospital", "library", "campus")):
        project_type = ProjectType.INSTITUTIONAL.value

    return ProjectAnalysis(
        project_type=project_type,
        scale=estimate_project_scale(description),
        keywords=keywords,
    )


def _scaled_loe(template: TaskTemplate, hours: float, factor: float) -> EffortEstimate:
    base = template.loe or EffortEstimate(
        optimistic_hours=math.ceil(template.estimated_hours * 0.8),
        most_likely_hours=template.estimated_hours,
        pessimistic_hours=math.ceil(template.estimated_hours * 1.3),
    )
    if factor == 1.0:
        return replace(base, most_likely_hours=hours)
    return replace(
        base,
        optimistic_hours=math.ceil(base.optimistic_hours * factor),
        most_likely_hours=hours,
        pessimistic_hours=math.ceil(base.pessimistic_hours * factor),
    )


def _task_from_template(
    template: TaskTemplate,
    index: int,
    hours: float,
    loe: EffortEstimate,
    start: Optional[date] = None,
    due: Optional[date] = None,
) -> GeneratedTask:
    return GeneratedTask(
        title=template.title,
        description=template.description,
        priority=template.priority,
        phase_name=template.phase_name,
        estimated_hours=hours,
        loe=loe,
        generation_index=index,
        start_date=start.isoformat() if start else None,
        due_date=due.isoformat() if due else None,
        weather_dependent=template.weather_dependent,
        requires_inspection=template.requires_inspection,
        safety_requirements=list(template.safety_requirements),
        equipment_needed=list(template.equipment_needed),
        materials_needed=list(template.materials_needed),
        subtasks=list(template.subtasks),
        risks=[replace(r) for r in template.risks],
    )


def generate_base_tasks(
    project_type: Optional[str],
    description: Optional[str],
    start_date: Optional[str] = None,
    project_name: Optional[str] = None,
) -> list[GeneratedTask]:
    """
    Instantiate the catalog tasks for a project type.

    A blank project type is inferred from the project name and description.

    Small projects keep every other template with hours scaled down; large
    projects keep all of them with hours scaled up. When a start date is
    given, tasks are scheduled back to back at 8 working hours per day with
    a one day buffer (two after inspected work). Each task depends on its
    immediate predecessor.

    Raises ValueError if start_date is not a real calendar date.
    """
    if not (project_type or "").strip():
        project_type = analyze_project(project_name or "", description or "").project_type
    scale = estimate_project_scale(description or "")
    factor = SCALE_FACTORS[scale]
    templates = get_catalog(project_type)
    if scale == "small":
        templates = templates[::2]

    base_start = date.fromisoformat(start_date) if start_date else None
    cumulative_days = 0
    tasks: list[GeneratedTask] = []

    for index, template in enumerate(templates):
        hours = template.estimated_hours if factor == 1.0 else math.ceil(template.estimated_hours * factor)
        duration_days = math.ceil(hours / HOURS_PER_WORKDAY)

        task_start = task_due = None
        if base_start is not None:
            task_start = base_start + timedelta(days=cumulative_days)
            task_due = task_start + timedelta(days=duration_days)
        cumulative_days += duration_days + (2 if template.requires_inspection else 1)

        task = _task_from_template(
            template, index, hours, _scaled_loe(template, hours, factor), task_start, task_due
        )
        if not task.risks:
            task.risks = [_default_schedule_risk()]
        if tasks:
            previous = tasks[-1]
            task.dependencies = [TaskDependency(
                title=previous.title,
                status=previous.status,
                completion_percentage=previous.completion_percentage,
            )]
        tasks.append(task)

    return tasks


def _phase_applies(applicable_phases: Iterable[str], phase_names: Iterable[str]) -> bool:
    names = [p.lower() for p in phase_names]
    return any(phase.lower() in name for phase in applicable_phases for name in names)


def generate_recurring_tasks(
    start_date: Optional[str],
    end_date: Optional[str],
    phase_names: Iterable[str] = DEFAULT_PHASES,
) -> list[GeneratedTask]:
    """
    Generate phase reviews and repeating tasks across the project span.

    Returns an empty list when either date is missing or the span is
    negative. The span is split into one consecutive segment per phase,
    each closed by a "<phase> Phase Review". Recurring templates that apply
    to any of the phases repeat at their interval from the start date while
    on or before the end date, up to MAX_RECURRING_INSTANCES each.

    Raises ValueError if either date is not a real calendar date.
    """
    if not start_date or not end_date:
        return []

    start = date.fromisoformat(start_date)
    end = date.fromisoformat(end_date)
    if end < start:
        return []

    phases = list(phase_names)
    span_days = (end - start).days
    tasks: list[GeneratedTask] = []

    for i, phase in enumerate(phases):
        segment_start = start + timedelta(days=span_days * i // len(phases))
        segment_end = start + timedelta(days=span_days * (i + 1) // len(phases))
        tasks.append(GeneratedTask(
            title=f"{phase} Phase Review",
            description=f"Review deliverables, budget and schedule at the close of the {phase} phase",
            priority="medium",
            phase_name=phase,
            estimated_hours=2,
            loe=EffortEstimate(1.5, 2, 3, confidence_level=85,
                               complexity_factor="low", skill_level_required="intermediate"),
            generation_index=len(tasks),
            start_date=segment_start.isoformat(),
            due_date=segment_end.isoformat(),
        ))

    for template in RECURRING_TASK_TEMPLATES:
        if not _phase_applies(template.applicable_phases, phases):
            continue

        interval = RECURRENCE_INTERVAL_DAYS.get(template.pattern, 7)
        current = start
        instance = 0
        while current <= end and instance < MAX_RECURRING_INSTANCES:
            hours = template.estimated_hours
            tasks.append(GeneratedTask(
                title=f"{template.title} (Instance {instance + 1})",
                description=template.description,
                priority=template.priority,
                phase_name=template.phase_name,
                estimated_hours=hours,
                loe=EffortEstimate(
                    optimistic_hours=round(hours * 0.8, 2),
                    most_likely_hours=hours,
                    pessimistic_hours=round(hours * 1.2, 2),
                    confidence_level=85,
                    complexity_factor="low",
                    skill_level_required="basic",
                ),
                generation_index=len(tasks),
                start_date=current.isoformat(),
                due_date=(current + timedelta(days=1)).isoformat(),
                weather_dependent=template.weather_dependent,
                safety_requirements=list(template.safety_requirements),
            ))
            current += timedelta(days=interval)
            instance += 1

    return tasks


def generate_milestone_tasks(completion_percentage: int, as_of: date) -> list[GeneratedTask]:
    """Tasks triggered by every milestone the project has reached, due in 3 days."""
    tasks: list[GeneratedTask] = []
    due = as_of + timedelta(days=3)
    for milestone in MILESTONE_TASK_TEMPLATES:
        if completion_percentage < milestone.completion_percentage:
            continue
        for template in milestone.triggered_tasks:
            tasks.append(_task_from_template(
                template,
                len(tasks),
                template.estimated_hours,
                _scaled_loe(template, template.estimated_hours, 1.0),
                as_of,
                due,
            ))
    return tasks


def get_suggested_tasks_by_phase(phase: str) -> list[TaskTemplate]:
    needle = phase.lower()
    return [
        template
        for templates in PROJECT_TASK_CATALOG.values()
        for template in templates
        if needle in template.phase_name.lower()
    ]
