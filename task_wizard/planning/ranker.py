"""
Priority adjustment and ordering of generated tasks.

rank_tasks never mutates its input: every adjusted task is a copy, and
the result is a new list in a stable, total order.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from ..schemas.answers import TopPriority
from ..schemas.generated_task import (
    GeneratedTask,
    TaskPriority,
    TaskStatus,
    PRIORITY_RANK,
)


# Top priorities that push medium work up to high
_PROMOTING_PRIORITIES = {
    TopPriority.TIME.value,
    TopPriority.QUALITY.value,
    TopPriority.SAFETY.value,
}

_UNKNOWN_PRIORITY_RANK = 9


def merge_generated(*groups: Iterable[GeneratedTask]) -> list[GeneratedTask]:
    """Concatenate generator outputs, re-stamping the generation index."""
    merged: list[GeneratedTask] = []
    for group in groups:
        for task in group:
            merged.append(replace(task, generation_index=len(merged)))
    return merged


def matches_done_item(title: str, done_items: Iterable[str]) -> bool:
    lowered = title.lower()
    return any(item.lower() in lowered for item in done_items if item)


def adjust_priority(priority: str, top_priority: Optional[str]) -> str:
    if top_priority in _PROMOTING_PRIORITIES and priority == TaskPriority.MEDIUM.value:
        return TaskPriority.HIGH.value
    return priority


def apply_adjustments(
    tasks: Iterable[GeneratedTask],
    top_priority: Optional[str],
    done_items: Iterable[str] = (),
) -> list[GeneratedTask]:
    """
    Mark already-done tasks complete and emphasise the top priority.

    A title containing any done item (case-insensitive) becomes 100% complete
    at low priority, overriding the top-priority promotion. Dependency
    references are refreshed with the adjusted status of their targets.
    """
    done = [d.strip() for d in done_items if d and d.strip()]
    adjusted: list[GeneratedTask] = []
    for task in tasks:
        if matches_done_item(task.title, done):
            adjusted.append(replace(
                task,
                completion_percentage=100,
                priority=TaskPriority.LOW.value,
                status=TaskStatus.COMPLETED.value,
            ))
        else:
            adjusted.append(replace(
                task,
                priority=adjust_priority(task.priority, top_priority),
            ))

    by_title = {t.title: t for t in adjusted}
    for task in adjusted:
        refreshed = []
        for dep in task.dependencies:
            target = by_title.get(dep.title)
            if target is None:
                refreshed.append(replace(dep))
            else:
                refreshed.append(replace(
                    dep,
                    status=target.status,
                    completion_percentage=target.completion_percentage,
                ))
        task.dependencies = refreshed
    return adjusted


def sort_key(task: GeneratedTask) -> tuple:
    """
    Ordering: pending before complete, then priority, then dependency count
    (more first), then due date (missing last), then generation order.
    """
    return (
        1 if task.is_completed else 0,
        PRIORITY_RANK.get(task.priority, _UNKNOWN_PRIORITY_RANK),
        -len(task.dependencies),
        task.due_date is None,
        task.due_date or "",
        task.generation_index,
    )


def sort_tasks(tasks: Iterable[GeneratedTask]) -> list[GeneratedTask]:
    return sorted(tasks, key=sort_key)


def rank_tasks(
    tasks: Iterable[GeneratedTask],
    top_priority: Optional[str],
    done_items: Iterable[str] = (),
) -> list[GeneratedTask]:
    """Adjust and sort a merged task list."""
    return sort_tasks(apply_adjustments(tasks, top_priority, done_items))
