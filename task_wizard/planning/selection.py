"""
Task selection and commit.

The user decides which ranked tasks to create. Completed tasks are shown
but can never be included, and therefore never reach the task store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from ..schemas.generated_task import GeneratedTask
from .estimator import estimate_project_duration


logger = logging.getLogger(__name__)

# (project_id, task) -> truthy on success; may raise
CreateTaskFn = Callable[[str, GeneratedTask], Awaitable[object]]


@dataclass
class CommitResult:
    """Outcome of one commit. Creations are independent, never rolled back."""
    created: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def to_dict(self) -> dict:
        return {
            "created": list(self.created),
            "failed": list(self.failed),
            "errors": list(self.errors),
            "created_count": self.created_count,
            "failed_count": self.failed_count,
        }


class SelectionModel:
    """Include/exclude flags for a ranked task list, keyed by title."""

    def __init__(self, tasks: list[GeneratedTask]):
        self._tasks = list(tasks)
        self._include: dict[str, bool] = {
            t.title: not t.is_completed for t in self._tasks
        }
        self._by_title = {t.title: t for t in self._tasks}

    @property
    def tasks(self) -> list[GeneratedTask]:
        return list(self._tasks)

    def is_included(self, title: str) -> bool:
        return self._include[title]

    def is_disabled(self, title: str) -> bool:
        return self._by_title[title].is_completed

    def set_included(self, title: str, include: bool) -> None:
        """
        Toggle a task.

        Raises KeyError for an unknown title and ValueError when trying to
        include a task that is already complete.
        """
        task = self._by_title[title]
        if include and task.is_completed:
            raise ValueError(f"'{title}' is already complete and cannot be created")
        self._include[title] = bool(include)

    def included_tasks(self) -> list[GeneratedTask]:
        """Included tasks in ranked order."""
        return [
            t for t in self._tasks
            if self._include.get(t.title) and not t.is_completed
        ]

    def include_map(self) -> dict[str, bool]:
        return dict(self._include)

    def estimate_selected_duration(self) -> int:
        return estimate_project_duration(self.included_tasks())

    async def commit(self, create_task: CreateTaskFn, project_id: Optional[str]) -> CommitResult:
        """
        Create every included task, one at a time, in ranked order.

        A failing creation (exception or falsy result) is recorded and the
        loop moves on; tasks created earlier stay created.
        """
        if not project_id:
            raise ValueError("A project id is required to create tasks")

        result = CommitResult()
        for task in self.included_tasks():
            try:
                ok = await create_task(project_id, task)
            except Exception as e:
                logger.warning("Task creation failed for %r: %s", task.title, e)
                result.failed.append(task.title)
                result.errors.append(f"{task.title}: {e}")
                continue

            if ok:
                result.created.append(task.title)
            else:
                result.failed.append(task.title)
                result.errors.append(f"{task.title}: task store rejected the task")

        logger.info(
            "Committed tasks to project %s: %d created, %d failed",
            project_id, result.created_count, result.failed_count,
        )
        return result
