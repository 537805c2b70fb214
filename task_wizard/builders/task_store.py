"""
Task Store Client

Thin wrapper around the project/task REST service that owns persisted
projects and tasks. The wizard uses it for two things only:
1. Looking up an existing project to seed the intake answers
2. Creating each task the user commits
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from typing import Optional

import requests

from ..schemas.generated_task import GeneratedTask


logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Error from the task store API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# Project record fields that map onto intake answers
_PROJECT_SEED_FIELDS = {
    "name": "project_name",
    "project_type": "project_type",
    "projectType": "project_type",
    "description": "description",
    "start_date": "start_date",
    "startDate": "start_date",
    "end_date": "end_date",
    "endDate": "end_date",
}


def seed_from_project(record: dict) -> dict:
    """Map a project record onto intake answer fields, skipping blanks."""
    seed: dict = {}
    for source, target in _PROJECT_SEED_FIELDS.items():
        value = record.get(source)
        if value in (None, "") or target in seed:
            continue
        if target in ("start_date", "end_date") and isinstance(value, str):
            value = value[:10]  # tolerate full timestamps
        seed[target] = value
    return seed


class TaskStoreClient:
    """HTTP client for the project/task store."""

    USER_AGENT = "ConstructionTaskWizard/1.0"

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.environ.get("TASK_STORE_URL", "")).strip().rstrip("/")
        if not self.base_url:
            raise ValueError("Task store URL cannot be empty (set TASK_STORE_URL)")
        self.token = (token if token is not None else os.environ.get("TASK_STORE_TOKEN", "")).strip()
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _compact_error_body(error_body: str, limit: int = 400) -> str:
        compact = re.sub(r"\s+", " ", error_body or "").strip()
        if len(compact) > limit:
            return compact[:limit] + "..."
        return compact

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TaskStoreError(f"Task store connection error via {url}: {exc}") from exc

        if response.status_code >= 400:
            body = self._compact_error_body(response.text)
            raise TaskStoreError(
                f"Task store HTTP {response.status_code} via {url}: {body}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise TaskStoreError(f"Task store returned invalid JSON via {url}") from exc

    def get_project(self, project_id: str) -> dict:
        """Fetch a project record."""
        return self._request("GET", f"/projects/{project_id}")

    def create_task(self, project_id: str, task: GeneratedTask) -> dict:
        """Create one task under a project. Returns the stored record."""
        payload = {**task.to_dict(), "project_id": project_id}
        created = self._request("POST", f"/projects/{project_id}/tasks", payload)
        logger.debug("Created task %r in project %s", task.title, project_id)
        return created

    async def create_task_async(self, project_id: str, task: GeneratedTask) -> bool:
        """Awaitable create, suitable for SelectionModel.commit."""
        await asyncio.to_thread(self.create_task, project_id, task)
        return True


def create_task_store_client(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: float = 30,
) -> Optional[TaskStoreClient]:
    """Factory function; returns None when no task store is configured."""
    try:
        return TaskStoreClient(base_url=base_url, token=token, timeout=timeout)
    except ValueError:
        return None
