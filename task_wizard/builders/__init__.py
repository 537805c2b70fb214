"""
Collaborators that persist wizard output.
"""

from .task_store import (
    TaskStoreClient,
    TaskStoreError,
    create_task_store_client,
    seed_from_project
)

__all__ = [
    "TaskStoreClient",
    "TaskStoreError",
    "create_task_store_client",
    "seed_from_project"
]
