"""
Tests for the task store client.

The HTTP session is mocked; no live task store is needed.
"""

import asyncio
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from task_wizard.builders.task_store import (
    TaskStoreClient,
    TaskStoreError,
    create_task_store_client,
    seed_from_project,
)
from task_wizard.schemas.generated_task import GeneratedTask, EffortEstimate


def _response(status_code=200, json_body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = b"{}" if json_body is not None else text.encode()
    response.json.return_value = json_body
    return response


def _task():
    return GeneratedTask(
        title="Framing",
        description="Frame walls",
        priority="high",
        phase_name="Structure",
        estimated_hours=40,
        loe=EffortEstimate(32, 40, 56),
    )


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return TaskStoreClient(base_url="https://store.example.com/api/", token="secret", session=session)


class TestConstruction:
    def test_requires_url(self, monkeypatch):
        monkeypatch.delenv("TASK_STORE_URL", raising=False)
        with pytest.raises(ValueError):
            TaskStoreClient(base_url="")

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("TASK_STORE_URL", "https://env.example.com")
        monkeypatch.setenv("TASK_STORE_TOKEN", "tok")
        client = TaskStoreClient(session=MagicMock())
        assert client.base_url == "https://env.example.com"
        assert client.token == "tok"

    def test_factory_returns_none_when_unconfigured(self, monkeypatch):
        monkeypatch.delenv("TASK_STORE_URL", raising=False)
        assert create_task_store_client() is None


class TestRequests:
    def test_get_project(self, client, session):
        session.request.return_value = _response(json_body={"id": "42", "name": "Duplex"})
        assert client.get_project("42") == {"id": "42", "name": "Duplex"}

        args, kwargs = session.request.call_args
        assert args == ("GET", "https://store.example.com/api/projects/42")
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 30

    def test_create_task_payload(self, client, session):
        session.request.return_value = _response(json_body={"id": "t1"})
        client.create_task("42", _task())

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://store.example.com/api/projects/42/tasks")
        payload = kwargs["json"]
        assert payload["project_id"] == "42"
        assert payload["title"] == "Framing"
        assert payload["actual_hours"] == 0
        assert payload["loe"]["pessimistic_hours"] == 56

    def test_no_auth_header_without_token(self, session):
        client = TaskStoreClient(base_url="https://store.example.com", token="", session=session)
        session.request.return_value = _response(json_body={})
        client.get_project("1")
        assert "Authorization" not in session.request.call_args.kwargs["headers"]

    def test_empty_body(self, client, session):
        session.request.return_value = _response(status_code=204)
        assert client.get_project("42") == {}


class TestErrors:
    def test_http_error_wrapped(self, client, session):
        session.request.return_value = _response(status_code=422, text="bad\n   field   value")
        with pytest.raises(TaskStoreError) as excinfo:
            client.create_task("42", _task())
        assert excinfo.value.status_code == 422
        assert "bad field value" in str(excinfo.value)

    def test_long_body_truncated(self, client, session):
        session.request.return_value = _response(status_code=500, text="x" * 1000)
        with pytest.raises(TaskStoreError) as excinfo:
            client.get_project("42")
        assert str(excinfo.value).endswith("...")

    def test_connection_error_wrapped(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TaskStoreError) as excinfo:
            client.get_project("42")
        assert excinfo.value.status_code is None
        assert "connection error" in str(excinfo.value)

    def test_invalid_json(self, client, session):
        response = _response(text="<html>")
        response.json.side_effect = ValueError("no json")
        session.request.return_value = response
        with pytest.raises(TaskStoreError):
            client.get_project("42")


class TestAsyncCreate:
    def test_returns_true(self, client, session):
        session.request.return_value = _response(json_body={"id": "t1"})
        assert asyncio.run(client.create_task_async("42", _task())) is True

    def test_propagates_errors(self, client):
        with patch.object(client, "create_task", side_effect=TaskStoreError("down", 503)):
            with pytest.raises(TaskStoreError):
                asyncio.run(client.create_task_async("42", _task()))


class TestSeedFromProject:
    def test_maps_fields(self):
        seed = seed_from_project({
            "id": "42",
            "name": "Maple Street Duplex",
            "projectType": "residential",
            "description": "",
            "startDate": "2025-01-01T08:00:00Z",
            "end_date": None,
        })
        assert seed == {
            "project_name": "Maple Street Duplex",
            "project_type": "residential",
            "start_date": "2025-01-01",
        }

    def test_snake_case_wins(self):
        seed = seed_from_project({"project_type": "commercial", "projectType": "residential"})
        assert seed["project_type"] == "commercial"
