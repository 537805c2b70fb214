"""
Tests for the terminal interface. Input is scripted with a patched input().
"""

import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from task_wizard import cli
from task_wizard.agents.task_wizard_agent import TaskWizardAgent


DESCRIPTION = (
    "Two-storey wood frame duplex with a full basement, attached garages, "
    "new utility connections, driveway paving and landscaping on a corner lot."
)


@pytest.fixture(autouse=True)
def no_task_store(monkeypatch):
    monkeypatch.delenv("TASK_STORE_URL", raising=False)
    monkeypatch.delenv("TASK_STORE_TOKEN", raising=False)


def _interview_args(output_dir, *extra):
    return [
        "interview",
        "--project-name", "Maple Street Duplex",
        "--project-type", "residential",
        "--description", DESCRIPTION,
        "--start-date", "2025-01-01",
        "--end-date", "2025-01-31",
        "--output-dir", str(output_dir),
        *extra,
    ]


def _ready_agent():
    return TaskWizardAgent(seed={
        "project_name": "Maple Street Duplex",
        "project_type": "residential",
        "description": DESCRIPTION,
        "start_date": "2025-01-01",
        "end_date": "2025-01-31",
        "budget": 450000,
        "top_priority": "time",
        "team_size": 5,
        "constraints": [],
        "risks_text": "Tight lot",
        "done_tasks": ["site survey"],
    })


class TestInterview:
    def test_full_run(self, tmp_path, capsys):
        replies = ["status", "450000", "1", "5", "none", "Tight lot", "site survey", "1", ""]
        with patch("builtins.input", side_effect=replies):
            code = cli.main(_interview_args(tmp_path))

        assert code == 0
        out = capsys.readouterr().out
        assert "Progress:" in out
        assert "PLAN:" in out
        assert "[done]" in out
        assert list(tmp_path.glob("wizard-*.json"))

    def test_quit_saves_session(self, tmp_path, capsys):
        with patch("builtins.input", side_effect=["quit"]):
            code = cli.main(_interview_args(tmp_path))
        assert code == 0
        assert "Session saved to:" in capsys.readouterr().out
        assert list(tmp_path.glob("wizard-*.json"))

    def test_commit_requires_project_id(self, tmp_path, capsys):
        replies = ["450000", "time", "5", "none", "Tight lot", "none", ""]
        with patch("builtins.input", side_effect=replies):
            code = cli.main(_interview_args(tmp_path, "--commit"))
        assert code == 1
        assert "--project-id is required" in capsys.readouterr().out

    def test_commit_to_task_store(self, tmp_path, capsys):
        store = MagicMock()

        async def create_task_async(project_id, task):
            return True

        store.create_task_async.side_effect = create_task_async
        replies = ["450000", "time", "5", "none", "Tight lot", "none", ""]
        with patch("builtins.input", side_effect=replies), \
                patch("task_wizard.cli.create_task_store_client", return_value=store):
            code = cli.main(_interview_args(tmp_path, "--project-id", "42", "--commit"))

        assert code == 0
        assert store.create_task_async.call_count > 0
        assert "failed" in capsys.readouterr().out


class TestToggleTasks:
    def test_toggle_by_number(self):
        agent = _ready_agent()
        first = agent.tasks[0].title
        assert cli.toggle_tasks(agent, "1") == []
        assert not agent.selection.is_included(first)
        cli.toggle_tasks(agent, "1")
        assert agent.selection.is_included(first)

    def test_bad_numbers_reported(self):
        agent = _ready_agent()
        problems = cli.toggle_tasks(agent, "0, abc, 99999")
        assert len(problems) == 3

    def test_completed_task_reported(self):
        agent = _ready_agent()
        last = len(agent.tasks)
        problems = cli.toggle_tasks(agent, str(last))
        assert problems and "already complete" in problems[0]


class TestMilestones:
    def test_lists_triggered_tasks(self, capsys):
        code = cli.main(["milestones", "--completion", "50", "--as-of", "2025-05-01"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Mid-Project Assessment" in out
        assert "2025-05-04" in out

    def test_none_triggered(self, capsys):
        cli.main(["milestones", "--completion", "5"])
        assert "No milestone tasks" in capsys.readouterr().out


class TestNoCommand:
    def test_prints_help(self, capsys):
        assert cli.main([]) == 1
