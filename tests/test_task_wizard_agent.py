"""
Tests for the task wizard dialogue: slot filling, validation, plan
generation and session output.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from task_wizard.agents.task_wizard_agent import (
    TaskWizardAgent,
    WizardState,
    GENERATION_FAILED_TEXT,
)
from task_wizard.schemas.answers import MessageRole


DESCRIPTION = (
    "Two-storey wood frame duplex with a full basement, attached garages, "
    "new utility connections, driveway paving and landscaping on a corner lot."
)


def full_seed(**overrides):
    seed = {
        "project_name": "Maple Street Duplex",
        "project_type": "residential",
        "description": DESCRIPTION,
        "start_date": "2025-01-01",
        "end_date": "2025-03-01",
        "budget": 450000,
        "top_priority": "time",
        "team_size": 6,
        "constraints": ["weather"],
        "risks_text": "Tight lot",
        "done_tasks": ["site survey"],
    }
    seed.update(overrides)
    return seed


def answer_all(agent):
    """Answer every outstanding question with valid input."""
    replies = {
        "project_name": ("Maple Street Duplex", None),
        "project_type": ("", ["residential"]),
        "description": (DESCRIPTION, None),
        "start_date": ("2025-01-01", None),
        "end_date": ("March 1, 2025", None),
        "budget": ("$450,000", None),
        "top_priority": ("", ["time"]),
        "team_size": ("6", None),
        "constraints": ("", ["weather", "permits"]),
        "risks_text": ("Tight lot", None),
        "done_tasks": ("site survey", None),
    }
    while not agent.is_ready:
        text, options = replies[agent.get_next_question().id]
        assert agent.submit_answer(text, options)


class TestStart:
    def test_greeting_then_first_question(self):
        agent = TaskWizardAgent()
        transcript = agent.transcript
        assert transcript[0].text.startswith("Hi! I'll help craft a prioritized task plan for your project.")
        assert transcript[1].text == "What's the project name?"
        assert transcript[1].meta == {"id": "project_name"}
        assert agent.state == WizardState.COLLECTING

    def test_greeting_uses_seed_name(self):
        agent = TaskWizardAgent(seed={"project_name": "Elm Clinic"})
        assert "Elm Clinic" in agent.transcript[0].text
        assert agent.get_next_question().id == "project_type"

    def test_question_carries_options(self):
        agent = TaskWizardAgent(seed={"project_name": "Elm Clinic"})
        assert agent.transcript[-1].meta["options"][0] == "residential"

    def test_blank_seed_values_still_asked(self):
        agent = TaskWizardAgent(seed={"project_name": "", "description": "Clinic fit-out"})
        assert agent.get_next_question().id == "project_name"


class TestSubmitAnswer:
    def test_valid_answer_advances(self):
        agent = TaskWizardAgent()
        assert agent.submit_answer("Maple Street Duplex")
        assert agent.answers.project_name == "Maple Street Duplex"
        assert agent.get_next_question().id == "project_type"

    def test_invalid_answer_reasks(self):
        agent = TaskWizardAgent(seed={
            "project_name": "Duplex",
            "project_type": "residential",
            "description": "Two units",
        })
        before = len(agent.transcript)
        assert not agent.submit_answer("next spring")

        new = agent.transcript[before:]
        assert [m.role for m in new] == [MessageRole.USER, MessageRole.ASSISTANT, MessageRole.ASSISTANT]
        assert new[1].text == "Please use a valid date like 2025-03-15."
        assert new[2].meta["id"] == "start_date"
        assert agent.answers.start_date is None

    def test_options_recorded_in_transcript(self):
        agent = TaskWizardAgent(seed={"project_name": "Duplex"})
        agent.submit_answer("", ["commercial"])
        user_messages = [m for m in agent.transcript if m.role == MessageRole.USER]
        assert user_messages[-1].text == "commercial"
        assert agent.answers.project_type == "commercial"

    def test_transcript_only_grows(self):
        agent = TaskWizardAgent()
        sizes = [len(agent.transcript)]
        for reply in ("Duplex", "", "residential"):
            agent.submit_answer(reply)
            sizes.append(len(agent.transcript))
        assert sizes == sorted(sizes)
        assert len(set(sizes)) == len(sizes)

    def test_progress(self):
        agent = TaskWizardAgent()
        assert agent.progress_percentage == 0
        agent.submit_answer("Duplex")
        assert agent.progress_percentage == 9


class TestPlanGeneration:
    def test_full_conversation_reaches_ready(self):
        agent = TaskWizardAgent()
        answer_all(agent)

        assert agent.state == WizardState.READY
        assert agent.get_next_question() is None
        assert agent.answers.end_date == "2025-03-01"
        assert agent.answers.budget == 450000
        assert agent.answers.constraints == ("weather", "permits")
        assert agent.tasks
        assert agent.transcript[-1].text.startswith("Here's a prioritized plan. I estimated ~")

    def test_full_seed_is_ready_immediately(self):
        agent = TaskWizardAgent(seed=full_seed())
        assert agent.is_ready
        assert len(agent.transcript) == 2

    def test_done_task_ranked_last_and_completed(self):
        agent = TaskWizardAgent(seed=full_seed())
        survey = next(t for t in agent.tasks if t.title == "Site Survey and Preparation")
        assert survey.completion_percentage == 100
        assert survey.priority == "low"
        assert agent.tasks[-1].title == "Site Survey and Preparation"
        assert not agent.selection.is_included(survey.title)

    def test_time_priority_promotes_medium(self):
        agent = TaskWizardAgent(seed=full_seed())
        assert not [t for t in agent.tasks if t.priority == "medium"]

    def test_cost_priority_keeps_medium(self):
        agent = TaskWizardAgent(seed=full_seed(top_priority="cost"))
        assert [t for t in agent.tasks if t.priority == "medium"]

    def test_recurring_tasks_included(self):
        agent = TaskWizardAgent(seed=full_seed())
        meetings = [t for t in agent.tasks if t.title.startswith("Daily Safety Meeting")]
        assert len(meetings) == 60
        assert any(t.title == "Construction Phase Review" for t in agent.tasks)

    def test_estimate_positive(self):
        agent = TaskWizardAgent(seed=full_seed())
        assert agent.estimated_weeks > 0

    def test_pending_before_completed(self):
        agent = TaskWizardAgent(seed=full_seed(done_tasks=["site survey", "framing"]))
        flags = [t.is_completed for t in agent.tasks]
        assert flags == sorted(flags)

    def test_generation_index_unique(self):
        agent = TaskWizardAgent(seed=full_seed())
        indexes = [t.generation_index for t in agent.tasks]
        assert len(indexes) == len(set(indexes))

    def test_same_answers_same_plan(self):
        first = TaskWizardAgent(seed=full_seed())
        second = TaskWizardAgent(seed=full_seed())
        assert [t.to_dict() for t in first.tasks] == [t.to_dict() for t in second.tasks]

    def test_unknown_project_type_uses_generic_catalog(self):
        agent = TaskWizardAgent(seed=full_seed(project_type="Mixed use", done_tasks=[]))
        titles = [t.title for t in agent.tasks]
        assert "Main Construction Work" in titles

    def test_generation_failure(self):
        agent = TaskWizardAgent(seed=full_seed(start_date=None, end_date=None))
        agent.submit_answer("2025-13-45")
        agent.submit_answer("2025-12-31")

        assert agent.is_ready
        assert agent.tasks == []
        assert agent.generation_error
        assert agent.estimated_weeks is None
        assert agent.selection.included_tasks() == []
        assert agent.transcript[-1].text == GENERATION_FAILED_TEXT

    def test_dates_at_end_of_calendar_fail_gracefully(self):
        agent = TaskWizardAgent(seed=full_seed(start_date=None, end_date=None))
        assert agent.submit_answer("9999-12-25")
        assert agent.submit_answer("9999-12-31")

        assert agent.is_ready
        assert agent.tasks == []
        assert agent.generation_error
        assert agent.selection is not None
        assert agent.selection.estimate_selected_duration() == 0
        assert agent.transcript[-1].text == GENERATION_FAILED_TEXT

    def test_seeded_loose_dates_normalised(self):
        agent = TaskWizardAgent(seed=full_seed(start_date="January 1, 2025", end_date="03/01/2025"))
        assert agent.answers.start_date == "2025-01-01"
        assert agent.answers.end_date == "2025-03-01"
        assert agent.is_ready
        assert agent.generation_error is None

    def test_answers_ignored_once_ready(self):
        agent = TaskWizardAgent(seed=full_seed())
        before = len(agent.transcript)
        assert not agent.submit_answer("anything")
        assert len(agent.transcript) == before


class TestOutput:
    def test_status_display(self):
        agent = TaskWizardAgent(seed={"project_name": "Duplex"})
        status = agent.get_status_display()
        assert "✓ project name: Duplex" in status
        assert "○ project type: -" in status

    def test_to_dict_flags(self):
        agent = TaskWizardAgent(seed=full_seed())
        data = agent.to_dict()
        assert data["state"] == "ready"
        assert data["question"] is None
        survey = next(t for t in data["tasks"] if t["title"] == "Site Survey and Preparation")
        assert survey["include"] is False
        assert survey["disabled"] is True

    def test_save_session(self, tmp_path):
        agent = TaskWizardAgent(seed=full_seed())
        filepath = agent.save_session(str(tmp_path))
        assert Path(filepath).exists()
        with open(filepath) as f:
            data = json.load(f)
        assert data["session_id"] == agent.session_id
        assert data["answers"]["done_tasks"] == ["site survey"]
