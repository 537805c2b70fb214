"""
Task Wizard Agent for construction project intake

This agent runs a rule-based intake conversation: it asks one question
per unanswered slot, validates each reply, and once every slot is filled
generates a prioritized, estimated task plan the user can review.

Usage:
    agent = TaskWizardAgent(seed={"project_name": "Maple Street Duplex"})
    agent.submit_answer("residential")
    ...
    if agent.is_ready:
        print(agent.estimated_weeks)
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from ..schemas.answers import Answers, Message, MessageRole
from ..schemas.generated_task import GeneratedTask
from ..schemas.slot_schema import Slot, INTAKE_SLOTS, next_slot, get_total_slots
from ..planning.catalog import DEFAULT_PHASES
from ..planning.task_generator import generate_base_tasks, generate_recurring_tasks
from ..planning.ranker import merge_generated, rank_tasks
from ..planning.estimator import estimate_project_duration
from ..planning.selection import SelectionModel


logger = logging.getLogger(__name__)


class WizardState(str, Enum):
    """Current state of the wizard."""
    COLLECTING = "collecting"
    READY = "ready"


GENERATION_FAILED_TEXT = "I had trouble generating tasks. Please adjust inputs and try again."


class TaskWizardAgent:
    """
    Intake wizard that turns a short Q&A into a ranked task plan.

    The agent:
    - Asks exactly one outstanding question at a time, in fixed order
    - Re-asks the same question when an answer fails validation
    - Generates, ranks and estimates tasks once, when the last slot is filled
    - Keeps an append-only transcript of the whole exchange
    """

    def __init__(
        self,
        seed: Optional[dict] = None,
        project_id: Optional[str] = None,
        phase_names: tuple[str, ...] = DEFAULT_PHASES,
    ):
        self.session_id = f"wizard-{datetime.now().strftime('%Y%m%d%H%M%S%f')}"
        self.project_id = project_id
        self.phase_names = tuple(phase_names)

        self._answers = Answers.from_seed(seed)
        self._transcript: list[Message] = []
        self._state = WizardState.COLLECTING
        self._tasks: list[GeneratedTask] = []
        self._selection: Optional[SelectionModel] = None
        self._estimated_weeks: Optional[int] = None
        self._generation_error: Optional[str] = None

        name = self._answers.project_name or "your project"
        self._say(
            f"Hi! I'll help craft a prioritized task plan for {name}. "
            "I'll ask quick questions and adapt as we go."
        )
        self._advance()

    # -- read-only state ------------------------------------------------------

    @property
    def answers(self) -> Answers:
        return self._answers

    @property
    def transcript(self) -> tuple[Message, ...]:
        return tuple(self._transcript)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == WizardState.READY

    @property
    def tasks(self) -> list[GeneratedTask]:
        """Ranked tasks; empty until ready, or if generation failed."""
        return list(self._tasks)

    @property
    def selection(self) -> Optional[SelectionModel]:
        return self._selection

    @property
    def estimated_weeks(self) -> Optional[int]:
        return self._estimated_weeks

    @property
    def generation_error(self) -> Optional[str]:
        return self._generation_error

    @property
    def progress_percentage(self) -> int:
        filled = sum(1 for slot in INTAKE_SLOTS if self._answers.is_set(slot.id))
        return int((filled / get_total_slots()) * 100)

    def get_next_question(self) -> Optional[Slot]:
        """The outstanding slot, or None once every slot is filled."""
        return next_slot(self._answers)

    # -- transitions ------------------------------------------------------------

    def submit_answer(self, raw_input: str = "", chosen_options: Optional[list[str]] = None) -> bool:
        """
        Answer the outstanding question.

        Returns True when the answer was accepted. Invalid answers leave the
        slot unfilled, append an explanation and re-ask the same question.
        Does nothing once the wizard is ready.
        """
        slot = next_slot(self._answers)
        if slot is None:
            return False

        text = (raw_input or "").strip()
        options = [o for o in (chosen_options or []) if o]
        self._transcript.append(Message(
            role=MessageRole.USER,
            text=text or ", ".join(options),
        ))

        result = slot.parser(text, options, self._answers)
        if not result.ok:
            logger.debug("Rejected answer for %s: %r", slot.id, text)
            self._say(result.error)
            self._ask(slot)
            return False

        self._answers = self._answers.with_value(slot.id, result.value)
        self._advance()
        return True

    def _advance(self) -> None:
        slot = next_slot(self._answers)
        if slot is not None:
            self._ask(slot)
            return
        if self._state != WizardState.READY:
            self._state = WizardState.READY
            self._generate_plan()

    def _generate_plan(self) -> None:
        a = self._answers
        try:
            base = generate_base_tasks(a.project_type, a.description, a.start_date, a.project_name)
            recurring = generate_recurring_tasks(a.start_date, a.end_date, self.phase_names)
            ranked = rank_tasks(
                merge_generated(base, recurring),
                a.top_priority,
                a.done_tasks or (),
            )
        except (ValueError, TypeError, OverflowError) as e:
            logger.exception("Task generation failed for session %s", self.session_id)
            self._generation_error = str(e)
            self._tasks = []
            self._selection = SelectionModel([])
            self._estimated_weeks = None
            self._say(GENERATION_FAILED_TEXT)
            return

        self._tasks = ranked
        self._selection = SelectionModel(ranked)
        self._estimated_weeks = estimate_project_duration(ranked)
        logger.info(
            "Generated %d tasks (%d base, %d recurring), ~%d weeks",
            len(ranked), len(base), len(recurring), self._estimated_weeks,
        )
        self._say(
            f"Here's a prioritized plan. I estimated ~{self._estimated_weeks} weeks of effort "
            "across all tasks. Review and confirm which to create."
        )

    def _say(self, text: str, meta: Optional[dict] = None) -> None:
        self._transcript.append(Message(role=MessageRole.ASSISTANT, text=text, meta=meta or {}))

    def _ask(self, slot: Slot) -> None:
        meta = {"id": slot.id}
        if slot.options:
            meta["options"] = list(slot.options)
        self._say(slot.prompt, meta)

    # -- output ---------------------------------------------------------------

    def get_status_display(self) -> str:
        """Get a status display of the collected answers."""
        status = f"\n{'─'*60}\n"
        status += f"Progress: {self.progress_percentage}% complete\n"
        status += f"{'─'*60}\n"
        answers = self._answers.to_dict()
        for slot in INTAKE_SLOTS:
            value = answers[slot.id]
            icon = "✓" if value is not None else "○"
            if isinstance(value, list):
                value = ", ".join(value) or "none"
            status += f"  {icon} {slot.id.replace('_', ' ')}: {value if value is not None else '-'}\n"
        status += f"{'─'*60}\n"
        return status

    def to_dict(self) -> dict:
        """JSON-ready snapshot of the session."""
        slot = next_slot(self._answers)
        include = self._selection.include_map() if self._selection else {}
        return {
            "session_id": self.session_id,
            "project_id": self.project_id,
            "state": self._state.value,
            "progress": self.progress_percentage,
            "answers": self._answers.to_dict(),
            "question": slot.to_dict() if slot else None,
            "transcript": [m.to_dict() for m in self._transcript],
            "tasks": [
                {
                    **t.to_dict(),
                    "generation_index": t.generation_index,
                    "include": include.get(t.title, False),
                    "disabled": t.is_completed,
                }
                for t in self._tasks
            ],
            "estimated_weeks": self._estimated_weeks,
            "generation_error": self._generation_error,
        }

    def save_session(self, output_dir: str = "./outputs") -> str:
        """Save the current session to a JSON file."""
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        filepath = out / f"{self.session_id}.json"

        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        return str(filepath)
