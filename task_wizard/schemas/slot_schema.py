"""
Intake slot definitions for the task wizard.

Slots are asked strictly in the order of ``INTAKE_SLOTS``: identity and
scope questions first, then dates and numbers.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from .answers import Answers, ProjectType, TopPriority
from . import answer_parsers


@dataclass(frozen=True)
class Slot:
    """A single intake question."""
    id: str  # Answers field name
    prompt: str
    parser: Optional[Callable] = None  # (text, options, answers) -> ParseResult
    options: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = {"id": self.id, "prompt": self.prompt}
        if self.options:
            data["options"] = list(self.options)
        return data


PROJECT_TYPE_OPTIONS = tuple(t.value for t in ProjectType)
TOP_PRIORITY_OPTIONS = tuple(p.value for p in TopPriority)
CONSTRAINT_OPTIONS = ("permits", "weather", "site access", "noise hours", "supply chain", "none")


INTAKE_SLOTS: tuple[Slot, ...] = (
    Slot(
        id="project_name",
        prompt="What's the project name?",
        parser=answer_parsers.parse_required_text,
    ),
    Slot(
        id="project_type",
        prompt="What type of project is this?",
        parser=answer_parsers.parse_choice,
        options=PROJECT_TYPE_OPTIONS,
    ),
    Slot(
        id="description",
        prompt="Give a brief scope/description.",
        parser=answer_parsers.parse_required_text,
    ),
    Slot(
        id="start_date",
        prompt="When does the project start? (yyyy-mm-dd)",
        parser=answer_parsers.parse_start_date,
    ),
    Slot(
        id="end_date",
        prompt="When should it finish? (yyyy-mm-dd)",
        parser=answer_parsers.parse_end_date,
    ),
    Slot(
        id="budget",
        prompt="Approximate total budget (USD)?",
        parser=answer_parsers.parse_budget,
    ),
    Slot(
        id="top_priority",
        prompt="Pick the top priority.",
        parser=answer_parsers.parse_choice,
        options=TOP_PRIORITY_OPTIONS,
    ),
    Slot(
        id="team_size",
        prompt="Estimated team size working concurrently?",
        parser=answer_parsers.parse_team_size,
    ),
    Slot(
        id="constraints",
        prompt="Any constraints? Choose any that apply.",
        parser=answer_parsers.parse_constraints,
        options=CONSTRAINT_OPTIONS,
    ),
    Slot(
        id="risks_text",
        prompt="Any known risks or special considerations?",
        parser=answer_parsers.parse_required_text,
    ),
    Slot(
        id="done_tasks",
        prompt="Anything already done (e.g., survey, permits, demo)? List comma-separated or say none.",
        parser=answer_parsers.parse_done_tasks,
    ),
)


def next_slot(answers: Answers) -> Optional[Slot]:
    """Get the first slot whose answer is still unset."""
    for slot in INTAKE_SLOTS:
        if not answers.is_set(slot.id):
            return slot
    return None


def get_slot(slot_id: str) -> Slot:
    for slot in INTAKE_SLOTS:
        if slot.id == slot_id:
            return slot
    raise KeyError(f"Unknown slot: {slot_id}")


def get_total_slots() -> int:
    return len(INTAKE_SLOTS)
