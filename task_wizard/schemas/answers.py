"""
Answer and transcript records for the task wizard.

Answers holds one optional field per intake slot. The record is frozen:
every accepted answer produces a new record via ``Answers.with_value``,
so a session can be replayed deterministically from its inputs.
"""

from dataclasses import dataclass, field, fields, replace, asdict
from enum import Enum
from typing import Any, Optional

from .answer_parsers import parse_date_like


class ProjectType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    RENOVATION = "renovation"
    INDUSTRIAL = "industrial"
    INSTITUTIONAL = "institutional"
    OTHER = "other"


class TopPriority(str, Enum):
    TIME = "time"
    COST = "cost"
    QUALITY = "quality"
    SAFETY = "safety"
    SCOPE = "scope"


class MessageRole(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


@dataclass(frozen=True)
class Answers:
    """Collected intake answers. ``None`` means the slot is still unset."""
    project_name: Optional[str] = None
    project_type: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None  # YYYY-MM-DD
    end_date: Optional[str] = None  # YYYY-MM-DD
    budget: Optional[int] = None
    top_priority: Optional[str] = None
    team_size: Optional[int] = None
    constraints: Optional[tuple[str, ...]] = None
    risks_text: Optional[str] = None
    done_tasks: Optional[tuple[str, ...]] = None

    def is_set(self, slot_id: str) -> bool:
        return getattr(self, slot_id) is not None

    def with_value(self, slot_id: str, value: Any) -> "Answers":
        """Return a new record with one slot filled."""
        if slot_id not in _FIELD_NAMES:
            raise KeyError(f"Unknown slot: {slot_id}")
        if isinstance(value, list):
            value = tuple(value)
        return replace(self, **{slot_id: value})

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("constraints", "done_tasks"):
            if data[key] is not None:
                data[key] = list(data[key])
        return data

    @classmethod
    def from_seed(cls, seed: Optional[dict] = None) -> "Answers":
        """
        Build answers from a partial mapping, e.g. an existing project record.

        Empty strings and unknown keys are ignored so that a blank field on
        the project record does not short-circuit its question. Dates are
        normalised to YYYY-MM-DD; ones that do not parse are left unset.
        """
        if not seed:
            return cls()
        values = {}
        for key, value in seed.items():
            if key not in _FIELD_NAMES or value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
                if key in _DATE_FIELDS:
                    value = parse_date_like(value)
                    if value is None:
                        continue
            if isinstance(value, list):
                value = tuple(value)
            values[key] = value
        return cls(**values)


_FIELD_NAMES = {f.name for f in fields(Answers)}
_DATE_FIELDS = ("start_date", "end_date")


@dataclass(frozen=True)
class Message:
    """A single transcript entry."""
    role: MessageRole
    text: str
    meta: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "text": self.text,
            "meta": dict(self.meta),
        }
