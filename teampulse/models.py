"""Input records consumed by the scoring engine.

Tasks, students, teams and self-assessments arrive from an external data store
as loosely-typed dicts. The models here coerce sloppy upstream values to safe
defaults instead of rejecting them, so the engine always receives a complete
record.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
import logging
import math
from typing import Any, Literal, get_args

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Skill categories
# ---------------------------------------------------------------------------
SkillCategory = Literal[
    "Planning",
    "Execution",
    "Coordination",
    "Exploration",
    "Design",
    "Development",
    "Analysis",
    "Documentation",
    "Communication",
    "Leadership",
    "Presentation",
    "Problem-Solving",
]

SKILL_CATEGORIES: tuple[str, ...] = get_args(SkillCategory)

# Task categories that carry a required-skill check when reassigning.
CORE_TASK_CATEGORIES: tuple[str, ...] = ("Planning", "Execution", "Coordination", "Exploration")

TaskStatus = Literal["pending", "in_progress", "completed"]

_TASK_STATUSES: frozenset[str] = frozenset({"pending", "in_progress", "completed"})
_SKILL_FIELD_PREFIX = "skill_"


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------
def normalize_timestamp(value: datetime | date) -> datetime:
    """Return *value* as a naive UTC datetime so timestamps compare safely."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, (datetime, date)):
        return normalize_timestamp(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return normalize_timestamp(datetime.fromisoformat(text))
        except ValueError:
            logger.debug("Ignoring unparseable timestamp %r", value)
            return None
    logger.debug("Ignoring timestamp of unsupported type %s", type(value).__name__)
    return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _coerce_score(value: Any, default: float = 3.0) -> float:
    """Coerce an externally stored 1-5 score, falling back to *default*."""
    number = _to_float(value)
    if number is None:
        if value is not None:
            logger.debug("Replacing non-numeric score %r with %.1f", value, default)
        return default
    return max(1.0, min(5.0, number))


def _as_id_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(v) for v in value if v not in (None, "")]
    return [str(value)]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
class Task(BaseModel):
    """A unit of work assigned to one or more students."""

    task_id: str = Field(..., min_length=1)
    title: str = ""
    category: str = ""
    difficulty: int = Field(default=3, ge=1, le=5)
    status: TaskStatus = "pending"
    assignee_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("assignee_ids", "assignee_id"),
    )
    estimated_hours: float | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    deadline: datetime | None = None

    @field_validator("task_id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v: Any) -> int:
        number = _to_float(v)
        if number is None:
            if v is not None:
                logger.debug("Replacing non-numeric difficulty %r with 3", v)
            return 3
        return max(1, min(5, int(number + 0.5)))

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v: Any) -> str:
        if isinstance(v, str) and v in _TASK_STATUSES:
            return v
        logger.debug("Treating unknown task status %r as pending", v)
        return "pending"

    @field_validator("assignee_ids", mode="before")
    @classmethod
    def _coerce_assignees(cls, v: Any) -> list[str]:
        return _as_id_list(v)

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def _coerce_hours(cls, v: Any) -> float | None:
        number = _to_float(v)
        if number is None or number < 0:
            return None
        return number

    @field_validator("start_date", "end_date", "deadline", mode="before")
    @classmethod
    def _coerce_dates(cls, v: Any) -> datetime | None:
        return _parse_timestamp(v)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def is_active(self) -> bool:
        return self.status != "completed"

    def is_assigned_to(self, student_id: str) -> bool:
        return student_id in self.assignee_ids

    def is_overdue(self, as_of: datetime | date) -> bool:
        """An active task whose deadline lies strictly before *as_of*."""
        if self.deadline is None or self.is_completed:
            return False
        return self.deadline < normalize_timestamp(as_of)


class Student(BaseModel):
    """A team member, with externally stored scores and partner preferences."""

    student_id: str = Field(..., min_length=1)
    name: str = ""
    mbti: str = Field(default="", validation_alias=AliasChoices("mbti", "MBTI"))
    team_id: str = ""
    load_score: float = 3.0
    motivation_score: float = 3.0
    danger_score: float | None = None
    skills: dict[str, float] = Field(default_factory=dict)
    preferred_partners: list[str] = Field(default_factory=list)
    avoided_partners: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collect_flat_skills(cls, data: Any) -> Any:
        """Fold ``skill_<Category>`` columns into the ``skills`` mapping."""
        if not isinstance(data, dict):
            return data
        flat = {
            key[len(_SKILL_FIELD_PREFIX):]: value
            for key, value in data.items()
            if isinstance(key, str) and key.startswith(_SKILL_FIELD_PREFIX)
        }
        if not flat:
            return data
        remaining = {k: v for k, v in data.items() if not (isinstance(k, str) and k.startswith(_SKILL_FIELD_PREFIX))}
        merged = dict(flat)
        explicit = remaining.get("skills")
        if isinstance(explicit, dict):
            merged.update(explicit)
        remaining["skills"] = merged
        return remaining

    @field_validator("student_id", "team_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v: Any) -> Any:
        if v is None:
            return ""
        return str(v) if isinstance(v, int) else v

    @field_validator("name", "mbti", mode="before")
    @classmethod
    def _blank_if_missing(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("load_score", "motivation_score", mode="before")
    @classmethod
    def _coerce_scores(cls, v: Any) -> float:
        return _coerce_score(v)

    @field_validator("danger_score", mode="before")
    @classmethod
    def _coerce_danger(cls, v: Any) -> float | None:
        if v is None:
            return None
        return _coerce_score(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, v: Any) -> dict[str, float]:
        if not isinstance(v, dict):
            return {}
        return {str(k): _coerce_score(score) for k, score in v.items()}

    @field_validator("preferred_partners", "avoided_partners", mode="before")
    @classmethod
    def _coerce_partners(cls, v: Any) -> list[str]:
        return _as_id_list(v)

    def skill_for(self, category: str, default: float = 3.0) -> float:
        """Stored skill level for *category*, or *default* when unknown."""
        return self.skills.get(category, default)


class SelfAssessment(BaseModel):
    """A self-reported score for one skill category.

    ``score`` and ``confidence`` use a 1-5 scale. Missing, zero or non-numeric
    values are stored as ``None`` and read as the neutral 3.0 by the blender.
    """

    skill: str = Field(..., min_length=1)
    score: float | None = None
    confidence: float | None = None
    reason: str | None = None

    @field_validator("score", "confidence", mode="before")
    @classmethod
    def _coerce_rating(cls, v: Any) -> float | None:
        number = _to_float(v)
        if not number:
            return None
        return max(1.0, min(5.0, number))


class SelfAssessmentRecord(BaseModel):
    """All self-assessments a student submitted on one date."""

    student_id: str = Field(..., min_length=1)
    date: datetime | None = None
    skills: list[SelfAssessment] = Field(default_factory=list)
    is_initial: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, v: Any) -> datetime | None:
        return _parse_timestamp(v)


class Team(BaseModel):
    """A project team and its member ids."""

    team_id: str = Field(..., min_length=1)
    name: str = ""
    project_name: str = ""
    student_ids: list[str] = Field(default_factory=list)

    @field_validator("student_ids", mode="before")
    @classmethod
    def _coerce_members(cls, v: Any) -> list[str]:
        return _as_id_list(v)


def latest_self_assessments(
    records: list[SelfAssessmentRecord],
    student_id: str,
) -> list[SelfAssessment] | None:
    """Return the newest record's assessments for *student_id*, or ``None``."""
    own = [r for r in records if r.student_id == student_id]
    if not own:
        return None
    newest = max(own, key=lambda r: r.date or datetime.min)
    return list(newest.skills)
