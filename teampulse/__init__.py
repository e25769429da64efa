"""Skill, load and risk scoring for student project teams."""

from .config import ReassignmentSettings, load_reassignment_settings
from .engine.reassignment import ReassignmentSuggestion, suggest_task_reassignments
from .engine.skill_blender import (
    SkillEstimate,
    SkillEvaluationResult,
    calculate_skill_for_category,
    calculate_skills,
)
from .models import SelfAssessment, SelfAssessmentRecord, Student, Task, Team

__all__ = [
    "ReassignmentSettings",
    "ReassignmentSuggestion",
    "SelfAssessment",
    "SelfAssessmentRecord",
    "SkillEstimate",
    "SkillEvaluationResult",
    "Student",
    "Task",
    "Team",
    "calculate_skill_for_category",
    "calculate_skills",
    "load_reassignment_settings",
    "suggest_task_reassignments",
]
