"""Tunable scoring constants with environment overrides.

Reads ``TEAMPULSE_*`` environment variables. Invalid values are logged and
replaced by the defaults, so a bad deployment setting never stops scoring.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)

ENV_PREFIX = "TEAMPULSE_"


class ReassignmentSettings(BaseModel):
    """Thresholds and bonuses used by the reassignment recommender."""

    load_trigger: float = Field(default=4.0, ge=1.0, le=5.0)
    motivation_trigger: float = Field(default=2.0, ge=1.0, le=5.0)
    skill_trigger: float = Field(default=3.0, ge=1.0, le=5.0)
    suggest_threshold: float = Field(default=50.0, ge=0.0, le=100.0)
    preferred_bonus: float = Field(default=10.0, ge=0.0, le=100.0)
    avoided_penalty: float = Field(default=5.0, ge=0.0, le=100.0)
    load_order_bonus: float = Field(default=10.0, ge=0.0, le=100.0)


def _env_overrides() -> dict[str, float]:
    overrides: dict[str, float] = {}
    for name in ReassignmentSettings.model_fields:
        env_name = f"{ENV_PREFIX}{name.upper()}"
        raw = os.getenv(env_name, "")
        if not raw:
            continue
        try:
            overrides[name] = float(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a number", env_name, raw)
    return overrides


def load_reassignment_settings() -> ReassignmentSettings:
    """Build settings from defaults plus any ``TEAMPULSE_*`` overrides.

    Each override is validated on its own; one out-of-range value does not
    discard the others.
    """
    accepted: dict[str, float] = {}
    for name, value in _env_overrides().items():
        try:
            ReassignmentSettings(**{name: value})
        except ValidationError as e:
            logger.warning("Ignoring %s%s=%s: %s", ENV_PREFIX, name.upper(), value, e.errors()[0]["msg"])
            continue
        accepted[name] = value

    settings = ReassignmentSettings(**accepted)
    if accepted:
        logger.info("Reassignment settings overridden from environment: %s", sorted(accepted))
    return settings
