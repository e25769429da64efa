"""Tests for teampulse.config module."""

import logging
import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from teampulse.config import ReassignmentSettings, load_reassignment_settings


class TestReassignmentSettings:
    def test_defaults(self):
        s = ReassignmentSettings()
        assert s.load_trigger == 4.0
        assert s.motivation_trigger == 2.0
        assert s.skill_trigger == 3.0
        assert s.suggest_threshold == 50.0
        assert s.preferred_bonus == 10.0
        assert s.avoided_penalty == 5.0
        assert s.load_order_bonus == 10.0

    def test_bounds(self):
        with pytest.raises(ValidationError):
            ReassignmentSettings(load_trigger=7)
        with pytest.raises(ValidationError):
            ReassignmentSettings(suggest_threshold=-1)


class TestLoadReassignmentSettings:
    @patch.dict(os.environ, {}, clear=True)
    def test_no_overrides(self):
        assert load_reassignment_settings() == ReassignmentSettings()

    @patch.dict(os.environ, {
        "TEAMPULSE_SUGGEST_THRESHOLD": "60",
        "TEAMPULSE_PREFERRED_BONUS": "15.5",
    }, clear=True)
    def test_overrides_applied(self):
        s = load_reassignment_settings()
        assert s.suggest_threshold == 60.0
        assert s.preferred_bonus == 15.5
        assert s.load_trigger == 4.0

    @patch.dict(os.environ, {
        "TEAMPULSE_LOAD_TRIGGER": "high",
        "TEAMPULSE_AVOIDED_PENALTY": "8",
    }, clear=True)
    def test_non_number_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="teampulse.config"):
            s = load_reassignment_settings()
        assert s.load_trigger == 4.0
        assert s.avoided_penalty == 8.0
        assert "TEAMPULSE_LOAD_TRIGGER" in caplog.text

    @patch.dict(os.environ, {
        "TEAMPULSE_MOTIVATION_TRIGGER": "9",
        "TEAMPULSE_SKILL_TRIGGER": "2.5",
    }, clear=True)
    def test_out_of_range_ignored_others_kept(self, caplog):
        with caplog.at_level(logging.WARNING, logger="teampulse.config"):
            s = load_reassignment_settings()
        assert s.motivation_trigger == 2.0
        assert s.skill_trigger == 2.5
        assert "TEAMPULSE_MOTIVATION_TRIGGER" in caplog.text
