# -*- coding: utf-8 -*-
"""
Tests for the local transfer validators.

Tests cover:
- Weekday parsing of schedule strings
- Effective date rules
- Reason length
- Confirmation step checks
"""

from datetime import date, timedelta

import pytest

from app.config import Config
from models.transfer import TransferOption
from services.translation_manager import tr
from services.wizard.transfer_validators import (
    parse_date, parse_schedule_weekdays, validate_effective_date,
    validate_on_behalf_confirmation, validate_reason, validate_transfer_confirmation
)

from api_payloads import option_row, session_row

# A Monday far enough from any month end to keep the arithmetic readable
TODAY = date(2030, 1, 7)


class TestScheduleWeekdays:
    """Test weekday extraction from scheduleDays."""

    @pytest.mark.parametrize("text,expected", [
        ("Mon, Wed, Fri", {0, 2, 4}),
        ("T2-T4-T6", {0, 2, 4}),
        ("Thứ 3, Thứ 5", {1, 3}),
        ("T7, CN", {5, 6}),
        ("Chủ nhật", {6}),
        ("", set()),
        (None, set()),
    ])
    def test_parse(self, text, expected):
        assert parse_schedule_weekdays(text) == frozenset(expected)

    def test_numbers_are_not_weekdays(self):
        assert parse_schedule_weekdays("T20, room 12") == frozenset()

    def test_parse_date(self):
        assert parse_date("2030-01-07T08:00:00") == TODAY
        assert parse_date(TODAY) == TODAY
        assert parse_date("07/01/2030") is None
        assert parse_date("") is None


class TestEffectiveDate:
    """Test the effective date rules."""

    def test_required(self):
        result = validate_effective_date(None, "Mon", today=TODAY)
        assert result.errors == [tr("validation.date.required")]

    def test_unparseable(self):
        result = validate_effective_date("next monday", "Mon", today=TODAY)
        assert result.errors == [tr("validation.date.invalid")]

    def test_past(self):
        result = validate_effective_date(TODAY - timedelta(days=7), "Mon", today=TODAY)
        assert result.errors == [tr("validation.date.past")]

    def test_class_day_from_schedule(self):
        assert validate_effective_date(TODAY + timedelta(days=2), "Mon, Wed", today=TODAY).is_valid
        result = validate_effective_date(TODAY + timedelta(days=1), "Mon, Wed", today=TODAY)
        assert not result.is_valid

    def test_session_dates_take_precedence(self):
        session_day = TODAY + timedelta(days=1)
        assert validate_effective_date(
            session_day, "Mon", session_dates=[session_day], today=TODAY
        ).is_valid
        result = validate_effective_date(TODAY, "Mon", session_dates=[session_day], today=TODAY)
        assert result.errors == [tr("validation.date.no_session")]

    def test_too_far_ahead(self):
        far = TODAY + timedelta(weeks=(Config.EFFECTIVE_DATE_MAX_DAYS // 7) + 1)
        result = validate_effective_date(far, "Mon", today=TODAY)
        assert result.errors == [tr("validation.date.too_far", days=Config.EFFECTIVE_DATE_MAX_DAYS)]

    def test_today_is_allowed(self):
        assert validate_effective_date(TODAY.isoformat(), "Mon", today=TODAY).is_valid


class TestReason:
    def test_required(self):
        assert validate_reason("   ").errors == [tr("validation.reason.required")]

    def test_minimum_length_after_trim(self):
        short = "x" * (Config.TRANSFER_REASON_MIN_LENGTH - 1)
        assert not validate_reason(f"  {short}  ").is_valid
        assert validate_reason("x" * Config.TRANSFER_REASON_MIN_LENGTH).is_valid

    def test_custom_minimum(self):
        assert not validate_reason("fifteen chars..", 20).is_valid


def _target(**kwargs):
    return TransferOption.from_api(option_row(**kwargs))


class TestConfirmation:
    """Test the confirmation step checks."""

    def _state(self, **overrides):
        target = _target(sessions=[session_row(days_ahead=7)])
        state = {
            "target_class": target,
            "session_id": 501,
            "effective_date": target.all_sessions[0].date,
            "reason": "Moving to the evening shift",
            "terms_accepted": True,
            "quota_acknowledged": True,
            "content_gap_acknowledged": True,
            "capacity_override": False,
            "override_reason": "",
        }
        state.update(overrides)
        return state

    def test_complete_confirmation(self):
        assert validate_transfer_confirmation(self._state()).is_valid

    def test_every_acknowledgement_required(self):
        result = validate_transfer_confirmation(self._state(
            terms_accepted=False, quota_acknowledged=False, content_gap_acknowledged=False
        ))
        assert result.errors == [
            tr("validation.ack.terms"), tr("validation.ack.quota"), tr("validation.ack.content_gap"),
        ]

    def test_missing_target(self):
        result = validate_transfer_confirmation(self._state(target_class=None))
        assert result.errors == [tr("validation.target.required")]

    def test_on_behalf_open_class(self):
        assert validate_on_behalf_confirmation(self._state()).is_valid

    def test_on_behalf_full_class_needs_override(self):
        target = _target(available=0, sessions=[session_row(days_ahead=7)])
        state = self._state(target_class=target)
        assert tr("validation.override.required") in validate_on_behalf_confirmation(state).errors

        state["capacity_override"] = True
        state["override_reason"] = "too short"
        assert not validate_on_behalf_confirmation(state).is_valid

        state["override_reason"] = "Center head approved an extra seat"
        assert validate_on_behalf_confirmation(state).is_valid

    def test_on_behalf_session_required(self):
        result = validate_on_behalf_confirmation(self._state(session_id=None))
        assert result.errors == [tr("validation.session.required")]
