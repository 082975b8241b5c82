# -*- coding: utf-8 -*-
"""
Local validation for the transfer and enrollment import wizards.

Validates context values without UI coupling. Nothing here talks to the
network; a failing check blocks the step before any request is made.
"""

import re
from datetime import date, timedelta
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from app.config import Config
from services.translation_manager import tr
from ui.wizards.framework.base_step import StepValidationResult

# Python weekday (Monday = 0) -> accepted spellings in ``scheduleDays``
_WEEKDAY_PATTERNS = {
    0: re.compile(r"(?<!\w)(?:mon|t2(?!\d)|thứ\s*2(?!\d))"),
    1: re.compile(r"(?<!\w)(?:tue|t3(?!\d)|thứ\s*3(?!\d))"),
    2: re.compile(r"(?<!\w)(?:wed|t4(?!\d)|thứ\s*4(?!\d))"),
    3: re.compile(r"(?<!\w)(?:thu|t5(?!\d)|thứ\s*5(?!\d))"),
    4: re.compile(r"(?<!\w)(?:fri|t6(?!\d)|thứ\s*6(?!\d))"),
    5: re.compile(r"(?<!\w)(?:sat|t7(?!\d)|thứ\s*7(?!\d))"),
    6: re.compile(r"(?<!\w)(?:sun|cn(?!\w)|chủ\s*nhật)"),
}


def parse_schedule_weekdays(schedule_days: Optional[str]) -> FrozenSet[int]:
    """
    Weekdays named in a class schedule string.

    Understands English abbreviations ("Mon, Wed"), short Vietnamese
    ("T2-T4-T6", "CN") and long Vietnamese ("Thứ 2, Thứ 5").
    """
    text = (schedule_days or "").lower()
    return frozenset(day for day, pattern in _WEEKDAY_PATTERNS.items() if pattern.search(text))


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def validate_reason(reason: Optional[str], min_length: Optional[int] = None) -> StepValidationResult:
    """Free-text reason: required, at least ``min_length`` characters once trimmed."""
    min_length = min_length or Config.TRANSFER_REASON_MIN_LENGTH
    text = (reason or "").strip()
    if not text:
        return StepValidationResult.fail(tr("validation.reason.required"))
    if len(text) < min_length:
        return StepValidationResult.fail(tr("validation.reason.too_short", min=min_length))
    return StepValidationResult.ok()


def validate_override_reason(reason: Optional[str]) -> StepValidationResult:
    return validate_reason(reason, Config.OVERRIDE_REASON_MIN_LENGTH)


def validate_effective_date(
    value: Any,
    schedule_days: str = "",
    session_dates: Optional[Iterable[date]] = None,
    today: Optional[date] = None,
) -> StepValidationResult:
    """
    Effective date of a transfer.

    Must be present, parseable, not in the past, a class day of the target
    (one of ``session_dates`` when known, else a weekday of
    ``schedule_days``) and no more than EFFECTIVE_DATE_MAX_DAYS ahead.
    """
    today = today or date.today()
    if value in (None, ""):
        return StepValidationResult.fail(tr("validation.date.required"))

    effective = parse_date(value)
    if effective is None:
        return StepValidationResult.fail(tr("validation.date.invalid"))

    if effective < today:
        return StepValidationResult.fail(tr("validation.date.past"))

    dates = frozenset(d for d in (session_dates or ()) if d is not None)
    if dates:
        if effective not in dates:
            return StepValidationResult.fail(tr("validation.date.no_session"))
    else:
        weekdays = parse_schedule_weekdays(schedule_days)
        if effective.weekday() not in weekdays:
            return StepValidationResult.fail(
                tr("validation.date.not_class_day", schedule=schedule_days or "-")
            )

    if effective > today + timedelta(days=Config.EFFECTIVE_DATE_MAX_DAYS):
        return StepValidationResult.fail(
            tr("validation.date.too_far", days=Config.EFFECTIVE_DATE_MAX_DAYS)
        )

    return StepValidationResult.ok()


def validate_transfer_confirmation(state: Mapping[str, Any], today: Optional[date] = None) -> StepValidationResult:
    """
    Confirmation step of the self-service transfer.

    Reads: target_class, effective_date, reason, terms_accepted,
    quota_acknowledged, content_gap_acknowledged.
    """
    result = StepValidationResult.ok()
    target = state["target_class"]
    if target is None:
        return StepValidationResult.fail(tr("validation.target.required"))

    result.merge(validate_effective_date(
        state["effective_date"],
        schedule_days=target.schedule_days,
        session_dates=[s.date for s in target.upcoming_sessions(today)],
        today=today,
    ))
    result.merge(validate_reason(state["reason"]))

    if not state["terms_accepted"]:
        result.add_error(tr("validation.ack.terms"))
    if not state["quota_acknowledged"]:
        result.add_error(tr("validation.ack.quota"))
    if not state["content_gap_acknowledged"]:
        result.add_error(tr("validation.ack.content_gap"))
    return result


def validate_on_behalf_confirmation(state: Mapping[str, Any], today: Optional[date] = None) -> StepValidationResult:
    """
    Confirmation step of the on-behalf transfer.

    Reads: target_class, session_id, effective_date, reason,
    capacity_override, override_reason.
    """
    target = state["target_class"]
    if target is None:
        return StepValidationResult.fail(tr("validation.target.required"))
    if state["session_id"] is None:
        return StepValidationResult.fail(tr("validation.session.required"))

    result = validate_effective_date(
        state["effective_date"],
        session_dates=[s.date for s in target.upcoming_sessions(today)],
        today=today,
    )
    result.merge(validate_reason(state["reason"]))

    if target.is_full:
        if not state["capacity_override"]:
            result.add_error(tr("validation.override.required"))
        else:
            result.merge(validate_override_reason(state["override_reason"]))
    return result
