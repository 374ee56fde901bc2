"""Tests for status transitions and prompt field formatting."""

from datetime import date, datetime

import pytest

from portfolio.db.status import DISTRIBUTION_TRANSITIONS, JOB_ALERT_TRANSITIONS, check_transition
from portfolio.errors import ValidationError
from portfolio.utils.formatting import format_period, format_years, iso_date, last_updated


@pytest.mark.parametrize(
    "current,new",
    [("identified", "applied"), ("applied", "interview"), ("interview", "accepted"), ("identified", "rejected")],
)
def test_job_alert_allowed(current, new):
    check_transition(JOB_ALERT_TRANSITIONS, current, new)


@pytest.mark.parametrize(
    "current,new",
    [("identified", "interview"), ("applied", "identified"), ("accepted", "rejected"), ("applied", "hired")],
)
def test_job_alert_rejected(current, new):
    with pytest.raises(ValidationError):
        check_transition(JOB_ALERT_TRANSITIONS, current, new)


def test_distribution_can_skip_to_responded():
    check_transition(DISTRIBUTION_TRANSITIONS, "sent", "responded")
    with pytest.raises(ValidationError):
        check_transition(DISTRIBUTION_TRANSITIONS, "responded", "viewed")


class TestFormatting:
    def test_iso_date(self):
        assert iso_date(datetime(2024, 5, 6, 13, 30)) == "2024-05-06"
        assert iso_date(date(2024, 5, 6)) == "2024-05-06"
        assert iso_date(None) == ""

    def test_open_period(self):
        assert format_period(date(2020, 1, 1), None) == "2020-01-01 to Present"
        assert format_years(date(2018, 9, 1), None) == "2018-Present"
        assert format_years(date(2018, 9, 1), date(2022, 6, 30)) == "2018-2022"

    def test_last_updated(self):
        assert last_updated(None) == "never"
        assert last_updated(datetime(2025, 1, 2, 3, 4)) == "2025-01-02"
