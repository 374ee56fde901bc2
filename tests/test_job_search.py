"""Tests for the job search agent."""

import asyncio
import json

import pytest
from sqlalchemy.exc import OperationalError

from portfolio.agents.job_search import JobSearchParams, JobSearchTask, format_filters, search_jobs
from portfolio.db import JobAlert, User
from portfolio.errors import (
    InferenceError,
    InsufficientDataError,
    MalformedResponseError,
    PersistenceError,
    ValidationError,
)
from tests.conftest import StubLLM

JOBS = [
    {
        "jobTitle": f"Backend Engineer {i}",
        "company": f"Company {i}",
        "location": "Berlin" if i % 2 else "",
        "description": "Build APIs",
        "requirements": ["Python", "SQL"],
        "salary": "$100k-$120k" if i % 2 else None,
        "applicationUrl": f"https://jobs.example.com/{i}",
        "confidenceScore": 0.5 + i / 10,
    }
    for i in range(5)
]


def alerts_for(db, user_id):
    return db.query(JobAlert).filter(JobAlert.user_id == user_id).all()


class TestJobSearch:
    def test_creates_one_alert_per_job(self, db, owner, notifier, outbox):
        llm = StubLLM("```json\n" + json.dumps(JOBS) + "\n```")

        jobs = asyncio.run(search_jobs({"user_id": owner.id}, db, llm, notifier))

        assert len(jobs) == 5
        assert [j.job_title for j in jobs] == [j["jobTitle"] for j in JOBS]
        assert [j.company for j in jobs] == [j["company"] for j in JOBS]

        alerts = alerts_for(db, owner.id)
        assert len(alerts) == 5
        assert {a.status for a in alerts} == {"identified"}
        assert sorted(a.company for a in alerts) == sorted(j["company"] for j in JOBS)

    def test_empty_location_defaults_to_remote(self, db, owner, notifier):
        llm = StubLLM(json.dumps(JOBS))
        asyncio.run(search_jobs({"user_id": owner.id}, db, llm, notifier))

        locations = {a.company: a.location for a in alerts_for(db, owner.id)}
        assert locations["Company 0"] == "Remote"
        assert locations["Company 1"] == "Berlin"

    def test_prompt_contains_profile_and_filters(self, db, owner, notifier):
        llm = StubLLM(json.dumps(JOBS))
        params = {"user_id": owner.id, "job_title": "Staff Engineer", "location": "Lisbon", "remote": True}
        asyncio.run(search_jobs(params, db, llm, notifier))

        prompt, temperature = llm.calls[0]
        assert temperature == 0.5
        assert "Python (backend, 90%, 6 years)" in prompt
        assert "Senior Engineer at Acme (2021-03-01 to Present)" in prompt
        assert "Developer at Initech (2018-01-15 to 2021-02-28)" in prompt
        assert "- Job Title: Staff Engineer" in prompt
        assert "- Location: Lisbon" in prompt
        assert "- Remote: Yes" in prompt

    def test_notifies_owner_by_email_and_sms(self, db, owner, notifier, outbox):
        asyncio.run(search_jobs({"user_id": owner.id}, db, StubLLM(json.dumps(JOBS)), notifier))

        assert len(outbox.emails) == 1
        assert outbox.emails[0]["to"] == "owner@example.com"
        assert "5 opportunities" in outbox.emails[0]["subject"]
        assert len(outbox.texts) == 1

    def test_notification_failure_does_not_fail_task(self, db, owner, notifier, outbox):
        outbox.delivered = False
        jobs = asyncio.run(search_jobs({"user_id": owner.id}, db, StubLLM(json.dumps(JOBS)), notifier))
        assert len(jobs) == 5


class TestJobSearchFailures:
    def test_no_skills_or_experience(self, db, notifier):
        user = User(name="Empty")
        db.add(user)
        db.commit()
        llm = StubLLM()

        with pytest.raises(InsufficientDataError):
            asyncio.run(search_jobs({"user_id": user.id}, db, llm, notifier))
        assert llm.calls == []

    def test_missing_user_id(self, db, notifier):
        llm = StubLLM()
        with pytest.raises(ValidationError):
            asyncio.run(search_jobs({}, db, llm, notifier))
        assert llm.calls == []

    def test_malformed_reply_writes_nothing(self, db, owner, notifier, outbox):
        llm = StubLLM("Here are five great jobs for you!")

        with pytest.raises(MalformedResponseError):
            asyncio.run(search_jobs({"user_id": owner.id}, db, llm, notifier))
        assert alerts_for(db, owner.id) == []
        assert outbox.emails == []

    def test_wrong_shape_writes_nothing(self, db, owner, notifier):
        incomplete = [dict(JOBS[0]), {"jobTitle": "No company"}]
        llm = StubLLM(json.dumps(incomplete))

        with pytest.raises(MalformedResponseError):
            asyncio.run(search_jobs({"user_id": owner.id}, db, llm, notifier))
        assert alerts_for(db, owner.id) == []

    def test_object_instead_of_array(self, db, owner, notifier):
        llm = StubLLM(json.dumps({"jobs": JOBS}))
        with pytest.raises(MalformedResponseError):
            asyncio.run(search_jobs({"user_id": owner.id}, db, llm, notifier))

    def test_model_failure(self, db, owner, notifier):
        llm = StubLLM(InferenceError("connection reset"))
        with pytest.raises(InferenceError):
            asyncio.run(JobSearchTask(db, llm, notifier).run({"user_id": owner.id}))
        assert alerts_for(db, owner.id) == []

    def test_failed_write_rolls_back_every_job(self, db, owner, notifier, outbox, monkeypatch):
        def disk_full():
            raise OperationalError("INSERT INTO job_alerts", {}, Exception("disk full"))

        monkeypatch.setattr(db, "commit", disk_full)

        with pytest.raises(PersistenceError):
            asyncio.run(search_jobs({"user_id": owner.id}, db, StubLLM(json.dumps(JOBS)), notifier))

        monkeypatch.undo()
        assert alerts_for(db, owner.id) == []
        assert outbox.emails == []


def test_format_filters_empty():
    assert format_filters(JobSearchParams(user_id="u1")) == ""
