"""Shared test fixtures for the portfolio agents."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from portfolio.db import Base, Experience, Skill, User
from portfolio.notifications import Notifier


class StubLLM:
    """Language model stand-in returning canned replies in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[tuple[str, float]] = []

    async def complete(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class Outbox:
    """Records every email and SMS a Notifier hands off."""

    def __init__(self, delivered: bool = True):
        self.delivered = delivered
        self.emails: list[dict] = []
        self.texts: list[dict] = []

    async def mailer(self, to, subject, text, attachments=None):
        self.emails.append({"to": to, "subject": subject, "text": text, "attachments": attachments})
        return self.delivered

    async def texter(self, to, body):
        self.texts.append({"to": to, "body": body})
        return self.delivered


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (TestClient runs sync routes in a pool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def owner(db: Session) -> User:
    """Portfolio owner with three skills and two positions."""
    user = User(name="Jane Doe", email="jane@example.com", bio="Backend engineer.", role="admin")
    user.skills = [
        Skill(name="Python", category="backend", proficiency=90, years_of_experience=6),
        Skill(name="PostgreSQL", category="database", proficiency=75, years_of_experience=4),
        Skill(name="React", category="frontend", proficiency=60, years_of_experience=2.5),
    ]
    user.experiences = [
        Experience(
            company="Acme",
            position="Senior Engineer",
            description="Built payment APIs.",
            start_date=date(2021, 3, 1),
            achievements=["Cut p99 latency by 40%"],
        ),
        Experience(
            company="Initech",
            position="Developer",
            description="Maintained reporting tools.",
            start_date=date(2018, 1, 15),
            end_date=date(2021, 2, 28),
        ),
    ]
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture
def notifier(outbox: Outbox) -> Notifier:
    return Notifier(
        owner_email="owner@example.com",
        owner_phone="+15550100",
        mailer=outbox.mailer,
        texter=outbox.texter,
    )
