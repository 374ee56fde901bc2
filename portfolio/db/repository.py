"""Queries and writes used by the agent tasks."""

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.db.tables import (
    ChatInteraction,
    ChatMessage,
    Education,
    Experience,
    JobAlert,
    PortfolioReminder,
    Project,
    ResumeDistribution,
    Skill,
    TechnologyTrend,
    User,
)
from portfolio.errors import PersistenceError

logger = logging.getLogger(__name__)


class PortfolioRepository:
    """Thin wrapper around a SQLAlchemy session.

    Reads return ORM objects; writes commit in one transaction and roll back
    everything on failure.
    """

    def __init__(self, db: Session):
        self.db = db

    # Profile

    def get_user(self, user_id: str) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_owner(self) -> User | None:
        """The portfolio owner is the first admin user."""
        return self.db.query(User).filter(User.role == "admin").order_by(User.created_at).first()

    def list_skills(self, user_id: str, by_proficiency: bool = False, limit: int | None = None) -> list[Skill]:
        query = self.db.query(Skill).filter(Skill.user_id == user_id)
        if by_proficiency:
            query = query.order_by(Skill.proficiency.desc())
        else:
            query = query.order_by(Skill.name)
        if limit:
            query = query.limit(limit)
        return query.all()

    def list_experience(self, user_id: str, limit: int | None = None) -> list[Experience]:
        """Most recent first (by start date)."""
        query = self.db.query(Experience).filter(Experience.user_id == user_id).order_by(Experience.start_date.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def list_education(self, user_id: str) -> list[Education]:
        return (
            self.db.query(Education).filter(Education.user_id == user_id).order_by(Education.start_date.desc()).all()
        )

    def list_projects(self, user_id: str) -> list[Project]:
        return self.db.query(Project).filter(Project.user_id == user_id).order_by(Project.updated_at.desc()).all()

    def latest_update(self, model: type[Skill] | type[Project] | type[Experience], user_id: str) -> datetime | None:
        """Most recent ``updated_at`` for a user's records of one kind."""
        return self.db.query(func.max(model.updated_at)).filter(model.user_id == user_id).scalar()

    def top_trends(self, limit: int = 10) -> list[TechnologyTrend]:
        return self.db.query(TechnologyTrend).order_by(TechnologyTrend.growth_rate.desc()).limit(limit).all()

    # Job alerts and distributions

    def get_job_alert(self, alert_id: str) -> JobAlert | None:
        return self.db.query(JobAlert).filter(JobAlert.id == alert_id).first()

    def list_job_alerts(self, user_id: str) -> list[JobAlert]:
        return self.db.query(JobAlert).filter(JobAlert.user_id == user_id).order_by(JobAlert.created_at.desc()).all()

    def get_distribution(self, distribution_id: str) -> ResumeDistribution | None:
        return self.db.query(ResumeDistribution).filter(ResumeDistribution.id == distribution_id).first()

    # Chat

    def get_chat(self, chat_id: str) -> ChatInteraction | None:
        return self.db.query(ChatInteraction).filter(ChatInteraction.id == chat_id).first()

    def list_chat_messages(self, chat_id: str) -> list[ChatMessage]:
        return (
            self.db.query(ChatMessage).filter(ChatMessage.chat_id == chat_id).order_by(ChatMessage.timestamp).all()
        )

    # Reminders

    def get_reminder(self, reminder_id: str) -> PortfolioReminder | None:
        return self.db.query(PortfolioReminder).filter(PortfolioReminder.id == reminder_id).first()

    def due_reminders(self, cutoff: datetime) -> list[PortfolioReminder]:
        """Incomplete, not-yet-notified reminders due on or before ``cutoff``."""
        return (
            self.db.query(PortfolioReminder)
            .filter(
                PortfolioReminder.due_date <= cutoff,
                PortfolioReminder.completed.is_(False),
                PortfolioReminder.notification_sent.is_(False),
            )
            .order_by(PortfolioReminder.due_date)
            .all()
        )

    # Writes

    def add_all(self, records: Iterable[object]) -> list:
        """Insert records in a single transaction and refresh them."""
        records = list(records)
        try:
            self.db.add_all(records)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Batch write of %d records failed: %s", len(records), e)
            raise PersistenceError(f"Failed to save {len(records)} records") from e

        for record in records:
            self.db.refresh(record)
        return records

    def commit(self) -> None:
        """Commit pending updates, rolling back on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Commit failed: %s", e)
            raise PersistenceError("Failed to save changes") from e
