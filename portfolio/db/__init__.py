"""Database package."""

from portfolio.db.base import Base, get_db, init_db
from portfolio.db.repository import PortfolioRepository
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

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "PortfolioRepository",
    "User",
    "Skill",
    "Experience",
    "Education",
    "Project",
    "JobAlert",
    "ResumeDistribution",
    "ChatInteraction",
    "ChatMessage",
    "PortfolioReminder",
    "TechnologyTrend",
]
