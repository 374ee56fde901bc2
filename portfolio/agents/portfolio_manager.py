"""
Portfolio Manager Agent.

Keeps the portfolio fresh:
- analyze_portfolio_content: content gaps and improvement areas
- suggest_skill_updates: new skills based on technology trends
- generate_reminders: model-suggested update reminders
- send_reminder_notifications: due-check that notifies the owner
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Literal

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from sqlalchemy.exc import SQLAlchemyError

from portfolio.agents.base import AgentTask
from portfolio.config import settings
from portfolio.db.repository import PortfolioRepository
from portfolio.db.tables import Experience, PortfolioReminder, Project, Skill, to_utc, utcnow
from portfolio.errors import InsufficientDataError, NotFoundError, PersistenceError
from portfolio.notifications import Notifier
from portfolio.utils.formatting import iso_date, last_updated
from portfolio.utils.parser import parse_model_json

logger = logging.getLogger(__name__)

SkillCategory = Literal["frontend", "backend", "database", "devops", "design", "ai_ml", "mobile", "other"]
ReminderPriority = Literal["low", "medium", "high", "urgent"]
ReminderCategory = Literal[
    "skill_update", "project_add", "resume_update", "experience_update", "content_refresh", "other"
]

ESCALATED_PRIORITIES = {"high", "urgent"}

CONTENT_ANALYSIS_PROMPT = PromptTemplate.from_template(
    """You are an AI portfolio content manager. Analyze the user's portfolio content and recommend improvements.

## Skills
{skills}

## Projects
{projects}

## Experience
{experience}

## Education
{education}

## Analyze
1. Content gaps and inconsistencies
2. Skills that should be highlighted more prominently
3. Projects that would showcase the user's abilities better
4. Areas where the portfolio could be improved for better job prospects
5. Industry trends the user should consider adding to their portfolio

## Output Format (JSON object only)
{{"contentGaps": ["..."], "skillHighlights": ["..."], "projectSuggestions": ["..."], "improvementAreas": ["..."], "trendSuggestions": ["..."]}}

Every value is an array of short, specific strings. Return ONLY the JSON object.
"""
)

SKILL_UPDATE_PROMPT = PromptTemplate.from_template(
    """You are an AI career development advisor. Suggest skill updates based on current tech trends and job market demand.

## Current User Skills
{skills}

## Current User Projects
{projects}

## Current Experience
{experience}

## Current Tech Trends
{tech_trends}

## Focus Area
{focus_area}

Suggest new skills, or updates to existing skills, that would make the user more competitive,
particularly in {focus_area}.

## Output Format (JSON array only)
[{{"name": "Kubernetes", "category": "devops", "importance": "Why it matters in today's market", "complementsExisting": "How it builds on current skills", "learningResources": ["https://..."], "estimatedTimeToLearn": "2-3 months"}}]

category is one of: frontend, backend, database, devops, design, ai_ml, mobile, other.
Return ONLY the JSON array.
"""
)

REMINDER_PROMPT = PromptTemplate.from_template(
    """You are an AI portfolio manager scheduling regular updates for the user's portfolio.

## Portfolio Last Updates
Skills last updated: {skills_last_updated}
Projects last updated: {projects_last_updated}
Experience last updated: {experience_last_updated}

Current date: {current_date}

Create 3-5 specific reminders for the user to keep their portfolio updated.

## Output Format (JSON array only)
[{{"title": "Short, specific title", "description": "Detailed, actionable description", "dueDate": "YYYY-MM-DD", "priority": "medium", "category": "skill_update"}}]

- priority: low, medium, high or urgent
- category: skill_update, project_add, resume_update, experience_update, content_refresh or other
- Return ONLY the JSON array
"""
)


def _lower(value):
    return value.lower() if isinstance(value, str) else value


# Parameters


class PortfolioAnalysisParams(BaseModel):
    user_id: str = Field(min_length=1)


class SkillUpdateParams(BaseModel):
    user_id: str = Field(min_length=1)
    skill_area_focus: SkillCategory | None = None

    @field_validator("skill_area_focus", mode="before")
    @classmethod
    def normalize_case(cls, value):
        return _lower(value)


class ReminderGenerationParams(BaseModel):
    user_id: str = Field(min_length=1)


class ReminderCreate(BaseModel):
    user_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str
    due_date: datetime
    priority: ReminderPriority = "medium"
    category: ReminderCategory

    @field_validator("priority", "category", mode="before")
    @classmethod
    def normalize_case(cls, value):
        return _lower(value)

    @field_validator("due_date")
    @classmethod
    def store_as_utc(cls, value: datetime) -> datetime:
        return to_utc(value)


# Model replies


class PortfolioAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_gaps: list[str] = Field(validation_alias="contentGaps")
    skill_highlights: list[str] = Field(validation_alias="skillHighlights")
    project_suggestions: list[str] = Field(validation_alias="projectSuggestions")
    improvement_areas: list[str] = Field(validation_alias="improvementAreas")
    trend_suggestions: list[str] = Field(validation_alias="trendSuggestions")


class SkillSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    category: SkillCategory = "other"
    importance: str = ""
    complements_existing: str = Field(default="", validation_alias="complementsExisting")
    learning_resources: list[str] = Field(default_factory=list, validation_alias="learningResources")
    estimated_time_to_learn: str = Field(default="", validation_alias="estimatedTimeToLearn")

    @field_validator("category", mode="before")
    @classmethod
    def normalize_case(cls, value):
        return _lower(value)


class ReminderSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: str = ""
    due_date: date = Field(validation_alias="dueDate")
    priority: ReminderPriority = "medium"
    category: ReminderCategory = "other"

    @field_validator("priority", "category", mode="before")
    @classmethod
    def normalize_case(cls, value):
        return _lower(value)


class ReminderRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    due_date: datetime
    priority: str
    category: str
    completed: bool
    notification_sent: bool


# Prompt records (serialized to JSON for the analysis prompts)


class SkillRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str
    proficiency: int
    years_of_experience: float
    description: str = ""


class ProjectRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    description: str
    category: str
    skills: list[str] = Field(default_factory=list)
    completion_date: date | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def skill_names(cls, value):
        return [getattr(skill, "name", skill) for skill in value or []]


class ExperienceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company: str
    position: str
    description: str
    start_date: date
    end_date: date | None = None
    achievements: list[str] = Field(default_factory=list)


class EducationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    institution: str
    degree: str
    field_of_study: str
    start_date: date
    end_date: date | None = None
    description: str = ""


class TrendRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str
    popularity_score: float
    growth_rate: float
    description: str = ""


def to_json(record_type: type[BaseModel], rows: list) -> str:
    """Serialize ORM rows through a record model."""
    adapter = TypeAdapter(list[record_type])
    return adapter.dump_json(adapter.validate_python(rows, from_attributes=True)).decode()


class PortfolioAnalysisTask(AgentTask[PortfolioAnalysisParams, PortfolioAnalysis]):
    """Analyze portfolio content and recommend improvements."""

    name = "analyze portfolio content"
    temperature = 0.2
    params_model = PortfolioAnalysisParams

    async def execute(self, params: PortfolioAnalysisParams) -> PortfolioAnalysis:
        skills = self.repo.list_skills(params.user_id)
        projects = self.repo.list_projects(params.user_id)
        experience = self.repo.list_experience(params.user_id)
        education = self.repo.list_education(params.user_id)
        if not (skills or projects or experience or education):
            raise InsufficientDataError("Portfolio has no content to analyze")

        reply = await self.infer(
            CONTENT_ANALYSIS_PROMPT,
            skills=to_json(SkillRecord, skills),
            projects=to_json(ProjectRecord, projects),
            experience=to_json(ExperienceRecord, experience),
            education=to_json(EducationRecord, education),
        )
        return parse_model_json(reply, PortfolioAnalysis)


class SkillUpdateTask(AgentTask[SkillUpdateParams, list[SkillSuggestion]]):
    """Suggest skills to learn based on technology trends."""

    name = "suggest skill updates"
    temperature = 0.4
    params_model = SkillUpdateParams

    async def execute(self, params: SkillUpdateParams) -> list[SkillSuggestion]:
        skills = self.repo.list_skills(params.user_id)
        if not skills:
            raise InsufficientDataError("User must have skills to suggest updates")

        reply = await self.infer(
            SKILL_UPDATE_PROMPT,
            skills=to_json(SkillRecord, skills),
            projects=to_json(ProjectRecord, self.repo.list_projects(params.user_id)),
            experience=to_json(ExperienceRecord, self.repo.list_experience(params.user_id)),
            tech_trends=to_json(TrendRecord, self.repo.top_trends(limit=10)),
            focus_area=params.skill_area_focus or "all skill areas",
        )
        return parse_model_json(reply, list[SkillSuggestion])


class ReminderGenerationTask(AgentTask[ReminderGenerationParams, list[ReminderRecord]]):
    """Create update reminders from the portfolio's last-updated dates."""

    name = "generate reminders"
    temperature = 0.3
    params_model = ReminderGenerationParams

    async def execute(self, params: ReminderGenerationParams) -> list[ReminderRecord]:
        if not self.repo.get_user(params.user_id):
            raise NotFoundError(f"User not found: {params.user_id}")

        reply = await self.infer(
            REMINDER_PROMPT,
            skills_last_updated=last_updated(self.repo.latest_update(Skill, params.user_id)),
            projects_last_updated=last_updated(self.repo.latest_update(Project, params.user_id)),
            experience_last_updated=last_updated(self.repo.latest_update(Experience, params.user_id)),
            current_date=iso_date(utcnow()),
        )
        suggestions = parse_model_json(reply, list[ReminderSuggestion])

        reminders = self.repo.add_all(
            PortfolioReminder(
                user_id=params.user_id,
                title=s.title,
                description=s.description,
                due_date=datetime.combine(s.due_date, time()),
                priority=s.priority,
                category=s.category,
                completed=False,
                notification_sent=False,
            )
            for s in suggestions
        )
        logger.info("Created %d reminders for user %s", len(reminders), params.user_id)

        await self.notifier.email_owner(
            "New Portfolio Update Reminders",
            f"Your AI portfolio manager has created {len(reminders)} new reminders to help you keep your "
            "portfolio up-to-date. Check your dashboard to view them.",
        )
        return [ReminderRecord.model_validate(r) for r in reminders]


async def analyze_portfolio_content(params: PortfolioAnalysisParams | dict, db, llm) -> PortfolioAnalysis:
    return await PortfolioAnalysisTask(db, llm).run(params)


async def suggest_skill_updates(params: SkillUpdateParams | dict, db, llm) -> list[SkillSuggestion]:
    return await SkillUpdateTask(db, llm).run(params)


async def generate_reminders(params: ReminderGenerationParams | dict, db, llm, notifier=None) -> list[ReminderRecord]:
    return await ReminderGenerationTask(db, llm, notifier).run(params)


def create_reminder(data: ReminderCreate, db) -> ReminderRecord:
    """Create a reminder directly (no model call)."""
    repo = PortfolioRepository(db)
    if not repo.get_user(data.user_id):
        raise NotFoundError(f"User not found: {data.user_id}")

    [reminder] = repo.add_all([PortfolioReminder(**data.model_dump())])
    return ReminderRecord.model_validate(reminder)


def complete_reminder(reminder_id: str, db) -> ReminderRecord:
    repo = PortfolioRepository(db)
    reminder = repo.get_reminder(reminder_id)
    if not reminder:
        raise NotFoundError(f"Reminder not found: {reminder_id}")

    reminder.completed = True
    repo.commit()
    return ReminderRecord.model_validate(reminder)


async def send_reminder_notifications(db, notifier: Notifier | None = None, now: datetime | None = None) -> int:
    """
    Notify the owner about reminders due within the lookahead window.

    Each reminder gets one email, plus an SMS when its priority is high or
    urgent, and is then marked notified so later scans skip it.

    Returns:
        Number of reminders notified. A store failure stops the scan and the
        count reached so far is returned.
    """
    repo = PortfolioRepository(db)
    notifier = notifier or Notifier.from_settings()
    now = to_utc(now) if now else utcnow()
    cutoff = now + timedelta(hours=settings.reminder_lookahead_hours)

    notified = 0
    try:
        due = repo.due_reminders(cutoff)
        for reminder in due:
            due_on = iso_date(reminder.due_date)

            await notifier.email_owner(
                f"Portfolio Reminder: {reminder.title}",
                f"REMINDER: {reminder.title} - Due {due_on}.\n{reminder.description}",
            )
            if reminder.priority in ESCALATED_PRIORITIES:
                await notifier.text_owner(f"{reminder.priority.upper()} PRIORITY: {reminder.title} due on {due_on}")

            reminder.notification_sent = True
            repo.commit()
            notified += 1
    except (PersistenceError, SQLAlchemyError):
        logger.exception("Reminder due-check stopped after %d notifications", notified)
        return notified

    if notified:
        logger.info("Sent %d reminder notifications", notified)
    return notified
