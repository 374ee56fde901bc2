"""Portfolio manager endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio.agents.portfolio_manager import (
    PortfolioAnalysis,
    PortfolioAnalysisParams,
    PortfolioAnalysisTask,
    ReminderCreate,
    ReminderGenerationParams,
    ReminderGenerationTask,
    ReminderRecord,
    SkillSuggestion,
    SkillUpdateParams,
    SkillUpdateTask,
    complete_reminder,
    create_reminder,
    send_reminder_notifications,
)
from portfolio.api.deps import get_llm, get_notifier
from portfolio.api.schemas import DueCheckResponse
from portfolio.db import get_db
from portfolio.llm import LanguageModelClient
from portfolio.notifications import Notifier

router = APIRouter()


@router.post("/analysis", response_model=PortfolioAnalysis)
async def analyze_content(
    data: PortfolioAnalysisParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
):
    """Analyze portfolio content and recommend improvements."""
    return await PortfolioAnalysisTask(db, llm).run(data)


@router.post("/skill-suggestions", response_model=list[SkillSuggestion])
async def suggest_skills(
    data: SkillUpdateParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
):
    """Suggest skill updates based on technology trends."""
    return await SkillUpdateTask(db, llm).run(data)


@router.post("/reminders/generate", response_model=list[ReminderRecord])
async def generate(
    data: ReminderGenerationParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
    notifier: Notifier = Depends(get_notifier),
):
    """Generate update reminders from the portfolio's last-updated dates."""
    return await ReminderGenerationTask(db, llm, notifier).run(data)


@router.post("/reminders", response_model=ReminderRecord)
def add_reminder(data: ReminderCreate, db: Session = Depends(get_db)):
    """Create a reminder."""
    return create_reminder(data, db)


@router.patch("/reminders/{reminder_id}/complete", response_model=ReminderRecord)
def mark_complete(reminder_id: str, db: Session = Depends(get_db)):
    """Mark a reminder completed."""
    return complete_reminder(reminder_id, db)


@router.post("/reminders/due-check", response_model=DueCheckResponse)
async def due_check(db: Session = Depends(get_db), notifier: Notifier = Depends(get_notifier)):
    """Notify the owner about reminders due soon."""
    return DueCheckResponse(notified=await send_reminder_notifications(db, notifier))
