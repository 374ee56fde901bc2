"""Job search and resume distribution endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio.agents.job_search import JobSearchParams, JobSearchResult, JobSearchTask
from portfolio.agents.resume_distributor import (
    DistributionResult,
    ResumeDistributionParams,
    ResumeDistributionTask,
)
from portfolio.api.deps import get_llm, get_notifier
from portfolio.api.schemas import (
    DistributionResponse,
    JobAlertListResponse,
    JobAlertResponse,
    StatusUpdate,
)
from portfolio.db import PortfolioRepository, get_db
from portfolio.db.status import DISTRIBUTION_TRANSITIONS, JOB_ALERT_TRANSITIONS, check_transition
from portfolio.db.tables import utcnow
from portfolio.errors import NotFoundError
from portfolio.llm import LanguageModelClient
from portfolio.notifications import Notifier

router = APIRouter()


@router.post("/search", response_model=list[JobSearchResult])
async def search_jobs(
    data: JobSearchParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
    notifier: Notifier = Depends(get_notifier),
):
    """Find jobs matching the user's skills and save them as job alerts."""
    return await JobSearchTask(db, llm, notifier).run(data)


@router.get("/alerts", response_model=JobAlertListResponse)
def list_job_alerts(user_id: str, db: Session = Depends(get_db)):
    """List a user's job alerts, newest first."""
    alerts = PortfolioRepository(db).list_job_alerts(user_id)
    return JobAlertListResponse(alerts=[JobAlertResponse.model_validate(a) for a in alerts])


@router.patch("/alerts/{alert_id}", response_model=JobAlertResponse)
def update_job_alert(alert_id: str, data: StatusUpdate, db: Session = Depends(get_db)):
    """Move a job alert to its next status."""
    repo = PortfolioRepository(db)
    alert = repo.get_job_alert(alert_id)
    if not alert:
        raise NotFoundError(f"Job alert not found: {alert_id}")

    check_transition(JOB_ALERT_TRANSITIONS, alert.status, data.status)
    alert.status = data.status
    if data.status == "applied":
        alert.applied_at = utcnow()
    repo.commit()
    return JobAlertResponse.model_validate(alert)


@router.post("/distribute", response_model=DistributionResult)
async def distribute_resume(
    data: ResumeDistributionParams,
    db: Session = Depends(get_db),
    llm: LanguageModelClient = Depends(get_llm),
    notifier: Notifier = Depends(get_notifier),
):
    """Send the resume with a generated cover letter to a company contact."""
    return await ResumeDistributionTask(db, llm, notifier).run(data)


@router.patch("/distributions/{distribution_id}", response_model=DistributionResponse)
def update_distribution(distribution_id: str, data: StatusUpdate, db: Session = Depends(get_db)):
    """Move a resume distribution to its next status."""
    repo = PortfolioRepository(db)
    distribution = repo.get_distribution(distribution_id)
    if not distribution:
        raise NotFoundError(f"Resume distribution not found: {distribution_id}")

    check_transition(DISTRIBUTION_TRANSITIONS, distribution.status, data.status)
    distribution.status = data.status
    repo.commit()
    return DistributionResponse.model_validate(distribution)
