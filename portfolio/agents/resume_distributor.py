"""
Resume Distribution Agent.

Writes a personalized cover letter, emails it with the resume to a company
contact and records the distribution.
"""

import logging
from datetime import timedelta
from pathlib import Path

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, Field

from portfolio.agents.base import EMAIL_PATTERN, AgentTask
from portfolio.config import settings
from portfolio.db.status import JOB_ALERT_TRANSITIONS, check_transition
from portfolio.db.tables import PortfolioReminder, ResumeDistribution, utcnow
from portfolio.errors import AgentTaskError, NotFoundError
from portfolio.notifications import Attachment

logger = logging.getLogger(__name__)

FOLLOW_UP_DELAY = timedelta(days=7)

COVER_LETTER_PROMPT = PromptTemplate.from_template(
    """You are an expert career advisor helping to create personalized messages to send along with a resume.

## Job Details
Title: {job_title}
Company: {company}
Description: {job_description}

## User Profile
Name: {user_name}
Skills: {user_skills}
Experience:
{user_experience}

Create a personalized cover letter to send to this company along with the resume. The cover letter should:
1. Address the company specifically{contact_line}
2. Highlight the user's relevant skills and experience
3. Explain why they're a good fit for this position
4. Be professional, enthusiastic, and concise (around 250 words)
5. Include a call to action for an interview

Return only the cover letter text without any additional commentary.
"""
)


class ResumeDistributionParams(BaseModel):
    user_id: str = Field(min_length=1)
    job_alert_id: str | None = None
    company_name: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    contact_email: str = Field(pattern=EMAIL_PATTERN)
    contact_person: str | None = None
    job_description: str = Field(min_length=1)


class DistributionResult(BaseModel):
    success: bool
    message: str
    distribution_id: str | None = None


def resume_attachment() -> list[Attachment]:
    """The configured resume file, if it exists."""
    if settings.resume_path and Path(settings.resume_path).is_file():
        path = Path(settings.resume_path)
        return [Attachment(filename=path.name, path=str(path))]
    return []


class ResumeDistributionTask(AgentTask[ResumeDistributionParams, DistributionResult]):
    """Send a cover letter and resume to one company contact."""

    name = "distribute resume"
    temperature = 0.7
    params_model = ResumeDistributionParams

    async def run(self, params: ResumeDistributionParams | dict) -> DistributionResult:
        """Report failures as an unsuccessful result instead of raising."""
        try:
            return await super().run(params)
        except AgentTaskError as e:
            return DistributionResult(success=False, message=f"Failed to distribute resume: {e}")

    async def execute(self, params: ResumeDistributionParams) -> DistributionResult:
        user = self.repo.get_user(params.user_id)
        if not user:
            raise NotFoundError(f"User not found: {params.user_id}")

        job_alert = None
        if params.job_alert_id:
            job_alert = self.repo.get_job_alert(params.job_alert_id)
            if not job_alert or job_alert.user_id != params.user_id:
                raise NotFoundError(f"Job alert not found: {params.job_alert_id}")
            check_transition(JOB_ALERT_TRANSITIONS, job_alert.status, "applied")

        skills = self.repo.list_skills(params.user_id, by_proficiency=True, limit=10)
        experience = self.repo.list_experience(params.user_id, limit=3)

        reply = await self.infer(
            COVER_LETTER_PROMPT,
            job_title=params.job_title,
            company=params.company_name,
            job_description=params.job_description,
            contact_line=f" (addressed to {params.contact_person})" if params.contact_person else "",
            user_name=user.name,
            user_skills=", ".join(s.name for s in skills),
            user_experience="\n\n".join(f"{e.position} at {e.company}: {e.description}" for e in experience),
        )
        cover_letter = reply.strip()

        delivered = await self.notifier.send_email(
            params.contact_email,
            f"Application for {params.job_title} position at {params.company_name}",
            cover_letter,
            attachments=resume_attachment(),
        )
        if not delivered:
            raise AgentTaskError(f"Could not deliver application email to {params.contact_email}")

        distribution = ResumeDistribution(
            user_id=params.user_id,
            job_alert_id=params.job_alert_id,
            company_name=params.company_name,
            job_title=params.job_title,
            contact_email=params.contact_email,
            contact_person=params.contact_person,
            cover_letter=cover_letter,
            status="sent",
        )
        follow_up = PortfolioReminder(
            user_id=params.user_id,
            title=f"Follow up with {params.company_name}",
            description=f"Follow up on the {params.job_title} application sent to {params.contact_email}.",
            due_date=utcnow() + FOLLOW_UP_DELAY,
            priority="medium",
            category="other",
        )
        records: list = [distribution, follow_up]
        if job_alert:
            job_alert.status = "applied"
            job_alert.applied_at = utcnow()
            records.append(job_alert)
        self.repo.add_all(records)
        logger.info("Resume sent to %s for %s", params.company_name, params.job_title)

        await self.notifier.email_owner(
            f"Resume sent to {params.company_name}",
            f"Your resume has been sent to {params.company_name} for the {params.job_title} position. "
            "A follow-up has been scheduled for one week from today.",
        )

        return DistributionResult(
            success=True,
            message=f"Resume and cover letter sent to {params.company_name} for the {params.job_title} position.",
            distribution_id=distribution.id,
        )


async def distribute_resume(params: ResumeDistributionParams | dict, db, llm, notifier=None) -> DistributionResult:
    """Send the resume to a company contact; never raises."""
    return await ResumeDistributionTask(db, llm, notifier).run(params)
