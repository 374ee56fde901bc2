"""
Job Search Agent.

Finds job opportunities matching the user's skills and experience and stores
them as job alerts.
"""

import logging

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict, Field

from portfolio.agents.base import AgentTask
from portfolio.db.tables import Experience, JobAlert, Skill
from portfolio.errors import InsufficientDataError
from portfolio.utils.formatting import format_period
from portfolio.utils.parser import parse_model_json

logger = logging.getLogger(__name__)

JOB_SEARCH_PROMPT = PromptTemplate.from_template(
    """You are an expert job hunting assistant. Based on the user's skills and experience, find relevant job opportunities.

## User Skills
{skills}

## User Experience
{experience}

## Task
Generate a list of 5 potential job opportunities that match the user's profile.

## Output Format (JSON array only)
[{{"jobTitle": "Backend Engineer", "company": "Acme", "location": "Remote", "description": "Brief job description", "requirements": ["Python", "PostgreSQL"], "salary": "$120k-$140k", "applicationUrl": "https://...", "confidenceScore": 0.85}}]

## Rules
- location: city name or "Remote"
- salary: estimated range, or null if unknown
- applicationUrl: use a placeholder if unknown
- confidenceScore: 0-1, how well the job matches the user's profile
- Return ONLY the JSON array
"""
)


class JobSearchParams(BaseModel):
    user_id: str = Field(min_length=1)
    job_title: str | None = None
    location: str | None = None
    remote: bool | None = None


class JobSearchResult(BaseModel):
    """One job as returned by the model."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    job_title: str = Field(validation_alias="jobTitle", min_length=1)
    company: str = Field(min_length=1)
    location: str = ""
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    salary: str | None = None
    application_url: str | None = Field(default=None, validation_alias="applicationUrl")
    confidence_score: float = Field(default=0.0, validation_alias="confidenceScore", ge=0, le=1)


def format_skills(skills: list[Skill]) -> str:
    return "\n".join(
        f"{s.name} ({s.category}, {s.proficiency}%, {s.years_of_experience:g} years)" for s in skills
    )


def format_experience(experience: list[Experience]) -> str:
    return "\n\n".join(
        f"{e.position} at {e.company} ({format_period(e.start_date, e.end_date)})\n"
        f"{e.description}\n"
        f"Achievements: {', '.join(e.achievements or [])}"
        for e in experience
    )


def format_filters(params: JobSearchParams) -> str:
    """Extra search criteria appended to the skills block."""
    filters = ""
    if params.job_title:
        filters += f"\nAdditional search criteria:\n- Job Title: {params.job_title}"
    if params.location:
        filters += f"\n- Location: {params.location}"
    if params.remote is not None:
        filters += f"\n- Remote: {'Yes' if params.remote else 'No'}"
    return filters


class JobSearchTask(AgentTask[JobSearchParams, list[JobSearchResult]]):
    """Search for jobs and save each one as an "identified" job alert."""

    name = "search for jobs"
    temperature = 0.5
    params_model = JobSearchParams

    async def execute(self, params: JobSearchParams) -> list[JobSearchResult]:
        skills = self.repo.list_skills(params.user_id)
        experience = self.repo.list_experience(params.user_id)
        if not skills or not experience:
            raise InsufficientDataError("User must have skills and experience records to search for jobs")

        reply = await self.infer(
            JOB_SEARCH_PROMPT,
            skills=format_skills(skills) + format_filters(params),
            experience=format_experience(experience),
        )
        jobs = parse_model_json(reply, list[JobSearchResult])

        self.repo.add_all(
            JobAlert(
                user_id=params.user_id,
                job_title=job.job_title,
                company=job.company,
                location=job.location or "Remote",
                description=job.description,
                requirements=job.requirements,
                salary=job.salary,
                application_url=job.application_url,
                confidence=job.confidence_score,
                status="identified",
            )
            for job in jobs
        )
        logger.info("Saved %d job alerts for user %s", len(jobs), params.user_id)

        await self.notifier.email_owner(
            f"New Job Matches Found: {len(jobs)} opportunities",
            f"The AI agent found {len(jobs)} new job opportunities matching your profile. "
            "Log in to your portfolio dashboard to view them.",
        )
        await self.notifier.text_owner(
            f"Your portfolio AI found {len(jobs)} new job opportunities matching your skills. "
            "Check your dashboard for details."
        )
        return jobs


async def search_jobs(params: JobSearchParams | dict, db, llm, notifier=None) -> list[JobSearchResult]:
    """Run one job search for a user."""
    return await JobSearchTask(db, llm, notifier).run(params)
