"""API request/response schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# Profile schemas
class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    proficiency: int
    years_of_experience: float
    description: str


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company: str
    position: str
    description: str
    start_date: date
    end_date: date | None
    achievements: list[str]


class EducationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    institution: str
    degree: str
    field_of_study: str
    start_date: date
    end_date: date | None
    description: str


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    category: str
    completion_date: date | None


class ProfileResponse(BaseModel):
    id: str
    name: str
    bio: str
    skills: list[SkillResponse]
    experiences: list[ExperienceResponse]
    education: list[EducationResponse]
    projects: list[ProjectResponse]


# Job schemas
class JobAlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_title: str
    company: str
    location: str
    description: str
    requirements: list[str]
    salary: str | None
    application_url: str | None
    confidence: float
    status: str
    applied_at: datetime | None
    created_at: datetime


class JobAlertListResponse(BaseModel):
    alerts: list[JobAlertResponse]


class DistributionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_alert_id: str | None
    company_name: str
    job_title: str
    contact_email: str
    contact_person: str | None
    status: str
    sent_at: datetime


class StatusUpdate(BaseModel):
    status: str = Field(min_length=1)


# Reminder schemas
class DueCheckResponse(BaseModel):
    notified: int
