# jobportal/models/job.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from jobportal.models.base import CreateModel, DocumentModel, UpdateModel

JobStatus = Literal["active", "inactive", "expired"]


def check_salary_range(salary_min: Optional[float], salary_max: Optional[float]):
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError("salary_min must not exceed salary_max")


class JobCreate(CreateModel):
    title: str
    description: str
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    salary_currency: str = "NPR"
    employment_type: str = "full_time"
    experience_level: str = "mid"
    location: str
    is_remote: bool = False
    company_id: str
    category_id: str
    status: JobStatus = "active"
    posted_by: str
    expires_at: Optional[datetime] = None
    cover_image_url: Optional[str] = None

    @model_validator(mode="after")
    def _salary_range(self):
        check_salary_range(self.salary_min, self.salary_max)
        return self


class JobUpdate(UpdateModel):
    title: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    salary_currency: Optional[str] = None
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    location: Optional[str] = None
    is_remote: Optional[bool] = None
    company_id: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[JobStatus] = None
    posted_by: Optional[str] = None
    expires_at: Optional[datetime] = None
    cover_image_url: Optional[str] = None

    @model_validator(mode="after")
    def _salary_range(self):
        check_salary_range(self.salary_min, self.salary_max)
        return self


class Job(DocumentModel):
    title: str
    description: str
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: str = "NPR"
    employment_type: str
    experience_level: str
    location: str
    is_remote: bool = False
    company_id: str
    category_id: str
    status: JobStatus
    posted_by: str
    expires_at: Optional[datetime] = None
    cover_image_url: Optional[str] = None
    created_at: datetime


class JobCategoryCreate(CreateModel):
    name: str
    description: Optional[str] = None
    tier: int = Field(ge=1, le=3)
    parent_id: Optional[str] = None
    icon: Optional[str] = None


class JobCategory(DocumentModel):
    name: str
    description: Optional[str] = None
    tier: int
    parent_id: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
