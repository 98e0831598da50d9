# jobportal/models/application.py
from datetime import datetime
from typing import Literal, Optional

from jobportal.models.base import CreateModel, DocumentModel, UpdateModel

ApplicationStatus = Literal["pending", "reviewed", "shortlisted", "rejected", "hired"]


class ApplicationCreate(CreateModel):
    job_id: str
    job_seeker_id: str
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: ApplicationStatus = "pending"


class ApplicationUpdate(UpdateModel):
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: Optional[ApplicationStatus] = None


class Application(DocumentModel):
    job_id: str
    job_seeker_id: str
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: ApplicationStatus
    applied_at: datetime
