# jobportal/models/user.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobportal.models.base import CreateModel, DocumentModel, UpdateModel

UserType = Literal["job_seeker", "employer", "admin"]


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    location: Optional[str] = None
    resume_url: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserCreate(CreateModel):
    email: str
    password_hash: str
    user_type: UserType
    full_name: str
    phone_number: Optional[str] = None
    is_verified: bool = False
    otp_code: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    profile: Optional[UserProfile] = None


class UserUpdate(UpdateModel):
    email: Optional[str] = None
    password_hash: Optional[str] = None
    user_type: Optional[UserType] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_verified: Optional[bool] = None
    otp_code: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    # replaces the whole profile, it is never merged
    profile: Optional[UserProfile] = None


class User(DocumentModel):
    email: str
    password_hash: str
    user_type: UserType
    full_name: str
    phone_number: Optional[str] = None
    is_verified: bool = False
    otp_code: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    profile: Optional[UserProfile] = Field(default=None)
    created_at: datetime
