# jobportal/models/company.py
from datetime import datetime
from typing import Optional

from jobportal.models.base import CreateModel, DocumentModel, UpdateModel


class CompanyCreate(CreateModel):
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = None
    is_featured: bool = False
    is_top_hiring: bool = False
    is_trusted: bool = False
    employer_id: Optional[str] = None


class CompanyUpdate(UpdateModel):
    name: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = None
    is_featured: Optional[bool] = None
    is_top_hiring: Optional[bool] = None
    is_trusted: Optional[bool] = None
    employer_id: Optional[str] = None


class Company(DocumentModel):
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = None
    is_featured: bool = False
    is_top_hiring: bool = False
    is_trusted: bool = False
    employer_id: Optional[str] = None
    created_at: datetime
