from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from repositories.db_models import (
    ReportPriority,
    ReportStatus,
    ReportType,
    UpdateType,
    UserRole,
)

# Shared length limits for free-text fields
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
MESSAGE_MAX_LENGTH = 5000


# User Schemas
class UserBase(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    full_name: Optional[str] = Field(default=None, max_length=100)


class UserCreate(UserBase):
    password: str


class User(UserBase):
    id: int
    avatar_url: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserList(BaseModel):
    id: int
    email: EmailStr
    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    """Paginated user list response with total count."""

    users: List[UserList]
    total: int
    page: int
    page_size: int
    total_pages: int


# Token Schemas
class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    email: Optional[str] = None


# Catalog Schemas
class CatalogEntry(BaseModel):
    key: str
    label: str
    icon: str
    description: str
    color: Optional[str] = None


class Catalog(BaseModel):
    report_types: List[CatalogEntry]
    categories: List[CatalogEntry]
    priorities: List[CatalogEntry]
    statuses: List[CatalogEntry]


# Report Schemas
class ReportCreate(BaseModel):
    """Submission draft as entered on the report form."""

    report_type: ReportType
    category: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    # Accepts a list or the comma-separated form field
    affected_areas: Union[List[str], str]
    priority: Optional[ReportPriority] = None
    is_anonymous: bool = False
    contact_phone: Optional[str] = Field(default=None, max_length=30)
    contact_email: Optional[EmailStr] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("affected_areas", mode="after")
    @classmethod
    def normalize_affected_areas(cls, v: Union[List[str], str]) -> List[str]:
        """Split, trim and de-duplicate area names, keeping first-seen order."""
        raw = v.split(",") if isinstance(v, str) else v
        areas: List[str] = []
        for area in raw:
            name = area.strip()
            if name and name not in areas:
                areas.append(name)
        if not areas:
            raise ValueError("At least one affected area is required")
        return areas

    @field_validator("contact_email", "contact_phone", mode="before")
    @classmethod
    def empty_contact_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ReportAuthor(BaseModel):
    """Public author card; omitted for anonymous reports."""

    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Report(BaseModel):
    id: int
    report_number: Optional[str] = None
    user_id: Optional[int] = None
    report_type: ReportType
    category: str
    title: str
    description: str
    affected_areas: List[str]
    priority: Optional[ReportPriority] = None
    status: ReportStatus
    is_anonymous: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    upvotes_count: int
    updates_count: int
    views_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportSummary(Report):
    """Feed item with presentation fields."""

    author: Optional[ReportAuthor] = None
    has_workflow: bool = True
    user_has_upvoted: Optional[bool] = None  # None when not authenticated


class ReportUpdate(BaseModel):
    id: int
    report_id: int
    update_type: UpdateType
    message: str
    old_status: Optional[ReportStatus] = None
    new_status: Optional[ReportStatus] = None
    is_official: bool
    created_at: datetime
    author_username: Optional[str] = None
    author_full_name: Optional[str] = None
    author_role: Optional[UserRole] = None


class ReportDetail(ReportSummary):
    updates: List[ReportUpdate] = []
    # Only populated for staff viewers
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None


class ReportChanges(BaseModel):
    """Poll-based change feed page."""

    reports: List[Report]
    cursor: datetime
    cursor_id: Optional[int] = None  # id of the last report at the cursor timestamp


# Update Log Schemas
class CommentCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)

    model_config = ConfigDict(str_strip_whitespace=True)


class OfficialUpdateCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)

    model_config = ConfigDict(str_strip_whitespace=True)


# Workflow Schemas
class StatusChange(BaseModel):
    status: ReportStatus
    note: Optional[str] = Field(default=None, max_length=MESSAGE_MAX_LENGTH)


class PriorityChange(BaseModel):
    priority: Optional[ReportPriority] = None


class StatusChangeResponse(BaseModel):
    report: Report
    changed: bool
    update: Optional[ReportUpdate] = None


# Upvote Schemas
class UpvoteToggleResponse(BaseModel):
    upvoted: bool
    upvotes_count: int


class ViewRecorded(BaseModel):
    counted: bool
    views_count: int


# Admin Console Schemas
class AdminStats(BaseModel):
    total_reports: int
    new_reports: int
    active_cases: int
    resolved_reports: int


class AdminReportListResponse(BaseModel):
    """Paginated report list for the admin console."""

    reports: List[Report]
    total: int
    page: int
    page_size: int
    total_pages: int
