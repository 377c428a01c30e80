"""
Database models using SQLAlchemy 2.0 style with Mapped type hints.

Report is the aggregate root: update-log entries and upvote memberships
belong to exactly one report and are never edited in place.
"""

import enum
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repositories.database import Base


class UserRole(str, enum.Enum):
    CITIZEN = "citizen"
    OFFICIAL = "official"
    ADMIN = "admin"


class ReportType(str, enum.Enum):
    ISSUE = "issue"
    COMPLIMENT = "compliment"
    SUGGESTION = "suggestion"
    REQUEST = "request"


class ReportStatus(str, enum.Enum):
    NEW = "new"
    UNDER_REVIEW = "under_review"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    REJECTED = "rejected"


class ReportPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UpdateType(str, enum.Enum):
    COMMENT = "comment"
    STATUS_CHANGE = "status_change"
    OFFICIAL_UPDATE = "official_update"


# Roles allowed to drive the report workflow
STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.OFFICIAL})

# Statuses counted as "active cases" on the admin dashboard
ACTIVE_STATUSES = (ReportStatus.UNDER_REVIEW, ReportStatus.IN_PROGRESS)


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, index=True, nullable=False
    )
    full_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), default=UserRole.CITIZEN, nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now
    )

    reports: Mapped[List["Report"]] = relationship("Report", back_populates="author")
    updates: Mapped[List["ReportUpdate"]] = relationship(
        "ReportUpdate", back_populates="author"
    )

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint("upvotes_count >= 0", name="ck_reports_upvotes_nonnegative"),
        CheckConstraint("updates_count >= 0", name="ck_reports_updates_nonnegative"),
        CheckConstraint("views_count >= 0", name="ck_reports_views_nonnegative"),
        Index("ix_reports_status_created", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Assigned from the id inside the creating transaction
    report_number: Mapped[Optional[str]] = mapped_column(
        String(20), unique=True, index=True, nullable=True
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True, index=True
    )
    report_type: Mapped[ReportType] = mapped_column(Enum(ReportType), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    affected_areas: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    priority: Mapped[Optional[ReportPriority]] = mapped_column(
        Enum(ReportPriority), nullable=True
    )
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus), default=ReportStatus.NEW, nullable=False
    )
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Denormalized counters, only changed through atomic increments
    upvotes_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updates_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now, index=True
    )

    author: Mapped[Optional["User"]] = relationship("User", back_populates="reports")
    updates: Mapped[List["ReportUpdate"]] = relationship(
        "ReportUpdate",
        back_populates="report",
        order_by=lambda: [ReportUpdate.created_at, ReportUpdate.id],
        cascade="all, delete-orphan",
    )
    upvotes: Mapped[List["ReportUpvote"]] = relationship(
        "ReportUpvote", back_populates="report", cascade="all, delete-orphan"
    )

    @property
    def has_workflow(self) -> bool:
        return self.report_type != ReportType.COMPLIMENT


class ReportUpdate(Base):
    """Append-only log entry attached to a report."""

    __tablename__ = "report_updates"
    __table_args__ = (
        CheckConstraint(
            "(update_type = 'STATUS_CHANGE' AND old_status IS NOT NULL AND new_status IS NOT NULL)"
            " OR (update_type != 'STATUS_CHANGE' AND old_status IS NULL AND new_status IS NULL)",
            name="ck_report_updates_status_pair",
        ),
        Index("ix_report_updates_report_created", "report_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    update_type: Mapped[UpdateType] = mapped_column(Enum(UpdateType), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    old_status: Mapped[Optional[ReportStatus]] = mapped_column(
        Enum(ReportStatus), nullable=True
    )
    new_status: Mapped[Optional[ReportStatus]] = mapped_column(
        Enum(ReportStatus), nullable=True
    )
    is_official: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    report: Mapped["Report"] = relationship("Report", back_populates="updates")
    author: Mapped["User"] = relationship("User", back_populates="updates")


class ReportUpvote(Base):
    """One user's endorsement of one report."""

    __tablename__ = "report_upvotes"
    __table_args__ = (
        UniqueConstraint("report_id", "user_id", name="uq_report_upvotes_report_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    report: Mapped["Report"] = relationship("Report", back_populates="upvotes")
