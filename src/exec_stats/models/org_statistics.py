"""Running execution counters per organization."""

import uuid
from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class OrgStatistics(Base):
    """Today's and this month's counters for one organization."""

    __tablename__ = "org_statistics"

    org_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    daily_workflow_executions: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    daily_workflow_executions_finished: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    daily_app_executions: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    daily_app_executions_failed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    monthly_workflow_executions: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    monthly_workflow_executions_finished: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    monthly_app_executions: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    monthly_app_executions_failed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    total_api_usage: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    daily_api_usage: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class DailyStatisticRow(Base):
    """Counters for one completed day, appended when the day rolls over."""

    __tablename__ = "daily_statistics"
    __table_args__ = (
        UniqueConstraint("org_id", "day", name="uq_daily_statistics_org_day"),
    )

    org_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    workflow_executions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    workflow_executions_finished: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    app_executions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    app_executions_failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
