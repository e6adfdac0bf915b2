from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import false, func

from pm_reports.models.base import Base

DUPLICATE_REPORT_CONSTRAINT = "uq_private_message_report_message_creator"


class PrivateMessageReport(Base):
    __tablename__ = "private_message_report"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        # One report per person per message
        UniqueConstraint(
            "private_message_id", "creator_id", name=DUPLICATE_REPORT_CONSTRAINT
        ),
        CheckConstraint(
            "(resolved AND resolver_id IS NOT NULL) OR (NOT resolved AND resolver_id IS NULL)",
            name="ck_private_message_report_resolver_matches_resolved",
        ),
    )

    id = Column(Integer, primary_key=True)
    creator_id = Column(
        Integer, ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True
    )
    private_message_id = Column(
        Integer,
        ForeignKey("private_message.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Snapshot of the message content at report time
    original_pm_text = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)
    resolved = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)
    resolver_id = Column(Integer, ForeignKey("person.id", ondelete="CASCADE"), nullable=True)
    published = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
    updated = Column(DateTime(timezone=True), nullable=True)
