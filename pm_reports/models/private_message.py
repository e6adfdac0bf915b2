from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import false, func, true

from pm_reports.models.base import Base


class PrivateMessage(Base):
    __tablename__ = "private_message"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True)
    creator_id = Column(
        Integer, ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id = Column(
        Integer, ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())
    read = Column(Boolean, nullable=False, default=False, server_default=false())
    local = Column(Boolean, nullable=False, default=True, server_default=true())
    published = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated = Column(DateTime(timezone=True), nullable=True)
