from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import false, func, true

from pm_reports.models.base import Base


class Person(Base):
    __tablename__ = "person"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, unique=True)
    display_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    local = Column(Boolean, nullable=False, default=True, server_default=true())
    banned = Column(Boolean, nullable=False, default=False, server_default=false())
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())
    bot_account = Column(Boolean, nullable=False, default=False, server_default=false())
    published = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated = Column(DateTime(timezone=True), nullable=True)
