"""SQLAlchemy implementations of repository interfaces."""

from .private_message_report import (
    SqlAlchemyPrivateMessageReportRepository,
    compose_view_statement,
)

__all__ = [
    "SqlAlchemyPrivateMessageReportRepository",
    "compose_view_statement",
]
