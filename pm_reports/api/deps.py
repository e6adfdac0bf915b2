"""API dependency helpers and service providers."""

from pm_reports import db
from pm_reports.infra.unit_of_work import SqlAlchemyUnitOfWork
from pm_reports.services.private_message_reports import PrivateMessageReportService

__all__ = [
    "get_private_message_report_service",
]


def _uow_factory() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(db.SessionLocal)


def get_private_message_report_service() -> PrivateMessageReportService:
    return PrivateMessageReportService(_uow_factory)
