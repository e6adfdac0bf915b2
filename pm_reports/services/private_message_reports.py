"""Private message report use cases backed by the unit of work."""

from __future__ import annotations

from collections.abc import Callable

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pm_reports.core.config import settings
from pm_reports.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StoreError,
)
from pm_reports.dto import PrivateMessageReportViewDTO
from pm_reports.dto.mappers import map_report_view, map_report_views
from pm_reports.infra.unit_of_work import UnitOfWork
from pm_reports.models.private_message_report import DUPLICATE_REPORT_CONSTRAINT
from pm_reports.repositories.interfaces import PrivateMessageReportQuery

UnitOfWorkFactory = Callable[[], UnitOfWork]

logger = structlog.get_logger(__name__)


def _clean_reason(reason: str | None) -> str:
    cleaned = (reason or "").strip()
    if not cleaned:
        raise InvalidArgumentError("reason must not be empty")
    if len(cleaned) > settings.report_reason_max_length:
        raise InvalidArgumentError(
            f"reason must be {settings.report_reason_max_length} characters or less"
        )
    return cleaned


def _is_duplicate_report(exc: IntegrityError) -> bool:
    # Postgres names the constraint; SQLite lists the constrained columns
    detail = str(exc.orig)
    return DUPLICATE_REPORT_CONSTRAINT in detail or (
        "UNIQUE constraint failed: private_message_report.private_message_id" in detail
    )


class PrivateMessageReportService:
    """Moderation use cases for reports filed against private messages.

    Every call runs in its own unit of work. Storage failures surface as
    StoreError and are never retried here.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def get_report(self, report_id: int) -> PrivateMessageReportViewDTO:
        try:
            async with self._uow_factory() as uow:
                view = await uow.reports.read(report_id)
                if view is None:
                    raise NotFoundError("private message report not found")
                return map_report_view(view)
        except SQLAlchemyError as exc:
            logger.error("private_message_report_read_failed", report_id=report_id, exc_info=True)
            raise StoreError("database unavailable") from exc

    async def list_reports(
        self,
        *,
        unresolved_only: bool = False,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[PrivateMessageReportViewDTO]:
        query = PrivateMessageReportQuery(unresolved_only=unresolved_only, page=page, limit=limit)
        try:
            async with self._uow_factory() as uow:
                views = await uow.reports.list(query)
                return map_report_views(views)
        except SQLAlchemyError as exc:
            logger.error(
                "private_message_report_list_failed",
                unresolved_only=unresolved_only,
                exc_info=True,
            )
            raise StoreError("database unavailable") from exc

    async def count_unresolved(self) -> int:
        try:
            async with self._uow_factory() as uow:
                return await uow.reports.count_unresolved()
        except SQLAlchemyError as exc:
            logger.error("private_message_report_count_failed", exc_info=True)
            raise StoreError("database unavailable") from exc

    async def create_report(
        self, *, private_message_id: int, creator_id: int, reason: str
    ) -> PrivateMessageReportViewDTO:
        cleaned = _clean_reason(reason)
        try:
            async with self._uow_factory() as uow:
                message = await uow.reports.get_private_message(private_message_id)
                if message is None:
                    raise NotFoundError("private message not found")
                if await uow.reports.get_person(creator_id) is None:
                    raise NotFoundError("person not found")

                report = await uow.reports.create(
                    creator_id=creator_id,
                    private_message_id=private_message_id,
                    reason=cleaned,
                    original_pm_text=message.content,
                )
                view = await uow.reports.read(int(report.id))
                if view is None:
                    raise NotFoundError("private message report not found")
                dto = map_report_view(view)
        except IntegrityError as exc:
            if _is_duplicate_report(exc):
                raise ConflictError("private message already reported by this person") from exc
            logger.error(
                "private_message_report_create_failed",
                private_message_id=private_message_id,
                exc_info=True,
            )
            raise StoreError("database unavailable") from exc
        except SQLAlchemyError as exc:
            logger.error(
                "private_message_report_create_failed",
                private_message_id=private_message_id,
                exc_info=True,
            )
            raise StoreError("database unavailable") from exc

        logger.info(
            "private_message_report_created",
            report_id=dto.private_message_report.id,
            private_message_id=private_message_id,
            creator_id=creator_id,
        )
        return dto

    async def resolve_report(self, report_id: int, resolver_id: int) -> PrivateMessageReportViewDTO:
        """Mark a report as handled by ``resolver_id``.

        Resolving an already resolved report overwrites the resolver; the
        last committed write wins.
        """
        try:
            async with self._uow_factory() as uow:
                if await uow.reports.get_person(resolver_id) is None:
                    raise NotFoundError("person not found")
                if not await uow.reports.resolve(report_id, resolver_id):
                    raise NotFoundError("private message report not found")
                view = await uow.reports.read(report_id)
                if view is None:
                    raise NotFoundError("private message report not found")
                dto = map_report_view(view)
        except SQLAlchemyError as exc:
            logger.error("private_message_report_resolve_failed", report_id=report_id, exc_info=True)
            raise StoreError("database unavailable") from exc

        logger.info("private_message_report_resolved", report_id=report_id, resolver_id=resolver_id)
        return dto

    async def resolve_all_for_message(self, private_message_id: int, resolver_id: int) -> int:
        try:
            async with self._uow_factory() as uow:
                if await uow.reports.get_person(resolver_id) is None:
                    raise NotFoundError("person not found")
                count = await uow.reports.resolve_all_for_message(private_message_id, resolver_id)
        except SQLAlchemyError as exc:
            logger.error(
                "private_message_reports_resolve_all_failed",
                private_message_id=private_message_id,
                exc_info=True,
            )
            raise StoreError("database unavailable") from exc

        logger.info(
            "private_message_reports_resolved_for_message",
            private_message_id=private_message_id,
            resolver_id=resolver_id,
            resolved_count=count,
        )
        return count
