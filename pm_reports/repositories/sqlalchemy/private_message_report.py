"""SQLAlchemy implementation of the private message report repository."""

from __future__ import annotations

from sqlalchemy import Select, false, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from pm_reports.models import Person, PrivateMessage, PrivateMessageReport
from pm_reports.repositories.interfaces import (
    PrivateMessageReportQuery,
    PrivateMessageReportRepository,
    PrivateMessageReportView,
    ReportOrder,
)
from pm_reports.utils.paging import limit_and_offset

# Person appears in three roles, each needs its own alias in the join
message_creator = aliased(Person, name="private_message_creator")
report_creator = aliased(Person, name="report_creator")
report_resolver = aliased(Person, name="report_resolver")

_ORDER_BY = {
    ReportOrder.OLDEST_FIRST: PrivateMessageReport.published.asc(),
    ReportOrder.NEWEST_FIRST: PrivateMessageReport.published.desc(),
}


def compose_view_statement() -> Select:
    """Report ⋈ message ⋈ author ⋈ creator, left join resolver."""
    return (
        select(
            PrivateMessageReport,
            PrivateMessage,
            message_creator,
            report_creator,
            report_resolver,
        )
        .select_from(PrivateMessageReport)
        .join(PrivateMessage, PrivateMessage.id == PrivateMessageReport.private_message_id)
        .join(message_creator, message_creator.id == PrivateMessage.creator_id)
        .join(report_creator, report_creator.id == PrivateMessageReport.creator_id)
        .outerjoin(report_resolver, report_resolver.id == PrivateMessageReport.resolver_id)
    )


def _to_view(row) -> PrivateMessageReportView:
    report, message, author, creator, resolver = row
    return PrivateMessageReportView(
        private_message_report=report,
        private_message=message,
        private_message_creator=author,
        creator=creator,
        resolver=resolver,
    )


class SqlAlchemyPrivateMessageReportRepository(PrivateMessageReportRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def read(self, report_id: int) -> PrivateMessageReportView | None:
        stmt = compose_view_statement().where(PrivateMessageReport.id == report_id)
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        return _to_view(row)

    async def list(self, query: PrivateMessageReportQuery) -> list[PrivateMessageReportView]:
        limit, offset = limit_and_offset(query.page, query.limit)

        stmt = compose_view_statement()
        if query.unresolved_only:
            stmt = stmt.where(PrivateMessageReport.resolved == false())
        stmt = stmt.order_by(_ORDER_BY[query.order]).limit(limit).offset(offset)

        rows = await self._session.execute(stmt)
        return [_to_view(row) for row in rows.all()]

    async def count_unresolved(self) -> int:
        # Only the message join matters for counting
        stmt = (
            select(func.count(PrivateMessageReport.id))
            .select_from(PrivateMessageReport)
            .join(PrivateMessage, PrivateMessage.id == PrivateMessageReport.private_message_id)
            .where(PrivateMessageReport.resolved == false())
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def create(
        self,
        *,
        creator_id: int,
        private_message_id: int,
        reason: str,
        original_pm_text: str,
    ) -> PrivateMessageReport:
        report = PrivateMessageReport(
            creator_id=creator_id,
            private_message_id=private_message_id,
            reason=reason,
            original_pm_text=original_pm_text,
            resolved=False,
        )
        self._session.add(report)
        await self._session.flush()
        return report

    async def resolve(self, report_id: int, resolver_id: int) -> bool:
        # Single UPDATE: concurrent resolves on one row are serialized by the row lock
        stmt = (
            update(PrivateMessageReport)
            .where(PrivateMessageReport.id == report_id)
            .values(resolved=True, resolver_id=resolver_id, updated=func.now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def resolve_all_for_message(self, private_message_id: int, resolver_id: int) -> int:
        stmt = (
            update(PrivateMessageReport)
            .where(
                PrivateMessageReport.private_message_id == private_message_id,
                PrivateMessageReport.resolved == false(),
            )
            .values(resolved=True, resolver_id=resolver_id, updated=func.now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return int(result.rowcount)

    async def get_private_message(self, private_message_id: int) -> PrivateMessage | None:
        return await self._session.get(PrivateMessage, private_message_id)

    async def get_person(self, person_id: int) -> Person | None:
        return await self._session.get(Person, person_id)
