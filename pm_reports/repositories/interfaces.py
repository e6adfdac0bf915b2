"""Repository abstractions for the service layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pm_reports.models import Person, PrivateMessage, PrivateMessageReport


@dataclass
class PrivateMessageReportView:
    """A report joined with its message and every person involved."""

    private_message_report: PrivateMessageReport
    private_message: PrivateMessage
    private_message_creator: Person
    creator: Person
    resolver: Person | None


class ReportOrder(str, Enum):
    """Chronological ordering applied to report listings."""

    OLDEST_FIRST = "published_asc"
    NEWEST_FIRST = "published_desc"

    @classmethod
    def for_filter(cls, unresolved_only: bool) -> ReportOrder:
        # The unresolved queue is worked FIFO, the full history newest first
        return cls.OLDEST_FIRST if unresolved_only else cls.NEWEST_FIRST


@dataclass
class PrivateMessageReportQuery:
    unresolved_only: bool = False
    page: int | None = None
    limit: int | None = None

    @property
    def order(self) -> ReportOrder:
        return ReportOrder.for_filter(self.unresolved_only)


class PrivateMessageReportRepository(Protocol):
    """Repository boundary for private message reports and their views."""

    async def read(self, report_id: int) -> PrivateMessageReportView | None: ...

    async def list(self, query: PrivateMessageReportQuery) -> list[PrivateMessageReportView]: ...

    async def count_unresolved(self) -> int: ...

    async def create(
        self,
        *,
        creator_id: int,
        private_message_id: int,
        reason: str,
        original_pm_text: str,
    ) -> PrivateMessageReport: ...

    async def resolve(self, report_id: int, resolver_id: int) -> bool: ...

    async def resolve_all_for_message(self, private_message_id: int, resolver_id: int) -> int: ...

    async def get_private_message(self, private_message_id: int) -> PrivateMessage | None: ...

    async def get_person(self, person_id: int) -> Person | None: ...
