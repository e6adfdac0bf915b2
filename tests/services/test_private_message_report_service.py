from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from pm_reports.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from pm_reports.models import PrivateMessage, PrivateMessageReport
from pm_reports.services.private_message_reports import PrivateMessageReportService
from tests.factories import create_person, create_private_message, create_report


@pytest.mark.asyncio
async def test_report_then_resolve_scenario(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    timmy = await create_person(session, "timmy_mrv")
    jessica = await create_person(session, "jessica_mrv")
    # timmy sends a private message to jessica, jessica reports it
    pm = await create_private_message(session, timmy, jessica, "something offensive")
    created = await service.create_report(
        private_message_id=pm.id, creator_id=jessica.id, reason="its offensive"
    )

    reports = await service.list_reports(unresolved_only=True)
    assert len(reports) == 1
    view = reports[0]
    assert view.private_message_report.id == created.private_message_report.id
    assert view.private_message_report.resolved is False
    assert view.private_message_report.resolver_id is None
    assert view.private_message_creator.name == "timmy_mrv"
    assert view.creator.name == "jessica_mrv"
    assert view.private_message_report.reason == "its offensive"
    assert view.private_message.content == "something offensive"
    assert view.resolver is None

    admin = await create_person(session, "admin_mrv")
    resolved = await service.resolve_report(created.private_message_report.id, admin.id)
    assert resolved.private_message_report.resolved is True
    assert resolved.resolver is not None and resolved.resolver.name == "admin_mrv"

    reports = await service.list_reports(unresolved_only=False)
    assert len(reports) == 1
    assert reports[0].private_message_report.resolved is True
    assert reports[0].private_message_report.resolver_id == admin.id
    assert reports[0].resolver is not None
    assert reports[0].resolver.name == "admin_mrv"

    assert await service.list_reports(unresolved_only=True) == []
    assert await service.count_unresolved() == 0


@pytest.mark.asyncio
async def test_unresolved_listing_is_oldest_first_and_full_listing_newest_first(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    mod = await create_person(session, "mod")
    reporters = [await create_person(session, f"reporter_{i}") for i in range(3)]
    pm = await create_private_message(session, author, reporters[0], "hello")

    r_old = await create_report(session, message=pm, creator=reporters[0], minutes=0)
    r_mid = await create_report(session, message=pm, creator=reporters[1], minutes=10, resolver=mod)
    r_new = await create_report(session, message=pm, creator=reporters[2], minutes=20)

    unresolved = await service.list_reports(unresolved_only=True)
    assert [v.private_message_report.id for v in unresolved] == [r_old.id, r_new.id]
    assert all(not v.private_message_report.resolved for v in unresolved)

    everything = await service.list_reports(unresolved_only=False)
    assert [v.private_message_report.id for v in everything] == [r_new.id, r_mid.id, r_old.id]


@pytest.mark.asyncio
async def test_listing_paginates_after_ordering(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporters = [await create_person(session, f"reporter_{i}") for i in range(5)]
    pm = await create_private_message(session, author, reporters[0], "hello")
    ids = [
        (await create_report(session, message=pm, creator=p, minutes=i)).id
        for i, p in enumerate(reporters)
    ]

    page1 = await service.list_reports(unresolved_only=True, page=1, limit=2)
    page2 = await service.list_reports(unresolved_only=True, page=2, limit=2)
    page3 = await service.list_reports(unresolved_only=True, page=3, limit=2)
    page4 = await service.list_reports(unresolved_only=True, page=4, limit=2)

    assert [v.private_message_report.id for v in page1] == ids[0:2]
    assert [v.private_message_report.id for v in page2] == ids[2:4]
    assert [v.private_message_report.id for v in page3] == ids[4:5]
    assert page4 == []


@pytest.mark.asyncio
async def test_count_matches_unresolved_listing(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    mod = await create_person(session, "mod")
    reporters = [await create_person(session, f"reporter_{i}") for i in range(4)]
    pm = await create_private_message(session, author, reporters[0], "hello")
    for i, p in enumerate(reporters):
        await create_report(session, message=pm, creator=p, minutes=i, resolver=mod if i % 2 else None)

    unresolved = await service.list_reports(unresolved_only=True, limit=50)
    assert await service.count_unresolved() == len(unresolved) == 2


@pytest.mark.asyncio
async def test_empty_store_lists_nothing_and_counts_zero(
    service: PrivateMessageReportService,
) -> None:
    assert await service.list_reports(unresolved_only=True) == []
    assert await service.list_reports(unresolved_only=False) == []
    assert await service.count_unresolved() == 0


@pytest.mark.asyncio
async def test_get_report_missing_raises_not_found(service: PrivateMessageReportService) -> None:
    with pytest.raises(NotFoundError):
        await service.get_report(9999)


@pytest.mark.asyncio
async def test_get_report_is_stable_without_writes(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")
    report = await create_report(session, message=pm, creator=reporter)

    first = await service.get_report(report.id)
    second = await service.get_report(report.id)
    assert first == second
    assert first.resolver is None


@pytest.mark.asyncio
async def test_list_rejects_invalid_pagination(service: PrivateMessageReportService) -> None:
    with pytest.raises(InvalidArgumentError):
        await service.list_reports(page=0)
    with pytest.raises(InvalidArgumentError):
        await service.list_reports(limit=0)
    with pytest.raises(InvalidArgumentError):
        await service.list_reports(page=10**19, limit=10)


@pytest.mark.asyncio
async def test_resolve_missing_report_raises_not_found(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    mod = await create_person(session, "mod")
    with pytest.raises(NotFoundError):
        await service.resolve_report(12345, mod.id)


@pytest.mark.asyncio
async def test_resolve_with_unknown_resolver_leaves_report_untouched(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")
    report = await create_report(session, message=pm, creator=reporter)

    with pytest.raises(NotFoundError):
        await service.resolve_report(report.id, 98765)

    view = await service.get_report(report.id)
    assert view.private_message_report.resolved is False
    assert view.private_message_report.resolver_id is None


@pytest.mark.asyncio
async def test_re_resolving_overwrites_resolver(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    mod_a = await create_person(session, "mod_a")
    mod_b = await create_person(session, "mod_b")
    pm = await create_private_message(session, author, reporter, "hello")
    report = await create_report(session, message=pm, creator=reporter)

    await service.resolve_report(report.id, mod_a.id)
    view = await service.resolve_report(report.id, mod_b.id)

    assert view.private_message_report.resolved is True
    assert view.private_message_report.resolver_id == mod_b.id
    assert view.resolver is not None and view.resolver.name == "mod_b"
    assert view.private_message_report.updated is not None


@pytest.mark.asyncio
async def test_concurrent_resolves_settle_on_one_resolver(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    mod_a = await create_person(session, "mod_a")
    mod_b = await create_person(session, "mod_b")
    pm = await create_private_message(session, author, reporter, "hello")
    report = await create_report(session, message=pm, creator=reporter)

    await asyncio.gather(
        service.resolve_report(report.id, mod_a.id),
        service.resolve_report(report.id, mod_b.id),
    )

    view = await service.get_report(report.id)
    assert view.private_message_report.resolved is True
    assert view.private_message_report.resolver_id in {mod_a.id, mod_b.id}
    assert view.resolver is not None
    assert view.resolver.id == view.private_message_report.resolver_id
    assert await service.count_unresolved() == 0


@pytest.mark.asyncio
async def test_create_report_snapshots_message_content(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "original words")

    created = await service.create_report(
        private_message_id=pm.id, creator_id=reporter.id, reason="  harassment  "
    )
    assert created.private_message_report.reason == "harassment"
    assert created.private_message_report.original_pm_text == "original words"
    assert created.private_message_report.published is not None

    await session.execute(
        update(PrivateMessage).where(PrivateMessage.id == pm.id).values(content="edited words")
    )
    await session.commit()

    view = await service.get_report(created.private_message_report.id)
    assert view.private_message.content == "edited words"
    assert view.private_message_report.original_pm_text == "original words"


@pytest.mark.asyncio
@pytest.mark.parametrize("reason", ["", "   ", "x" * 1001])
async def test_create_report_rejects_bad_reason(
    session: AsyncSession, service: PrivateMessageReportService, reason: str
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")

    with pytest.raises(InvalidArgumentError):
        await service.create_report(private_message_id=pm.id, creator_id=reporter.id, reason=reason)
    assert await service.count_unresolved() == 0


@pytest.mark.asyncio
async def test_create_report_requires_message_and_creator(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")

    with pytest.raises(NotFoundError):
        await service.create_report(private_message_id=4242, creator_id=reporter.id, reason="spam")
    with pytest.raises(NotFoundError):
        await service.create_report(private_message_id=pm.id, creator_id=4242, reason="spam")


@pytest.mark.asyncio
async def test_duplicate_report_conflicts(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")

    await service.create_report(private_message_id=pm.id, creator_id=reporter.id, reason="spam")
    with pytest.raises(ConflictError):
        await service.create_report(private_message_id=pm.id, creator_id=reporter.id, reason="again")
    assert await service.count_unresolved() == 1


@pytest.mark.asyncio
async def test_resolve_all_for_message_only_touches_open_reports(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    first_mod = await create_person(session, "first_mod")
    mod = await create_person(session, "mod")
    reporters = [await create_person(session, f"reporter_{i}") for i in range(3)]
    pm = await create_private_message(session, author, reporters[0], "hello")
    other_pm = await create_private_message(session, author, reporters[1], "other")

    already = await create_report(session, message=pm, creator=reporters[0], resolver=first_mod)
    await create_report(session, message=pm, creator=reporters[1], minutes=1)
    await create_report(session, message=pm, creator=reporters[2], minutes=2)
    untouched = await create_report(session, message=other_pm, creator=reporters[0], minutes=3)

    assert await service.resolve_all_for_message(pm.id, mod.id) == 2
    assert await service.count_unresolved() == 1

    kept = await service.get_report(already.id)
    assert kept.private_message_report.resolver_id == first_mod.id
    still_open = await service.get_report(untouched.id)
    assert still_open.private_message_report.resolved is False


@pytest.mark.asyncio
async def test_report_with_missing_message_is_excluded(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    reporter = await create_person(session, "reporter")
    pm = await create_private_message(session, author, reporter, "hello")
    report = await create_report(session, message=pm, creator=reporter)

    await session.execute(delete(PrivateMessage).where(PrivateMessage.id == pm.id))
    await session.commit()

    assert await service.list_reports(unresolved_only=False) == []
    assert await service.count_unresolved() == 0
    with pytest.raises(NotFoundError):
        await service.get_report(report.id)


@pytest.mark.asyncio
async def test_resolved_flag_and_resolver_stay_consistent(
    session: AsyncSession, service: PrivateMessageReportService
) -> None:
    author = await create_person(session, "author")
    mod = await create_person(session, "mod")
    reporters = [await create_person(session, f"reporter_{i}") for i in range(3)]
    pm = await create_private_message(session, author, reporters[0], "hello")
    for i, p in enumerate(reporters):
        await create_report(session, message=pm, creator=p, minutes=i)
    first = (await service.list_reports(unresolved_only=True, limit=1))[0]
    await service.resolve_report(first.private_message_report.id, mod.id)

    for view in await service.list_reports(unresolved_only=False):
        report = view.private_message_report
        if report.resolved:
            assert report.resolver_id is not None
            assert view.resolver is not None and view.resolver.id == report.resolver_id
        else:
            assert report.resolver_id is None
            assert view.resolver is None

    rows = (await session.execute(PrivateMessageReport.__table__.select())).all()
    assert len(rows) == 3
