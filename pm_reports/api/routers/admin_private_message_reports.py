from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from pm_reports.api.deps import get_private_message_report_service
from pm_reports.dto import (
    PrivateMessageReportCountDTO,
    PrivateMessageReportListDTO,
    PrivateMessageReportViewDTO,
)
from pm_reports.schemas.common import MAX_ID, ErrorResponse
from pm_reports.schemas.private_message_report import PrivateMessageReportResolveRequest
from pm_reports.services.private_message_reports import PrivateMessageReportService

router = APIRouter(prefix="/admin/private-message-reports", tags=["admin"])


@router.get(
    "",
    response_model=PrivateMessageReportListDTO,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="List private message reports",
    description=(
        "unresolved_only=true returns pending reports oldest first; "
        "otherwise every report newest first."
    ),
)
async def list_private_message_reports(
    unresolved_only: bool = Query(False),
    page: int | None = Query(None),
    limit: int | None = Query(None),
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    items = await svc.list_reports(unresolved_only=unresolved_only, page=page, limit=limit)
    return PrivateMessageReportListDTO(private_message_reports=items)


@router.get(
    "/count",
    response_model=PrivateMessageReportCountDTO,
    responses={503: {"model": ErrorResponse}},
    summary="Count unresolved private message reports",
)
async def count_unresolved_private_message_reports(
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    return PrivateMessageReportCountDTO(count=await svc.count_unresolved())


@router.get(
    "/{report_id}",
    response_model=PrivateMessageReportViewDTO,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Get a private message report",
)
async def get_private_message_report(
    report_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    return await svc.get_report(report_id)


@router.put(
    "/{report_id}/resolve",
    response_model=PrivateMessageReportViewDTO,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Resolve a private message report",
)
async def resolve_private_message_report(
    report_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    payload: PrivateMessageReportResolveRequest,
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    return await svc.resolve_report(report_id, payload.resolver_id)
