from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from pm_reports.api.deps import get_private_message_report_service
from pm_reports.dto import PrivateMessageReportViewDTO
from pm_reports.schemas.common import MAX_ID, ErrorResponse
from pm_reports.schemas.private_message_report import (
    PrivateMessageReportCreateRequest,
    PrivateMessageReportResolveRequest,
    ResolveAllResponse,
)
from pm_reports.services.private_message_reports import PrivateMessageReportService

router = APIRouter(prefix="/private-messages", tags=["private-messages"])


@router.post(
    "/{private_message_id}/report",
    response_model=PrivateMessageReportViewDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Report a private message",
)
async def report_private_message(
    private_message_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    payload: PrivateMessageReportCreateRequest,
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    return await svc.create_report(
        private_message_id=private_message_id,
        creator_id=payload.creator_id,
        reason=payload.reason,
    )


@router.put(
    "/{private_message_id}/reports/resolve",
    response_model=ResolveAllResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Resolve every open report for a private message",
)
async def resolve_private_message_reports(
    private_message_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    payload: PrivateMessageReportResolveRequest,
    svc: PrivateMessageReportService = Depends(get_private_message_report_service),
):
    count = await svc.resolve_all_for_message(private_message_id, payload.resolver_id)
    return ResolveAllResponse(private_message_id=private_message_id, resolved_count=count)
