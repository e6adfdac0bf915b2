from __future__ import annotations

from pydantic import BaseModel, Field

from pm_reports.schemas.common import MAX_ID


class PrivateMessageReportCreateRequest(BaseModel):
    creator_id: int = Field(ge=1, le=MAX_ID, description="Person filing the report")
    reason: str = Field(description="Why the message is being reported")


class PrivateMessageReportResolveRequest(BaseModel):
    resolver_id: int = Field(ge=1, le=MAX_ID, description="Moderator resolving the report")


class ResolveAllResponse(BaseModel):
    private_message_id: int
    resolved_count: int = Field(ge=0)
