"""DTOs for private message report views exposed via the moderation API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PersonDTO(BaseModel):
    id: int = Field(description="Person ID")
    name: str = Field(description="Unique account name")
    display_name: str | None = Field(default=None, description="Display name (optional)")
    local: bool = Field(description="Whether the account is local to this instance")
    banned: bool = Field(description="Whether the account is banned")
    deleted: bool = Field(description="Whether the account is deleted")
    bot_account: bool = Field(description="Whether the account is a bot")
    published: datetime | None = Field(default=None, description="Account creation time")

    model_config = ConfigDict(from_attributes=True)


class PrivateMessageDTO(BaseModel):
    id: int = Field(description="Private message ID")
    creator_id: int = Field(description="Author person ID")
    recipient_id: int = Field(description="Recipient person ID")
    content: str = Field(description="Current message content")
    deleted: bool = Field(description="Whether the message is deleted")
    read: bool = Field(description="Whether the recipient has read the message")
    published: datetime | None = Field(default=None, description="Sent at")
    updated: datetime | None = Field(default=None, description="Last edited at")

    model_config = ConfigDict(from_attributes=True)


class PrivateMessageReportDTO(BaseModel):
    id: int = Field(description="Report ID")
    creator_id: int = Field(description="Reporting person ID")
    private_message_id: int = Field(description="Reported message ID")
    original_pm_text: str = Field(description="Message content when the report was filed")
    reason: str = Field(description="Free-text reason")
    resolved: bool = Field(description="Whether a moderator handled the report")
    resolver_id: int | None = Field(default=None, description="Resolving moderator ID")
    published: datetime | None = Field(default=None, description="Filed at")
    updated: datetime | None = Field(default=None, description="Last resolution change")

    model_config = ConfigDict(from_attributes=True)


class PrivateMessageReportViewDTO(BaseModel):
    private_message_report: PrivateMessageReportDTO
    private_message: PrivateMessageDTO
    private_message_creator: PersonDTO = Field(description="Author of the reported message")
    creator: PersonDTO = Field(description="Person who filed the report")
    resolver: PersonDTO | None = Field(default=None, description="Moderator who resolved it")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "private_message_report": {
                    "id": 1,
                    "creator_id": 2,
                    "private_message_id": 7,
                    "original_pm_text": "something offensive",
                    "reason": "its offensive",
                    "resolved": False,
                    "resolver_id": None,
                    "published": "2024-06-01T09:00:00+00:00",
                    "updated": None,
                },
                "resolver": None,
            }
        },
    )


class PrivateMessageReportListDTO(BaseModel):
    private_message_reports: list[PrivateMessageReportViewDTO]


class PrivateMessageReportCountDTO(BaseModel):
    count: int = Field(ge=0, description="Number of unresolved reports")
