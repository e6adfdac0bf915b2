"""Public DTO exports for FastAPI response models."""

from .private_message_report import (
    PersonDTO,
    PrivateMessageDTO,
    PrivateMessageReportCountDTO,
    PrivateMessageReportDTO,
    PrivateMessageReportListDTO,
    PrivateMessageReportViewDTO,
)

__all__ = [
    "PersonDTO",
    "PrivateMessageDTO",
    "PrivateMessageReportCountDTO",
    "PrivateMessageReportDTO",
    "PrivateMessageReportListDTO",
    "PrivateMessageReportViewDTO",
]
