"""Utilities to map repository views into DTOs."""

from __future__ import annotations

from collections.abc import Iterable

from pm_reports.dto import (
    PersonDTO,
    PrivateMessageDTO,
    PrivateMessageReportDTO,
    PrivateMessageReportViewDTO,
)
from pm_reports.models import Person
from pm_reports.repositories.interfaces import PrivateMessageReportView


def _person(person: Person | None) -> PersonDTO | None:
    if person is None:
        return None
    return PersonDTO.model_validate(person)


def map_report_view(view: PrivateMessageReportView) -> PrivateMessageReportViewDTO:
    return PrivateMessageReportViewDTO(
        private_message_report=PrivateMessageReportDTO.model_validate(view.private_message_report),
        private_message=PrivateMessageDTO.model_validate(view.private_message),
        private_message_creator=PersonDTO.model_validate(view.private_message_creator),
        creator=PersonDTO.model_validate(view.creator),
        resolver=_person(view.resolver),
    )


def map_report_views(views: Iterable[PrivateMessageReportView]) -> list[PrivateMessageReportViewDTO]:
    return [map_report_view(v) for v in views]
