"""Build the ``protocol_completed`` webhook payload.

The wire schema is fixed: optional protocol fields are rendered as ``null``
and optional item fields as ``""``, never omitted.
"""
from __future__ import annotations

from dataclasses import dataclass

from protocol_webhook.store.records import ChecklistItem, Protocol, Section, User

EVENT_PROTOCOL_COMPLETED = "protocol_completed"


@dataclass(frozen=True)
class SectionSummary:
    title: str
    completed: int
    total: int
    progress: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "completed": self.completed,
            "total": self.total,
            "progress": self.progress,
        }


@dataclass(frozen=True)
class ItemSummary:
    section_path: str
    name: str
    status: str
    remark: str
    comment: str

    def to_dict(self) -> dict:
        return {
            "sectionPath": self.section_path,
            "name": self.name,
            "status": self.status,
            "remark": self.remark,
            "comment": self.comment,
        }


@dataclass(frozen=True)
class WebhookPayload:
    """Immutable snapshot of a completed protocol sent to the webhook."""

    protocol_id: str
    protocol_title: str
    user_id: str
    user_name: str
    remaining_count: int
    all_done: bool
    completed_at: str | None
    site_name: str | None
    turbine_id: str | None
    date: str | None
    template_name: str | None
    sections: tuple[SectionSummary, ...]
    items: tuple[ItemSummary, ...]
    event: str = EVENT_PROTOCOL_COMPLETED

    def to_dict(self) -> dict:
        return {
            "event": self.event,
            "protocolId": self.protocol_id,
            "protocolTitle": self.protocol_title,
            "userId": self.user_id,
            "userName": self.user_name,
            "remainingCount": self.remaining_count,
            "allDone": self.all_done,
            "completedAt": self.completed_at,
            "protocolDetails": {
                "siteName": self.site_name,
                "turbineId": self.turbine_id,
                "date": self.date,
                "templateName": self.template_name,
                "sections": [s.to_dict() for s in self.sections],
                "items": [i.to_dict() for i in self.items],
            },
        }


def format_progress(completed: int, total: int) -> str:
    return f"{completed} / {total}"


def _summarize_section(section: Section) -> SectionSummary:
    return SectionSummary(
        title=section.title,
        completed=section.completed,
        total=section.total,
        progress=format_progress(section.completed, section.total),
    )


def _summarize_item(item: ChecklistItem) -> ItemSummary:
    return ItemSummary(
        section_path=item.section_path,
        name=item.name,
        status=item.status,
        remark=item.remark or "",
        comment=item.comment or "",
    )


def build_payload(
    protocol: Protocol,
    assignee: User | None,
    remaining_count: int,
    completed_at: str | None = None,
) -> WebhookPayload:
    """Return the payload for *protocol* completed by *assignee*.

    *completed_at* defaults to the protocol's own timestamp.  When the
    assignee is unknown, ``userName`` falls back to the assignee id.
    """
    return WebhookPayload(
        protocol_id=protocol.id,
        protocol_title=protocol.title,
        user_id=protocol.assignee_id,
        user_name=assignee.name if assignee is not None else protocol.assignee_id,
        remaining_count=remaining_count,
        all_done=remaining_count == 0,
        completed_at=completed_at if completed_at is not None else protocol.completed_at,
        site_name=protocol.site_name or None,
        turbine_id=protocol.turbine_id or None,
        date=protocol.date or None,
        template_name=protocol.template_name or None,
        sections=tuple(_summarize_section(s) for s in protocol.sections),
        items=tuple(_summarize_item(i) for i in protocol.items),
    )
