"""Plain record types shared by every store backend.

``to_dict()`` yields the camelCase JSON shape served by the API.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(id=data["id"], name=data["name"])


@dataclass(frozen=True)
class Section:
    title: str
    completed: int
    total: int

    def to_dict(self) -> dict:
        return {"title": self.title, "completed": self.completed, "total": self.total}

    @classmethod
    def from_dict(cls, data: dict) -> Section:
        return cls(
            title=data["title"],
            completed=int(data.get("completed", 0)),
            total=int(data.get("total", 0)),
        )


@dataclass(frozen=True)
class ChecklistItem:
    section_path: str
    name: str
    status: str
    remark: str | None = None
    comment: str | None = None

    def to_dict(self) -> dict:
        return {
            "sectionPath": self.section_path,
            "name": self.name,
            "status": self.status,
            "remark": self.remark,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ChecklistItem:
        return cls(
            section_path=data["sectionPath"],
            name=data["name"],
            status=data["status"],
            remark=data.get("remark"),
            comment=data.get("comment"),
        )


@dataclass(frozen=True)
class Protocol:
    """Snapshot of an inspection protocol.

    Instances are immutable; backends hand out fresh snapshots on every read,
    so a caller never observes a later mutation through an old reference.
    """

    id: str
    assignee_id: str
    status: str
    title: str
    site_name: str | None = None
    turbine_id: str | None = None
    date: str | None = None
    template_name: str | None = None
    sections: tuple[Section, ...] = field(default_factory=tuple)
    items: tuple[ChecklistItem, ...] = field(default_factory=tuple)
    completed_at: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "assigneeId": self.assignee_id,
            "status": self.status,
            "title": self.title,
            "siteName": self.site_name,
            "turbineId": self.turbine_id,
            "date": self.date,
            "templateName": self.template_name,
            "sections": [s.to_dict() for s in self.sections],
            "items": [i.to_dict() for i in self.items],
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Protocol:
        return cls(
            id=data["id"],
            assignee_id=data["assigneeId"],
            status=data["status"],
            title=data["title"],
            site_name=data.get("siteName"),
            turbine_id=data.get("turbineId"),
            date=data.get("date"),
            template_name=data.get("templateName"),
            sections=tuple(Section.from_dict(s) for s in data.get("sections") or []),
            items=tuple(ChecklistItem.from_dict(i) for i in data.get("items") or []),
            completed_at=data.get("completedAt"),
        )
