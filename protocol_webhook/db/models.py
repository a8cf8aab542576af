from __future__ import annotations

from sqlalchemy import Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from protocol_webhook.db.base import Base


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProtocolRow(Base):
    """One inspection checklist instance.

    ``sections`` and ``items`` are stored as JSON arrays in their checklist
    order; ``completed_at`` holds the ISO 8601 string exactly as it is
    reported in the webhook payload.
    """

    __tablename__ = "protocols"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Weak reference: no FK, a protocol may outlive or predate its assignee.
    assignee_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    site_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    turbine_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    template_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    sections: Mapped[list | None] = mapped_column(JSON, nullable=True)
    items: Mapped[list | None] = mapped_column(JSON, nullable=True)
    completed_at: Mapped[str | None] = mapped_column(String(40), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
