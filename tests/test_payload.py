"""Tests for protocol_webhook/lifecycle/payload.py."""
from __future__ import annotations

import dataclasses

import pytest

from protocol_webhook.lifecycle.payload import build_payload, format_progress
from protocol_webhook.store.records import ChecklistItem, Protocol, Section, User

TS = "2025-03-15T08:30:00.000Z"


def _protocol(**overrides) -> Protocol:
    fields = dict(
        id="p1",
        assignee_id="u1",
        status="closed",
        title="Annual Inspection WTG-01",
        site_name="Windpark Nordsee Ost",
        turbine_id="WTG-01",
        date="2025-03-10",
        template_name="Annual Inspection v3",
        sections=(
            Section(title="Tower", completed=4, total=4),
            Section(title="Nacelle", completed=6, total=7),
        ),
        items=(
            ChecklistItem(section_path="Tower", name="Anchor bolts", status="ok"),
            ChecklistItem(
                section_path="Nacelle / Gearbox",
                name="Oil level",
                status="deficient",
                remark="Below minimum",
                comment="Top-up scheduled",
            ),
        ),
        completed_at=TS,
    )
    fields.update(overrides)
    return Protocol(**fields)


ANNA = User(id="u1", name="Anna Berg")


class TestBuildPayload:
    def test_top_level_fields(self):
        data = build_payload(_protocol(), ANNA, 2).to_dict()

        assert data["event"] == "protocol_completed"
        assert data["protocolId"] == "p1"
        assert data["protocolTitle"] == "Annual Inspection WTG-01"
        assert data["userId"] == "u1"
        assert data["userName"] == "Anna Berg"
        assert data["remainingCount"] == 2
        assert data["allDone"] is False
        assert data["completedAt"] == TS

    def test_exact_schema(self):
        data = build_payload(_protocol(), ANNA, 0).to_dict()

        assert set(data) == {
            "event", "protocolId", "protocolTitle", "userId", "userName",
            "remainingCount", "allDone", "completedAt", "protocolDetails",
        }
        assert set(data["protocolDetails"]) == {
            "siteName", "turbineId", "date", "templateName", "sections", "items",
        }

    def test_section_progress_string(self):
        sections = build_payload(_protocol(), ANNA, 1).to_dict()["protocolDetails"]["sections"]

        assert sections == [
            {"title": "Tower", "completed": 4, "total": 4, "progress": "4 / 4"},
            {"title": "Nacelle", "completed": 6, "total": 7, "progress": "6 / 7"},
        ]

    def test_items_render_missing_text_as_empty_string(self):
        items = build_payload(_protocol(), ANNA, 1).to_dict()["protocolDetails"]["items"]

        assert items[0] == {
            "sectionPath": "Tower",
            "name": "Anchor bolts",
            "status": "ok",
            "remark": "",
            "comment": "",
        }
        assert items[1]["remark"] == "Below minimum"
        assert items[1]["comment"] == "Top-up scheduled"

    def test_missing_optional_fields_render_as_null(self):
        protocol = _protocol(site_name=None, turbine_id="", date=None, template_name=None)
        details = build_payload(protocol, ANNA, 0).to_dict()["protocolDetails"]

        assert details["siteName"] is None
        assert details["turbineId"] is None
        assert details["date"] is None
        assert details["templateName"] is None

    def test_empty_sections_and_items(self):
        details = build_payload(_protocol(sections=(), items=()), ANNA, 0).to_dict()["protocolDetails"]

        assert details["sections"] == []
        assert details["items"] == []

    def test_unknown_assignee_falls_back_to_id(self):
        assert build_payload(_protocol(), None, 0).user_name == "u1"

    @pytest.mark.parametrize("remaining,all_done", [(0, True), (1, False), (5, False)])
    def test_all_done_iff_zero_remaining(self, remaining, all_done):
        assert build_payload(_protocol(), ANNA, remaining).all_done is all_done

    def test_explicit_completed_at_wins(self):
        payload = build_payload(_protocol(), ANNA, 0, completed_at="2030-01-01T00:00:00.000Z")
        assert payload.completed_at == "2030-01-01T00:00:00.000Z"

    def test_deterministic(self):
        a = build_payload(_protocol(), ANNA, 3)
        b = build_payload(_protocol(), ANNA, 3)

        assert a == b
        assert a.to_dict() == b.to_dict()

    def test_payload_is_immutable(self):
        payload = build_payload(_protocol(), ANNA, 3)

        with pytest.raises(dataclasses.FrozenInstanceError):
            payload.remaining_count = 0


def test_format_progress():
    assert format_progress(0, 12) == "0 / 12"
