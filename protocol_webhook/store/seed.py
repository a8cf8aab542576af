"""Demo seed data: three service technicians and their turbine inspections.

Both backends load from here on ``init()`` and ``reset()``.
"""
from __future__ import annotations

from protocol_webhook.store.records import Protocol, User

SEED_USERS: tuple[dict, ...] = (
    {"id": "u1", "name": "Anna Berg"},
    {"id": "u2", "name": "Jonas Weber"},
    {"id": "u3", "name": "Mia Schulz"},
)

_ANNUAL_SECTIONS = [
    {"title": "Tower & Foundation", "completed": 4, "total": 4},
    {"title": "Nacelle", "completed": 6, "total": 7},
    {"title": "Rotor Blades", "completed": 3, "total": 3},
]

_ANNUAL_ITEMS = [
    {"sectionPath": "Tower & Foundation", "name": "Anchor bolt torque", "status": "ok"},
    {
        "sectionPath": "Tower & Foundation",
        "name": "Grout joint",
        "status": "ok",
        "remark": "Minor surface cracks, within tolerance",
    },
    {
        "sectionPath": "Nacelle / Gearbox",
        "name": "Oil level and sample",
        "status": "deficient",
        "remark": "Oil below minimum mark",
        "comment": "Top-up scheduled with next service",
    },
    {"sectionPath": "Nacelle / Yaw system", "name": "Yaw brake pads", "status": "ok"},
    {"sectionPath": "Rotor Blades", "name": "Leading edge erosion", "status": "ok"},
]

_SAFETY_SECTIONS = [
    {"title": "Fall Protection", "completed": 2, "total": 3},
    {"title": "Emergency Equipment", "completed": 2, "total": 2},
]

_SAFETY_ITEMS = [
    {"sectionPath": "Fall Protection", "name": "Ladder guide rail", "status": "ok"},
    {
        "sectionPath": "Fall Protection",
        "name": "Anchor point certification",
        "status": "open",
        "comment": "Certificate not on site",
    },
    {"sectionPath": "Emergency Equipment", "name": "First aid kit", "status": "ok"},
    {"sectionPath": "Emergency Equipment", "name": "Rescue device", "status": "ok"},
]

SEED_PROTOCOLS: tuple[dict, ...] = (
    {
        "id": "p1",
        "assigneeId": "u1",
        "status": "open",
        "title": "Annual Inspection WTG-01",
        "siteName": "Windpark Nordsee Ost",
        "turbineId": "WTG-01",
        "date": "2025-03-10",
        "templateName": "Annual Inspection v3",
        "sections": _ANNUAL_SECTIONS,
        "items": _ANNUAL_ITEMS,
    },
    {
        "id": "p2",
        "assigneeId": "u1",
        "status": "open",
        "title": "Annual Inspection WTG-02",
        "siteName": "Windpark Nordsee Ost",
        "turbineId": "WTG-02",
        "date": "2025-03-11",
        "templateName": "Annual Inspection v3",
        "sections": _ANNUAL_SECTIONS,
        "items": _ANNUAL_ITEMS,
    },
    {
        "id": "p3",
        "assigneeId": "u1",
        "status": "open",
        "title": "Safety Check WTG-02",
        "siteName": "Windpark Nordsee Ost",
        "turbineId": "WTG-02",
        "date": "2025-03-12",
        "templateName": "Safety Check",
        "sections": _SAFETY_SECTIONS,
        "items": _SAFETY_ITEMS,
    },
    {
        "id": "p4",
        "assigneeId": "u2",
        "status": "open",
        "title": "Blade Inspection WTG-07",
        "siteName": "Windpark Havelland",
        "turbineId": "WTG-07",
        "date": "2025-03-14",
        "templateName": "Blade Inspection",
        "sections": [{"title": "Rotor Blades", "completed": 1, "total": 3}],
        "items": [
            {"sectionPath": "Rotor Blades", "name": "Blade A lightning receptor", "status": "ok"},
        ],
    },
    {
        "id": "p5",
        "assigneeId": "u2",
        "status": "open",
        "title": "Safety Check WTG-07",
        "siteName": "Windpark Havelland",
        "turbineId": "WTG-07",
        "date": "2025-03-14",
        "templateName": "Safety Check",
        "sections": _SAFETY_SECTIONS,
        "items": _SAFETY_ITEMS,
    },
    {
        "id": "p6",
        "assigneeId": "u2",
        "status": "closed",
        "title": "Annual Inspection WTG-05",
        "siteName": "Windpark Havelland",
        "turbineId": "WTG-05",
        "date": "2025-02-20",
        "templateName": "Annual Inspection v3",
        "sections": _ANNUAL_SECTIONS,
        "items": _ANNUAL_ITEMS,
        "completedAt": "2025-02-20T15:42:00.000Z",
    },
    {
        "id": "p7",
        "assigneeId": "u3",
        "status": "open",
        "title": "Transformer Station Check",
        "sections": [],
        "items": [],
    },
)


def seed_users() -> list[User]:
    return [User.from_dict(data) for data in SEED_USERS]


def seed_protocols() -> list[Protocol]:
    return [Protocol.from_dict(data) for data in SEED_PROTOCOLS]
