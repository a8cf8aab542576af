#!/usr/bin/env python3
"""Create the protocol tables and (re)seed the demo users and protocols.

Usage:
    python scripts/seed_demo.py          # uses DATABASE_URL from env / .env
    DATABASE_URL=... python scripts/seed_demo.py
"""
from __future__ import annotations

import sys

from protocol_webhook.core.settings import get_settings
from protocol_webhook.store.sql import SqlProtocolStore


def main() -> int:
    settings = get_settings()
    if not settings.database_url:
        print("DATABASE_URL is not set; the in-memory store seeds itself on startup.")
        return 1

    store = SqlProtocolStore.from_url(settings.database_url)
    store.init()
    count = store.reset()

    users = store.get_users()
    print(f"Seeded {len(users)} users and {count} protocols:")
    for user in users:
        print(f"  {user.id:<4} {user.name:<20} open={store.count_open_for_user(user.id)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
