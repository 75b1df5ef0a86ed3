#!/usr/bin/env python3
"""
Create the first EasyBuk administrator, or elevate an existing account.

Reads from the environment / .env:
    DATABASE_URL     database to write to (required)
    ADMIN_EMAIL      admin account email (required)
    ADMIN_PASSWORD   password, used only when the account is created (required)
    ADMIN_NAME       display name (optional, defaults to "EasyBuk Admin")

Usage:
    python -m scripts.create_admin
"""
from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from easybuk.admin.service import bootstrap_admin  # noqa: E402
from easybuk.config import Settings  # noqa: E402
from easybuk.core.database import (  # noqa: E402
    get_async_engine,
    get_async_session_factory,
    get_session,
)
import easybuk.models  # noqa: E402,F401


async def main() -> None:
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        print("Error: ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        sys.exit(1)
    name = os.getenv("ADMIN_NAME", "EasyBuk Admin")

    settings = Settings()
    if not settings.database_url:
        print("Error: DATABASE_URL must be set")
        sys.exit(1)

    engine = get_async_engine(settings.database_url)
    session_factory = get_async_session_factory(engine)
    try:
        async for session in get_session(session_factory):
            user, created = await bootstrap_admin(
                session, email=email, password=password, name=name
            )
        if created:
            print(f"Admin created: {user.email} (id={user.id})")
        else:
            print(f"User {user.email} (id={user.id}) now holds roles {user.roles}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
