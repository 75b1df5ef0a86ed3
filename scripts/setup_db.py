#!/usr/bin/env python3
"""
Create every EasyBuk table that does not exist yet.

Usage:
    python -m scripts.setup_db
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from easybuk.config import Settings  # noqa: E402
from easybuk.core.database import Base, get_async_engine  # noqa: E402
import easybuk.models  # noqa: E402,F401


async def main() -> None:
    settings = Settings()
    if not settings.database_url:
        print("Error: DATABASE_URL must be set")
        sys.exit(1)

    engine = get_async_engine(settings.database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print(f"Created {len(Base.metadata.tables)} tables (existing ones left untouched)")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
