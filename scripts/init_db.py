#!/usr/bin/env python3
"""
Create the StudyMate tables without starting the server.
Pass --reset to drop existing tables first (dev databases only).
"""
import asyncio
import sys

from sqlmodel import SQLModel

from studymate.config import settings
from studymate.db import create_db_and_tables, engine


async def reset_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


async def main(reset: bool):
    if reset:
        if settings.env == "prod":
            print("Refusing to drop tables in prod.")
            sys.exit(1)
        await reset_tables()
    await create_db_and_tables()
    print(f"DB tables ready: {settings.db_url}")


if __name__ == "__main__":
    asyncio.run(main("--reset" in sys.argv[1:]))
