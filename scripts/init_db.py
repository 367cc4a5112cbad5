#!/usr/bin/env python3
"""
Database initialization script for SkinRoutine
Creates all tables and loads the starter catalog
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from skinroutine.config import get_settings
from skinroutine.database import make_engine
from skinroutine.repositories.sql import SqlStorage
from skinroutine.seed import seed_catalog
from skinroutine.services.catalog import CatalogService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Initialize the database"""
    settings = get_settings()
    logger.info(f"Database URL: {settings.database_url}")
    storage = SqlStorage(make_engine(settings.database_url, echo=settings.database_echo))
    try:
        await storage.startup()
        seeded = await seed_catalog(CatalogService(storage))
        logger.info(f"Database initialized (catalog seeded: {seeded})")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise
    finally:
        await storage.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
