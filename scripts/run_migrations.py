#!/usr/bin/env python3
"""Apply database migrations, then make sure the search index exists."""

import asyncio
import sys

import logfire
from alembic import command
from alembic.config import Config

from board.adapter.search import ElasticsearchBackend
from board.config import Settings
from board.domain.error import IndexDegradedError
from board.util.observability import configure_logfire


async def prepare_search_index(settings: Settings) -> None:
    backend = ElasticsearchBackend(settings.search)
    try:
        await backend.ensure_index()
    finally:
        await backend.aclose()


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations")
        command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database migrations completed successfully")
    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise

    # The index is rebuildable and the API works without it
    try:
        asyncio.run(prepare_search_index(settings))
    except IndexDegradedError as e:
        logfire.warn("Search index not prepared", error=str(e))

    return 0


if __name__ == "__main__":
    sys.exit(main())
