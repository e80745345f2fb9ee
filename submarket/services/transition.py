"""Transition Boundary — one commit per marketplace operation, rollback on any failure.

Invariants:
    - Either every write staged inside the block commits, or none do
    - Errors are re-raised unchanged after rollback; nothing is swallowed
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transition(db: AsyncSession, operation: str) -> AsyncGenerator[None, None]:
    try:
        yield
        await db.commit()
    except Exception:
        await db.rollback()
        logger.debug(
            f"Transition {operation} rolled back", extra={"operation": operation},
        )
        raise
