"""
User aggregate access

Every write to a user's wallets, positions or referral fields goes through
load_user(for_update=True) and touch() inside one session transaction: the
row lock serializes writers on PostgreSQL and the version column makes a
stale writer fail at flush instead of overwriting a newer state.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from .exceptions import ApiError, InternalError, NotFoundError

logger = logging.getLogger("api")


async def load_user(
    db: AsyncSession, telegram_id: str, for_update: bool = False
) -> Optional[User]:
    query = select(User).filter(User.telegram_id == telegram_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalars().first()


async def require_user(
    db: AsyncSession, telegram_id: str, for_update: bool = False
) -> User:
    user = await load_user(db, telegram_id, for_update=for_update)
    if not user:
        raise NotFoundError("User not found", details={"telegram_id": telegram_id})
    return user


def touch(user: User) -> None:
    """Mark the aggregate root dirty so its version is bumped on flush"""
    user.updated_at = datetime.utcnow()


@asynccontextmanager
async def write_transaction(db: AsyncSession, failure_message: str):
    """
    Wrap one aggregate write: commit on success, explicit rollback on any
    failure. Store errors surface as InternalError with the store message.
    """
    try:
        yield db
        await db.commit()
    except ApiError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ {failure_message}: {e}", exc_info=True)
        raise InternalError(failure_message, details={"error": str(e)}) from e
    except Exception:
        await db.rollback()
        raise
