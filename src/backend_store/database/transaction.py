"""
Explicit transactions for multi-entity writes.

The aggregate services open a dedicated session, run every repository call on
it and then decide themselves whether to commit or roll back.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class Transaction:
    """A begun transaction bound to its own session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()
        await self.session.close()

    async def rollback(self) -> None:
        # Safe after a repository already rolled the session back.
        try:
            await self.session.rollback()
        finally:
            await self.session.close()


class TransactionManager:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def begin(self) -> Transaction:
        session = self._session_maker()
        try:
            await session.begin()
        except Exception:
            await session.close()
            raise
        logger.debug("transaction.begin")
        return Transaction(session)
