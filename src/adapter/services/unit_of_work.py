from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.accounts = AccountRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # A rollback expires loaded accounts, which use cases still read after the block
        if exc_type is not None:
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
