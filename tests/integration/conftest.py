from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import DeliveryResult, INotificationSender
from src.depends import (
    get_clock,
    get_credential_hasher,
    get_notification_sender,
    get_unit_of_work,
)
from src.domain.base import utcnow


class RecordingNotificationSender(INotificationSender):
    """Keeps sent codes in memory instead of mailing them"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_reset_code(self, email: str, code: str) -> DeliveryResult:
        if self.fail:
            return DeliveryResult(delivered=False, error="mailbox unavailable")
        self.sent.append((email, code))
        return DeliveryResult(delivered=True)

    def last_code_for(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]


class MutableClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def notifications():
    return RecordingNotificationSender()


@pytest.fixture
def clock():
    return MutableClock(utcnow())


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def app(engine, notifications, clock):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_hasher] = lambda: CredentialHasher(rounds=4)
    app.dependency_overrides[get_notification_sender] = lambda: notifications
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
