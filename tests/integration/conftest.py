import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from invoice_service.adapter.repositories import tables  # noqa: F401  (registers tables)
from invoice_service.app.services.notification_service import NotificationService
from invoice_service.depends import get_session, get_notification_service
from invoice_service.domain.exceptions import NotifierError

# Shared-cache in-memory SQLite, one schema per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///file::memory:?cache=shared&uri=true"


class RecordingNotificationService(NotificationService):
    """Notifier double that records calls and can be told to fail"""

    def __init__(self):
        self.sent = []
        self.fail_with = None

    async def notify(self, resource_id, to_email, subject, message):
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            {"resource_id": resource_id, "to_email": to_email, "subject": subject, "message": message}
        )


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create test database engine with a fresh schema"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotificationService()


@pytest.fixture
def failing_notifier():
    service = RecordingNotificationService()
    service.fail_with = NotifierError("Mail gateway unreachable", reason="connect timeout")
    return service


def _build_app(db_session, notification_service):
    from invoice_service.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notification_service] = lambda: notification_service
    return app


@pytest_asyncio.fixture
async def client(db_session, notifier):
    """Create test client with database session and notifier overrides"""
    app = _build_app(db_session, notifier)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def failing_client(db_session, failing_notifier):
    """Test client whose notifier always fails"""
    app = _build_app(db_session, failing_notifier)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
