import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.stripe_gateway import StripePaymentGateway
from src.app.services.compute_resume_service import ComputeResumeService
from src.app.services.payment_gateway import CheckoutSessionInfo
from src.depends import get_payment_gateway, get_resume_service, get_session
from tests.fixtures.stripe_events import WEBHOOK_SECRET


class FakeStripeGateway(StripePaymentGateway):
    """Real webhook verification, recorded checkout calls"""

    def __init__(self):
        super().__init__(secret_key="sk_test_fake", webhook_secret=WEBHOOK_SECRET)
        self.customers = []
        self.sessions = []

    async def create_customer(self, tenant_id: str, email: str) -> str:
        self.customers.append((tenant_id, email))
        return f"cus_{tenant_id}"

    async def create_checkout_session(self, customer_id, tenant_id, amount_usd, success_url, cancel_url):
        self.sessions.append(
            {"customer_id": customer_id, "tenant_id": tenant_id, "amount_usd": amount_usd}
        )
        session_id = f"cs_{len(self.sessions)}"
        return CheckoutSessionInfo(session_id=session_id, url=f"https://checkout.stripe.test/{session_id}")


class RecordingResumeService(ComputeResumeService):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def resume_tenant(self, tenant_id: str) -> bool:
        self.calls.append(tenant_id)
        if self.fail:
            raise RuntimeError("orchestrator unavailable")
        return True


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file per test"""
    db_url = f"sqlite+aiosqlite:///{tmp_path}/credit_ledger_test.db"

    engine = create_async_engine(db_url, echo=False, future=True, connect_args={"timeout": 30})

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def gateway():
    return FakeStripeGateway()


@pytest_asyncio.fixture
async def resume_service():
    return RecordingResumeService()


@pytest_asyncio.fixture
async def client(session_factory, gateway, resume_service):
    """Create test client with session, gateway and resume overrides"""
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    # Each request gets its own session, like production
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_resume_service] = lambda: resume_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
