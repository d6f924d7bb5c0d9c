"""
Pytest configuration and shared fixtures.

The referral store is a throwaway SQLite file per test (via aiosqlite) and the
SMTP transport is replaced with an in-memory fake.
"""
import pytest
import pytest_asyncio
from typing import Any, Dict, List
from fastapi.testclient import TestClient

from referral_api.core.config import Settings
from referral_api.core.exceptions import DeliveryFailedError
from referral_api.deps import get_mailer
from referral_api.infrastructure.database import build_engine, build_session_factory
from referral_api.main import create_app
from referral_api.models import Base


VALID_PAYLOAD = {
    "referrerName": "Alice",
    "referrerEmail": "alice@x.com",
    "refereeName": "Bob",
    "refereeEmail": "bob@x.com",
    "course": "CS101",
}


class FakeMailer:
    """Records every message instead of talking to an SMTP server"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Dict[str, Any]] = []

    async def send(self, to_address: str, subject: str, body: str) -> None:
        self.sent.append({"to": to_address, "subject": subject, "body": body})
        if self.fail:
            raise DeliveryFailedError("550 Requested action not taken: mailbox unavailable")


@pytest.fixture
def valid_payload():
    return dict(VALID_PAYLOAD)


@pytest.fixture
def settings(tmp_path):
    return Settings({
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'referrals.db'}",
        "EMAIL_USER": "courses@example.com",
        "EMAIL_PASS": "app-password",
    })


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def app(settings, mailer):
    app = create_app(settings)
    app.dependency_overrides[get_mailer] = lambda: mailer
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest_asyncio.fixture
async def session(settings):
    """Session on a freshly created schema, for repository and service tests"""
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()
