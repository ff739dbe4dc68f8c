from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from fastapi_mail.errors import ConnectionErrors
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rentalms.config import settings
from rentalms.core.mailer import ReceiptMailer
from rentalms.database import get_db, enable_sqlite_foreign_keys
from rentalms.dependencies import get_mailer
# Import all model classes to ensure they're registered with SQLAlchemy
from rentalms.models import Base
# Import FastAPI app AFTER model imports
from rentalms.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def html_body(message) -> str:
    """HTML part of a message captured by FastMail.record_messages()"""
    for part in message.walk():
        if part.get_content_type() == "text/html":
            return part.get_payload(decode=True).decode(part.get_content_charset() or "utf-8")
    raise AssertionError("message has no text/html part")


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    """Real mailer with sending suppressed: messages are rendered and dispatched, no SMTP"""
    return ReceiptMailer(settings.model_copy(update={"SMTP_SUPPRESS_SEND": True}))


@pytest.fixture
def outbox(mailer):
    """Receipts dispatched by the `mailer` fixture during the test"""
    with mailer.fm.record_messages() as messages:
        yield messages


@pytest.fixture
def failing_mailer(monkeypatch):
    """Mailer whose SMTP server always refuses the connection"""
    mailer = ReceiptMailer(settings)
    monkeypatch.setattr(
        mailer.fm,
        "send_message",
        AsyncMock(side_effect=ConnectionErrors("Exception raised 421 Service not available")),
    )
    return mailer


@pytest.fixture(scope="function")
def client(db_session, mailer):
    """FastAPI test client with test database and recording mailer"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def property_id(client):
    """A property to hang units and expenses on"""
    response = client.post(
        "/api/properties",
        json={"code": "SUN", "name": "Sunset Apartments", "address": "12 Palm Road"},
    )
    return response.json()["id"]


@pytest.fixture
def unit_id(client, property_id):
    """A vacant unit in the default property"""
    response = client.post(
        "/api/units",
        json={"property_id": property_id, "code": "A1", "name": "Apartment 1", "rent_amount": 1200.00},
    )
    return response.json()["id"]


@pytest.fixture
def tenant_id(client, unit_id):
    """An active tenant whose lease started on 2024-01-15"""
    response = client.post(
        "/api/tenants",
        json={
            "unit_id": unit_id,
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
            "start_date": "2024-01-15",
        },
    )
    return response.json()["id"]


def payment_payload(tenant_id: int, unit_id: int, months: int = 1, **overrides) -> dict:
    """Minimal valid body for POST /api/payments"""
    payload = {
        "tenant_id": tenant_id,
        "unit_id": unit_id,
        "amount": 1200.00 * months,
        "payment_date": "2024-01-15",
        "months_covered": months,
    }
    payload.update(overrides)
    return payload
