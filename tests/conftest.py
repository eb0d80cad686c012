import json
import os

os.environ.setdefault("SITE_DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.clients.ai_gateway import ChatCompletionClient
from app.clients.site import SiteClient
from app.core.security import hash_password
from app.db.base import Base, get_db
from app.db.models.order import Order
from app.db.models.user import User
from app.dependencies.clients import get_chat_completion_client
from app.main import app

from fixtures import ADMIN_EMAIL, ADMIN_PASSWORD


class FakeLanguageModel:
    """Stands in for the remote chat-completion API behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.reply = "  Working with Alex was a pleasure. I would recommend them.  "
        self.status_code = 200
        self.body = None
        self.error = None
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, text=self.body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="upstream exploded")
        return httpx.Response(200, json={"choices": [{"message": {"content": self.reply}}]})

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_llm():
    return FakeLanguageModel()


@pytest.fixture()
def client(session_factory, fake_llm):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_chat_client():
        return ChatCompletionClient(
            "https://llm.test/v1/chat/completions",
            model="test-model",
            temperature=0.7,
            max_tokens=300,
            api_key="test-key",
            transport=httpx.MockTransport(fake_llm.handler),
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_completion_client] = override_chat_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def site(client):
    return SiteClient(client)


@pytest.fixture()
def admin_user(db):
    user = User(
        email=ADMIN_EMAIL,
        name="Site Owner",
        password_hash=hash_password(ADMIN_PASSWORD),
        role="admin",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def admin_site(client, admin_user):
    site = SiteClient(client)
    site.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    return site


@pytest.fixture()
def admin_headers(admin_site):
    return {"Authorization": f"Bearer {admin_site.token}"}


@pytest.fixture()
def make_order(db):
    def _make(**overrides):
        fields = {
            "full_name": "Sam Carter",
            "email": "sam@example.com",
            "whatsapp": "+15550100",
            "business_name": "Carter Bakery",
            "niche": "Food",
            "website_goal": "ecommerce",
        }
        fields.update(overrides)
        order = Order(**fields)
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    return _make
