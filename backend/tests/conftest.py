import os

# Configure the app before config.settings is first imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_PHONES"] = "0899999999"
os.environ["PRODUCTION_BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app

ADMIN_PHONE = "0899999999"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh in-memory database for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client bound to the in-memory database"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, channel="student", **fields):
    form = {"id": "s-1", "name": "Somchai", "phone": "0812345678", "email": "somchai@example.com"}
    form.update(fields)
    return client.post(f"/api/{channel}/register", data=form)


def auth_headers(token_response):
    return {"Authorization": f"Bearer {token_response.json()['accessToken']}"}


@pytest.fixture
def admin_headers(client):
    response = register(client, channel="staff", id="admin-1", name="Admin", phone=ADMIN_PHONE)
    return auth_headers(response)


@pytest.fixture
def central_staff_headers(client):
    response = register(client, channel="staff", id="central-1", name="Gate", phone="0811111111",
                        isCentralStaff="true")
    return auth_headers(response)


@pytest.fixture
def faculty_staff_headers(client):
    response = register(client, channel="staff", id="eng-1", name="Booth", phone="0822222222",
                        faculty="Engineering")
    return auth_headers(response)
