import os

# Must be set before the application modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CLINIC_TIMEZONE", "America/Sao_Paulo")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from physioclinic.auth import create_access_token, demo_user
from physioclinic.database import Base, get_db
from physioclinic.main import app


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def override_db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def token():
    return create_access_token(demo_user("tester"))


@pytest.fixture
def anon_client(override_db):
    return TestClient(app)


@pytest.fixture
def client(override_db, token):
    test_client = TestClient(app)
    test_client.headers.update({"Authorization": f"Bearer {token}"})
    return test_client


@pytest.fixture
def create_patient(client):
    def _create(nome="Maria Silva", **extra):
        payload = {
            "nome": nome,
            "email": extra.pop("email", f"{nome.split()[0].lower()}@example.com"),
            "telefone": extra.pop("telefone", "11987654321"),
        }
        payload.update(extra)
        response = client.post("/clientes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_session(client):
    def _create(patient_id, start="2024-06-03T08:00:00", end="2024-06-03T09:00:00", **extra):
        payload = {"clienteId": patient_id, "dataHoraInicio": start, "dataHoraFim": end}
        payload.update(extra)
        response = client.post("/sessoes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
