# tests/conftest.py

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

# --- 1. Configurações de teste ANTES de importar a app ---
# O engine da aplicação é criado no import de storeadmin.database,
# então a URL precisa estar no ambiente antes disso.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storeadmin.main import app  # noqa: E402
from storeadmin.database import Base, get_db  # noqa: E402
from storeadmin.core.config import settings  # noqa: E402

# --- 2. Banco de dados de teste ---
engine = create_engine(
    settings.DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# --- 3. Fixtures do Pytest ---

@pytest.fixture(scope="function")
def db() -> Generator:
    """Fixture para criar uma sessão de banco de dados limpa para cada teste."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(scope="function")
def session_factory(db: Session):
    """Fábrica de sessões do banco de teste, para os jobs que abrem a própria sessão."""
    return TestingSessionLocal

@pytest.fixture(scope="function")
def client(db: Session) -> Generator:
    """Fixture para criar um TestClient com a dependência do DB sobrescrita."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()

@pytest.fixture
def api() -> str:
    return settings.API_PREFIX
