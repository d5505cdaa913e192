"""
Pytest configuration and fixtures for backend tests.
"""

import os
import tempfile

# Settings are read at import time: configure the test environment first
_TEST_DIR = tempfile.mkdtemp(prefix="kiosco-tests-")
os.environ["DATABASE_URL"] = ""
os.environ["LOCAL_STORE_PATH"] = os.path.join(_TEST_DIR, "local_store.json")
os.environ["CLI_PROFILE_PATH"] = os.path.join(_TEST_DIR, "profile.json")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config.constants import Roles
from shared.infrastructure.session_store import MemorySessionStore
from shared.utils.schemas import Product, User

from cafeteria_api.core.dependencies import get_persistence, get_session_store
from cafeteria_api.main import app
from cafeteria_api.models import Base
from cafeteria_api.repositories import FallbackStore, LocalStore, RemoteStore
from cafeteria_api.seed import DEMO_PASSWORD, seed


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_tables():
    """
    Create fresh tables for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_store():
    """Fresh in-memory key-value session store."""
    return MemorySessionStore()


@pytest.fixture
def remote_store(db_tables):
    return RemoteStore(TestingSessionLocal)


@pytest.fixture
def local_store(memory_store):
    return LocalStore(memory_store)


@pytest.fixture
def persistence(remote_store, local_store):
    """Remote SQLite store with the in-memory local store behind it."""
    return FallbackStore(remote_store, local_store)


@pytest.fixture
def local_only(local_store):
    """Demo mode: no remote store configured."""
    return FallbackStore(None, local_store)


@pytest.fixture
def seeded(persistence):
    """Persistence with the demo accounts and menu."""
    seed(persistence)
    return persistence


@pytest.fixture(scope="function")
def client(persistence, memory_store):
    """
    Create a test client with persistence and session store overrides.
    """
    app.dependency_overrides[get_persistence] = lambda: persistence
    app.dependency_overrides[get_session_store] = lambda: memory_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Users
# =============================================================================


@pytest.fixture
def basic_student():
    return User(id="1", email="usuario@ciclobasico.com", role=Roles.CICLO_BASICO, name="Estudiante Ciclo Básico")


@pytest.fixture
def superior_student():
    return User(
        id="2", email="usuario@ciclosuperior.com", role=Roles.CICLO_SUPERIOR, name="Estudiante Ciclo Superior"
    )


@pytest.fixture
def kiosk_user():
    return User(id="3", email="usuario@kiosquero.com", role=Roles.KIOSQUERO, name="Encargado del Kiosco")


@pytest.fixture
def admin_user():
    return User(id="4", email="usuario@admin.com", role=Roles.ADMIN, name="Administrador")


@pytest.fixture
def sample_product():
    """Customizable product with generous stock."""
    return Product(
        id="p-salad",
        name="Ensalada de prueba",
        category="ensaladas",
        price=850,
        is_customizable=True,
        ingredients=["lechuga", "tomate", "zanahoria"],
        stock_quantity=20,
    )


@pytest.fixture
def drink_product():
    return Product(id="p-water", name="Agua de prueba", category="bebidas", price=300, stock_quantity=20)


# =============================================================================
# Authentication headers
# =============================================================================


def _login(client, email: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": DEMO_PASSWORD})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(client, seeded):
    """Ciclo básico student."""
    return _login(client, "usuario@ciclobasico.com")


@pytest.fixture
def superior_headers(client, seeded):
    """Ciclo superior student."""
    return _login(client, "usuario@ciclosuperior.com")


@pytest.fixture
def kiosk_headers(client, seeded):
    return _login(client, "usuario@kiosquero.com")


@pytest.fixture
def admin_headers(client, seeded):
    return _login(client, "usuario@admin.com")
