"""
Fixtures compartidas.

Las variables de entorno se fijan antes de importar turnos_core porque
config.py las lee al importarse.
"""
import os

os.environ.setdefault("TURNOS_DB_URL", "sqlite://")
os.environ.setdefault("TURNOS_BACKEND", "sql")
os.environ.setdefault("TURNOS_LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel, Session, create_engine  # noqa: E402

from turnos_core.almacen.fabrica import get_store  # noqa: E402
from turnos_core.almacen.local import LocalReservaStore  # noqa: E402
from turnos_core.almacen.sql import SqlReservaStore  # noqa: E402
from turnos_core.core_app import app  # noqa: E402
from turnos_core.db.conexion import get_session  # noqa: E402
from turnos_core.db.modelos import Role, Usuario  # noqa: E402
from turnos_core.security import get_password_hash  # noqa: E402

ADMIN_EMAIL = "duena@turnos.local"
ADMIN_PASSWORD = "clave-secreta"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(engine):
    return SqlReservaStore(engine)


@pytest.fixture
def local_store(tmp_path):
    return LocalReservaStore(tmp_path / "reservas.json")


@pytest.fixture(params=["sql", "local"])
def store(request, engine, tmp_path):
    """Corre el mismo test contra los dos almacenes."""
    if request.param == "sql":
        return SqlReservaStore(engine)
    return LocalReservaStore(tmp_path / "reservas.json")


@pytest.fixture
def client(engine, store):
    def _session_override():
        with Session(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client, engine):
    with Session(engine) as session:
        session.add(
            Usuario(
                email=ADMIN_EMAIL,
                nombre="Dueña",
                password_hash=get_password_hash(ADMIN_PASSWORD),
                rol=Role.admin,
            )
        )
        session.commit()

    resp = client.post(
        "/api/auth/login",
        data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
