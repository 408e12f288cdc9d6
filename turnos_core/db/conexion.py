# turnos_core/db/conexion.py
from typing import Generator

from sqlmodel import SQLModel, Session, create_engine

from turnos_core.config import DB_URL

# Necesario para SQLite en modo multi-hilo (FastAPI corre los def en threadpool)
connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

engine = create_engine(DB_URL, echo=False, connect_args=connect_args)


def init_db() -> None:
    """
    Crea las tablas (usuarios, reservas) si no existen.
    """
    # Import tardío para registrar los modelos antes de create_all
    from turnos_core.db import modelos  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine, expire_on_commit=False) as session:
        yield session
