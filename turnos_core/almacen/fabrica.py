# turnos_core/almacen/fabrica.py
from functools import lru_cache
from typing import Optional

from turnos_core import config
from turnos_core.almacen.base import ReservaStore
from turnos_core.almacen.local import LocalReservaStore
from turnos_core.almacen.sql import SqlReservaStore


def crear_store(backend: Optional[str] = None) -> ReservaStore:
    backend = (backend or config.BACKEND).strip().lower()
    if backend == "sql":
        from turnos_core.db.conexion import engine
        return SqlReservaStore(engine)
    if backend == "local":
        return LocalReservaStore(config.LOCAL_PATH)
    raise ValueError(f"TURNOS_BACKEND desconocido: {backend!r} (usa 'sql' o 'local')")


@lru_cache
def get_store() -> ReservaStore:
    """
    Dependencia de FastAPI. En tests se reemplaza con app.dependency_overrides.
    """
    return crear_store()
