# turnos_core/almacen/sql.py
# Reservas en una base SQL (SQLite por defecto, Postgres vía TURNOS_DB_URL)

import uuid
from typing import Any, Dict, List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from turnos_core.almacen.base import ReservaStore, validar_campos
from turnos_core.db.modelos import Reserva, EstadoReserva
from turnos_core.errores import NotFoundError, StorageError
from turnos_core.logger_config import logger


class SqlReservaStore(ReservaStore):
    """
    Cada operación abre y cierra su propia sesión. Los ids son UUID4 en texto,
    generados acá y no por la base.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    def crear(self, reserva: Reserva) -> str:
        nueva = Reserva(
            id=str(uuid.uuid4()),
            nombre=reserva.nombre,
            telefono=reserva.telefono,
            fecha=reserva.fecha,
            hora=reserva.hora,
            estado=EstadoReserva.pendiente,
        )
        try:
            with self._session() as session:
                session.add(nueva)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"No se pudo guardar la reserva: {e}")
            raise StorageError("No se pudo guardar la reserva") from e
        logger.debug(f"Reserva {nueva.id} creada")
        return nueva.id

    def listar(self) -> List[Reserva]:
        try:
            with self._session() as session:
                return list(session.exec(select(Reserva)).all())
        except SQLAlchemyError as e:
            logger.error(f"No se pudieron leer las reservas: {e}")
            raise StorageError("No se pudieron leer las reservas") from e

    def obtener(self, reserva_id: str) -> Reserva:
        try:
            with self._session() as session:
                reserva = session.get(Reserva, reserva_id)
        except SQLAlchemyError as e:
            raise StorageError("No se pudo leer la reserva") from e
        if reserva is None:
            raise NotFoundError(f"Reserva {reserva_id} no encontrada")
        return reserva

    def actualizar(self, reserva_id: str, campos: Dict[str, Any]) -> None:
        validar_campos(campos)
        try:
            with self._session() as session:
                reserva = session.get(Reserva, reserva_id)
                if reserva is None:
                    raise NotFoundError(f"Reserva {reserva_id} no encontrada")
                for campo, valor in campos.items():
                    setattr(reserva, campo, valor)
                session.add(reserva)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"No se pudo actualizar la reserva {reserva_id}: {e}")
            raise StorageError("No se pudo actualizar la reserva") from e
        logger.debug(f"Reserva {reserva_id} actualizada: {sorted(campos)}")

    def eliminar(self, reserva_id: str) -> None:
        try:
            with self._session() as session:
                reserva = session.get(Reserva, reserva_id)
                if reserva is None:
                    raise NotFoundError(f"Reserva {reserva_id} no encontrada")
                session.delete(reserva)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"No se pudo eliminar la reserva {reserva_id}: {e}")
            raise StorageError("No se pudo eliminar la reserva") from e
        logger.debug(f"Reserva {reserva_id} eliminada")
