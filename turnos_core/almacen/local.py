# turnos_core/almacen/local.py
# Reservas en un archivo JSON local: una sola clave con el array serializado.

import json
import os
import tempfile
import threading
import time
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from turnos_core.almacen.base import ReservaStore, validar_campos
from turnos_core.db.modelos import Reserva, EstadoReserva
from turnos_core.errores import NotFoundError, StorageError
from turnos_core.logger_config import logger

CLAVE_RESERVAS = "reservas"


def _a_json(valor: Any) -> Any:
    if isinstance(valor, Enum):
        return valor.value
    if isinstance(valor, date):
        return valor.isoformat()
    return valor


class LocalReservaStore(ReservaStore):
    """
    Guarda todo bajo la clave ``"reservas"`` de un archivo JSON. Los ids son
    enteros derivados del timestamp en milisegundos; hacia afuera se exponen
    como texto igual que los del almacén SQL.

    Cada escritura relee y reescribe el archivo completo, así que las
    operaciones de una misma instancia se serializan con un lock.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    # --------- lectura / escritura del archivo ---------

    def _leer(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            contenido = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            logger.error(f"No se pudo leer {self.path}: {e}")
            raise StorageError("No se pudieron leer las reservas") from e
        if not isinstance(contenido, dict):
            raise StorageError(f"Formato inválido en {self.path}")
        registros = contenido.get(CLAVE_RESERVAS, [])
        if not isinstance(registros, list):
            raise StorageError(f"Formato inválido en {self.path}: '{CLAVE_RESERVAS}' no es una lista")
        return list(registros)

    def _escribir(self, registros: List[Dict[str, Any]]) -> None:
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({CLAVE_RESERVAS: registros}, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"No se pudo escribir {self.path}: {e}")
            if tmp and os.path.exists(tmp):
                os.unlink(tmp)
            raise StorageError("No se pudo guardar la reserva") from e

    @staticmethod
    def _a_reserva(registro: Dict[str, Any]) -> Reserva:
        try:
            return Reserva.model_validate({**registro, "id": str(registro["id"])})
        except (KeyError, ValidationError) as e:
            raise StorageError("Registro de reserva corrupto") from e

    @staticmethod
    def _buscar(registros: List[Dict[str, Any]], reserva_id: str) -> int:
        for i, r in enumerate(registros):
            if str(r.get("id")) == str(reserva_id):
                return i
        raise NotFoundError(f"Reserva {reserva_id} no encontrada")

    # --------- contrato ---------

    def crear(self, reserva: Reserva) -> str:
        with self._lock:
            registros = self._leer()
            usados = {r.get("id") for r in registros}
            nuevo_id = int(time.time() * 1000)
            while nuevo_id in usados:
                nuevo_id += 1
            registros.append({
                "id": nuevo_id,
                "nombre": reserva.nombre,
                "telefono": reserva.telefono,
                "fecha": _a_json(reserva.fecha),
                "hora": reserva.hora,
                "estado": EstadoReserva.pendiente.value,
            })
            self._escribir(registros)
        logger.debug(f"Reserva {nuevo_id} creada en {self.path}")
        return str(nuevo_id)

    def listar(self) -> List[Reserva]:
        with self._lock:
            registros = self._leer()
        return [self._a_reserva(r) for r in registros]

    def obtener(self, reserva_id: str) -> Reserva:
        with self._lock:
            registros = self._leer()
        return self._a_reserva(registros[self._buscar(registros, reserva_id)])

    def actualizar(self, reserva_id: str, campos: Dict[str, Any]) -> None:
        validar_campos(campos)
        with self._lock:
            registros = self._leer()
            i = self._buscar(registros, reserva_id)
            registros[i].update({k: _a_json(v) for k, v in campos.items()})
            self._escribir(registros)
        logger.debug(f"Reserva {reserva_id} actualizada: {sorted(campos)}")

    def eliminar(self, reserva_id: str) -> None:
        with self._lock:
            registros = self._leer()
            del registros[self._buscar(registros, reserva_id)]
            self._escribir(registros)
        logger.debug(f"Reserva {reserva_id} eliminada de {self.path}")
