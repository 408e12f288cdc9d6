# turnos_core/almacen/base.py
"""
Contrato del almacén de reservas.

El flujo de turnos no sabe si las reservas viven en una base SQL o en un
archivo local: recibe un ``ReservaStore`` y solo usa estas operaciones.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from turnos_core.db.modelos import Reserva


class ReservaStore(ABC):

    @abstractmethod
    def crear(self, reserva: Reserva) -> str:
        """
        Guarda una reserva nueva con estado Pendiente y devuelve su id.
        Lanza StorageError si el medio falla.
        """

    @abstractmethod
    def listar(self) -> List[Reserva]:
        """
        Todas las reservas guardadas. El orden no está garantizado.
        """

    @abstractmethod
    def obtener(self, reserva_id: str) -> Reserva:
        """Lanza NotFoundError si no existe."""

    @abstractmethod
    def actualizar(self, reserva_id: str, campos: Dict[str, Any]) -> None:
        """
        Actualización parcial: solo cambian los campos recibidos.
        NotFoundError si el id no existe, StorageError si falla el medio.
        """

    @abstractmethod
    def eliminar(self, reserva_id: str) -> None:
        """NotFoundError si el id no existe."""


def validar_campos(campos: Dict[str, Any]) -> None:
    if "id" in campos:
        raise ValueError("el id de una reserva no se puede modificar")
    desconocidos = set(campos) - {"nombre", "telefono", "fecha", "hora", "estado"}
    if desconocidos:
        raise ValueError(f"campos desconocidos: {sorted(desconocidos)}")
