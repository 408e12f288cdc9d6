# turnos_core/flujo.py
"""
Flujo de turnos: qué puede hacer el cliente y qué puede hacer el dueño.

    Pendiente --confirmar--> Confirmado
    Pendiente --rechazar---> (eliminada)
    Confirmado --cancelar--> (eliminada)

Todas las funciones reciben el almacén explícitamente.
"""

from datetime import date
from typing import Iterable, List, Optional

from turnos_core import config
from turnos_core.almacen.base import ReservaStore
from turnos_core.db.modelos import EstadoReserva, Reserva, ReservaIn, normalizar_hora
from turnos_core.errores import (
    DatosInvalidosError,
    HorarioInvalidoError,
    TransicionInvalidaError,
)
from turnos_core.logger_config import logger

MENSAJE_ENVIADA = "Tu solicitud ha sido enviada. Espera la confirmación del dueño."
MENSAJE_ERROR_ENVIO = "Error al enviar la reserva. Intenta de nuevo más tarde."


def mensaje_fuera_de_horario(apertura: str, cierre: str) -> str:
    return f"Lo sentimos, solo se puede reservar entre las {apertura} y las {cierre}."


def fecha_minima(hoy: Optional[date] = None) -> str:
    # Solo se usa como "min" del input de fecha; no se vuelve a chequear al guardar
    return (hoy or date.today()).isoformat()


def validar_horario(
    hora: str,
    apertura: Optional[str] = None,
    cierre: Optional[str] = None,
) -> None:
    apertura = normalizar_hora(apertura or config.HORA_APERTURA)
    cierre = normalizar_hora(cierre or config.HORA_CIERRE)
    # "HH:MM" con ceros compara bien como texto
    if hora < apertura or hora > cierre:
        raise HorarioInvalidoError(mensaje_fuera_de_horario(apertura, cierre))


# ---------------- Cliente ----------------

def solicitar_reserva(store: ReservaStore, datos: ReservaIn) -> Reserva:
    """
    Valida el horario y guarda la reserva como Pendiente. Si el horario no
    es válido no se toca el almacén. Devuelve la reserva tal como quedó
    guardada (se relee del almacén).
    """
    validar_horario(datos.hora)
    reserva_id = store.crear(
        Reserva(
            nombre=datos.nombre,
            telefono=datos.telefono,
            fecha=datos.fecha,
            hora=datos.hora,
        )
    )
    logger.info(f"Nueva solicitud {reserva_id} para {datos.fecha} {datos.hora}")
    return store.obtener(reserva_id)


# ---------------- Dueño ----------------

def confirmar_reserva(
    store: ReservaStore,
    reserva_id: str,
    fecha: Optional[date] = None,
    hora: Optional[str] = None,
) -> Reserva:
    if (fecha is None) != (hora is None):
        raise DatosInvalidosError("fecha y hora se reasignan juntas")

    reserva = store.obtener(reserva_id)
    if reserva.estado != EstadoReserva.pendiente:
        raise TransicionInvalidaError(
            f"La reserva {reserva_id} ya está {reserva.estado.value}"
        )

    campos = {"estado": EstadoReserva.confirmado}
    if fecha is not None:
        campos["fecha"] = fecha
        campos["hora"] = hora
    store.actualizar(reserva_id, campos)
    logger.info(
        f"Reserva {reserva_id} confirmada"
        + (f" y reasignada a {fecha} {hora}" if fecha is not None else "")
    )
    return store.obtener(reserva_id)


def _eliminar_en_estado(store: ReservaStore, reserva_id: str, estado: EstadoReserva, accion: str) -> None:
    reserva = store.obtener(reserva_id)
    if reserva.estado != estado:
        raise TransicionInvalidaError(
            f"Solo se puede {accion} una reserva {estado.value} "
            f"(la {reserva_id} está {reserva.estado.value})"
        )
    store.eliminar(reserva_id)
    logger.info(f"Reserva {reserva_id} eliminada ({accion})")


def rechazar_reserva(store: ReservaStore, reserva_id: str) -> None:
    _eliminar_en_estado(store, reserva_id, EstadoReserva.pendiente, "rechazar")


def cancelar_reserva(store: ReservaStore, reserva_id: str) -> None:
    _eliminar_en_estado(store, reserva_id, EstadoReserva.confirmado, "cancelar")


# ---------------- Filtros ----------------

def filtrar(reservas: Iterable[Reserva], estado: EstadoReserva) -> List[Reserva]:
    return [r for r in reservas if r.estado == estado]


def pendientes(reservas: Iterable[Reserva]) -> List[Reserva]:
    return filtrar(reservas, EstadoReserva.pendiente)


def confirmadas(reservas: Iterable[Reserva]) -> List[Reserva]:
    return filtrar(reservas, EstadoReserva.confirmado)
