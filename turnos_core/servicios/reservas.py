# turnos_core/servicios/reservas.py
# Lado cliente: formulario público, envío de solicitudes y disponibilidad.
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from turnos_core import config
from turnos_core.almacen.base import ReservaStore
from turnos_core.almacen.fabrica import get_store
from turnos_core.db.modelos import Reserva, ReservaIn
from turnos_core.errores import HorarioInvalidoError, StorageError
from turnos_core.flujo import (
    MENSAJE_ENVIADA,
    MENSAJE_ERROR_ENVIO,
    confirmadas,
    fecha_minima,
    solicitar_reserva,
)
from turnos_core.logger_config import logger
from turnos_core.vistas import render_pagina_publica

router = APIRouter()
paginas = APIRouter()


# --------- API JSON ---------

@router.post("", response_model=Reserva, status_code=status.HTTP_201_CREATED)
def crear_reserva(
    payload: ReservaIn,
    store: ReservaStore = Depends(get_store),
):
    try:
        return solicitar_reserva(store, payload)
    except StorageError as e:
        # Al cliente no le distinguimos el tipo de error
        raise StorageError(MENSAJE_ERROR_ENVIO) from e


@router.get("/disponibilidad", response_model=List[Dict[str, str]])
def disponibilidad(store: ReservaStore = Depends(get_store)):
    return [
        {"fecha": r.fecha.isoformat(), "hora": r.hora}
        for r in confirmadas(store.listar())
    ]


# --------- Páginas HTML ---------

def _confirmadas_o_none(store: ReservaStore) -> Optional[List[Reserva]]:
    # None = no se pudo leer; la vista muestra el aviso de error en la tabla
    try:
        return confirmadas(store.listar())
    except StorageError:
        logger.exception("No se pudo cargar la disponibilidad")
        return None


def _pagina(
    store: ReservaStore,
    mensaje: Optional[str] = None,
    es_error: bool = False,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    ocupadas = _confirmadas_o_none(store)
    if ocupadas is None and status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    html = render_pagina_publica(
        ocupadas,
        fecha_minima=fecha_minima(),
        hora_apertura=config.HORA_APERTURA,
        hora_cierre=config.HORA_CIERRE,
        mensaje=mensaje,
        es_error=es_error,
    )
    return HTMLResponse(html, status_code=status_code)


@paginas.get("/", response_class=HTMLResponse)
def pagina_publica(store: ReservaStore = Depends(get_store)):
    return _pagina(store)


@paginas.post("/reservar", response_class=HTMLResponse)
def reservar_desde_formulario(
    nombre: str = Form(""),
    telefono: str = Form(""),
    fecha: str = Form(""),
    hora: str = Form(""),
    store: ReservaStore = Depends(get_store),
):
    try:
        datos = ReservaIn.model_validate(
            {"nombre": nombre, "telefono": telefono, "fecha": fecha, "hora": hora}
        )
        solicitar_reserva(store, datos)
    except ValidationError as e:
        logger.warning(f"Formulario inválido: {e.errors()}")
        return _pagina(
            store,
            "Revisa los datos del formulario: nombre, teléfono, fecha y hora son obligatorios.",
            es_error=True,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except HorarioInvalidoError as e:
        return _pagina(store, e.message, es_error=True, status_code=status.HTTP_400_BAD_REQUEST)
    except StorageError:
        logger.exception("No se pudo registrar la solicitud")
        return _pagina(
            store,
            MENSAJE_ERROR_ENVIO,
            es_error=True,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return _pagina(store, MENSAJE_ENVIADA)
