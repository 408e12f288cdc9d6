# turnos_core/servicios/admin.py
# Panel del dueño: aprobar / reasignar, rechazar y cancelar turnos.
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse

from turnos_core.almacen.base import ReservaStore
from turnos_core.almacen.fabrica import get_store
from turnos_core.db.modelos import ConfirmacionIn, EstadoReserva, Reserva, Role
from turnos_core.flujo import (
    cancelar_reserva,
    confirmadas,
    confirmar_reserva,
    filtrar,
    pendientes,
    rechazar_reserva,
)
from turnos_core.security import require_role
from turnos_core.vistas import render_contenido_admin, render_panel_admin

router = APIRouter()
paginas = APIRouter()


@router.get("/reservas", response_model=List[Reserva])
def listar_reservas(
    estado: Optional[EstadoReserva] = None,
    store: ReservaStore = Depends(get_store),
    _user=Depends(require_role(Role.admin)),
):
    reservas = store.listar()
    if estado:
        reservas = filtrar(reservas, estado)
    return reservas


@router.post("/reservas/{reserva_id}/confirmar", response_model=Reserva)
def confirmar(
    reserva_id: str,
    payload: Optional[ConfirmacionIn] = None,
    store: ReservaStore = Depends(get_store),
    _user=Depends(require_role(Role.admin)),
):
    payload = payload or ConfirmacionIn()
    return confirmar_reserva(store, reserva_id, payload.fecha, payload.hora)


@router.delete("/reservas/{reserva_id}/rechazar", status_code=status.HTTP_204_NO_CONTENT)
def rechazar(
    reserva_id: str,
    store: ReservaStore = Depends(get_store),
    _user=Depends(require_role(Role.admin)),
):
    rechazar_reserva(store, reserva_id)


@router.delete("/reservas/{reserva_id}/cancelar", status_code=status.HTTP_204_NO_CONTENT)
def cancelar(
    reserva_id: str,
    store: ReservaStore = Depends(get_store),
    _user=Depends(require_role(Role.admin)),
):
    cancelar_reserva(store, reserva_id)


@router.get("/panel", response_class=HTMLResponse)
def panel(
    store: ReservaStore = Depends(get_store),
    _user=Depends(require_role(Role.admin)),
):
    reservas = store.listar()
    return render_contenido_admin(pendientes(reservas), confirmadas(reservas))


# La página no trae datos; el script del panel pide el token y llama a /panel
@paginas.get("/admin", response_class=HTMLResponse)
def pagina_admin():
    return render_panel_admin()
