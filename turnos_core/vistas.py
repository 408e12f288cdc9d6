# turnos_core/vistas.py
# HTML del calendario público y del panel del dueño.
# Son funciones puras: reciben las reservas ya filtradas y devuelven texto.

from html import escape
from typing import Iterable, List, Optional
from urllib.parse import quote

from turnos_core.db.modelos import Reserva

VACIO_DISPONIBILIDAD = "¡Todo el calendario está libre!"
VACIO_PENDIENTES = "No hay turnos pendientes por aprobar."
VACIO_CONFIRMADAS = "No hay turnos confirmados aún."
ERROR_DISPONIBILIDAD = "No se pudo cargar la disponibilidad. Intenta de nuevo más tarde."

CONFIRMAR_RECHAZO = "¿Seguro que quieres rechazar y ELIMINAR este turno?"
CONFIRMAR_CANCELACION = (
    "¿Seguro que quieres CANCELAR y ELIMINAR este turno CONFIRMADO? "
    "Esta acción es permanente."
)

URL_ADMIN_RESERVAS = "/api/admin/reservas"

# El panel se pide con el token del dueño y se inyecta en #panel-contenido.
# Los botones y formularios llevan la URL del endpoint que disparan.
SCRIPT_PANEL = """
(function () {
  const TOKEN_KEY = "turnos_token";
  const contenido = document.getElementById("panel-contenido");
  const mensaje = document.getElementById("mensaje-admin");
  const login = document.getElementById("form-login");

  function token() { return sessionStorage.getItem(TOKEN_KEY); }

  async function llamar(url, opciones) {
    const headers = Object.assign({}, opciones.headers || {}, {"Authorization": "Bearer " + token()});
    const resp = await fetch(url, Object.assign({}, opciones, {headers: headers}));
    if (resp.status === 401) {
      sessionStorage.removeItem(TOKEN_KEY);
      login.hidden = false;
      throw new Error("Sesión vencida, vuelve a ingresar.");
    }
    if (!resp.ok) {
      let detalle = resp.statusText;
      try { detalle = (await resp.json()).detail || detalle; } catch (e) {}
      throw new Error(typeof detalle === "string" ? detalle : JSON.stringify(detalle));
    }
    return resp;
  }

  async function cargarPanel() {
    if (!token()) { login.hidden = false; return; }
    try {
      const resp = await llamar("/api/admin/panel", {method: "GET"});
      contenido.innerHTML = await resp.text();
      login.hidden = true;
    } catch (e) { mensaje.textContent = e.message; }
  }

  login.addEventListener("submit", async (ev) => {
    ev.preventDefault();
    mensaje.textContent = "";
    const resp = await fetch("/api/auth/login", {method: "POST", body: new URLSearchParams(new FormData(login))});
    if (!resp.ok) { mensaje.textContent = "Usuario o contraseña incorrectos"; return; }
    sessionStorage.setItem(TOKEN_KEY, (await resp.json()).access_token);
    cargarPanel();
  });

  contenido.addEventListener("submit", async (ev) => {
    const form = ev.target.closest(".form-aprobacion");
    if (!form) return;
    ev.preventDefault();
    mensaje.textContent = "";
    const datos = {fecha: form.elements.fecha.value, hora: form.elements.hora.value};
    try {
      await llamar(form.getAttribute("action"), {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(datos),
      });
    } catch (e) { mensaje.textContent = e.message; }
    cargarPanel();
  });

  contenido.addEventListener("click", async (ev) => {
    const btn = ev.target.closest("button[data-url]");
    if (!btn) return;
    if (!confirm(btn.dataset.confirmar)) return;
    mensaje.textContent = "";
    try { await llamar(btn.dataset.url, {method: "DELETE"}); } catch (e) { mensaje.textContent = e.message; }
    cargarPanel();
  });

  cargarPanel();
})();
"""


def url_accion(reserva_id: str, accion: str) -> str:
    return f"{URL_ADMIN_RESERVAS}/{quote(str(reserva_id), safe='')}/{accion}"


def _fila_vacia(mensaje: str, columnas: int, clase: str = "vacio") -> str:
    return f'<tr><td colspan="{columnas}" class="{clase}">{escape(mensaje)}</td></tr>'


def render_disponibilidad(confirmadas: Optional[Iterable[Reserva]]) -> str:
    """
    ``None`` significa que no se pudo leer el almacén: se muestra un aviso
    de error, nunca el mensaje de calendario libre.
    """
    if confirmadas is None:
        cuerpo = _fila_vacia(ERROR_DISPONIBILIDAD, 3, clase="error")
    else:
        filas = "".join(
            f"<tr><td>{escape(str(r.fecha))}</td><td>{escape(r.hora)}</td>"
            f'<td><span class="estado-ocupado">OCUPADO</span></td></tr>'
            for r in confirmadas
        )
        cuerpo = filas or _fila_vacia(VACIO_DISPONIBILIDAD, 3)
    return (
        '<table id="calendario-disponibilidad">'
        "<thead><tr><th>Fecha</th><th>Hora</th><th>Estado</th></tr></thead>"
        f"<tbody>{cuerpo}</tbody>"
        "</table>"
    )


def _tarjeta_pendiente(r: Reserva) -> str:
    rid = escape(str(r.id))
    return f"""
    <div class="reservas-list">
        <p><strong>Cliente:</strong> {escape(r.nombre)}</p>
        <p><strong>Teléfono:</strong> {escape(r.telefono)}</p>
        <p><strong>Solicita:</strong> {escape(str(r.fecha))} a las {escape(r.hora)}</p>
        <form class="form-aprobacion" data-id="{rid}" method="post"
              action="{escape(url_accion(r.id, 'confirmar'))}">
            <label for="fecha-{rid}">Fecha (Reasignar):</label>
            <input type="date" id="fecha-{rid}" name="fecha" value="{escape(str(r.fecha))}" required>
            <label for="hora-{rid}">Hora (Reasignar):</label>
            <input type="time" id="hora-{rid}" name="hora" value="{escape(r.hora)}" required>
            <button type="submit">Confirmar Turno</button>
            <button type="button" class="btn-rechazar" data-id="{rid}"
                    data-url="{escape(url_accion(r.id, 'rechazar'))}"
                    data-confirmar="{escape(CONFIRMAR_RECHAZO)}">Rechazar/Eliminar</button>
        </form>
    </div>"""


def render_pendientes(pendientes: Iterable[Reserva]) -> str:
    tarjetas = "".join(_tarjeta_pendiente(r) for r in pendientes)
    contenido = tarjetas or f"<p>{escape(VACIO_PENDIENTES)}</p>"
    return f'<div id="reservas-pendientes">{contenido}</div>'


def render_confirmadas(confirmadas: Iterable[Reserva]) -> str:
    filas: List[str] = []
    for r in confirmadas:
        rid = escape(str(r.id))
        filas.append(
            f"<tr><td>{escape(r.nombre)}</td><td>{escape(r.telefono)}</td>"
            f"<td>{escape(str(r.fecha))} {escape(r.hora)}</td>"
            '<td><span class="estado-ocupado">Confirmado</span></td>'
            f'<td><button type="button" class="btn-eliminar-confirmado" data-id="{rid}" '
            f'data-url="{escape(url_accion(r.id, "cancelar"))}" '
            f'data-confirmar="{escape(CONFIRMAR_CANCELACION)}">Cancelar</button></td></tr>'
        )
    return (
        '<table id="reservas-confirmadas">'
        "<thead><tr><th>Cliente</th><th>Teléfono</th><th>Turno</th>"
        "<th>Estado</th><th>Acciones</th></tr></thead>"
        f"<tbody>{''.join(filas) or _fila_vacia(VACIO_CONFIRMADAS, 5)}</tbody>"
        "</table>"
    )


def render_contenido_admin(pendientes: Iterable[Reserva], confirmadas: Iterable[Reserva]) -> str:
    """Fragmento que el panel pide con el token y pinta en #panel-contenido."""
    return f"""
    <h2>Pendientes</h2>
    {render_pendientes(pendientes)}
    <h2>Confirmados</h2>
    {render_confirmadas(confirmadas)}"""


def render_panel_admin() -> str:
    """
    Página del panel. No trae datos: el script pide el login, guarda el
    token y carga el contenido desde /api/admin/panel.
    """
    return f"""<!doctype html>
<html lang="es">
<head><meta charset="utf-8"><title>Panel de turnos</title></head>
<body>
    <h1>Panel del dueño</h1>
    <form id="form-login" hidden>
        <label for="username">Email:</label>
        <input type="email" id="username" name="username" required>
        <label for="password">Contraseña:</label>
        <input type="password" id="password" name="password" required>
        <button type="submit">Ingresar</button>
    </form>
    <p id="mensaje-admin" class="mensaje-error"></p>
    <div id="panel-contenido"></div>
    <script>{SCRIPT_PANEL}</script>
</body>
</html>"""


def render_pagina_publica(
    confirmadas: Optional[Iterable[Reserva]],
    fecha_minima: str,
    hora_apertura: str,
    hora_cierre: str,
    mensaje: Optional[str] = None,
    es_error: bool = False,
) -> str:
    clase = "mensaje-error" if es_error else "mensaje-ok"
    if mensaje:
        aviso = f'<p id="mensaje-reserva" class="{clase}">{escape(mensaje)}</p>'
    else:
        aviso = '<p id="mensaje-reserva"></p>'
    return f"""<!doctype html>
<html lang="es">
<head><meta charset="utf-8"><title>Reservá tu turno</title></head>
<body>
    <h1>Reservá tu turno</h1>
    <form id="formulario-reserva" method="post" action="/reservar">
        <label for="nombre">Nombre:</label>
        <input type="text" id="nombre" name="nombre" required>
        <label for="telefono">Teléfono:</label>
        <input type="tel" id="telefono" name="telefono" required>
        <label for="fecha">Fecha:</label>
        <input type="date" id="fecha" name="fecha" min="{escape(fecha_minima)}" required>
        <label for="hora">Hora:</label>
        <input type="time" id="hora" name="hora" min="{escape(hora_apertura)}" max="{escape(hora_cierre)}" required>
        <button type="submit">Solicitar turno</button>
    </form>
    {aviso}
    <h2>Disponibilidad</h2>
    {render_disponibilidad(confirmadas)}
</body>
</html>"""
