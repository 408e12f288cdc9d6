from datetime import date

from turnos_core.db.modelos import EstadoReserva, Reserva
from turnos_core.vistas import (
    CONFIRMAR_CANCELACION,
    VACIO_CONFIRMADAS,
    VACIO_DISPONIBILIDAD,
    ERROR_DISPONIBILIDAD,
    VACIO_PENDIENTES,
    render_confirmadas,
    render_contenido_admin,
    render_disponibilidad,
    render_pagina_publica,
    render_panel_admin,
    render_pendientes,
)


def _reserva(rid="abc", estado=EstadoReserva.confirmado, **kw):
    datos = dict(id=rid, nombre="Ana", telefono="555", fecha=date(2025, 6, 1),
                 hora="10:00", estado=estado)
    datos.update(kw)
    return Reserva(**datos)


class TestEstadosVacios:
    def test_disponibilidad_vacia(self):
        html = render_disponibilidad([])
        assert VACIO_DISPONIBILIDAD in html
        assert 'colspan="3"' in html
        assert "OCUPADO" not in html

    def test_pendientes_vacios(self):
        assert VACIO_PENDIENTES in render_pendientes([])

    def test_confirmadas_vacias_ocupan_cinco_columnas(self):
        html = render_confirmadas([])
        assert VACIO_CONFIRMADAS in html
        assert 'colspan="5"' in html

    def test_con_datos_no_muestra_mensaje_vacio(self):
        r = _reserva()
        assert VACIO_DISPONIBILIDAD not in render_disponibilidad([r])
        assert VACIO_CONFIRMADAS not in render_confirmadas([r])
        assert VACIO_PENDIENTES not in render_pendientes([_reserva(estado=EstadoReserva.pendiente)])


def test_disponibilidad_marca_ocupado():
    html = render_disponibilidad([_reserva(), _reserva("def", hora="11:30")])
    assert html.count("OCUPADO") == 2
    assert "2025-06-01" in html and "11:30" in html
    # el público no ve datos del cliente
    assert "Ana" not in html and "555" not in html


def test_tarjeta_pendiente_viene_precargada():
    html = render_pendientes([_reserva("p1", estado=EstadoReserva.pendiente, hora="09:15")])
    assert 'data-id="p1"' in html
    assert 'value="2025-06-01"' in html
    assert 'value="09:15"' in html
    assert "btn-rechazar" in html
    assert "data-confirmar=" in html


def test_confirmadas_tienen_boton_cancelar():
    html = render_confirmadas([_reserva("c1")])
    assert 'class="btn-eliminar-confirmado" data-id="c1"' in html
    assert "2025-06-01 10:00" in html
    assert "CANCELAR y ELIMINAR" in CONFIRMAR_CANCELACION


def test_escapa_texto_del_cliente():
    html = render_confirmadas([_reserva(nombre="<script>alert(1)</script>")])
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_contenido_admin_incluye_ambas_secciones():
    html = render_contenido_admin([], [])
    assert VACIO_PENDIENTES in html
    assert VACIO_CONFIRMADAS in html


def test_pagina_publica():
    html = render_pagina_publica(
        [], fecha_minima="2026-10-19", hora_apertura="09:00", hora_cierre="18:00",
        mensaje="Hola", es_error=True,
    )
    assert 'min="2026-10-19"' in html
    assert 'min="09:00" max="18:00"' in html
    assert 'class="mensaje-error"' in html
    assert VACIO_DISPONIBILIDAD in html


def test_disponibilidad_sin_datos_no_dice_libre():
    html = render_disponibilidad(None)
    assert ERROR_DISPONIBILIDAD in html
    assert VACIO_DISPONIBILIDAD not in html


def test_pagina_publica_con_almacen_caido():
    html = render_pagina_publica(
        None, fecha_minima="2026-10-19", hora_apertura="09:00", hora_cierre="18:00",
    )
    assert ERROR_DISPONIBILIDAD in html
    assert VACIO_DISPONIBILIDAD not in html


def test_controles_del_panel_apuntan_a_los_endpoints():
    pend = render_pendientes([_reserva("p1", estado=EstadoReserva.pendiente)])
    assert 'method="post"' in pend
    assert 'action="/api/admin/reservas/p1/confirmar"' in pend
    assert 'data-url="/api/admin/reservas/p1/rechazar"' in pend

    conf = render_confirmadas([_reserva("c1")])
    assert 'data-url="/api/admin/reservas/c1/cancelar"' in conf


def test_id_con_caracteres_raros_se_codifica_en_la_url():
    html = render_confirmadas([_reserva("a/b")])
    assert 'data-url="/api/admin/reservas/a%2Fb/cancelar"' in html


def test_pagina_del_panel_pide_confirmacion_y_usa_el_token():
    html = render_panel_admin()
    assert 'id="panel-contenido"' in html
    assert 'id="form-login"' in html
    assert "confirm(btn.dataset.confirmar)" in html
    assert '"Authorization": "Bearer "' in html
    assert "/api/admin/panel" in html
    assert "/api/auth/login" in html
