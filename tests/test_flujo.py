"""Flujo de turnos contra los dos almacenes (parametrizado en conftest)."""
from datetime import date
from unittest.mock import MagicMock

import pytest

from turnos_core.almacen.base import ReservaStore
from turnos_core.db.modelos import EstadoReserva, ReservaIn
from turnos_core.errores import (
    DatosInvalidosError,
    HorarioInvalidoError,
    NotFoundError,
    TransicionInvalidaError,
)
from turnos_core.flujo import (
    cancelar_reserva,
    confirmadas,
    confirmar_reserva,
    fecha_minima,
    pendientes,
    rechazar_reserva,
    solicitar_reserva,
    validar_horario,
)


def _pedido(**kw):
    datos = {"nombre": "Ana", "telefono": "555", "fecha": "2025-06-01", "hora": "10:00"}
    datos.update(kw)
    return ReservaIn.model_validate(datos)


class TestSolicitarReserva:
    def test_queda_pendiente_con_los_datos_enviados(self, store):
        reserva = solicitar_reserva(store, _pedido())

        assert reserva.id
        assert reserva.estado == EstadoReserva.pendiente
        assert reserva.nombre == "Ana"
        assert reserva.telefono == "555"
        assert reserva.fecha == date(2025, 6, 1)
        assert reserva.hora == "10:00"

    def test_crear_y_listar_devuelve_la_reserva(self, store):
        creada = solicitar_reserva(store, _pedido())

        todas = store.listar()
        assert [r.id for r in todas] == [creada.id]
        assert todas[0].nombre == "Ana"
        assert todas[0].hora == "10:00"

    @pytest.mark.parametrize("hora", ["09:00", "13:30", "18:00"])
    def test_acepta_bordes_del_horario(self, store, hora):
        assert solicitar_reserva(store, _pedido(hora=hora)).hora == hora

    @pytest.mark.parametrize("hora", ["08:59", "18:01", "23:00", "00:00"])
    def test_fuera_de_horario_no_toca_el_almacen(self, hora):
        store = MagicMock(spec=ReservaStore)

        with pytest.raises(HorarioInvalidoError) as exc:
            solicitar_reserva(store, _pedido(hora=hora))

        assert "entre las 09:00 y las 18:00" in exc.value.message
        store.crear.assert_not_called()
        store.actualizar.assert_not_called()

    def test_fuera_de_horario_no_deja_registros(self, store):
        with pytest.raises(HorarioInvalidoError):
            solicitar_reserva(store, _pedido(hora="19:00"))
        assert store.listar() == []

    def test_no_detecta_turnos_duplicados(self, store):
        a = solicitar_reserva(store, _pedido())
        b = solicitar_reserva(store, _pedido(nombre="Beto"))
        confirmar_reserva(store, a.id)
        confirmar_reserva(store, b.id)

        ocupadas = confirmadas(store.listar())
        assert len(ocupadas) == 2
        assert {(r.fecha, r.hora) for r in ocupadas} == {(date(2025, 6, 1), "10:00")}


class TestTransiciones:
    def test_confirmar_con_reasignacion(self, store):
        r = solicitar_reserva(store, _pedido())

        confirmada = confirmar_reserva(store, r.id, date(2025, 6, 2), "11:00")

        assert confirmada.estado == EstadoReserva.confirmado
        assert confirmada.fecha == date(2025, 6, 2)
        assert confirmada.hora == "11:00"
        assert confirmada.nombre == "Ana"

    def test_confirmar_sin_reasignar_mantiene_fecha_y_hora(self, store):
        r = solicitar_reserva(store, _pedido())

        confirmada = confirmar_reserva(store, r.id)

        assert confirmada.estado == EstadoReserva.confirmado
        assert confirmada.fecha == date(2025, 6, 1)
        assert confirmada.hora == "10:00"

    def test_fecha_sin_hora_no_se_acepta(self, store):
        r = solicitar_reserva(store, _pedido())
        with pytest.raises(DatosInvalidosError):
            confirmar_reserva(store, r.id, fecha=date(2025, 6, 2))
        assert store.obtener(r.id).estado == EstadoReserva.pendiente

    def test_confirmado_no_vuelve_a_confirmarse(self, store):
        r = solicitar_reserva(store, _pedido())
        confirmar_reserva(store, r.id)
        with pytest.raises(TransicionInvalidaError):
            confirmar_reserva(store, r.id, date(2025, 7, 1), "12:00")
        assert store.obtener(r.id).fecha == date(2025, 6, 1)

    def test_rechazar_pendiente_la_elimina(self, store):
        r = solicitar_reserva(store, _pedido())
        rechazar_reserva(store, r.id)
        assert store.listar() == []

    def test_rechazar_confirmada_no_se_permite(self, store):
        r = solicitar_reserva(store, _pedido())
        confirmar_reserva(store, r.id)
        with pytest.raises(TransicionInvalidaError):
            rechazar_reserva(store, r.id)
        assert len(store.listar()) == 1

    def test_cancelar_confirmada_la_elimina(self, store):
        r = solicitar_reserva(store, _pedido())
        confirmar_reserva(store, r.id)
        cancelar_reserva(store, r.id)
        assert store.listar() == []

    def test_cancelar_pendiente_no_se_permite(self, store):
        r = solicitar_reserva(store, _pedido())
        with pytest.raises(TransicionInvalidaError):
            cancelar_reserva(store, r.id)

    def test_id_inexistente(self, store):
        with pytest.raises(NotFoundError):
            confirmar_reserva(store, "no-existe")
        with pytest.raises(NotFoundError):
            rechazar_reserva(store, "no-existe")


def test_escenario_completo(store):
    r = solicitar_reserva(store, _pedido())
    todas = store.listar()
    assert len(todas) == 1
    assert todas[0].estado == EstadoReserva.pendiente
    assert (todas[0].nombre, todas[0].telefono) == ("Ana", "555")

    confirmar_reserva(store, r.id, date(2025, 6, 2), "11:00")
    (unica,) = store.listar()
    assert unica.estado == EstadoReserva.confirmado
    assert (unica.fecha, unica.hora) == (date(2025, 6, 2), "11:00")

    cancelar_reserva(store, r.id)
    assert all(x.id != r.id for x in store.listar())


def test_filtros(store):
    a = solicitar_reserva(store, _pedido())
    solicitar_reserva(store, _pedido(nombre="Beto"))
    confirmar_reserva(store, a.id)

    todas = store.listar()
    assert [r.nombre for r in pendientes(todas)] == ["Beto"]
    assert [r.nombre for r in confirmadas(todas)] == ["Ana"]


def test_validar_horario_con_bordes_propios():
    validar_horario("07:00", apertura="07:00", cierre="12:00")
    with pytest.raises(HorarioInvalidoError) as exc:
        validar_horario("12:30", apertura="07:00", cierre="12:00")
    assert "07:00" in exc.value.message and "12:00" in exc.value.message


def test_fecha_minima_es_hoy():
    assert fecha_minima(date(2026, 1, 15)) == "2026-01-15"
    assert fecha_minima() == date.today().isoformat()


def test_bordes_sin_cero_a_la_izquierda(monkeypatch):
    monkeypatch.setattr("turnos_core.config.HORA_APERTURA", "9:00")
    validar_horario("10:00")
    validar_horario("09:00")
    with pytest.raises(HorarioInvalidoError) as exc:
        validar_horario("08:30")
    assert "entre las 09:00 y las 18:00" in exc.value.message


def test_config_normaliza_el_horario(monkeypatch):
    import importlib

    from turnos_core import config

    monkeypatch.setenv("TURNOS_HORA_APERTURA", "9:00")
    monkeypatch.setenv("TURNOS_HORA_CIERRE", "18:00:00")
    try:
        importlib.reload(config)
        assert config.HORA_APERTURA == "09:00"
        assert config.HORA_CIERRE == "18:00"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
