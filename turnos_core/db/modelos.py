# turnos_core/db/modelos.py
from typing import Optional
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, field_validator, model_validator
from sqlmodel import SQLModel, Field


# =========================
# Enums base
# =========================

class Role(str, Enum):
    """
    Roles de usuario. Por ahora solo el dueño (admin) entra al panel.
    """
    admin = "admin"


class EstadoReserva(str, Enum):
    """
    Pendiente -> Confirmado. Confirmado no vuelve atrás.
    """
    pendiente = "Pendiente"
    confirmado = "Confirmado"


def normalizar_hora(valor: str) -> str:
    """
    Acepta "HH:MM" o "HH:MM:SS" (lo que mandan algunos <input type="time">)
    y devuelve siempre "HH:MM".
    """
    s = str(valor).strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(s, fmt).strftime("%H:%M")
        except ValueError:
            continue
    raise ValueError("hora inválida (usa HH:MM)")


# =========================
# Usuarios
# =========================

class Usuario(SQLModel, table=True):
    """
    Cuenta del dueño para entrar al panel de administración.
    """
    __tablename__ = "usuarios"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    nombre: Optional[str] = Field(
        default=None,
        description="Nombre visible del usuario"
    )
    password_hash: str = Field(description="Hash de la contraseña")
    rol: Role = Field(default=Role.admin)
    activo: bool = Field(default=True)


# =========================
# Reservas
# =========================

class ReservaBase(SQLModel):
    nombre: str = Field(description="Nombre del cliente")
    telefono: str = Field(description="Teléfono de contacto")
    fecha: date = Field(description="Fecha solicitada o asignada")
    hora: str = Field(max_length=5, description="Hora HH:MM")

    @field_validator("nombre", "telefono")
    @classmethod
    def _requerido(cls, v: str) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("campo requerido")
        return v

    @field_validator("hora", mode="before")
    @classmethod
    def _hora(cls, v) -> str:
        return normalizar_hora(v)


class Reserva(ReservaBase, table=True):
    """
    Un turno pedido por un cliente. El id lo asigna el almacén.
    """
    __tablename__ = "reservas"

    id: Optional[str] = Field(default=None, primary_key=True)
    estado: EstadoReserva = Field(default=EstadoReserva.pendiente, index=True)


class ReservaIn(ReservaBase):
    """Lo que manda el cliente desde el formulario."""


class ConfirmacionIn(BaseModel):
    # Reasignación opcional: fecha y hora van juntas o no van
    fecha: Optional[date] = None
    hora: Optional[str] = None

    @field_validator("hora", mode="before")
    @classmethod
    def _hora(cls, v):
        if v in (None, ""):
            return None
        return normalizar_hora(v)

    @model_validator(mode="after")
    def _juntas(self):
        if (self.fecha is None) != (self.hora is None):
            raise ValueError("fecha y hora se reasignan juntas")
        return self
