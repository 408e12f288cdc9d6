# turnos_core/errores.py
"""Errores de dominio y su traducción a respuestas HTTP."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from turnos_core.logger_config import logger


class TurnosError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class StorageError(TurnosError):
    """El medio de almacenamiento no responde o falló la lectura/escritura."""

    def __init__(self, message: str = "Error de almacenamiento"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


class NotFoundError(TurnosError):
    def __init__(self, message: str = "Reserva no encontrada"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class TransicionInvalidaError(TurnosError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_409_CONFLICT)


class HorarioInvalidoError(TurnosError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class DatosInvalidosError(TurnosError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


# ---------- Handlers ----------

async def turnos_error_handler(request: Request, exc: TurnosError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def error_general_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Error interno"},
    )


def registrar_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TurnosError, turnos_error_handler)
    app.add_exception_handler(Exception, error_general_handler)
