# turnos_core/core_app.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turnos_core import config
from turnos_core.db.conexion import init_db
from turnos_core.errores import registrar_handlers
from turnos_core.logger_config import logger
from turnos_core.servicios import admin, autenticacion, reservas


app = FastAPI(title="Turnos API")


# ---------- CORS ----------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],          # En producción se puede restringir al dominio del front
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

registrar_handlers(app)


# ---------- Eventos de arranque ----------

@app.on_event("startup")
def on_startup() -> None:
    """
    Crea las tablas al arrancar. Los usuarios admin siempre viven en la base
    SQL, aunque las reservas estén en el archivo local.
    """
    init_db()
    logger.info(f"Turnos API lista (almacén de reservas: {config.BACKEND})")


app.include_router(
    autenticacion.router,
    prefix="/api/auth",
    tags=["Autenticacion"],
)
app.include_router(
    reservas.router,
    prefix="/api/reservas",
    tags=["Reservas"],
)
app.include_router(
    admin.router,
    prefix="/api/admin",
    tags=["Admin"],
)
app.include_router(reservas.paginas, include_in_schema=False)
app.include_router(admin.paginas, include_in_schema=False)


# ---------- Endpoint de salud básico ----------

@app.get("/api/salud")
def check_salud():
    return {
        "estado": "ok",
        "mensaje": "API de turnos funcionando",
    }
