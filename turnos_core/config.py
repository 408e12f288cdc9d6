# turnos_core/config.py
# Configuración por variables de entorno (mismo estilo que conexion.py / security.py)

import os

from turnos_core.db.modelos import normalizar_hora


# Base de datos (usuarios admin + reservas cuando TURNOS_BACKEND=sql)
DB_URL = os.getenv("TURNOS_DB_URL", "sqlite:///./datos_turnos.db")

# "sql" -> SqlReservaStore, "local" -> LocalReservaStore (archivo JSON)
BACKEND = os.getenv("TURNOS_BACKEND", "sql").strip().lower()
LOCAL_PATH = os.getenv("TURNOS_LOCAL_PATH", "./reservas.json")

# Horario de atención, inclusive en ambos extremos. Formato "HH:MM"
HORA_APERTURA = normalizar_hora(os.getenv("TURNOS_HORA_APERTURA", "09:00"))
HORA_CIERRE = normalizar_hora(os.getenv("TURNOS_HORA_CIERRE", "18:00"))

# Auth
SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET")
ACCESS_MIN = int(os.getenv("ACCESS_MINUTES", "720"))  # 12h default

# Logging
LOG_LEVEL = os.getenv("TURNOS_LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("TURNOS_LOG_DIR")  # si no está, solo consola
