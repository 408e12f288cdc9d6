# crear_admin.py
# Crea (o resetea) la cuenta del dueño para entrar al panel de turnos.
import argparse

from sqlmodel import Session, select

from turnos_core.db.conexion import engine, init_db
from turnos_core.db.modelos import Usuario, Role
from turnos_core.logger_config import logger
from turnos_core.security import get_password_hash


def asegurar_admin(email: str, password: str, nombre: str = "Dueño") -> Usuario:
    init_db()

    with Session(engine, expire_on_commit=False) as session:
        user = session.exec(
            select(Usuario).where(Usuario.email == email)
        ).first()

        if user:
            # Si ya existe, solo le cambio la contraseña y lo reactivo
            user.password_hash = get_password_hash(password)
            user.rol = Role.admin
            user.activo = True
            logger.info(f"Contraseña actualizada para {email}")
        else:
            user = Usuario(
                email=email,
                nombre=nombre,
                password_hash=get_password_hash(password),
                rol=Role.admin,
                activo=True,
            )
            logger.info(f"Usuario admin creado: {email}")

        session.add(user)
        session.commit()
        session.refresh(user)
        return user


def main():
    parser = argparse.ArgumentParser(description="Crea o resetea el admin del panel de turnos")
    parser.add_argument("--email", default="admin@turnos.local")
    parser.add_argument("--password", required=True)
    parser.add_argument("--nombre", default="Dueño")
    args = parser.parse_args()

    user = asegurar_admin(args.email, args.password, args.nombre)
    print(f"Admin listo: id={user.id}, email={user.email}")


if __name__ == "__main__":
    main()
