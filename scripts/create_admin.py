"""
Script para crear un administrador del panel

Crea las tablas si no existen e inserta el admin con su password
hasheado. Ejecutar una vez por administrador.

Uso:
    python scripts/create_admin.py --email admin@tienda.com --nombre "Admin" --password 'Admin123!'
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

# Agregar el directorio raíz al path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from config.settings import get_settings
from src.database.connection import DatabaseProvider
from src.database.queries import get_admin_by_email, create_admin
from src.utils.crypto import hash_password, validate_password_strength


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crea un administrador del panel")
    parser.add_argument("--email", required=True, help="Email de login")
    parser.add_argument("--nombre", required=True, help="Nombre completo")
    parser.add_argument("--password", help="Password (si se omite se pide por consola)")
    return parser.parse_args(argv)


async def create_initial_admin(email: str, nombre: str, password: str) -> int:
    """Crea el admin; devuelve 0 si se creó o ya existía, 1 si falló."""
    settings = get_settings()

    ok, error = validate_password_strength(password, settings.PASSWORD_MIN_LENGTH)
    if not ok:
        print(f"Password inválido: {error}")
        return 1

    db = DatabaseProvider(settings.get_async_database_url())
    try:
        print("Verificando tablas...")
        await db.create_tables()

        async with db.get_session() as session:
            if await get_admin_by_email(session, email):
                print(f"  Admin {email} ya existe, omitiendo...")
                return 0

            admin = await create_admin(session, {
                "email": email,
                "nombre_completo": nombre,
                "password_hash": hash_password(password),
                "activo": True,
            })
            print(f"  Creado: {nombre} <{email}> (id={admin.id})")
    finally:
        await db.close()

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    return asyncio.run(create_initial_admin(args.email, args.nombre, password))


if __name__ == '__main__':
    sys.exit(main())
