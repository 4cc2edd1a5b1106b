"""
Queries de Usuario

Funciones para consultar y registrar clientes.
"""

from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.models import Usuario
from src.database.queries.base import BaseQuery


class UserQuery(BaseQuery[Usuario]):
    model = Usuario


_users = UserQuery()


async def get_user_by_dni(db: AsyncSession, dni: str) -> Optional[Usuario]:
    """
    Busca un usuario por su DNI.

    Args:
        db: Sesión de base de datos
        dni: Documento del usuario

    Returns:
        Usuario encontrado o None
    """
    return await _users.get_one_by(db, dni=dni)


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[Usuario]:
    """Busca un usuario por su ID interno."""
    return await _users.get_by_id(db, user_id)


async def user_exists(db: AsyncSession, user_id: int) -> bool:
    """Verifica si existe un usuario con ese ID."""
    return await _users.exists(db, user_id)


async def list_users(db: AsyncSession) -> List[Usuario]:
    """Todos los usuarios, los más recientes primero."""
    return await _users.get_all(db, order_by="fecha_registro", order_desc=True)


async def create_user(db: AsyncSession, user_data: dict) -> Usuario:
    """
    Registra un usuario.

    Raises:
        IntegrityError: si el DNI ya está registrado
    """
    return await _users.create(db, user_data)


async def count_users(db: AsyncSession) -> int:
    """Cuenta usuarios registrados (usado por el probe de conexión)."""
    return await _users.count(db)
