"""
Queries de Administrador
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.models import Admin
from src.database.queries.base import BaseQuery


class AdminQuery(BaseQuery[Admin]):
    model = Admin


_admins = AdminQuery()


async def get_active_admin_by_email(db: AsyncSession, email: str) -> Optional[Admin]:
    """Busca un administrador activo por email."""
    result = await db.execute(
        select(Admin).where(Admin.email == email, Admin.activo.is_(True))
    )
    return result.scalar_one_or_none()


async def get_admin_by_email(db: AsyncSession, email: str) -> Optional[Admin]:
    """Busca un administrador por email, activo o no."""
    return await _admins.get_one_by(db, email=email)


async def update_last_access(
    db: AsyncSession,
    admin_id: int,
    when: Optional[datetime] = None
) -> None:
    """Registra el último acceso del administrador."""
    await db.execute(
        update(Admin)
        .where(Admin.id == admin_id)
        .values(ultimo_acceso=when or datetime.utcnow())
    )


async def create_admin(db: AsyncSession, admin_data: dict) -> Admin:
    """Inserta un administrador (password_hash ya calculado)."""
    return await _admins.create(db, admin_data)
