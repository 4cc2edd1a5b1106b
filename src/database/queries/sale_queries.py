"""
Queries de Venta

Funciones para registrar y listar ventas. Las lecturas "con usuario"
cargan la relación Venta.usuario en la misma consulta.
"""

from datetime import datetime
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.database.models import Venta
from src.database.queries.base import BaseQuery


class SaleQuery(BaseQuery[Venta]):
    model = Venta


_sales = SaleQuery()


def _sales_select(with_user: bool = True):
    query = select(Venta).order_by(Venta.fecha_venta.desc(), Venta.id.desc())
    if with_user:
        query = query.options(joinedload(Venta.usuario))
    return query


async def create_sale(db: AsyncSession, sale_data: dict) -> Venta:
    """Inserta una venta y la devuelve con id y fecha asignados."""
    return await _sales.create(db, sale_data)


async def list_sales(
    db: AsyncSession,
    estado: Optional[str] = None,
    desde: Optional[datetime] = None
) -> List[Venta]:
    """
    Lista ventas con su usuario, las más recientes primero.

    Args:
        db: Sesión de base de datos
        estado: Filtro exacto por estado (opcional)
        desde: Límite inferior inclusivo de fecha_venta (opcional)
    """
    query = _sales_select()
    if estado:
        query = query.where(Venta.estado == estado)
    if desde:
        query = query.where(Venta.fecha_venta >= desde)

    result = await db.execute(query)
    return list(result.scalars().unique().all())


async def get_sale_by_id(db: AsyncSession, sale_id: int) -> Optional[Venta]:
    """Busca una venta (con su usuario) por ID."""
    result = await db.execute(
        select(Venta)
        .options(joinedload(Venta.usuario))
        .where(Venta.id == sale_id)
    )
    return result.scalars().unique().one_or_none()


async def list_sales_for_user(
    db: AsyncSession,
    usuario_id: int,
    with_user: bool = False
) -> List[Venta]:
    """Ventas de un usuario, las más recientes primero."""
    result = await db.execute(
        _sales_select(with_user).where(Venta.usuario_id == usuario_id)
    )
    return list(result.scalars().unique().all())


async def update_sale(
    db: AsyncSession,
    sale_id: int,
    updates: dict
) -> Optional[Venta]:
    """Actualización parcial; None si la venta no existe."""
    return await _sales.update(db, sale_id, updates)
