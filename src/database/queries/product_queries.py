"""
Queries de Producto

Funciones para consultar y modificar el catálogo.
"""

from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.models import Producto
from src.database.queries.base import BaseQuery


class ProductQuery(BaseQuery[Producto]):
    model = Producto


_products = ProductQuery()


async def list_products(db: AsyncSession) -> List[Producto]:
    """Todos los productos ordenados por nombre."""
    return await _products.get_all(db, order_by="nombre")


async def get_product_by_id(db: AsyncSession, product_id: str) -> Optional[Producto]:
    """Busca un producto por su ID."""
    return await _products.get_by_id(db, product_id)


async def create_product(db: AsyncSession, product_data: dict) -> Producto:
    """Inserta un producto. Propaga IntegrityError si el ID ya existe."""
    return await _products.create(db, product_data)


async def update_product(
    db: AsyncSession,
    product_id: str,
    updates: dict
) -> Optional[Producto]:
    """Actualización parcial; None si el producto no existe."""
    return await _products.update(db, product_id, updates)


async def delete_product(db: AsyncSession, product_id: str) -> int:
    """Elimina un producto; devuelve filas afectadas."""
    return await _products.delete(db, product_id)
