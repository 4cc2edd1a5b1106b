"""
Base Query Class

Proporciona métodos comunes para todas las queries.
Implementa el patrón Repository sobre AsyncSession.

Los errores del almacén no se capturan aquí: se propagan a la capa de
servicio, que los traduce a errores de la API.
"""

from typing import TypeVar, Generic, Optional, List, Type, Any

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from src.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable para el modelo
T = TypeVar('T')


class BaseQuery(Generic[T]):
    """
    Clase base para queries con operaciones CRUD comunes.

    Uso:
        class ProductQuery(BaseQuery[Producto]):
            model = Producto

        query = ProductQuery()
        producto = await query.get_by_id(db, "CUAD-01")
    """

    model: Type[T] = None

    def __init__(self):
        if self.model is None:
            raise NotImplementedError("Subclass must define 'model' attribute")

    async def get_by_id(self, db: AsyncSession, record_id: Any) -> Optional[T]:
        """
        Busca un registro por su ID.

        Returns:
            Registro encontrado o None
        """
        result = await db.execute(
            select(self.model).where(self.model.id == record_id)
        )
        return result.scalar_one_or_none()

    async def get_one_by(self, db: AsyncSession, **filters) -> Optional[T]:
        """Busca un registro por igualdad de columnas."""
        conditions = [getattr(self.model, k) == v for k, v in filters.items()]
        result = await db.execute(select(self.model).where(*conditions))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        order_by: str = "id",
        order_desc: bool = False
    ) -> List[T]:
        """
        Obtiene todos los registros ordenados (sin paginación).

        Args:
            db: Sesión de base de datos
            order_by: Campo para ordenar
            order_desc: Orden descendente
        """
        order_field = getattr(self.model, order_by, self.model.id)
        if order_desc:
            order_field = order_field.desc()

        result = await db.execute(select(self.model).order_by(order_field))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, data: dict) -> T:
        """
        Inserta un registro y lo devuelve con los valores por defecto
        asignados por la base.

        Raises:
            IntegrityError: clave duplicada u otra restricción
        """
        record = self.model(**data)
        db.add(record)
        await db.flush()
        await db.refresh(record)
        logger.info(f"{self.model.__name__} creado: {record.id}")
        return record

    async def update(
        self,
        db: AsyncSession,
        record_id: Any,
        data: dict
    ) -> Optional[T]:
        """
        Actualiza un registro existente con los campos dados.

        Returns:
            Registro actualizado o None si no existe
        """
        record = await self.get_by_id(db, record_id)
        if record is None:
            return None

        for key, value in data.items():
            if hasattr(record, key):
                setattr(record, key, value)

        await db.flush()
        await db.refresh(record)
        logger.info(f"{self.model.__name__} actualizado: {record_id}")
        return record

    async def delete(self, db: AsyncSession, record_id: Any) -> int:
        """
        Elimina por ID.

        Returns:
            Número de filas eliminadas (0 si no existía)
        """
        result = await db.execute(
            delete(self.model).where(self.model.id == record_id)
        )
        logger.info(f"{self.model.__name__} eliminado: {record_id} ({result.rowcount} filas)")
        return result.rowcount or 0

    async def count(self, db: AsyncSession) -> int:
        """Cuenta registros de la tabla."""
        result = await db.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0

    async def exists(self, db: AsyncSession, record_id: Any) -> bool:
        """Verifica si existe un registro."""
        result = await db.execute(
            select(self.model.id).where(self.model.id == record_id)
        )
        return result.first() is not None
