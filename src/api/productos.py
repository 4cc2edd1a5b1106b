"""
Productos API

Catálogo público (lectura) y gestión del catálogo desde el panel.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from config.constants import MESSAGES, AuditAction
from src.api.auth import get_current_admin
from src.api.schemas import (
    ProductoCreate,
    ProductoUpdate,
    StockUpdate,
    ProductoResponse,
    MessageResponse,
)
from src.core.context import AppContext, get_app_context
from src.database.models import Producto
from src.database.queries import (
    list_products,
    get_product_by_id,
    create_product,
    update_product,
    delete_product,
)
from src.utils.errors import (
    BadRequestError,
    NotFoundError,
    ServerError,
    handle_store_errors,
)
from src.utils.logger import get_logger, audit_logger

logger = get_logger(__name__)


# ============================================================================
# SERVICE
# ============================================================================

class ProductService:
    """Operaciones sobre el catálogo de productos."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_store_errors(MESSAGES["products_list_error"])
    async def list_products(self) -> List[Producto]:
        async with self.ctx.db.get_session() as db:
            return await list_products(db)

    @handle_store_errors(MESSAGES["product_not_found"], fallback=NotFoundError)
    async def get_by_id(self, product_id: str) -> Producto:
        async with self.ctx.db.get_session() as db:
            producto = await get_product_by_id(db, product_id)

        if producto is None:
            raise NotFoundError(MESSAGES["product_not_found"])
        return producto

    @handle_store_errors(
        MESSAGES["product_create_error"],
        unique_message=MESSAGES["product_duplicate"]
    )
    async def create(self, data: ProductoCreate) -> Producto:
        """
        Crea un producto con el ID asignado por el administrador.

        id, nombre y precio_unitario son obligatorios; un valor vacío o
        cero cuenta como ausente. stock por defecto es 0.
        """
        if not data.id or not data.nombre or not data.precio_unitario:
            raise BadRequestError(MESSAGES["product_required_fields"])

        values = data.model_dump()
        values["stock"] = data.stock or 0

        async with self.ctx.db.get_session() as db:
            producto = await create_product(db, values)

        audit_logger.log(
            AuditAction.PRODUCTO_CREADO.value,
            entity_type="producto",
            entity_id=producto.id,
        )
        return producto

    @handle_store_errors(MESSAGES["product_update_error"])
    async def update(self, product_id: str, data: ProductoUpdate) -> Producto:
        """Actualización parcial; el id del producto no se modifica."""
        updates = data.model_dump(exclude_unset=True)
        updates.pop("id", None)

        async with self.ctx.db.get_session() as db:
            producto = await update_product(db, product_id, updates)

        if producto is None:
            raise ServerError(MESSAGES["product_update_error"])

        audit_logger.log(
            AuditAction.PRODUCTO_EDITADO.value,
            entity_type="producto",
            entity_id=product_id,
            details={"campos": sorted(updates)},
        )
        return producto

    @handle_store_errors(MESSAGES["stock_update_error"])
    async def update_stock(self, product_id: str, stock) -> Producto:
        if stock is None or stock < 0:
            raise BadRequestError(MESSAGES["stock_invalid"], field="stock")

        async with self.ctx.db.get_session() as db:
            producto = await update_product(db, product_id, {"stock": stock})

        if producto is None:
            raise ServerError(MESSAGES["stock_update_error"])

        audit_logger.log(
            AuditAction.STOCK_ACTUALIZADO.value,
            entity_type="producto",
            entity_id=product_id,
            details={"stock": stock},
        )
        return producto

    @handle_store_errors(MESSAGES["product_delete_error"])
    async def delete(self, product_id: str) -> dict:
        """Elimina el producto; responde igual aunque no existiera."""
        async with self.ctx.db.get_session() as db:
            deleted = await delete_product(db, product_id)

        audit_logger.log(
            AuditAction.PRODUCTO_ELIMINADO.value,
            entity_type="producto",
            entity_id=product_id,
            details={"filas": deleted},
        )
        return {"message": MESSAGES["product_deleted"]}


def get_product_service(ctx: AppContext = Depends(get_app_context)) -> ProductService:
    return ProductService(ctx)


# ============================================================================
# FASTAPI ROUTERS
# ============================================================================

productos_router = APIRouter(prefix="/api/productos", tags=["productos"])

admin_productos_router = APIRouter(
    prefix="/api/admin/productos",
    tags=["admin-productos"],
    dependencies=[Depends(get_current_admin)],
)


@productos_router.get("", response_model=List[ProductoResponse])
async def list_all(service: ProductService = Depends(get_product_service)):
    """Lista el catálogo completo ordenado por nombre."""
    return await service.list_products()


@productos_router.get("/{product_id}", response_model=ProductoResponse)
async def get_one(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    return await service.get_by_id(product_id)


@admin_productos_router.post(
    "",
    response_model=ProductoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create(
    data: ProductoCreate,
    service: ProductService = Depends(get_product_service),
):
    """Crea un producto."""
    return await service.create(data)


@admin_productos_router.put("/{product_id}", response_model=ProductoResponse)
async def update(
    product_id: str,
    data: ProductoUpdate,
    service: ProductService = Depends(get_product_service),
):
    """Actualiza los campos enviados de un producto."""
    return await service.update(product_id, data)


@admin_productos_router.patch("/{product_id}/stock", response_model=ProductoResponse)
async def update_stock(
    product_id: str,
    data: StockUpdate,
    service: ProductService = Depends(get_product_service),
):
    return await service.update_stock(product_id, data.stock)


@admin_productos_router.delete("/{product_id}", response_model=MessageResponse)
async def delete(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    return await service.delete(product_id)
