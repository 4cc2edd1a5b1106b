"""
Ventas API

Registro público de ventas y seguimiento desde el panel.

Una venta nace siempre en estado 'pendiente'; el panel la mueve entre
los estados de SaleStatus sin restricciones de transición.
"""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from config.constants import MESSAGES, SaleStatus, AuditAction
from src.api.auth import get_current_admin
from src.api.schemas import (
    VentaCreate,
    VentaUpdate,
    EstadoUpdate,
    VentaResponse,
    VentaDetalle,
    VentaPorEstado,
)
from src.core.context import AppContext, get_app_context
from src.database.models import Venta
from src.database.queries import (
    user_exists,
    create_sale,
    list_sales,
    get_sale_by_id,
    update_sale,
)
from src.utils.errors import (
    BadRequestError,
    NotFoundError,
    ServerError,
    handle_store_errors,
)
from src.utils.logger import get_logger, audit_logger

logger = get_logger(__name__)


def parse_fecha(value: Optional[str]) -> Optional[datetime]:
    """
    Convierte el filtro ?fecha= (fecha o fecha-hora ISO 8601) en un
    datetime naive UTC comparable con fecha_venta.

    Raises:
        BadRequestError: formato no reconocido
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise BadRequestError(MESSAGES["date_invalid"], field="fecha")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


# ============================================================================
# SERVICE
# ============================================================================

class SaleService:
    """Operaciones sobre ventas."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_store_errors(MESSAGES["sale_create_error"])
    async def create(self, data: VentaCreate) -> Venta:
        """
        Registra una venta para un usuario existente.

        Raises:
            BadRequestError: usuario_id o productos ausentes
            NotFoundError: el usuario no existe
        """
        if not data.usuario_id or data.productos is None:
            raise BadRequestError(MESSAGES["sale_required_fields"])

        async with self.ctx.db.get_session() as db:
            if not await user_exists(db, data.usuario_id):
                raise NotFoundError(MESSAGES["user_not_found"])

            venta = await create_sale(db, {
                "usuario_id": data.usuario_id,
                "productos": data.productos,
                "descripcion": data.descripcion,
                "metodo_pago": data.metodo_pago,
                "lugar_entrega": data.lugar_entrega,
                "estado": SaleStatus.PENDIENTE.value,
            })

        logger.info(f"Venta {venta.id} registrada para usuario {venta.usuario_id}")
        return venta

    @handle_store_errors(MESSAGES["sales_list_error"])
    async def list_sales(
        self,
        estado: Optional[str] = None,
        desde: Optional[datetime] = None
    ) -> List[Venta]:
        async with self.ctx.db.get_session() as db:
            return await list_sales(db, estado=estado, desde=desde)

    @handle_store_errors(MESSAGES["sales_list_error"])
    async def list_by_status(self, estado: str) -> List[Venta]:
        """Ventas en un estado dado; un estado desconocido da lista vacía."""
        async with self.ctx.db.get_session() as db:
            return await list_sales(db, estado=estado)

    @handle_store_errors(MESSAGES["sale_not_found"], fallback=NotFoundError)
    async def get_by_id(self, venta_id: int) -> Venta:
        async with self.ctx.db.get_session() as db:
            venta = await get_sale_by_id(db, venta_id)

        if venta is None:
            raise NotFoundError(MESSAGES["sale_not_found"])
        return venta

    @handle_store_errors(MESSAGES["status_update_error"])
    async def update_status(self, venta_id: int, estado: Optional[str]) -> Venta:
        if estado not in SaleStatus.values():
            raise BadRequestError(MESSAGES["status_invalid"], field="estado")

        async with self.ctx.db.get_session() as db:
            venta = await update_sale(db, venta_id, {"estado": estado})

        if venta is None:
            raise ServerError(MESSAGES["status_update_error"])

        audit_logger.log(
            AuditAction.VENTA_ESTADO.value,
            entity_type="venta",
            entity_id=venta_id,
            details={"estado": estado},
        )
        return venta

    @handle_store_errors(MESSAGES["sale_update_error"])
    async def update(self, venta_id: int, data: VentaUpdate) -> Venta:
        """Actualización completa; id y fecha_venta no se modifican."""
        updates = data.model_dump(exclude_unset=True, mode="json")
        updates.pop("id", None)
        updates.pop("fecha_venta", None)

        async with self.ctx.db.get_session() as db:
            venta = await update_sale(db, venta_id, updates)

        if venta is None:
            raise ServerError(MESSAGES["sale_update_error"])

        audit_logger.log(
            AuditAction.VENTA_EDITADA.value,
            entity_type="venta",
            entity_id=venta_id,
            details={"campos": sorted(updates)},
        )
        return venta


def get_sale_service(ctx: AppContext = Depends(get_app_context)) -> SaleService:
    return SaleService(ctx)


# ============================================================================
# FASTAPI ROUTERS
# ============================================================================

ventas_router = APIRouter(prefix="/api/ventas", tags=["ventas"])

admin_ventas_router = APIRouter(
    prefix="/api/admin/ventas",
    tags=["admin-ventas"],
    dependencies=[Depends(get_current_admin)],
)


@ventas_router.post(
    "",
    response_model=VentaResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: VentaCreate,
    service: SaleService = Depends(get_sale_service),
):
    """Registra una venta en estado pendiente."""
    return await service.create(data)


@admin_ventas_router.get("", response_model=List[VentaDetalle])
async def list_all(
    estado: Optional[str] = Query(default=None),
    fecha: Optional[str] = Query(default=None, description="Desde (ISO 8601, inclusivo)"),
    service: SaleService = Depends(get_sale_service),
):
    """Lista ventas con datos de contacto del usuario."""
    return await service.list_sales(estado=estado, desde=parse_fecha(fecha))


@admin_ventas_router.get("/estado/{estado}", response_model=List[VentaPorEstado])
async def list_by_status(
    estado: str,
    service: SaleService = Depends(get_sale_service),
):
    return await service.list_by_status(estado)


@admin_ventas_router.get("/{venta_id}", response_model=VentaDetalle)
async def get_one(
    venta_id: int,
    service: SaleService = Depends(get_sale_service),
):
    return await service.get_by_id(venta_id)


@admin_ventas_router.patch("/{venta_id}/estado", response_model=VentaResponse)
async def update_status(
    venta_id: int,
    data: EstadoUpdate,
    service: SaleService = Depends(get_sale_service),
):
    """Cambia el estado de una venta."""
    return await service.update_status(venta_id, data.estado)


@admin_ventas_router.put("/{venta_id}", response_model=VentaResponse)
async def update(
    venta_id: int,
    data: VentaUpdate,
    service: SaleService = Depends(get_sale_service),
):
    return await service.update(venta_id, data)
