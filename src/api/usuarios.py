"""
Usuarios API

Registro y consulta de clientes. El DNI es el identificador que usa el
frontend; el id interno sólo aparece en las ventas y en el panel.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from config.constants import MESSAGES, DNI_MIN_LENGTH
from src.api.auth import get_current_admin
from src.api.schemas import (
    UsuarioCreate,
    UsuarioResponse,
    VentaResponse,
    VentaDeUsuario,
)
from src.core.context import AppContext, get_app_context
from src.database.models import Usuario, Venta
from src.database.queries import (
    get_user_by_dni,
    get_user_by_id,
    list_users,
    create_user,
    list_sales_for_user,
)
from src.utils.errors import BadRequestError, NotFoundError, handle_store_errors
from src.utils.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# SERVICE
# ============================================================================

class UserService:
    """Operaciones sobre clientes."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_store_errors(
        MESSAGES["user_create_error"],
        unique_message=MESSAGES["dni_duplicate"]
    )
    async def create(self, data: UsuarioCreate) -> Usuario:
        """
        Registra un cliente.

        Raises:
            BadRequestError: dni o nombre ausentes, o dni demasiado corto
            ConflictError: el DNI ya está registrado
        """
        if not data.dni or not data.nombre_completo:
            raise BadRequestError(MESSAGES["user_required_fields"])

        if len(data.dni) < DNI_MIN_LENGTH:
            raise BadRequestError(MESSAGES["dni_invalid"], field="dni")

        async with self.ctx.db.get_session() as db:
            usuario = await create_user(db, {
                "dni": data.dni,
                "nombre_completo": data.nombre_completo,
                "telefono": data.telefono or None,
                "email": data.email or None,
            })

        logger.info(f"Usuario registrado: {usuario.id}")
        return usuario

    @handle_store_errors(MESSAGES["user_not_found"], fallback=NotFoundError)
    async def get_by_dni(self, dni: str) -> Usuario:
        async with self.ctx.db.get_session() as db:
            usuario = await get_user_by_dni(db, dni)

        if usuario is None:
            raise NotFoundError(MESSAGES["user_not_found"])
        return usuario

    @handle_store_errors(MESSAGES["user_not_found"], fallback=NotFoundError)
    async def get_by_id(self, usuario_id: int) -> Usuario:
        async with self.ctx.db.get_session() as db:
            usuario = await get_user_by_id(db, usuario_id)

        if usuario is None:
            raise NotFoundError(MESSAGES["user_not_found"])
        return usuario

    @handle_store_errors(MESSAGES["users_list_error"])
    async def list_users(self) -> List[Usuario]:
        async with self.ctx.db.get_session() as db:
            return await list_users(db)

    @handle_store_errors(MESSAGES["user_sales_error"])
    async def list_sales(self, usuario_id: int) -> List[Venta]:
        """Ventas del usuario sin datos embebidos (panel)."""
        async with self.ctx.db.get_session() as db:
            return await list_sales_for_user(db, usuario_id)

    @handle_store_errors(MESSAGES["sales_list_error"])
    async def list_sales_with_user(self, usuario_id: int) -> List[Venta]:
        """Ventas del usuario con su resumen embebido (historial público)."""
        async with self.ctx.db.get_session() as db:
            return await list_sales_for_user(db, usuario_id, with_user=True)


def get_user_service(ctx: AppContext = Depends(get_app_context)) -> UserService:
    return UserService(ctx)


# ============================================================================
# FASTAPI ROUTERS
# ============================================================================

usuarios_router = APIRouter(prefix="/api/usuarios", tags=["usuarios"])

admin_usuarios_router = APIRouter(
    prefix="/api/admin/usuarios",
    tags=["admin-usuarios"],
    dependencies=[Depends(get_current_admin)],
)


@usuarios_router.post(
    "",
    response_model=UsuarioResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: UsuarioCreate,
    service: UserService = Depends(get_user_service),
):
    """Registra un cliente nuevo."""
    return await service.create(data)


@usuarios_router.get("/{dni}", response_model=UsuarioResponse)
async def get_by_dni(dni: str, service: UserService = Depends(get_user_service)):
    return await service.get_by_dni(dni)


@usuarios_router.get("/{usuario_id}/ventas", response_model=List[VentaDeUsuario])
async def user_sales(
    usuario_id: int,
    service: UserService = Depends(get_user_service),
):
    """Historial de compras del usuario."""
    return await service.list_sales_with_user(usuario_id)


@admin_usuarios_router.get("", response_model=List[UsuarioResponse])
async def list_all(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@admin_usuarios_router.get("/{usuario_id}", response_model=UsuarioResponse)
async def get_by_id(
    usuario_id: int,
    service: UserService = Depends(get_user_service),
):
    return await service.get_by_id(usuario_id)


@admin_usuarios_router.get("/{usuario_id}/ventas", response_model=List[VentaResponse])
async def admin_user_sales(
    usuario_id: int,
    service: UserService = Depends(get_user_service),
):
    return await service.list_sales(usuario_id)
