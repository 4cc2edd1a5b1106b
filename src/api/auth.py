"""
Admin Auth API

Login de administradores y verificación de sesión.

Los routers del panel (/api/admin/*) declaran get_current_admin como
dependencia: sin un Bearer token válido la request no llega al handler.
"""

import asyncio
from datetime import datetime
from typing import Dict, Any, Optional

from fastapi import APIRouter, Depends, Header, Request

from config.constants import MESSAGES
from src.api.schemas import LoginRequest, LoginResponse, SessionResponse, AdminIdentity
from src.core.context import AppContext, get_app_context
from src.database.queries import get_active_admin_by_email, update_last_access
from src.utils.crypto import verify_password
from src.utils.errors import BadRequestError, UnauthorizedError, handle_store_errors
from src.utils.logger import get_logger, bind_context, audit_logger

logger = get_logger(__name__)


# ============================================================================
# SERVICE
# ============================================================================

class AuthService:
    """Autenticación de administradores."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @handle_store_errors(MESSAGES["server_error"])
    async def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Valida credenciales y emite un token de sesión.

        Raises:
            BadRequestError: email o password ausentes
            UnauthorizedError: admin inexistente, inactivo o password incorrecto
        """
        if not email or not password:
            raise BadRequestError(MESSAGES["login_required_fields"])

        async with self.ctx.db.get_session() as db:
            admin = await get_active_admin_by_email(db, email)

        # bcrypt es CPU-bound: fuera del event loop
        valid = admin is not None and await asyncio.to_thread(
            verify_password, password, admin.password_hash
        )
        if not valid:
            audit_logger.login(email, success=False)
            raise UnauthorizedError(MESSAGES["invalid_credentials"])

        await self._touch_last_access(admin.id)

        token = self.ctx.tokens.create_access_token(
            admin_id=admin.id,
            email=admin.email,
            nombre=admin.nombre_completo,
        )
        audit_logger.login(email, admin_id=admin.id, success=True)
        logger.info(f"Login de admin {admin.id}")

        return {
            "token": token,
            "admin": {
                "id": admin.id,
                "nombre": admin.nombre_completo,
                "email": admin.email,
            },
        }

    async def _touch_last_access(self, admin_id: int) -> None:
        """Actualiza ultimo_acceso; un fallo no impide el login."""
        try:
            async with self.ctx.db.get_session() as db:
                await update_last_access(db, admin_id, datetime.utcnow())
        except Exception as e:
            logger.warning(f"No se pudo actualizar ultimo_acceso de admin {admin_id}: {e}")

    def verify(self, authorization: Optional[str]) -> AdminIdentity:
        """
        Valida el header Authorization y devuelve la identidad del admin.

        Acepta "Bearer <token>" o el token solo.
        """
        parts = (authorization or "").split()
        if parts and parts[0].lower() == "bearer":
            parts = parts[1:]
        token = parts[0] if parts else ""

        if not token:
            raise UnauthorizedError(MESSAGES["token_missing"])

        payload = self.ctx.tokens.verify_token(token)
        if payload is None:
            raise UnauthorizedError(MESSAGES["token_invalid"])

        return AdminIdentity(
            id=payload.get("id"),
            nombre=payload.get("nombre"),
            email=payload.get("email"),
        )


def get_auth_service(ctx: AppContext = Depends(get_app_context)) -> AuthService:
    return AuthService(ctx)


# ============================================================================
# DEPENDENCY
# ============================================================================

async def get_current_admin(
    request: Request,
    authorization: Optional[str] = Header(None),
    service: AuthService = Depends(get_auth_service),
) -> AdminIdentity:
    """Dependencia de las rutas del panel: exige un token válido."""
    admin = service.verify(authorization)
    request.state.admin = admin
    if admin.id is not None:
        bind_context(admin_id=str(admin.id))
    return admin


# ============================================================================
# FASTAPI ROUTER
# ============================================================================

auth_router = APIRouter(prefix="/api/admin", tags=["auth"])


@auth_router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Login de administrador; devuelve el token de sesión."""
    return await service.login(credentials.email, credentials.password)


@auth_router.get("/verificar", response_model=SessionResponse)
async def check_session(admin: AdminIdentity = Depends(get_current_admin)):
    """Confirma que el token enviado sigue siendo válido."""
    return {"valido": True, "admin": admin}
