"""
Sistema Centralizado de Manejo de Errores

Proporciona:
- Taxonomía de errores de la API (BadRequest, Unauthorized, Conflict,
  NotFound, Server) con su código HTTP
- Detección de violaciones de unicidad reportadas por la base de datos
- Decorador para traducir fallos del almacén en errores de la API
"""

from enum import Enum
from functools import wraps
from typing import Optional, Callable, Type

from sqlalchemy.exc import IntegrityError

from src.utils.logger import get_logger, log_exception

logger = get_logger(__name__)

# SQLSTATE de PostgreSQL para unique_violation
UNIQUE_VIOLATION_CODE = "23505"


# ============================================================================
# ERROR CATEGORIES
# ============================================================================

class ErrorCategory(str, Enum):
    """Categorías de error para clasificación."""
    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    DATABASE = "DATABASE"
    INTERNAL = "INTERNAL"


# ============================================================================
# CUSTOM EXCEPTIONS
# ============================================================================

class ApiError(Exception):
    """
    Excepción base de la API.

    El mensaje es lo que recibe el cliente en {"error": mensaje};
    el error original (si existe) sólo se registra en logs.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        if status_code is not None:
            self.status_code = status_code
        self.original_error = original_error

    def to_dict(self) -> dict:
        """Cuerpo JSON de la respuesta."""
        return {"error": self.message}


class BadRequestError(ApiError):
    """Campo requerido ausente o inválido."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        self.field = field
        super().__init__(message, category=ErrorCategory.VALIDATION, **kwargs)


class UnauthorizedError(ApiError):
    """Token ausente, inválido o expirado; credenciales incorrectas."""

    status_code = 401

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.AUTHENTICATION, **kwargs)


class ConflictError(ApiError):
    """
    Violación de clave única.

    Se responde con 400 para mantener el contrato que ya consume el
    frontend.
    """

    status_code = 400

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFLICT, **kwargs)


class NotFoundError(ApiError):
    """La búsqueda no devolvió fila."""

    status_code = 404

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.NOT_FOUND, **kwargs)


class ServerError(ApiError):
    """Cualquier otro fallo del almacén o inesperado."""

    status_code = 500

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.DATABASE)
        super().__init__(message, **kwargs)


# ============================================================================
# STORE ERROR TRANSLATION
# ============================================================================

def is_unique_violation(error: Exception) -> bool:
    """
    Indica si un error del almacén es una violación de unicidad.

    Reconoce el SQLSTATE 23505 de PostgreSQL (asyncpg/psycopg) y el
    mensaje equivalente de SQLite.
    """
    if not isinstance(error, IntegrityError):
        return False

    orig = getattr(error, "orig", None)
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_CODE:
            return True

    # asyncpg a través del adaptador de SQLAlchemy
    cause = getattr(orig, "__cause__", None)
    if getattr(cause, "sqlstate", None) == UNIQUE_VIOLATION_CODE:
        return True

    text = str(orig if orig is not None else error)
    return "UNIQUE constraint failed" in text or UNIQUE_VIOLATION_CODE in text


def handle_store_errors(
    message: str,
    unique_message: Optional[str] = None,
    fallback: Type[ApiError] = ServerError
) -> Callable:
    """
    Decorador para operaciones de servicio que acceden al almacén.

    - Los ApiError se propagan sin cambios.
    - Una violación de unicidad se traduce a ConflictError(unique_message)
      cuando se indica unique_message.
    - Cualquier otro error se registra y colapsa a fallback(message).

    Args:
        message: Mensaje fijo para el cliente en caso de fallo
        unique_message: Mensaje para violaciones de unicidad
        fallback: Clase de error para fallos no reconocidos

    Usage:
        @handle_store_errors("Error al crear usuario",
                             unique_message="El DNI ya está registrado")
        async def create(self, data):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ApiError:
                raise
            except Exception as e:
                if unique_message and is_unique_violation(e):
                    logger.info(f"{func.__qualname__}: clave duplicada")
                    raise ConflictError(unique_message, original_error=e) from e

                log_exception(logger, f"Error en {func.__qualname__}", e)
                raise fallback(message, original_error=e) from e

        return wrapper

    return decorator


__all__ = [
    "ErrorCategory",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ConflictError",
    "NotFoundError",
    "ServerError",
    "is_unique_violation",
    "handle_store_errors",
    "UNIQUE_VIOLATION_CODE",
]
