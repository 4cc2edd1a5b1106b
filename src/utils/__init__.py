"""
Utilidades del Sistema

Módulo que exporta todas las utilidades:
- Logger: Logging estructurado con contexto y auditoría
- Crypto: Passwords (bcrypt) y JWT
- Errors: Taxonomía de errores de la API
"""

# Logger
from src.utils.logger import (
    get_logger,
    setup_logging,
    bind_context,
    clear_context,
    new_correlation_id,
    get_correlation_id,
    AuditLogger,
    audit_logger,
    log_exception,
)

# Crypto
from src.utils.crypto import (
    hash_password,
    verify_password,
    validate_password_strength,
    JWTService,
)

# Errors
from src.utils.errors import (
    ErrorCategory,
    ApiError,
    BadRequestError,
    UnauthorizedError,
    ConflictError,
    NotFoundError,
    ServerError,
    is_unique_violation,
    handle_store_errors,
)

__all__ = [
    # Logger
    "get_logger",
    "setup_logging",
    "bind_context",
    "clear_context",
    "new_correlation_id",
    "get_correlation_id",
    "AuditLogger",
    "audit_logger",
    "log_exception",
    # Crypto
    "hash_password",
    "verify_password",
    "validate_password_strength",
    "JWTService",
    # Errors
    "ErrorCategory",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ConflictError",
    "NotFoundError",
    "ServerError",
    "is_unique_violation",
    "handle_store_errors",
]
