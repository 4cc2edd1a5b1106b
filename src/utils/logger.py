"""
Sistema de Logging Estructurado

Configura el logging para toda la aplicación con:
- Salida a consola (colores en desarrollo, JSON en producción)
- Archivos rotativos opcionales (general, errores, auditoría)
- Contexto por request (correlation ID, admin autenticado)
"""

import logging
import json
import uuid
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any
from contextvars import ContextVar

# Context variables para información de contexto
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)
admin_id_var: ContextVar[Optional[str]] = ContextVar('admin_id', default=None)


# ============================================================================
# FORMATTERS
# ============================================================================

class ColoredFormatter(logging.Formatter):
    """
    Formatter con colores para desarrollo.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = (correlation_id_var.get() or '-')[:8]

        # Copia para no contaminar el levelname de otros handlers
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        colored.levelname = f"{color}{record.levelname}{self.RESET}"

        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """
    Formatter JSON para producción.

    Genera logs estructurados fáciles de procesar por agregadores.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        admin_id = admin_id_var.get()
        if admin_id:
            log_data["admin_id"] = admin_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        if hasattr(record, 'extra_data'):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, ensure_ascii=False, default=str)


# ============================================================================
# LOGGER CONFIGURATION
# ============================================================================

_configured = False


def setup_logging(
    environment: str = "development",
    log_level: str = "INFO",
    log_format: str = "console",
    log_dir: str = "",
    force: bool = False
) -> None:
    """
    Configura el sistema de logging según el entorno.

    Args:
        environment: Entorno (development, staging, production)
        log_level: Nivel de log (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" o "console"
        log_dir: Directorio para archivos de log (vacío = sin archivos)
        force: Reconfigurar aunque ya se haya configurado
    """
    global _configured

    if _configured and not force:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if environment == "production" or log_format == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s:%(lineno)d | %(message)s',
            datefmt='%H:%M:%S'
        ))

    root_logger.addHandler(console_handler)

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_path / "app.log",
            maxBytes=50*1024*1024,  # 50MB
            backupCount=10,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

        error_handler = RotatingFileHandler(
            logs_path / "errors.log",
            maxBytes=50*1024*1024,
            backupCount=10,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

        audit_handler = RotatingFileHandler(
            logs_path / "audit.log",
            maxBytes=100*1024*1024,
            backupCount=30,
            encoding='utf-8'
        )
        audit_handler.setLevel(logging.INFO)
        audit_handler.setFormatter(JSONFormatter())
        audit_handler.addFilter(lambda r: r.name.startswith('audit'))
        root_logger.addHandler(audit_handler)

    # SQLAlchemy maneja su propio echo
    logging.getLogger("sqlalchemy.engine").propagate = False

    _configured = True

    root_logger.info(
        f"Logging configurado: environment={environment}, level={log_level}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Obtiene un logger para el módulo especificado.

    La configuración de handlers se hace una vez al arrancar la
    aplicación (ver create_app); antes de eso los records propagan al
    root logger por defecto.

    Args:
        name: Nombre del módulo (típicamente __name__)
    """
    return logging.getLogger(name)


# ============================================================================
# CONTEXT MANAGEMENT
# ============================================================================

def bind_context(correlation_id: str = None, admin_id: str = None) -> None:
    """Establece variables de contexto para logging."""
    if correlation_id:
        correlation_id_var.set(correlation_id)
    if admin_id:
        admin_id_var.set(admin_id)


def clear_context() -> None:
    """Limpia todas las variables de contexto."""
    correlation_id_var.set(None)
    admin_id_var.set(None)


def new_correlation_id() -> str:
    """
    Genera y establece un nuevo correlation ID.

    Returns:
        El correlation ID generado
    """
    cid = str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


def get_correlation_id() -> Optional[str]:
    """Obtiene el correlation ID actual."""
    return correlation_id_var.get()


# ============================================================================
# AUDIT LOGGER
# ============================================================================

class AuditLogger:
    """
    Logger especializado para auditoría de acciones de administradores.
    """

    def __init__(self, name: str = "admin"):
        self.logger = logging.getLogger(f"audit.{name}")

    def log(
        self,
        action: str,
        entity_type: str = None,
        entity_id: Any = None,
        admin_id: Any = None,
        details: Dict[str, Any] = None,
        status: str = "success"
    ) -> None:
        """
        Registra una acción de auditoría.

        Args:
            action: Tipo de acción (ver config.constants.AuditAction)
            entity_type: Tipo de entidad afectada
            entity_id: ID de la entidad
            admin_id: Admin que ejecuta (por defecto el del contexto)
            details: Detalles adicionales
            status: success o failure
        """
        audit_data = {
            "action": action,
            "status": status,
            "timestamp": datetime.utcnow().isoformat() + "Z",
        }

        if admin_id is not None:
            audit_data["admin_id"] = str(admin_id)
        elif admin_id_var.get():
            audit_data["admin_id"] = admin_id_var.get()

        if correlation_id_var.get():
            audit_data["correlation_id"] = correlation_id_var.get()

        if entity_type:
            audit_data["entity_type"] = entity_type
        if entity_id is not None:
            audit_data["entity_id"] = str(entity_id)
        if details:
            audit_data["details"] = details

        self.logger.info(
            f"AUDIT: {action} on {entity_type or 'unknown'}",
            extra={"extra_data": audit_data}
        )

    def login(self, email: str, admin_id: Any = None, success: bool = True) -> None:
        """Registra un intento de login."""
        self.log(
            action="LOGIN_EXITOSO" if success else "LOGIN_FALLIDO",
            entity_type="admin",
            admin_id=admin_id,
            details={"email": email},
            status="success" if success else "failure"
        )


# Instancia global del audit logger
audit_logger = AuditLogger()


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """
    Loggea una excepción con contexto completo.

    Args:
        logger: Logger a usar
        message: Mensaje descriptivo
        exc: Excepción a loggear
    """
    logger.error(
        f"{message}: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "extra_data": {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            }
        }
    )
