"""
FastAPI Application

Aplicación principal de la API REST de la tienda.
Incluye todos los routers, middlewares y manejadores de error.

Uso:
    uvicorn src.api.app:create_app --factory
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.constants import MESSAGES
from config.settings import get_settings
from src.core.context import AppContext
from src.utils.errors import ApiError
from src.utils.logger import (
    get_logger,
    setup_logging,
    bind_context,
    clear_context,
    new_correlation_id,
)

logger = get_logger(__name__)


def _validation_field(exc: RequestValidationError) -> str:
    """Nombre del primer campo que no pasó la validación de forma."""
    errors = exc.errors()
    if not errors:
        return "body"
    loc = [str(part) for part in errors[0].get("loc", ())]
    if len(loc) > 1 and loc[0] in ("body", "path", "query", "header"):
        loc = loc[1:]
    return ".".join(loc) or "body"


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    Args:
        context: Contexto ya construido (los tests inyectan uno con base
            en memoria). Por defecto se crea desde get_settings().

    Returns:
        Aplicación FastAPI lista para servir
    """
    settings = context.config if context is not None else get_settings()
    ctx = context or AppContext.create(settings)

    setup_logging(
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
        log_dir=settings.LOG_DIR,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("API iniciando...")
        await ctx.initialize()
        if settings.AUTO_CREATE_TABLES:
            await ctx.db.create_tables()
            logger.info("Tablas verificadas")
        logger.info("API lista")
        yield
        logger.info("API cerrando...")
        await ctx.shutdown()

    docs = settings.docs_enabled()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## API REST de la Tienda

- **Catálogo**: productos con stock, lectura pública
- **Usuarios**: registro de clientes por DNI
- **Ventas**: registro público, seguimiento desde el panel

### Autenticación
Las rutas `/api/admin/*` (excepto login) requieren
`Authorization: Bearer <token>` obtenido en `POST /api/admin/login`.
        """,
        version=settings.VERSION,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Probe de conexión"},
            {"name": "productos", "description": "Catálogo público"},
            {"name": "usuarios", "description": "Registro y consulta de clientes"},
            {"name": "ventas", "description": "Registro de ventas"},
            {"name": "auth", "description": "Login del panel"},
            {"name": "admin-productos", "description": "Gestión del catálogo"},
            {"name": "admin-ventas", "description": "Seguimiento de ventas"},
            {"name": "admin-usuarios", "description": "Consulta de clientes"},
        ],
    )
    app.state.context = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Loggea cada request con su código y duración."""
        start_time = datetime.utcnow()
        response = await call_next(request)
        duration = (datetime.utcnow() - start_time).total_seconds() * 1000

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({duration:.2f}ms)"
        )
        response.headers["X-Response-Time"] = f"{duration:.2f}ms"
        return response

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        """Asigna el correlation ID de la request."""
        correlation_id = request.headers.get("X-Correlation-ID")
        if correlation_id:
            bind_context(correlation_id=correlation_id)
        else:
            correlation_id = new_correlation_id()

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path}: {exc.status_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        field = _validation_field(exc)
        logger.info(f"{request.method} {request.url.path}: datos inválidos en {field}")
        return JSONResponse(
            status_code=400,
            content={"error": f"{MESSAGES['invalid_data']}: {field}"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={"error": MESSAGES["route_not_found"]},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Maneja excepciones no capturadas."""
        logger.error(f"Unhandled exception: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": MESSAGES["server_error"]},
        )

    # =========================================================================
    # ROUTERS
    # =========================================================================

    from src.api.health import health_router
    from src.api.auth import auth_router
    from src.api.productos import productos_router, admin_productos_router
    from src.api.usuarios import usuarios_router, admin_usuarios_router
    from src.api.ventas import ventas_router, admin_ventas_router

    app.include_router(health_router)
    app.include_router(productos_router)
    app.include_router(usuarios_router)
    app.include_router(ventas_router)
    app.include_router(auth_router)
    app.include_router(admin_productos_router)
    app.include_router(admin_ventas_router)
    app.include_router(admin_usuarios_router)

    return app


def run_api(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """
    Ejecuta el servidor de la API.

    Args:
        host: Host para escuchar (por defecto settings.HOST)
        port: Puerto para escuchar (por defecto settings.PORT)
        reload: Recargar al detectar cambios (sólo desarrollo)
    """
    import uvicorn

    settings = get_settings()
    host = host or settings.HOST
    port = port or settings.PORT

    logger.info(f"Iniciando API en http://{host}:{port}")
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run_api()
