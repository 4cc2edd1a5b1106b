"""
Application Context

Contenedor de dependencias que se construye una vez al arrancar y se
inyecta a los handlers. Nada de esto vive como singleton de módulo:
los tests construyen su propio contexto con una base en memoria.
"""

from dataclasses import dataclass, field
from typing import Protocol, AsyncGenerator, Any, Optional
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings
from src.database.connection import DatabaseProvider
from src.utils.crypto import JWTService
from src.utils.logger import get_logger


# ============================================================================
# PROTOCOLOS (Interfaces)
# ============================================================================

class DatabaseProviderProtocol(Protocol):
    """Protocolo para proveedores de base de datos."""

    def initialize(self) -> None:
        ...

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        ...

    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        ...


class TokenServiceProtocol(Protocol):
    """Protocolo para emisión y verificación de tokens."""

    def create_access_token(self, admin_id: int, email: str, nombre: str) -> str:
        ...

    def verify_token(self, token: str) -> Optional[dict]:
        ...


# ============================================================================
# APPLICATION CONTEXT
# ============================================================================

@dataclass
class AppContext:
    """
    Contenedor de contexto de aplicación.

    Uso:
        ctx = AppContext.create(get_settings())
        await ctx.initialize()

        async with ctx.db.get_session() as session:
            ...
    """

    config: Settings
    db: DatabaseProviderProtocol
    tokens: TokenServiceProtocol
    _logger: Any = field(default=None, repr=False)
    _initialized: bool = field(default=False, repr=False)

    @property
    def logger(self):
        """Logger con lazy initialization."""
        if self._logger is None:
            self._logger = get_logger("app")
        return self._logger

    async def initialize(self) -> None:
        """Inicializa todas las dependencias."""
        if not self._initialized:
            self.db.initialize()
            self._initialized = True
            self.logger.info("AppContext inicializado")

    async def shutdown(self) -> None:
        """Cierra todas las conexiones."""
        await self.db.close()
        self._initialized = False
        self.logger.info("AppContext cerrado")

    @classmethod
    def create(cls, config: Settings, **overrides) -> "AppContext":
        """
        Factory method para crear el contexto desde la configuración.

        Args:
            config: Settings ya validados
            **overrides: Dependencias a sobrescribir (db, tokens)

        Returns:
            Instancia de AppContext configurada
        """
        db = overrides.get("db") or DatabaseProvider(
            config.get_async_database_url(),
            echo=config.DATABASE_ECHO,
            pool_size=config.DATABASE_POOL_SIZE,
            max_overflow=config.DATABASE_MAX_OVERFLOW,
            pool_timeout=config.DATABASE_POOL_TIMEOUT,
            pool_recycle=config.DATABASE_POOL_RECYCLE,
        )
        tokens = overrides.get("tokens") or JWTService(
            secret_key=config.JWT_SECRET.get_secret_value(),
            algorithm=config.JWT_ALGORITHM,
            expire_hours=config.JWT_EXPIRATION_HOURS,
        )
        return cls(config=config, db=db, tokens=tokens)


# ============================================================================
# FASTAPI DEPENDENCY
# ============================================================================

def get_app_context(request: Request) -> AppContext:
    """Dependencia FastAPI: contexto adjunto a la aplicación en create_app."""
    return request.app.state.context
