"""
Conexión a Base de Datos

Gestiona el engine async de SQLAlchemy contra PostgreSQL (producción,
base hospedada) o SQLite (desarrollo y tests). El proveedor se construye
una vez al arrancar y se inyecta a los servicios.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional, Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from src.utils.logger import get_logger

logger = get_logger(__name__)

# Base para los modelos
Base = declarative_base()


def build_async_engine(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30,
    pool_recycle: int = 1800
) -> AsyncEngine:
    """
    Crea el engine async según el tipo de base de datos.

    Args:
        database_url: URL async (postgresql+asyncpg:// o sqlite+aiosqlite://)
        echo: Loggear SQL emitido
        pool_size: Conexiones base (sólo PostgreSQL)
        max_overflow: Conexiones extra en picos (sólo PostgreSQL)
        pool_timeout: Segundos esperando conexión libre
        pool_recycle: Reciclar conexiones cada N segundos

    Returns:
        AsyncEngine configurado
    """
    if "aiosqlite" in database_url:
        db_path = database_url.replace("sqlite+aiosqlite:///", "")
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}

        if not db_path or db_path.startswith(":memory:"):
            # Una sola conexión compartida para que la base en memoria persista
            kwargs["poolclass"] = StaticPool
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        return create_async_engine(database_url, echo=echo, **kwargs)

    # PostgreSQL async con connection pooling
    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        pool_recycle=pool_recycle,
        pool_pre_ping=True
    )


class DatabaseProvider:
    """
    Proveedor de base de datos para dependency injection.

    Uso:
        db = DatabaseProvider("sqlite+aiosqlite:///:memory:")
        async with db.get_session() as session:
            ...
    """

    def __init__(self, database_url: str, **engine_options):
        self.database_url = database_url
        self._engine_options = engine_options
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self.initialize()
        return self._engine

    def initialize(self) -> None:
        """Crea el engine y la fábrica de sesiones (idempotente)."""
        if self._engine is not None:
            return

        self._engine = build_async_engine(self.database_url, **self._engine_options)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        logger.info(f"Engine de base de datos inicializado ({self._engine.dialect.name})")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager asincrónico para sesiones de base de datos.

        Hace commit al salir sin errores y rollback en caso contrario.

        Uso:
            async with db.get_session() as session:
                result = await session.execute(query)
        """
        if self._session_factory is None:
            self.initialize()

        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Crea todas las tablas (desarrollo y tests; producción usa Alembic)."""
        # Importar modelos para registrarlos
        from src.database import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Ejecuta una consulta trivial; propaga el error si falla."""
        async with self.get_session() as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Cierra las conexiones del pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Conexiones de base de datos cerradas")
