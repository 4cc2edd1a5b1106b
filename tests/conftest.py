"""
Pytest Configuration and Fixtures

Configuración global de pytest y fixtures compartidos.

Cada test obtiene su propia base SQLite en memoria, inyectada en la
aplicación a través del AppContext.
"""

import os
import sys
from pathlib import Path
from typing import AsyncGenerator

# Entorno de test: debe quedar fijado antes de importar config.settings
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only-0123456789")
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import httpx
import pytest

# Agregar el directorio raíz al path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import Settings
from src.api.app import create_app
from src.core.context import AppContext
from src.database.connection import DatabaseProvider
from src.database.queries import create_admin
from src.utils.crypto import hash_password
from tests.factories import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    UsuarioPayloadFactory,
    VentaPayloadFactory,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# SETTINGS / CONTEXT FIXTURES
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings aislados del .env local."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET="test-secret-key-for-testing-only-0123456789",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def db_provider() -> AsyncGenerator[DatabaseProvider, None]:
    """Base de datos en memoria con el esquema creado."""
    provider = DatabaseProvider(TEST_DATABASE_URL)
    await provider.create_tables()
    yield provider
    await provider.close()


@pytest.fixture
async def app_context(settings, db_provider) -> AsyncGenerator[AppContext, None]:
    ctx = AppContext.create(settings, db=db_provider)
    await ctx.initialize()
    yield ctx


# ============================================================================
# HTTP FIXTURES
# ============================================================================

@pytest.fixture
def app(app_context):
    return create_app(app_context)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Cliente HTTP contra la aplicación ASGI (sin red)."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ============================================================================
# ADMIN FIXTURES
# ============================================================================

@pytest.fixture
async def admin(db_provider):
    """Administrador activo con password conocido."""
    async with db_provider.get_session() as db:
        return await create_admin(db, {
            "email": ADMIN_EMAIL,
            "nombre_completo": "Admin Tienda",
            "password_hash": hash_password(ADMIN_PASSWORD),
            "activo": True,
        })


@pytest.fixture
def admin_token(app_context, admin) -> str:
    return app_context.tokens.create_access_token(
        admin_id=admin.id,
        email=admin.email,
        nombre=admin.nombre_completo,
    )


@pytest.fixture
def auth_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


# ============================================================================
# DATA HELPERS
# ============================================================================

@pytest.fixture
def create_usuario(client):
    """Registra un usuario vía API y devuelve el cuerpo de la respuesta."""
    async def _create(**overrides) -> dict:
        response = await client.post("/api/usuarios", json=UsuarioPayloadFactory(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_venta(client):
    """Registra una venta vía API y devuelve el cuerpo de la respuesta."""
    async def _create(usuario_id: int, **overrides) -> dict:
        response = await client.post(
            "/api/ventas",
            json=VentaPayloadFactory(usuario_id=usuario_id, **overrides)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
