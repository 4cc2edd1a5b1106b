"""
Configuración centralizada del sistema

Carga variables de entorno (o archivo .env) y las expone tipadas.

Uso:
    from config.settings import get_settings

    settings = get_settings()
    horas = settings.JWT_EXPIRATION_HOURS
"""

from functools import lru_cache
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.environments import Environment, get_config


class Settings(BaseSettings):
    """
    Configuración del sistema con soporte multi-entorno.

    JWT_SECRET no tiene valor por defecto: si no está definido la
    aplicación no arranca.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # ENTORNO
    # =========================================================================
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    DEBUG: bool = False

    # =========================================================================
    # INFORMACIÓN DEL PROYECTO
    # =========================================================================
    PROJECT_NAME: str = "Tienda API"
    VERSION: str = "1.0.0"

    # =========================================================================
    # SERVIDOR
    # =========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "*"

    # =========================================================================
    # BASE DE DATOS
    # =========================================================================
    DATABASE_URL: str = "sqlite+aiosqlite:///tienda.db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 1800
    AUTO_CREATE_TABLES: bool = False  # producción usa Alembic

    # =========================================================================
    # SEGURIDAD
    # =========================================================================
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 8
    PASSWORD_MIN_LENGTH: int = 8

    # =========================================================================
    # LOGGING
    # =========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # json o console
    LOG_DIR: str = ""  # vacío = sin archivos rotativos

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str, info) -> str:
        """Valida que no se use SQLite en producción"""
        if info.data.get("ENVIRONMENT") == Environment.PRODUCTION:
            if "sqlite" in v.lower():
                raise ValueError("SQLite no está permitido en producción. Use PostgreSQL.")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr, info) -> SecretStr:
        """Exige un secreto no vacío (y largo en producción)"""
        secret = v.get_secret_value()
        if not secret:
            raise ValueError("JWT_SECRET no puede estar vacío")
        if info.data.get("ENVIRONMENT") == Environment.PRODUCTION and len(secret) < 32:
            raise ValueError("JWT_SECRET debe tener al menos 32 caracteres en producción")
        return v

    def get_async_database_url(self) -> str:
        """Retorna la URL de base de datos para el driver async"""
        url = self.DATABASE_URL

        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    def get_cors_origins(self) -> List[str]:
        """Lista de orígenes permitidos para CORS."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def docs_enabled(self) -> bool:
        """La documentación interactiva sólo se expone fuera de producción."""
        return get_config(self.ENVIRONMENT).DOCS_ENABLED

    def is_production(self) -> bool:
        """Verifica si está en producción."""
        return self.ENVIRONMENT == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Instancia única de configuración.

    Aplica los valores del perfil de entorno que no fueron definidos
    explícitamente.
    """
    settings = Settings()
    env_config = get_config(settings.ENVIRONMENT)
    if not settings.DEBUG:
        settings.DEBUG = env_config.DEBUG
    if "DATABASE_POOL_SIZE" not in settings.model_fields_set:
        settings.DATABASE_POOL_SIZE = env_config.DATABASE_POOL_SIZE
    if "DATABASE_MAX_OVERFLOW" not in settings.model_fields_set:
        settings.DATABASE_MAX_OVERFLOW = env_config.DATABASE_MAX_OVERFLOW
    if "LOG_LEVEL" not in settings.model_fields_set:
        settings.LOG_LEVEL = env_config.LOG_LEVEL
    return settings
