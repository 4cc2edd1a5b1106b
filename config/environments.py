"""
Configuración Multi-Entorno

Define perfiles de configuración para development, staging y production.
"""

from enum import Enum
from typing import Dict, Type


class Environment(str, Enum):
    """Entornos disponibles"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class BaseConfig:
    """Configuración base compartida"""
    DEBUG: bool = False
    DOCS_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"

    # Pool de conexiones - Valores base
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10


class DevelopmentConfig(BaseConfig):
    """Configuración para desarrollo"""
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


class StagingConfig(BaseConfig):
    """Configuración para staging"""
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 10


class ProductionConfig(BaseConfig):
    """
    Configuración para producción.

    Sin documentación interactiva y con pool más amplio para la base
    de datos hospedada.
    """
    DOCS_ENABLED: bool = False
    LOG_LEVEL: str = "WARNING"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10


def get_config(env: Environment) -> Type[BaseConfig]:
    """
    Obtiene la configuración según el entorno.

    Args:
        env: Entorno seleccionado

    Returns:
        Clase de configuración correspondiente
    """
    configs: Dict[Environment, Type[BaseConfig]] = {
        Environment.DEVELOPMENT: DevelopmentConfig,
        Environment.STAGING: StagingConfig,
        Environment.PRODUCTION: ProductionConfig,
    }
    return configs.get(env, DevelopmentConfig)
