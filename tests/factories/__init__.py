"""
Factories para tests.

Uso:
    from tests.factories import ProductoPayloadFactory, UsuarioPayloadFactory
"""

from tests.factories.base import DictFactory
from tests.factories.payloads import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ProductoPayloadFactory,
    UsuarioPayloadFactory,
    VentaPayloadFactory,
)

__all__ = [
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
    "DictFactory",
    "ProductoPayloadFactory",
    "UsuarioPayloadFactory",
    "VentaPayloadFactory",
]
