# ==============================================================================
# Load Testing Users
# ==============================================================================
"""
Usuarios virtuales para pruebas de carga.

- BaseAPIUser: Usuario base con helpers y login del panel
- ClienteUser: Cliente navegando el catálogo y comprando
- AdminUser: Administrador revisando ventas
"""

from tests.load.users.base import BaseAPIUser
from tests.load.users.cliente import ClienteUser
from tests.load.users.admin import AdminUser

__all__ = ["BaseAPIUser", "ClienteUser", "AdminUser"]
