"""
API Module

Endpoints HTTP de la tienda.

Endpoints:
- Conexión: /api/test
- Catálogo: /api/productos
- Usuarios: /api/usuarios
- Ventas: /api/ventas
- Panel: /api/admin/* (login, productos, ventas, usuarios)

Documentación (fuera de producción):
- Swagger UI: /docs
- ReDoc: /redoc
"""

# App
from src.api.app import create_app, run_api

# Servicios
from src.api.auth import AuthService, get_current_admin
from src.api.productos import ProductService
from src.api.usuarios import UserService
from src.api.ventas import SaleService

__all__ = [
    # App
    "create_app",
    "run_api",
    # Servicios
    "AuthService",
    "get_current_admin",
    "ProductService",
    "UserService",
    "SaleService",
]
