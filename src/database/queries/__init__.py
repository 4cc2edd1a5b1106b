"""
Queries de Base de Datos

Módulo que exporta todas las funciones de consulta (async) a la base de datos.
"""

# Clase base para queries
from src.database.queries.base import BaseQuery

# Queries de producto
from src.database.queries.product_queries import (
    list_products,
    get_product_by_id,
    create_product,
    update_product,
    delete_product,
)

# Queries de usuario
from src.database.queries.user_queries import (
    get_user_by_dni,
    get_user_by_id,
    user_exists,
    list_users,
    create_user,
    count_users,
)

# Queries de venta
from src.database.queries.sale_queries import (
    create_sale,
    list_sales,
    get_sale_by_id,
    list_sales_for_user,
    update_sale,
)

# Queries de administrador
from src.database.queries.admin_queries import (
    get_active_admin_by_email,
    get_admin_by_email,
    update_last_access,
    create_admin,
)

__all__ = [
    "BaseQuery",
    # Productos
    "list_products",
    "get_product_by_id",
    "create_product",
    "update_product",
    "delete_product",
    # Usuarios
    "get_user_by_dni",
    "get_user_by_id",
    "user_exists",
    "list_users",
    "create_user",
    "count_users",
    # Ventas
    "create_sale",
    "list_sales",
    "get_sale_by_id",
    "list_sales_for_user",
    "update_sale",
    # Admins
    "get_active_admin_by_email",
    "get_admin_by_email",
    "update_last_access",
    "create_admin",
]
