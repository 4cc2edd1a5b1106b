"""
Constantes del sistema

Define valores que no cambian durante la ejecución.
"""

from enum import Enum


class SaleStatus(str, Enum):
    """Estados posibles de una venta"""
    PENDIENTE = "pendiente"
    PAGADO = "pagado"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"

    @classmethod
    def values(cls) -> list:
        return [s.value for s in cls]


class AuditAction(str, Enum):
    """Acciones registradas en audit trail"""
    LOGIN_EXITOSO = "LOGIN_EXITOSO"
    LOGIN_FALLIDO = "LOGIN_FALLIDO"
    PRODUCTO_CREADO = "PRODUCTO_CREADO"
    PRODUCTO_EDITADO = "PRODUCTO_EDITADO"
    STOCK_ACTUALIZADO = "STOCK_ACTUALIZADO"
    PRODUCTO_ELIMINADO = "PRODUCTO_ELIMINADO"
    VENTA_ESTADO = "VENTA_ESTADO"
    VENTA_EDITADA = "VENTA_EDITADA"


# Mensajes de respuesta (la API se consume desde un frontend en español)
MESSAGES = {
    # Genéricos
    "route_not_found": "Ruta no encontrada",
    "server_error": "Error del servidor",
    "invalid_data": "Datos inválidos",
    # Auth
    "login_required_fields": "Email y contraseña son requeridos",
    "invalid_credentials": "Credenciales inválidas",
    "token_missing": "Token no proporcionado",
    "token_invalid": "Token inválido",
    # Productos
    "products_list_error": "Error al obtener productos",
    "product_not_found": "Producto no encontrado",
    "product_required_fields": "ID, nombre y precio son requeridos",
    "product_duplicate": "Ya existe un producto con ese ID",
    "product_create_error": "Error al crear producto",
    "product_update_error": "Error al actualizar producto",
    "stock_invalid": "Stock inválido",
    "stock_update_error": "Error al actualizar stock",
    "product_delete_error": "Error al eliminar producto",
    "product_deleted": "Producto eliminado correctamente",
    # Usuarios
    "user_required_fields": "DNI y nombre son requeridos",
    "dni_invalid": "DNI inválido",
    "dni_duplicate": "El DNI ya está registrado",
    "user_create_error": "Error al crear usuario",
    "user_not_found": "Usuario no encontrado",
    "users_list_error": "Error al obtener usuarios",
    "user_sales_error": "Error al obtener ventas del usuario",
    # Ventas
    "sale_required_fields": "usuario_id y productos son requeridos",
    "sale_create_error": "Error al crear venta",
    "sales_list_error": "Error al obtener ventas",
    "sale_not_found": "Venta no encontrada",
    "status_invalid": "Estado no válido",
    "status_update_error": "Error al actualizar estado",
    "sale_update_error": "Error al actualizar venta",
    "date_invalid": "Fecha inválida",
    # Conexión
    "db_ok": "Conexión exitosa con la base de datos",
    "db_error": "Error de conexión con la base de datos",
}

DNI_MIN_LENGTH = 5
