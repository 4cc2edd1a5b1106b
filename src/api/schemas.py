"""
API Schemas

Schemas Pydantic de la API REST: forma de cada request y de cada
respuesta. Los campos requeridos por regla de negocio se declaran
opcionales aquí y se validan en los servicios, para responder con el
mensaje específico de cada ruta.

Uso:
    from src.api.schemas import ProductoCreate, VentaDetalle
"""

from typing import Annotated, Optional, List, Any
from datetime import datetime

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from config.constants import SaleStatus


# ============================================================================
# BASE SCHEMAS
# ============================================================================

class BaseSchema(BaseModel):
    """Schema base para respuestas construidas desde modelos ORM."""
    model_config = ConfigDict(from_attributes=True)


class RequestSchema(BaseModel):
    """Schema base para bodies: ignora campos desconocidos."""
    model_config = ConfigDict(extra="ignore")


def _int_to_str(value: Any) -> Any:
    """Acepta identificadores numéricos enviados como número JSON."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


IdStr = Annotated[Optional[str], BeforeValidator(_int_to_str)]


class ErrorResponse(BaseModel):
    """Respuesta de error estándar."""
    error: str = Field(..., description="Mensaje descriptivo del error")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Producto no encontrado"}}
    )


class MessageResponse(BaseModel):
    """Confirmación simple."""
    message: str


class ConnectionTestResponse(BaseModel):
    """Resultado del probe de conexión."""
    success: bool
    message: str
    db_status: Optional[str] = None
    timestamp: Optional[datetime] = None
    error: Optional[str] = None


# ============================================================================
# PRODUCTO
# ============================================================================

class ProductoFields(RequestSchema):
    """Campos editables de un producto."""
    nombre: Optional[str] = Field(None, max_length=200)
    tipo: Optional[str] = Field(None, max_length=100)
    gramaje: Optional[int] = Field(None, ge=0)
    hojas: Optional[int] = Field(None, ge=0)
    precio_unitario: Optional[float] = Field(None, description="Precio unitario")
    stock: Optional[int] = None
    imagen: Optional[str] = None


class ProductoCreate(ProductoFields):
    """Datos para crear un producto (id, nombre y precio requeridos)."""
    id: IdStr = Field(None, max_length=50, description="ID asignado por el administrador")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "CUAD-A4-100",
                "nombre": "Cuaderno A4",
                "tipo": "cuaderno",
                "gramaje": 75,
                "hojas": 100,
                "precio_unitario": 3.5,
                "stock": 40,
            }
        }
    )


class ProductoUpdate(ProductoFields):
    """Actualización parcial. El id enviado se descarta."""
    id: Optional[Any] = None


class StockUpdate(RequestSchema):
    stock: Optional[int] = None


class ProductoResponse(BaseSchema):
    id: str
    nombre: str
    tipo: Optional[str] = None
    gramaje: Optional[int] = None
    hojas: Optional[int] = None
    precio_unitario: float
    stock: int
    imagen: Optional[str] = None


# ============================================================================
# USUARIO
# ============================================================================

class UsuarioCreate(RequestSchema):
    """Registro de cliente (dni y nombre requeridos)."""
    dni: IdStr = Field(None, max_length=20)
    nombre_completo: Optional[str] = Field(None, max_length=200)
    telefono: IdStr = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"dni": "12345678", "nombre_completo": "Ana Pérez"}
        }
    )


class UsuarioResponse(BaseSchema):
    id: int
    dni: str
    nombre_completo: str
    telefono: Optional[str] = None
    email: Optional[str] = None
    fecha_registro: datetime


class UsuarioResumen(BaseSchema):
    """Datos del usuario embebidos en las ventas públicas."""
    nombre_completo: str
    dni: str
    telefono: Optional[str] = None


class UsuarioContacto(UsuarioResumen):
    """Datos del usuario embebidos en las ventas del panel."""
    email: Optional[str] = None


class UsuarioBreve(BaseSchema):
    """Datos mínimos para el listado por estado."""
    nombre_completo: str
    telefono: Optional[str] = None


# ============================================================================
# VENTA
# ============================================================================

class VentaCreate(RequestSchema):
    """Nueva venta. El estado siempre inicia en 'pendiente'."""
    usuario_id: Optional[int] = None
    productos: Optional[List[Any]] = Field(
        None,
        description="Lista de {producto, cantidad}; no se valida contra el catálogo"
    )
    descripcion: Optional[str] = None
    metodo_pago: Optional[str] = Field(None, max_length=50)
    lugar_entrega: Optional[str] = Field(None, max_length=300)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "usuario_id": 1,
                "productos": [{"producto_id": "CUAD-A4-100", "cantidad": 2}],
                "metodo_pago": "efectivo",
                "lugar_entrega": "Sede central",
            }
        }
    )


class VentaUpdate(RequestSchema):
    """Actualización completa. id y fecha_venta se descartan."""
    id: Optional[Any] = None
    fecha_venta: Optional[Any] = None
    usuario_id: Optional[int] = None
    productos: Optional[List[Any]] = None
    descripcion: Optional[str] = None
    metodo_pago: Optional[str] = Field(None, max_length=50)
    lugar_entrega: Optional[str] = Field(None, max_length=300)
    estado: Optional[SaleStatus] = None


class EstadoUpdate(RequestSchema):
    estado: Optional[str] = None


class VentaResponse(BaseSchema):
    id: int
    usuario_id: int
    productos: Any
    descripcion: Optional[str] = None
    metodo_pago: Optional[str] = None
    lugar_entrega: Optional[str] = None
    estado: str
    fecha_venta: datetime


_usuario_alias = AliasChoices("usuario", "usuarios")


class VentaDetalle(VentaResponse):
    """Venta con los datos de contacto del usuario (panel)."""
    usuarios: Optional[UsuarioContacto] = Field(None, validation_alias=_usuario_alias)


class VentaDeUsuario(VentaResponse):
    """Venta con el resumen del usuario (historial público)."""
    usuarios: Optional[UsuarioResumen] = Field(None, validation_alias=_usuario_alias)


class VentaPorEstado(VentaResponse):
    """Venta con nombre y teléfono del usuario (listado por estado)."""
    usuarios: Optional[UsuarioBreve] = Field(None, validation_alias=_usuario_alias)


# ============================================================================
# AUTH
# ============================================================================

class LoginRequest(RequestSchema):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminIdentity(BaseModel):
    """Identidad del administrador (perfil público / claims del token)."""
    id: Optional[int] = None
    nombre: Optional[str] = None
    email: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    admin: AdminIdentity


class SessionResponse(BaseModel):
    valido: bool
    admin: AdminIdentity
