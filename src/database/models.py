"""
Modelos de Base de Datos

Define las tablas de la tienda usando SQLAlchemy:
usuarios, productos, ventas y admins.
"""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text,
    ForeignKey, Float, CheckConstraint
)
from sqlalchemy.types import TypeDecorator, Text as TextType
from sqlalchemy.orm import relationship

from src.database.connection import Base
from config.constants import SaleStatus


class JSONType(TypeDecorator):
    """Tipo JSON compatible con SQLite y PostgreSQL"""
    impl = TextType
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(TextType())

    def process_bind_param(self, value, dialect):
        if value is not None and dialect.name != 'postgresql':
            return json.dumps(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and isinstance(value, str):
            return json.loads(value)
        return value


class Usuario(Base):
    """Cliente registrado (identificado por su DNI)"""
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dni = Column(String(20), unique=True, nullable=False, index=True)
    nombre_completo = Column(String(200), nullable=False)
    telefono = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    fecha_registro = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    ventas = relationship("Venta", back_populates="usuario")

    def __repr__(self):
        return f"<Usuario {self.dni}>"


class Producto(Base):
    """Producto del catálogo; el ID lo asigna el administrador"""
    __tablename__ = "productos"

    id = Column(String(50), primary_key=True)
    nombre = Column(String(200), nullable=False, index=True)
    tipo = Column(String(100), nullable=True)
    gramaje = Column(Integer, nullable=True)
    hojas = Column(Integer, nullable=True)
    precio_unitario = Column(Float, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    imagen = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_productos_stock_no_negativo"),
    )

    def __repr__(self):
        return f"<Producto {self.id}>"


_estados = ", ".join(f"'{s.value}'" for s in SaleStatus)


class Venta(Base):
    """Pedido de un usuario; productos es una lista JSON opaca"""
    __tablename__ = "ventas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    productos: Any = Column(JSONType(), nullable=False)
    descripcion = Column(Text, nullable=True)
    metodo_pago = Column(String(50), nullable=True)
    lugar_entrega = Column(String(300), nullable=True)
    estado = Column(String(20), default=SaleStatus.PENDIENTE.value, nullable=False, index=True)
    fecha_venta = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    usuario = relationship("Usuario", back_populates="ventas")

    __table_args__ = (
        CheckConstraint(f"estado IN ({_estados})", name="ck_ventas_estado"),
    )

    def __repr__(self):
        return f"<Venta {self.id} ({self.estado})>"


class Admin(Base):
    """Administrador del dashboard"""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nombre_completo = Column(String(200), nullable=False)
    activo = Column(Boolean, default=True, nullable=False)
    ultimo_acceso = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Admin {self.email}>"
