"""Initial schema: usuarios, productos, ventas, admins

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial store schema."""
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        from sqlalchemy.dialects.postgresql import JSONB
        json_type = JSONB()
    else:
        json_type = sa.Text()

    # Usuarios (clientes)
    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('dni', sa.String(20), nullable=False),
        sa.Column('nombre_completo', sa.String(200), nullable=False),
        sa.Column('telefono', sa.String(30), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_usuarios_dni', 'usuarios', ['dni'], unique=True)
    op.create_index('ix_usuarios_fecha_registro', 'usuarios', ['fecha_registro'])

    # Productos
    op.create_table(
        'productos',
        sa.Column('id', sa.String(50), primary_key=True),
        sa.Column('nombre', sa.String(200), nullable=False),
        sa.Column('tipo', sa.String(100), nullable=True),
        sa.Column('gramaje', sa.Integer(), nullable=True),
        sa.Column('hojas', sa.Integer(), nullable=True),
        sa.Column('precio_unitario', sa.Float(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('imagen', sa.Text(), nullable=True),
        sa.CheckConstraint('stock >= 0', name='ck_productos_stock_no_negativo'),
    )
    op.create_index('ix_productos_nombre', 'productos', ['nombre'])

    # Ventas
    op.create_table(
        'ventas',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('usuario_id', sa.Integer(), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('productos', json_type, nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('metodo_pago', sa.String(50), nullable=True),
        sa.Column('lugar_entrega', sa.String(300), nullable=True),
        sa.Column('estado', sa.String(20), nullable=False, server_default='pendiente'),
        sa.Column('fecha_venta', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "estado IN ('pendiente', 'pagado', 'entregado', 'cancelado')",
            name='ck_ventas_estado'
        ),
    )
    op.create_index('ix_ventas_usuario_id', 'ventas', ['usuario_id'])
    op.create_index('ix_ventas_estado', 'ventas', ['estado'])
    op.create_index('ix_ventas_fecha_venta', 'ventas', ['fecha_venta'])

    # Admins del panel
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('nombre_completo', sa.String(200), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('ultimo_acceso', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_admins_email', 'admins', ['email'], unique=True)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_admins_email', table_name='admins')
    op.drop_table('admins')

    op.drop_index('ix_ventas_fecha_venta', table_name='ventas')
    op.drop_index('ix_ventas_estado', table_name='ventas')
    op.drop_index('ix_ventas_usuario_id', table_name='ventas')
    op.drop_table('ventas')

    op.drop_index('ix_productos_nombre', table_name='productos')
    op.drop_table('productos')

    op.drop_index('ix_usuarios_fecha_registro', table_name='usuarios')
    op.drop_index('ix_usuarios_dni', table_name='usuarios')
    op.drop_table('usuarios')
