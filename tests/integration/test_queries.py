"""
Tests de integración para las queries async sobre SQLite en memoria.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from src.database.queries import (
    list_products,
    get_product_by_id,
    create_product,
    update_product,
    delete_product,
    get_user_by_dni,
    user_exists,
    list_users,
    create_user,
    count_users,
    create_sale,
    list_sales,
    get_sale_by_id,
    list_sales_for_user,
    update_sale,
    get_active_admin_by_email,
    update_last_access,
    create_admin,
)
from src.utils.errors import is_unique_violation


async def _user(db, dni="12345678", nombre="Ana Pérez", **extra):
    return await create_user(db, {"dni": dni, "nombre_completo": nombre, **extra})


async def _product(db, product_id="P-1", nombre="Cuaderno", **extra):
    data = {"id": product_id, "nombre": nombre, "precio_unitario": 3.5}
    data.update(extra)
    return await create_product(db, data)


class TestProductQueries:

    async def test_create_defaults_stock(self, db_provider):
        async with db_provider.get_session() as db:
            producto = await _product(db)

        assert producto.stock == 0
        assert producto.tipo is None

    async def test_list_ordered_by_nombre(self, db_provider):
        async with db_provider.get_session() as db:
            await _product(db, "P-1", "Zeta")
            await _product(db, "P-2", "Alfa")
            await _product(db, "P-3", "Medio")

        async with db_provider.get_session() as db:
            nombres = [p.nombre for p in await list_products(db)]

        assert nombres == ["Alfa", "Medio", "Zeta"]

    async def test_duplicate_id_is_unique_violation(self, db_provider):
        async with db_provider.get_session() as db:
            await _product(db)

        with pytest.raises(IntegrityError) as exc_info:
            async with db_provider.get_session() as db:
                await _product(db, nombre="Otro")

        assert is_unique_violation(exc_info.value)

        async with db_provider.get_session() as db:
            assert (await get_product_by_id(db, "P-1")).nombre == "Cuaderno"

    async def test_negative_stock_rejected(self, db_provider):
        with pytest.raises(IntegrityError) as exc_info:
            async with db_provider.get_session() as db:
                await _product(db, stock=-1)

        assert not is_unique_violation(exc_info.value)

    async def test_update_partial(self, db_provider):
        async with db_provider.get_session() as db:
            await _product(db, stock=5)

        async with db_provider.get_session() as db:
            producto = await update_product(db, "P-1", {"precio_unitario": 4.0})

        assert producto.precio_unitario == 4.0
        assert producto.stock == 5

    async def test_update_missing_returns_none(self, db_provider):
        async with db_provider.get_session() as db:
            assert await update_product(db, "NOPE", {"stock": 1}) is None

    async def test_delete_returns_rowcount(self, db_provider):
        async with db_provider.get_session() as db:
            await _product(db)

        async with db_provider.get_session() as db:
            assert await delete_product(db, "P-1") == 1
        async with db_provider.get_session() as db:
            assert await delete_product(db, "P-1") == 0
            assert await get_product_by_id(db, "P-1") is None


class TestUserQueries:

    async def test_create_and_lookup_by_dni(self, db_provider):
        async with db_provider.get_session() as db:
            usuario = await _user(db, telefono="600111222")

        assert usuario.id is not None
        assert usuario.fecha_registro is not None

        async with db_provider.get_session() as db:
            found = await get_user_by_dni(db, "12345678")
            assert found.id == usuario.id
            assert await user_exists(db, usuario.id)
            assert not await user_exists(db, usuario.id + 100)
            assert await count_users(db) == 1

    async def test_duplicate_dni(self, db_provider):
        async with db_provider.get_session() as db:
            await _user(db)

        with pytest.raises(IntegrityError) as exc_info:
            async with db_provider.get_session() as db:
                await _user(db, nombre="Otra")

        assert is_unique_violation(exc_info.value)

    async def test_list_newest_first(self, db_provider):
        base = datetime(2024, 1, 1)
        async with db_provider.get_session() as db:
            await _user(db, "11111111", fecha_registro=base)
            await _user(db, "22222222", fecha_registro=base + timedelta(days=2))
            await _user(db, "33333333", fecha_registro=base + timedelta(days=1))

        async with db_provider.get_session() as db:
            dnis = [u.dni for u in await list_users(db)]

        assert dnis == ["22222222", "33333333", "11111111"]


class TestSaleQueries:

    @pytest.fixture
    async def usuarios(self, db_provider):
        async with db_provider.get_session() as db:
            ana = await _user(db, "12345678", "Ana", email="ana@x.com")
            luis = await _user(db, "87654321", "Luis")
        return ana, luis

    async def _sale(self, db, usuario_id, estado="pendiente", fecha=None):
        data = {
            "usuario_id": usuario_id,
            "productos": [{"producto_id": "P-1", "cantidad": 1}],
            "estado": estado,
        }
        if fecha:
            data["fecha_venta"] = fecha
        return await create_sale(db, data)

    async def test_create_defaults(self, db_provider, usuarios):
        ana, _ = usuarios
        async with db_provider.get_session() as db:
            venta = await create_sale(db, {"usuario_id": ana.id, "productos": []})

        assert venta.estado == "pendiente"
        assert venta.productos == []
        assert venta.fecha_venta is not None

    async def test_list_with_filters(self, db_provider, usuarios):
        ana, luis = usuarios
        base = datetime(2024, 5, 1)
        async with db_provider.get_session() as db:
            v1 = await self._sale(db, ana.id, "pendiente", base)
            v2 = await self._sale(db, luis.id, "pagado", base + timedelta(days=1))
            v3 = await self._sale(db, ana.id, "pagado", base + timedelta(days=2))

        async with db_provider.get_session() as db:
            todas = await list_sales(db)
            pagadas = await list_sales(db, estado="pagado")
            recientes = await list_sales(db, desde=base + timedelta(days=1))
            vacias = await list_sales(db, estado="enviado")

        assert [v.id for v in todas] == [v3.id, v2.id, v1.id]
        assert [v.id for v in pagadas] == [v3.id, v2.id]
        assert [v.id for v in recientes] == [v3.id, v2.id]
        assert vacias == []
        assert todas[0].usuario.email == "ana@x.com"

    async def test_get_by_id_joined(self, db_provider, usuarios):
        ana, _ = usuarios
        async with db_provider.get_session() as db:
            venta = await self._sale(db, ana.id)

        async with db_provider.get_session() as db:
            found = await get_sale_by_id(db, venta.id)
            missing = await get_sale_by_id(db, venta.id + 100)

        assert found.usuario.dni == "12345678"
        assert missing is None

    async def test_list_for_user(self, db_provider, usuarios):
        ana, luis = usuarios
        async with db_provider.get_session() as db:
            await self._sale(db, ana.id)
            await self._sale(db, luis.id)
            await self._sale(db, ana.id)

        async with db_provider.get_session() as db:
            ventas = await list_sales_for_user(db, ana.id, with_user=True)

        assert len(ventas) == 2
        assert all(v.usuario_id == ana.id for v in ventas)
        assert ventas[0].usuario.nombre_completo == "Ana"

    async def test_update_status(self, db_provider, usuarios):
        ana, _ = usuarios
        async with db_provider.get_session() as db:
            venta = await self._sale(db, ana.id)

        async with db_provider.get_session() as db:
            updated = await update_sale(db, venta.id, {"estado": "entregado"})
            missing = await update_sale(db, venta.id + 100, {"estado": "pagado"})

        assert updated.estado == "entregado"
        assert updated.fecha_venta == venta.fecha_venta
        assert missing is None

    async def test_invalid_status_rejected_by_store(self, db_provider, usuarios):
        ana, _ = usuarios
        with pytest.raises(IntegrityError):
            async with db_provider.get_session() as db:
                await self._sale(db, ana.id, estado="enviado")


class TestAdminQueries:

    async def test_only_active_admins(self, db_provider):
        async with db_provider.get_session() as db:
            await create_admin(db, {
                "email": "off@tienda.test",
                "nombre_completo": "Inactivo",
                "password_hash": "x",
                "activo": False,
            })

        async with db_provider.get_session() as db:
            assert await get_active_admin_by_email(db, "off@tienda.test") is None

    async def test_update_last_access(self, db_provider, admin):
        when = datetime(2024, 6, 1, 12, 0)
        async with db_provider.get_session() as db:
            await update_last_access(db, admin.id, when)

        async with db_provider.get_session() as db:
            found = await get_active_admin_by_email(db, admin.email)

        assert found.ultimo_acceso == when
