"""
Tests for the local key-value persistence backend.
"""

import re
from datetime import date, datetime, timedelta, timezone

import pytest

from shared.config.constants import MovementType, OrderStatus, PaymentMethod, Roles, StoreSlots
from shared.utils.schemas import DailyAnalytics, InventoryMovement, Order, OrderItem, UserAccount


def _order(order_id, user_id="1", slot="11:55", minutes=0):
    return Order(
        id=order_id,
        user_id=user_id,
        items=[OrderItem(product_id="6", product_name="Agua Mineral", unit_price=300, quantity=1)],
        total_amount=300,
        scheduled_time=slot,
        payment_method=PaymentMethod.EFECTIVO,
        created_at=datetime(2026, 5, 4, 10, 0, tzinfo=timezone.utc) + timedelta(minutes=minutes),
    )


class TestLocalOrders:
    def test_order_id_format(self, local_store):
        assert re.match(r"^ORD-\d{6}$", local_store.generate_order_id())

    def test_order_id_skips_existing(self, local_store, monkeypatch):
        monkeypatch.setattr("cafeteria_api.repositories.local.time.time", lambda: 1.234567)
        local_store.create_order(_order("ORD-001234"))

        assert local_store.generate_order_id() == "ORD-001235"

    def test_order_stored_whole(self, local_store, memory_store):
        local_store.create_order(_order("ORD-000001"))

        raw = memory_store.get(StoreSlots.ORDERS)[0]
        assert raw["id"] == "ORD-000001"
        assert raw["items"][0]["product_name"] == "Agua Mineral"

    def test_list_filters_and_order(self, local_store):
        local_store.create_order(_order("ORD-000001", user_id="1", slot="9:35", minutes=0))
        local_store.create_order(_order("ORD-000002", user_id="2", slot="11:55", minutes=5))
        local_store.create_order(_order("ORD-000003", user_id="1", slot="11:55", minutes=10))

        assert [o.id for o in local_store.list_orders()] == ["ORD-000003", "ORD-000002", "ORD-000001"]
        assert [o.id for o in local_store.list_orders(user_id="1")] == ["ORD-000003", "ORD-000001"]
        assert [o.id for o in local_store.list_orders(scheduled_time="11:55", user_id="2")] == ["ORD-000002"]

    def test_update_missing_returns_none(self, local_store):
        assert local_store.update_order(_order("ORD-999999")) is None

    def test_update_replaces_record(self, local_store):
        local_store.create_order(_order("ORD-000001"))
        local_store.update_order(_order("ORD-000001").model_copy(update={"status": OrderStatus.READY}))

        assert local_store.get_order("ORD-000001").status == OrderStatus.READY
        assert len(local_store.list_orders()) == 1


class TestLocalCatalogAndUsers:
    def test_product_upsert(self, local_store, drink_product):
        local_store.save_product(drink_product)
        local_store.save_product(drink_product.model_copy(update={"price": 350}))

        products = local_store.list_products()
        assert len(products) == 1
        assert products[0].price == 350

    def test_available_only(self, local_store, drink_product, sample_product):
        local_store.save_product(drink_product.model_copy(update={"is_available": False}))
        local_store.save_product(sample_product)

        assert [p.id for p in local_store.list_products(available_only=True)] == [sample_product.id]

    def test_find_user_case_insensitive(self, local_store):
        local_store.save_user(
            UserAccount(id="9", email="Alumno@Escuela.com", role=Roles.CICLO_BASICO, name="Alumno", password_hash="x")
        )
        assert local_store.find_user_by_email("alumno@escuela.com").id == "9"
        assert local_store.get_user("9").name == "Alumno"


class TestLocalInventoryAndAnalytics:
    def test_movements_filtered(self, local_store):
        now = datetime.now(timezone.utc)
        for movement_id, product_id in (("m1", "1"), ("m2", "2")):
            local_store.record_inventory_movement(
                InventoryMovement(
                    id=movement_id,
                    product_id=product_id,
                    change_type=MovementType.RESTOCK,
                    previous_quantity=0,
                    quantity_change=5,
                    new_quantity=5,
                    created_at=now,
                )
            )

        assert [m.id for m in local_store.list_inventory_movements("2")] == ["m2"]
        assert len(local_store.list_inventory_movements()) == 2

    def test_daily_analytics_keyed_by_day(self, local_store):
        day = date(2026, 5, 4)
        local_store.save_daily_analytics(DailyAnalytics(day=day, total_orders=3))
        local_store.save_daily_analytics(DailyAnalytics(day=day, total_orders=4))

        assert local_store.get_daily_analytics(day).total_orders == 4
        assert local_store.get_daily_analytics(date(2026, 5, 5)) is None
