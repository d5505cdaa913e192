"""
Tests for the relational persistence backend (SQLite in-memory).
"""

from datetime import date, datetime, timezone

from shared.config.constants import OrderStatus, PaymentMethod, Roles
from shared.utils.schemas import (
    Customization,
    DailyAnalytics,
    Order,
    OrderItem,
    ProductSales,
    TimeSlotStats,
    UserAccount,
)


def _order(order_id):
    return Order(
        id=order_id,
        user_id="1",
        items=[
            OrderItem(
                product_id="1",
                product_name="Ensalada Mixta",
                category="ensaladas",
                unit_price=850,
                quantity=1,
                customizations=Customization(ingredients=["tomate"], condiments=["sal"]),
            ),
            OrderItem(product_id="6", product_name="Agua Mineral", category="bebidas", unit_price=300, quantity=2),
        ],
        total_amount=1450,
        scheduled_time="11:55",
        payment_method=PaymentMethod.TARJETA,
        created_at=datetime.now(timezone.utc),
        user_cycle=Roles.CICLO_BASICO,
        notes="retira Juan",
    )


class TestRemoteOrders:
    def test_order_id_sequence(self, remote_store):
        first = remote_store.generate_order_id()
        prefix = f"ORD-{datetime.now(timezone.utc):%Y%m%d}-"

        assert first == f"{prefix}0001"
        remote_store.create_order(_order(first))
        assert remote_store.generate_order_id() == f"{prefix}0002"

    def test_round_trip_keeps_items_in_order(self, remote_store):
        remote_store.create_order(_order("ORD-20260504-0001"))

        stored = remote_store.get_order("ORD-20260504-0001")
        assert [item.product_name for item in stored.items] == ["Ensalada Mixta", "Agua Mineral"]
        assert stored.items[0].customizations.condiments == ["sal"]
        assert stored.items[1].customizations is None
        assert stored.user_cycle == Roles.CICLO_BASICO
        assert stored.created_at.tzinfo is not None

    def test_update_order(self, remote_store):
        order = _order("ORD-20260504-0001")
        remote_store.create_order(order)

        now = datetime.now(timezone.utc)
        remote_store.update_order(
            order.model_copy(update={"status": OrderStatus.DELIVERED, "updated_at": now, "completed_at": now})
        )

        stored = remote_store.get_order(order.id)
        assert stored.status == OrderStatus.DELIVERED
        assert stored.completed_at is not None

    def test_update_missing_returns_none(self, remote_store):
        assert remote_store.update_order(_order("ORD-20260504-0009")) is None

    def test_filter_by_status(self, remote_store):
        remote_store.create_order(_order("ORD-20260504-0001"))
        assert remote_store.list_orders(status=OrderStatus.PENDING)[0].id == "ORD-20260504-0001"
        assert remote_store.list_orders(status=OrderStatus.READY) == []

    def test_ping(self, remote_store):
        remote_store.ping()


class TestRemoteCatalogAndUsers:
    def test_product_upsert(self, remote_store, sample_product):
        remote_store.save_product(sample_product)
        remote_store.save_product(sample_product.model_copy(update={"stock_quantity": 3}))

        stored = remote_store.get_product(sample_product.id)
        assert stored.stock_quantity == 3
        assert stored.ingredients == sample_product.ingredients
        assert stored.is_low_stock

    def test_user_lookup(self, remote_store):
        remote_store.save_user(
            UserAccount(id="7", email="Profe@Escuela.com", role=Roles.ADMIN, name="Profe", password_hash="$2b$x")
        )
        assert remote_store.find_user_by_email("profe@escuela.com").role == Roles.ADMIN
        assert [user.id for user in remote_store.list_users()] == ["7"]


class TestRemoteAnalytics:
    def test_save_and_read_summary(self, remote_store):
        day = date(2026, 5, 4)
        summary = DailyAnalytics(
            day=day,
            total_orders=2,
            total_revenue=1750,
            average_order_value=875.0,
            orders_by_status={"pendiente": 2},
            orders_by_time={"11:55": TimeSlotStats(orders=2, revenue=1750)},
            top_products=[ProductSales(product_name="Agua Mineral", quantity=3, revenue=900)],
        )
        remote_store.save_daily_analytics(summary)

        stored = remote_store.get_daily_analytics(day)
        assert stored.orders_by_time["11:55"].revenue == 1750
        assert stored.top_products[0].product_name == "Agua Mineral"
        assert remote_store.get_daily_analytics(date(2026, 5, 5)) is None
