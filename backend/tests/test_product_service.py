"""
Tests for ProductService - catalog listing and inventory management.

Tests cover:
- Role-scoped listing (students only see available products)
- Product creation and updates
- Availability toggle
- Stock adjustments and the movement log
"""

import pytest

from shared.config.constants import Category, MovementType, Roles
from shared.utils.exceptions import DuplicateEntityError, ProductNotFoundError, ValidationError
from shared.utils.schemas import ProductCreateRequest, ProductUpdateRequest

from cafeteria_api.services.domain import ProductService


@pytest.fixture
def product_service(persistence):
    return ProductService(persistence)


@pytest.fixture
def catalog(persistence, sample_product, drink_product):
    persistence.save_product(sample_product)
    persistence.save_product(drink_product.model_copy(update={"is_available": False}))
    return persistence


class TestProductQueries:
    def test_students_see_available_only(self, product_service, catalog, sample_product):
        products = product_service.list_for_role(Roles.CICLO_BASICO)
        assert [product.id for product in products] == [sample_product.id]

    def test_staff_see_everything(self, product_service, catalog):
        assert len(product_service.list_for_role(Roles.KIOSQUERO)) == 2
        assert len(product_service.list_inventory()) == 2

    def test_unavailable_hidden_from_student(self, product_service, catalog, drink_product):
        with pytest.raises(ProductNotFoundError):
            product_service.get_for_role(drink_product.id, Roles.CICLO_SUPERIOR)
        assert product_service.get_for_role(drink_product.id, Roles.ADMIN).id == drink_product.id

    def test_unknown_product(self, product_service, catalog):
        with pytest.raises(ProductNotFoundError):
            product_service.get("missing")


class TestProductCreate:
    def test_create_records_initial_stock(self, product_service, persistence):
        product = product_service.create(
            ProductCreateRequest(name="Empanada de carne", category=Category.EMPANADAS, price=450, stock_quantity=30),
            actor_id="3",
        )

        assert persistence.get_product(product.id).stock_quantity == 30
        movements = product_service.list_movements(product.id)
        assert len(movements) == 1
        assert movements[0].change_type == MovementType.RESTOCK
        assert movements[0].new_quantity == 30
        assert movements[0].created_by == "3"

    def test_create_without_stock_records_nothing(self, product_service):
        product = product_service.create(
            ProductCreateRequest(name="Tostado simple", category=Category.TOSTADOS, price=500),
            actor_id="3",
        )
        assert product_service.list_movements(product.id) == []

    def test_duplicate_name_rejected(self, product_service, catalog, sample_product):
        with pytest.raises(DuplicateEntityError):
            product_service.create(
                ProductCreateRequest(name=sample_product.name.upper(), category=Category.ENSALADAS, price=900),
                actor_id="3",
            )

    def test_customizable_needs_ingredients(self, product_service):
        with pytest.raises(ValidationError):
            product_service.create(
                ProductCreateRequest(
                    name="Ensalada vacía", category=Category.ENSALADAS, price=900, is_customizable=True
                ),
                actor_id="3",
            )

    def test_internal_image_url_rejected(self):
        with pytest.raises(ValueError):
            ProductCreateRequest(
                name="Agua", category=Category.BEBIDAS, price=300, image_url="http://127.0.0.1/admin.png"
            )


class TestProductUpdate:
    def test_partial_update(self, product_service, catalog, sample_product):
        updated = product_service.update(sample_product.id, ProductUpdateRequest(price=990), actor_id="3")

        assert updated.price == 990
        assert updated.name == sample_product.name
        assert product_service.get(sample_product.id).price == 990

    def test_rename_to_existing_name_rejected(self, product_service, catalog, sample_product, drink_product):
        with pytest.raises(DuplicateEntityError):
            product_service.update(sample_product.id, ProductUpdateRequest(name=drink_product.name), actor_id="3")

    def test_set_availability(self, product_service, catalog, drink_product):
        product_service.set_availability(drink_product.id, True, actor_id="3")
        assert product_service.get_for_role(drink_product.id, Roles.CICLO_BASICO).is_available


class TestStockAdjustment:
    def test_restock(self, product_service, catalog, sample_product):
        product, movement = product_service.adjust_stock(
            sample_product.id, 10, MovementType.RESTOCK, actor_id="3", reason="Entrega"
        )

        assert product.stock_quantity == 30
        assert movement.previous_quantity == 20
        assert movement.quantity_change == 10
        assert movement.reason == "Entrega"

    def test_negative_adjustment(self, product_service, catalog, sample_product):
        product, movement = product_service.adjust_stock(
            sample_product.id, -5, MovementType.ADJUSTMENT, actor_id="3", reason="Merma"
        )
        assert product.stock_quantity == 15
        assert movement.change_type == MovementType.ADJUSTMENT

    def test_result_cannot_go_negative(self, product_service, catalog, sample_product):
        with pytest.raises(ValidationError):
            product_service.adjust_stock(sample_product.id, -21, MovementType.ADJUSTMENT, actor_id="3")
        assert product_service.get(sample_product.id).stock_quantity == 20

    def test_negative_restock_rejected(self, product_service, catalog, sample_product):
        with pytest.raises(ValidationError):
            product_service.adjust_stock(sample_product.id, -1, MovementType.RESTOCK, actor_id="3")

    def test_zero_change_rejected(self, product_service, catalog, sample_product):
        with pytest.raises(ValidationError):
            product_service.adjust_stock(sample_product.id, 0, MovementType.ADJUSTMENT, actor_id="3")

    def test_manual_sale_rejected(self, product_service, catalog, sample_product):
        with pytest.raises(ValidationError):
            product_service.adjust_stock(sample_product.id, -1, MovementType.SALE, actor_id="3")

    def test_movements_newest_first(self, product_service, catalog, sample_product):
        product_service.adjust_stock(sample_product.id, 1, MovementType.RESTOCK, actor_id="3")
        product_service.adjust_stock(sample_product.id, 2, MovementType.RESTOCK, actor_id="3")

        changes = [movement.quantity_change for movement in product_service.list_movements(sample_product.id)]
        assert changes == [2, 1]
