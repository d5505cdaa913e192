"""
Product Domain Service.

Menu listing for students and inventory management for kiosk staff:
product CRUD, availability toggle, stock adjustments with movement log.
"""

import uuid
from datetime import datetime, timezone

from shared.config.constants import STUDENT_ROLES, MovementType, Roles
from shared.config.logging import kiosco_logger as logger
from shared.utils.exceptions import DuplicateEntityError, ProductNotFoundError, ValidationError
from shared.utils.schemas import (
    InventoryMovement,
    Product,
    ProductCreateRequest,
    ProductUpdateRequest,
)

from cafeteria_api.repositories.base import PersistencePort


class ProductService:
    """Catalog and inventory operations over the persistence port."""

    def __init__(self, persistence: PersistencePort):
        self._persistence = persistence

    # =========================================================================
    # Queries
    # =========================================================================

    def list_for_role(self, role: Roles) -> list[Product]:
        """Students only see available products; staff see the whole catalog."""
        return self._persistence.list_products(available_only=role in STUDENT_ROLES)

    def list_inventory(self) -> list[Product]:
        return self._persistence.list_products()

    def list_low_stock(self) -> list[Product]:
        return [product for product in self._persistence.list_products() if product.is_low_stock]

    def get(self, product_id: str) -> Product:
        product = self._persistence.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def get_for_role(self, product_id: str, role: Roles) -> Product:
        """Unavailable products are hidden from students."""
        product = self.get(product_id)
        if role in STUDENT_ROLES and not product.is_available:
            raise ProductNotFoundError(product_id)
        return product

    def list_movements(self, product_id: str | None = None) -> list[InventoryMovement]:
        return self._persistence.list_inventory_movements(product_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def create(self, data: ProductCreateRequest, actor_id: str) -> Product:
        """Create a product; a non-zero initial stock is logged as a restock."""
        name_key = data.name.strip().lower()
        if any(p.name.strip().lower() == name_key for p in self._persistence.list_products()):
            raise DuplicateEntityError("Producto", data.name)

        self._check_ingredients(data.is_customizable, data.ingredients)

        product = Product(id=str(uuid.uuid4()), **data.model_dump())
        self._persistence.save_product(product)

        if product.stock_quantity:
            self._record(product.id, MovementType.RESTOCK, 0, product.stock_quantity, "Stock inicial", actor_id)

        logger.info("Product created", product_id=product.id, name=product.name, actor_id=actor_id)
        return product

    def update(self, product_id: str, data: ProductUpdateRequest, actor_id: str) -> Product:
        """Apply the fields that were sent; stock changes go through adjust_stock."""
        product = self.get(product_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes:
            name_key = changes["name"].strip().lower()
            for other in self._persistence.list_products():
                if other.id != product_id and other.name.strip().lower() == name_key:
                    raise DuplicateEntityError("Producto", changes["name"])

        updated = product.model_copy(update=changes)
        self._check_ingredients(updated.is_customizable, updated.ingredients)
        updated = Product.model_validate(updated.model_dump())

        self._persistence.save_product(updated)
        logger.info("Product updated", product_id=product_id, fields=sorted(changes), actor_id=actor_id)
        return updated

    def set_availability(self, product_id: str, is_available: bool, actor_id: str) -> Product:
        product = self.get(product_id)
        updated = product.model_copy(update={"is_available": is_available})
        self._persistence.save_product(updated)
        logger.info(
            "Product availability changed",
            product_id=product_id,
            is_available=is_available,
            actor_id=actor_id,
        )
        return updated

    def adjust_stock(
        self,
        product_id: str,
        quantity_change: int,
        change_type: MovementType,
        actor_id: str,
        reason: str | None = None,
    ) -> tuple[Product, InventoryMovement]:
        """
        Restock (positive change) or adjust (any non-zero change) the stock.

        Sales are recorded by order creation only. The result may not be
        negative.
        """
        change_type = MovementType(change_type)
        if change_type is MovementType.SALE:
            raise ValidationError("Las ventas se registran al crear pedidos", product_id=product_id)
        if quantity_change == 0:
            raise ValidationError("La variación de stock no puede ser cero", product_id=product_id)
        if change_type is MovementType.RESTOCK and quantity_change < 0:
            raise ValidationError("Una reposición debe sumar stock", product_id=product_id)

        product = self.get(product_id)
        previous = product.stock_quantity
        new_quantity = previous + quantity_change
        if new_quantity < 0:
            raise ValidationError(
                f"El stock no puede quedar negativo (actual: {previous})",
                product_id=product_id,
            )

        updated = product.model_copy(update={"stock_quantity": new_quantity})
        self._persistence.save_product(updated)
        movement = self._record(product_id, change_type, previous, quantity_change, reason, actor_id)

        logger.info(
            "Stock adjusted",
            product_id=product_id,
            change_type=change_type.value,
            previous_quantity=previous,
            new_quantity=new_quantity,
            actor_id=actor_id,
        )
        return updated, movement

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_ingredients(is_customizable: bool, ingredients: list[str]) -> None:
        if is_customizable and not ingredients:
            raise ValidationError("Un producto personalizable debe tener ingredientes")

    def _record(
        self,
        product_id: str,
        change_type: MovementType,
        previous: int,
        change: int,
        reason: str | None,
        actor_id: str,
    ) -> InventoryMovement:
        movement = InventoryMovement(
            id=uuid.uuid4().hex,
            product_id=product_id,
            change_type=change_type,
            previous_quantity=previous,
            quantity_change=change,
            new_quantity=previous + change,
            reason=reason,
            created_by=actor_id,
            created_at=datetime.now(timezone.utc),
        )
        return self._persistence.record_inventory_movement(movement)
