"""
Cart Domain Service.

The cart belongs to one client session and lives in a ``SessionStore`` slot.
A line is identified by product id plus canonical customization everywhere:
``add``, ``set_quantity`` and ``remove`` all use that key. ``remove_product``
drops every variant of a product.

Lifecycle:
    cart = Cart(store, slot="cart:3").load()
    cart.add(product, 2)          # written to the store immediately
    cart.total_amount()
"""

from pydantic import ValidationError as PydanticValidationError

from shared.config.constants import CONDIMENTS, Limits, StoreSlots
from shared.config.logging import get_logger
from shared.infrastructure.session_store import SessionStore
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import CartItem, Customization, Product, customization_key

logger = get_logger(__name__)


def validate_customization(product: Product, customization: Customization | None) -> Customization | None:
    """
    Check a customization against the product and the condiment list.

    Returns the customization, or None when it selects nothing.
    """
    if customization is None or customization.is_empty:
        return None

    if not product.is_customizable:
        raise ValidationError(
            f"El producto '{product.name}' no admite personalización",
            product_id=product.id,
        )

    unknown_ingredients = set(customization.ingredients) - set(product.ingredients)
    if unknown_ingredients:
        raise ValidationError(
            f"Ingredientes no disponibles para '{product.name}': {', '.join(sorted(unknown_ingredients))}",
            product_id=product.id,
        )

    unknown_condiments = set(customization.condiments) - set(CONDIMENTS)
    if unknown_condiments:
        raise ValidationError(
            f"Condimentos no disponibles: {', '.join(sorted(unknown_condiments))}",
            product_id=product.id,
        )

    return customization


class Cart:
    """
    Cart aggregator over a session store slot.

    Mutations persist the whole snapshot via ``save()``.
    """

    def __init__(self, store: SessionStore, slot: str = StoreSlots.CART):
        self._store = store
        self._slot = slot
        self._items: list[CartItem] = []

    @property
    def slot(self) -> str:
        return self._slot

    @property
    def items(self) -> list[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    @property
    def is_empty(self) -> bool:
        return not self._items

    def load(self) -> "Cart":
        """Read the snapshot once. Unreadable lines are dropped."""
        items: list[CartItem] = []
        for raw in self._store.get(self._slot, []):
            try:
                items.append(CartItem.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning("Dropping unreadable cart line", slot=self._slot, error=str(e))
        self._items = items
        return self

    def save(self) -> None:
        self._store.set(self._slot, [item.model_dump(mode="json") for item in self._items])

    # =========================================================================
    # Mutations
    # =========================================================================

    def _find(self, product_id: str, customization: Customization | None) -> int | None:
        key = (product_id, customization_key(customization))
        for index, item in enumerate(self._items):
            if item.line_key() == key:
                return index
        return None

    def add(
        self,
        product: Product,
        quantity: int = 1,
        customization: Customization | None = None,
    ) -> CartItem:
        """
        Add ``quantity`` units of a product variant.

        An existing line with the same product and customization is
        incremented; otherwise a new line is appended. Stock does not cap
        the quantity.
        """
        if quantity < Limits.MIN_QUANTITY:
            raise ValidationError("La cantidad debe ser al menos 1", product_id=product.id)
        if not product.is_available:
            raise ValidationError(f"El producto '{product.name}' no está disponible", product_id=product.id)

        customization = validate_customization(product, customization)

        index = self._find(product.id, customization)
        if index is not None:
            line = self._items[index]
            line.quantity += quantity
        else:
            line = CartItem(product=product, quantity=quantity, customizations=customization)
            self._items.append(line)

        self.save()
        return line.model_copy(deep=True)

    def set_quantity(
        self,
        product_id: str,
        quantity: int,
        customization: Customization | None = None,
    ) -> CartItem | None:
        """
        Set the quantity of one line. Zero or less removes the line.

        Returns the updated line, or None if it was removed or not found.
        """
        index = self._find(product_id, customization)
        if index is None:
            return None

        if quantity <= 0:
            del self._items[index]
            self.save()
            return None

        self._items[index].quantity = quantity
        self.save()
        return self._items[index].model_copy(deep=True)

    def remove(self, product_id: str, customization: Customization | None = None) -> bool:
        """Remove the single line matching product and customization."""
        index = self._find(product_id, customization)
        if index is None:
            return False
        del self._items[index]
        self.save()
        return True

    def remove_product(self, product_id: str) -> int:
        """Remove every variant of a product. Returns the number of lines removed."""
        remaining = [item for item in self._items if item.product.id != product_id]
        removed = len(self._items) - len(remaining)
        if removed:
            self._items = remaining
            self.save()
        return removed

    def clear(self) -> None:
        self._items = []
        self.save()

    # =========================================================================
    # Totals
    # =========================================================================

    def total_amount(self) -> int:
        """Sum of unit price times quantity, using the line snapshots."""
        return sum(item.subtotal for item in self._items)

    def total_item_count(self) -> int:
        return sum(item.quantity for item in self._items)
