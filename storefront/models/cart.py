# storefront/models/cart.py
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from storefront.models.delivery import DeliveryQuote
from storefront.models.product import Product

if TYPE_CHECKING:
    from storefront.models.checkout import CheckoutState


@dataclass
class CartLine:
    """One product in the cart. Quantity is always >= 1."""

    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity

    @property
    def line_weight(self) -> Decimal:
        return self.product.weight_kg * self.quantity


class Cart:
    """
    Shopping cart aggregate.

    Lines are unique by product id and keep insertion order. The cart
    also owns the delivery quote chosen at checkout, so emptying the
    cart always drops the quote with it.
    """

    def __init__(self) -> None:
        self._lines: dict[int, CartLine] = {}
        self.delivery_quote: DeliveryQuote | None = None

    # ---- mutations ----

    def add_item(self, product: Product) -> None:
        line = self._lines.get(product.id)
        if line:
            line.quantity += 1
        else:
            self._lines[product.id] = CartLine(product=product, quantity=1)

    def remove_item(self, product_id: int) -> None:
        self._lines.pop(product_id, None)
        if not self._lines:
            # an empty cart never keeps a quote
            self.delivery_quote = None

    def set_quantity(self, product_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return
        line = self._lines.get(product_id)
        if line:
            line.quantity = quantity

    def clear(self) -> None:
        self._lines.clear()
        self.delivery_quote = None

    # ---- reads ----

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, product_id: int) -> CartLine | None:
        return self._lines.get(product_id)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def merchandise_total(self) -> Decimal:
        # Unrounded; round only when rendering.
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def total_weight(self) -> Decimal:
        return sum((line.line_weight for line in self._lines.values()), Decimal("0"))

    def delivery_fee(self) -> Decimal:
        if self.delivery_quote is None:
            return Decimal("0")
        return self.delivery_quote.price

    def final_total(self) -> Decimal:
        return self.merchandise_total() + self.delivery_fee()


class ShopSession:
    """
    All state owned by one shopper.

    `cart`, `favorites` and the cart's delivery quote are persisted as a
    snapshot; `checkout` is transient and lives only in memory.
    """

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.cart = Cart()
        self.favorites: list[int] = []
        self.checkout: "CheckoutState | None" = None

    def toggle_favorite(self, product_id: int) -> bool:
        """Flip a favorite; returns True if the product is now a favorite."""
        if product_id in self.favorites:
            self.favorites.remove(product_id)
            return False
        self.favorites.append(product_id)
        return True

    def clear_cart(self) -> None:
        """Empty the cart (dropping its quote) and abandon any checkout."""
        self.cart.clear()
        self.checkout = None

    def drop_checkout_if_empty(self) -> None:
        if self.cart.is_empty():
            self.checkout = None
