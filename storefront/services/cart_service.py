# storefront/services/cart_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.cart import ShopSession
from storefront.schemas.cart import CartItemCreate, CartItemUpdate, CartSummary
from storefront.services.catalog_service import CatalogService
from storefront.services.session_store import ShopSessionStore


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence and availability on add
      - apply add / set quantity / remove / clear to the session cart
      - persist the session snapshot after every change
      - compute totals (via CartSummary)
    """

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog

    # ---- public operations ----

    def get_cart_summary(self, shop: ShopSession) -> CartSummary:
        return CartSummary.from_cart(shop.cart)

    def add_to_cart(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        payload: CartItemCreate,
    ) -> CartSummary:
        """
        Add one unit of a product.

        Rules:
          - product must exist (404)
          - product must be in stock (400)
        """
        product = self.catalog.get_product(payload.product_id)
        if not product.in_stock:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is out of stock",
            )

        shop.cart.add_item(product)
        store.save(session, shop)
        return self.get_cart_summary(shop)

    def update_quantity(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        product_id: int,
        payload: CartItemUpdate,
    ) -> CartSummary:
        """
        Set the quantity of a cart line.

        Quantity <= 0 removes the line; an absent line is left absent.
        """
        shop.cart.set_quantity(product_id, payload.quantity)
        shop.drop_checkout_if_empty()
        store.save(session, shop)
        return self.get_cart_summary(shop)

    def remove_item(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        product_id: int,
    ) -> CartSummary:
        """
        Remove a product from the cart (no-op if absent).
        """
        shop.cart.remove_item(product_id)
        shop.drop_checkout_if_empty()
        store.save(session, shop)
        return self.get_cart_summary(shop)

    def clear_cart(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
    ) -> CartSummary:
        """
        Clear all items, the delivery quote and any open checkout.
        """
        shop.clear_cart()
        store.save(session, shop)
        return self.get_cart_summary(shop)
