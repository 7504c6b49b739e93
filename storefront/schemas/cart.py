# storefront/schemas/cart.py
from datetime import date
from decimal import Decimal

from sqlmodel import SQLModel

from storefront.models.cart import Cart, CartLine
from storefront.models.delivery import DeliveryAddress, DeliveryMethod, DeliveryQuote
from storefront.schemas.courier import City, Office
from storefront.services.delivery_pricing import round_money

GRAM = Decimal("0.001")


class CartItemCreate(SQLModel):
    """
    Payload for adding one unit of a product to the cart.
    """

    product_id: int


class CartItemUpdate(SQLModel):
    """
    Payload for setting the quantity of a cart line.

    Zero or negative removes the line.
    """

    quantity: int


class CartLineRead(SQLModel):
    """
    Read model for a single cart line, including line_total.
    """

    product_id: int
    name: str
    image: str
    weight: str
    unit_price: float
    quantity: int
    line_total: float

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineRead":
        return cls(
            product_id=line.product_id,
            name=line.product.name,
            image=line.product.image,
            weight=line.product.weight,
            unit_price=float(round_money(line.product.price)),
            quantity=line.quantity,
            line_total=float(round_money(line.line_total)),
        )


class DeliveryQuoteRead(SQLModel):
    """
    Read model for the chosen delivery.
    """

    method: DeliveryMethod
    price: float
    currency: str
    deadline: int
    pickup_date: date | None = None
    delivery_date: date | None = None
    saturday_delivery: bool = False
    city: City
    address: DeliveryAddress | None = None
    office: Office | None = None

    @classmethod
    def from_quote(cls, quote: DeliveryQuote) -> "DeliveryQuoteRead":
        return cls(
            method=quote.method,
            price=float(round_money(quote.price)),
            currency=quote.currency,
            deadline=quote.deadline,
            pickup_date=quote.pickup_date,
            delivery_date=quote.delivery_date,
            saturday_delivery=quote.saturday_delivery,
            city=quote.city,
            address=quote.address,
            office=quote.office,
        )


class CartSummary(SQLModel):
    """
    Full cart response model with totals.

    Amounts are rounded to cents here; the cart itself keeps exact sums.
    """

    items: list[CartLineRead]
    item_count: int
    merchandise_total: float
    total_weight_kg: float
    delivery_fee: float
    final_total: float
    delivery: DeliveryQuoteRead | None = None

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartSummary":
        quote = cart.delivery_quote
        return cls(
            items=[CartLineRead.from_line(line) for line in cart.lines],
            item_count=cart.item_count(),
            merchandise_total=float(round_money(cart.merchandise_total())),
            total_weight_kg=float(cart.total_weight().quantize(GRAM)),
            delivery_fee=float(round_money(cart.delivery_fee())),
            final_total=float(round_money(cart.final_total())),
            delivery=DeliveryQuoteRead.from_quote(quote) if quote else None,
        )
