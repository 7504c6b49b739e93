# storefront/schemas/product.py
from sqlmodel import SQLModel

from storefront.models.product import Category, Product
from storefront.services.delivery_pricing import round_money


class ProductRead(SQLModel):
    """
    Storefront view of a catalog entry.
    """

    id: int
    name: str
    price: float
    category: Category
    weight: str
    weight_kg: float
    stock_quantity: int
    in_stock: bool
    rating: float
    reviews: int
    image: str
    badge: str | None = None
    description: str
    ingredients: list[str]
    is_favorite: bool = False

    @classmethod
    def from_product(cls, product: Product, is_favorite: bool = False) -> "ProductRead":
        return cls(
            id=product.id,
            name=product.name,
            price=float(round_money(product.price)),
            category=product.category,
            weight=product.weight,
            weight_kg=float(product.weight_kg),
            stock_quantity=product.stock_quantity,
            in_stock=product.in_stock,
            rating=product.rating,
            reviews=product.reviews,
            image=product.image,
            badge=product.badge,
            description=product.description,
            ingredients=list(product.ingredients),
            is_favorite=is_favorite,
        )


class FavoriteToggleRead(SQLModel):
    product_id: int
    is_favorite: bool
    favorites: list[int]
