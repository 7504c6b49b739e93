# storefront/models/product.py
import re
from decimal import Decimal
from enum import Enum

from sqlmodel import SQLModel, Field

# Grams assumed when a weight label cannot be parsed
DEFAULT_WEIGHT_GRAMS = Decimal("500")

_WEIGHT_NUMBER = re.compile(r"\d+(?:[.,]\d+)?")
_KILOGRAM_UNITS = ("кг", "kg")


class Category(str, Enum):
    """Closed set of catalog categories."""

    PICKLES = "Краставички"
    LYUTENITSA = "Лютеници"
    VEGETABLES = "Зеленчуци"
    MIXED = "Смесени"
    PEPPERS = "Чушки"


def parse_weight_kg(label: str) -> Decimal:
    """
    Parse a display weight such as "720г", "1.2 кг" or "500g" into kilograms.

    Labels without a kilogram unit are read as grams. Unparseable labels
    count as DEFAULT_WEIGHT_GRAMS.
    """
    match = _WEIGHT_NUMBER.search(label or "")
    if not match:
        return DEFAULT_WEIGHT_GRAMS / 1000

    value = Decimal(match.group(0).replace(",", "."))
    if value <= 0:
        return DEFAULT_WEIGHT_GRAMS / 1000
    if any(unit in label.lower() for unit in _KILOGRAM_UNITS):
        return value
    return value / 1000


class Product(SQLModel):
    """
    Catalog entry.

    Reference data built once at process start from the fixed catalog
    and never mutated afterwards.
    """

    id: int = Field(description="Catalog identity")

    name: str = Field(
        min_length=1,
        max_length=100,
        description="Display name",
    )

    price: Decimal = Field(
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price in BGN",
    )

    category: Category

    weight: str = Field(description='Display weight, e.g. "720г"')

    stock_quantity: int = Field(default=0, ge=0)
    in_stock: bool = True

    rating: float = Field(default=0, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)

    image: str = "/placeholder.svg?height=300&width=300"
    badge: str | None = None
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)

    @property
    def weight_kg(self) -> Decimal:
        return parse_weight_kg(self.weight)
