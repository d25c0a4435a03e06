"""Product price tracking models.

Prices and counts arrive as decimal strings; they are kept as strings on the
wire models and converted with ``Decimal`` only for display.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict

_CENTS = Decimal("0.01")


class Product(BaseModel):
    """Tracked product identity."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    searchKeyword: str = ""
    jdSkuId: str
    jdUrl: str = ""
    variant: str = ""
    imageUrl: str = ""
    shopName: str = ""
    isActive: bool = True
    createdAt: str = ""
    updatedAt: str = ""


class CurrentPrice(BaseModel):
    """Latest observed price."""

    model_config = ConfigDict(frozen=True)

    price: str
    shopName: str = ""
    inStock: bool = False
    updatedAt: str = ""


class PriceRecord(BaseModel):
    """Single price history point."""

    model_config = ConfigDict(frozen=True)

    price: str
    createdAt: str


class PriceStats(BaseModel):
    """Aggregate price statistics."""

    model_config = ConfigDict(frozen=True)

    minPrice: str
    maxPrice: str
    avgPrice: str
    recordCount: str

    @property
    def average_price_display(self) -> str:
        """Average price rounded to two decimal places."""
        try:
            value = Decimal(self.avgPrice)
        except InvalidOperation:
            return self.avgPrice
        return str(value.quantize(_CENTS, rounding=ROUND_HALF_UP))

    @property
    def record_count(self) -> int:
        """Number of price records, or 0 if the count is not numeric."""
        return int(self.recordCount) if self.recordCount.isdigit() else 0


class ProductPriceData(BaseModel):
    """Product detail bundle."""

    model_config = ConfigDict(frozen=True)

    product: Product
    currentPrice: CurrentPrice
    priceHistory: list[PriceRecord] = []
    stats: PriceStats


class ProductPrice(BaseModel):
    """Product price API response envelope."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: ProductPriceData
