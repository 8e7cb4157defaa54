from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union

EntityId = Union[int, str]


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: EntityId
    name: str
    purchase_price: float
    sku: Optional[str] = None


class Seller(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: EntityId
    first_name: str
    last_name: str
    position: Optional[str] = None
    department: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class LineItem(BaseModel):
    product_id: EntityId
    quantity: float
    sale_price: float
    discount: Optional[float] = Field(default=None, ge=0, le=100)  # percent


class PurchaseRecord(BaseModel):
    seller_id: EntityId
    items: list[LineItem]
    receipt_id: Optional[str] = None
    date: Optional[str] = None
    customer_id: Optional[str] = None
    total_amount: Optional[float] = None


class SalesData(BaseModel):
    products: list[Product]
    sellers: list[Seller]
    purchase_records: list[PurchaseRecord]


# ── Accumulator ──────────────────────────────────────────────────────────────

class SellerStat(BaseModel):
    id: EntityId
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    # product_id -> cumulative quantity, in first-sold order
    products_sold: dict[EntityId, float] = Field(default_factory=dict)
    bonus: float = 0.0
    top_products: list[str] = Field(default_factory=list)


# ── Response models ──────────────────────────────────────────────────────────

class SellerReportEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller_id: EntityId
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: list[str]
    bonus: float
