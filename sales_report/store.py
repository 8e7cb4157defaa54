import threading
from typing import Optional
from sales_report.models import EntityId, Product, PurchaseRecord, SalesData, Seller


class DataStore:
    def __init__(self) -> None:
        self.products: dict[EntityId, Product] = {}
        self.sellers: dict[EntityId, Seller] = {}
        self.purchase_records: list[PurchaseRecord] = []
        # guards bulk swaps against concurrent snapshots
        self._lock = threading.Lock()

    # ── writes ────────────────────────────────────────────────────────────────

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product

    def add_seller(self, seller: Seller) -> None:
        self.sellers[seller.id] = seller

    def add_purchase_record(self, record: PurchaseRecord) -> None:
        self.purchase_records.append(record)

    def clear(self) -> None:
        with self._lock:
            self.products = {}
            self.sellers = {}
            self.purchase_records = []

    def replace_with(self, other: "DataStore") -> None:
        """Take over another store's contents in one step."""
        products, sellers = other.products.copy(), other.sellers.copy()
        records = list(other.purchase_records)
        with self._lock:
            self.products = products
            self.sellers = sellers
            self.purchase_records = records

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_product(self, product_id: EntityId) -> Optional[Product]:
        return self.products.get(product_id)

    def get_seller(self, seller_id: EntityId) -> Optional[Seller]:
        return self.sellers.get(seller_id)

    def list_products(self) -> list[Product]:
        return list(self.products.values())

    def list_sellers(self) -> list[Seller]:
        return list(self.sellers.values())

    def get_records_for_seller(self, seller_id: EntityId) -> list[PurchaseRecord]:
        return [r for r in self.purchase_records if r.seller_id == seller_id]

    def snapshot(self) -> SalesData:
        """Copy of the current contents, shaped for build_report."""
        with self._lock:
            return SalesData(
                products=self.list_products(),
                sellers=self.list_sellers(),
                purchase_records=list(self.purchase_records),
            )


# module-level singleton used by the app
store = DataStore()
