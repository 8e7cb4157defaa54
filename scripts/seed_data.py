"""
Deterministic demo-data generator.

Produces:
  - 12 products (purchase price 50 - 900)
  - 5 sellers
  - 200 purchase records with 1-4 line items each
    - ~50 % of line items carry a 5-30 % discount
    - sale price is a 10-60 % markup on purchase price
  - 2 extra records that reference an unknown seller / unknown product
"""

import random

from sales_report.models import LineItem, Product, PurchaseRecord, Seller
from sales_report.store import DataStore

SEED = 42
RECORD_COUNT = 200

_PRODUCT_NAMES = [
    "Espresso Machine",
    "Burr Grinder",
    "Milk Frother",
    "Pour-Over Kettle",
    "French Press",
    "Moka Pot",
    "Cold Brew Jar",
    "Digital Scale",
    "Tamper",
    "Knock Box",
    "Paper Filters",
    "Descaler Kit",
]

_SELLERS = [
    ("Alexey", "Petrov", "Senior Seller"),
    ("Maria", "Ivanova", "Seller"),
    ("Ivan", "Smirnov", "Seller"),
    ("Olga", "Kuznetsova", "Junior Seller"),
    ("Dmitry", "Volkov", "Junior Seller"),
]


def _line_item(rng: random.Random, product: Product) -> LineItem:
    markup = 1 + rng.uniform(0.10, 0.60)
    discount = rng.choice([5, 10, 15, 20, 25, 30]) if rng.random() < 0.5 else None
    return LineItem(
        product_id=product.id,
        quantity=rng.randint(1, 5),
        sale_price=round(product.purchase_price * markup, 2),
        discount=discount,
    )


def seed(store: DataStore, seed: int = SEED) -> None:
    rng = random.Random(seed)

    # ── catalog ──────────────────────────────────────────────────────────────
    products = [
        Product(
            id=i,
            name=name,
            sku=f"SKU_{i:03d}",
            purchase_price=float(rng.randint(50, 900)),
        )
        for i, name in enumerate(_PRODUCT_NAMES, start=1)
    ]
    for p in products:
        store.add_product(p)

    # ── roster ───────────────────────────────────────────────────────────────
    for i, (first, last, position) in enumerate(_SELLERS, start=1):
        store.add_seller(Seller(
            id=f"seller_{i}",
            first_name=first,
            last_name=last,
            position=position,
            department="Sales",
        ))

    seller_ids = list(store.sellers)
    # skew volume so the ranking is not a coin toss
    weights = [5, 4, 3, 2, 1]

    # ── purchase records ─────────────────────────────────────────────────────
    for n in range(1, RECORD_COUNT + 1):
        picked = rng.sample(products, rng.randint(1, 4))
        items = [_line_item(rng, p) for p in picked]
        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            date=f"2026-01-{rng.randint(1, 31):02d}",
            seller_id=rng.choices(seller_ids, weights=weights)[0],
            customer_id=f"customer_{rng.randint(1, 60)}",
            items=items,
        ))

    # records the report is expected to skip
    store.add_purchase_record(PurchaseRecord(
        receipt_id="receipt_orphan_seller",
        seller_id="seller_unknown",
        items=[_line_item(rng, products[0])],
    ))
    store.add_purchase_record(PurchaseRecord(
        receipt_id="receipt_orphan_product",
        seller_id=seller_ids[0],
        items=[LineItem(product_id=999, quantity=1, sale_price=100.0)],
    ))


if __name__ == "__main__":
    from sales_report.engine import build_report
    from sales_report.policies import DEFAULT_POLICIES

    s = DataStore()
    seed(s)
    for entry in build_report(s.snapshot(), DEFAULT_POLICIES):
        print(entry.model_dump_json())
