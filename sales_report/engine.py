import logging
import math
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

from pydantic import ValidationError

from sales_report.errors import PolicyConfigurationError, StructuralValidationError
from sales_report.models import (
    EntityId,
    Product,
    SalesData,
    SellerReportEntry,
    SellerStat,
)
from sales_report.policies import ReportPolicies, discounted_price

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 10

_COLLECTIONS = ("products", "sellers", "purchase_records")
_TWO_DP = Decimal("0.01")
_ROUND_PREC = 400


def _validate_data(data: Any) -> SalesData:
    if data is None:
        raise StructuralValidationError("no data supplied")
    if isinstance(data, SalesData):
        raw = {name: getattr(data, name) for name in _COLLECTIONS}
    elif isinstance(data, Mapping):
        raw = data
    else:
        raise StructuralValidationError(f"expected a mapping, got {type(data).__name__}")

    for name in _COLLECTIONS:
        value = raw.get(name)
        if value is None:
            raise StructuralValidationError(f"'{name}' is missing")
        if not isinstance(value, (list, tuple)):
            raise StructuralValidationError(f"'{name}' must be a list")
        if not value:
            raise StructuralValidationError(f"'{name}' is empty")

    if isinstance(data, SalesData):
        return data
    try:
        return SalesData.model_validate(data)
    except ValidationError as exc:
        raise StructuralValidationError(str(exc)) from exc


def _resolve_policy(policies: Any, name: str, alias: str):
    if isinstance(policies, Mapping):
        fn = policies.get(name, policies.get(alias))
    else:
        fn = getattr(policies, name, None)
    if not callable(fn):
        raise PolicyConfigurationError(f"'{name}' must be a callable")
    return fn


def _validate_policies(policies: Any) -> ReportPolicies:
    if policies is None:
        raise PolicyConfigurationError("no policies supplied")
    return ReportPolicies(
        calculate_revenue=_resolve_policy(policies, "calculate_revenue", "calculateRevenue"),
        calculate_bonus=_resolve_policy(policies, "calculate_bonus", "calculateBonus"),
    )


def _round2(value: float) -> float:
    """Round half away from zero on the exact binary value, like JS toFixed(2)."""
    if not math.isfinite(value):
        return value
    # any finite double fits in 309 integer digits plus two decimals
    with localcontext() as ctx:
        ctx.prec = _ROUND_PREC
        return float(Decimal(value).quantize(_TWO_DP, rounding=ROUND_HALF_UP))


def _top_products(stat: SellerStat, products: dict[EntityId, Product]) -> list[str]:
    ranked = sorted(stat.products_sold.items(), key=lambda kv: kv[1], reverse=True)
    names = []
    for product_id, _ in ranked[:TOP_PRODUCTS_LIMIT]:
        product = products.get(product_id)
        names.append(product.name if product is not None else f"Product {product_id}")
    return names


def build_report(data: Any, policies: Any) -> list[SellerReportEntry]:
    """
    Aggregate revenue and profit per seller, rank sellers by profit and
    attach bonus and best-selling products.

    ``data`` is a SalesData or a mapping with ``products``, ``sellers`` and
    ``purchase_records``. ``policies`` supplies ``calculate_revenue`` and
    ``calculate_bonus`` callables. Unknown sellers and products inside the
    records are skipped, never reported as errors.
    """
    sales = _validate_data(data)
    policy = _validate_policies(policies)

    # ── 1. Indexes ───────────────────────────────────────────────────────────
    products: dict[EntityId, Product] = {p.id: p for p in sales.products}
    stats: dict[EntityId, SellerStat] = {
        s.id: SellerStat(id=s.id, name=s.full_name) for s in sales.sellers
    }

    # ── 2. Fold purchase records into per-seller totals ─────────────────────
    for record in sales.purchase_records:
        stat = stats.get(record.seller_id)
        if stat is None:
            logger.debug("Skipping record for unknown seller %r", record.seller_id)
            continue

        stat.sales_count += 1

        for item in record.items:
            product = products.get(item.product_id)
            if product is None:
                logger.debug("Skipping line item for unknown product %r", item.product_id)
                continue

            stat.revenue += discounted_price(item) * item.quantity
            stat.profit += policy.calculate_revenue(item, product)
            stat.products_sold[item.product_id] = (
                stat.products_sold.get(item.product_id, 0) + item.quantity
            )

    # ── 3. Rank, bonus, top products ─────────────────────────────────────────
    ranked = sorted(stats.values(), key=lambda s: s.profit, reverse=True)
    total = len(ranked)

    for index, stat in enumerate(ranked):
        stat.bonus = policy.calculate_bonus(index, total, stat)
        stat.top_products = _top_products(stat, products)

    logger.debug("Built report for %d sellers", total)

    # ── 4. Emit ──────────────────────────────────────────────────────────────
    return [
        SellerReportEntry(
            seller_id=stat.id,
            name=stat.name,
            revenue=_round2(stat.revenue),
            profit=_round2(stat.profit),
            sales_count=stat.sales_count,
            top_products=stat.top_products,
            bonus=_round2(stat.bonus),
        )
        for stat in ranked
    ]
