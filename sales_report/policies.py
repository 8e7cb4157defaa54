from typing import Callable, NamedTuple

from sales_report.models import LineItem, Product, SellerStat

RevenuePolicy = Callable[[LineItem, Product], float]
BonusPolicy = Callable[[int, int, SellerStat], float]

# Bonus share of profit by rank tier
_TOP_RATE = 0.15
_PODIUM_RATE = 0.10
_DEFAULT_RATE = 0.05


def discounted_price(item: LineItem) -> float:
    """Unit sale price after the line item's percentage discount."""
    return item.sale_price * (1 - (item.discount or 0) / 100)


def calculate_simple_revenue(item: LineItem, product: Product) -> float:
    """Profit of one line item: discounted price minus cost, times quantity."""
    return (discounted_price(item) - product.purchase_price) * item.quantity


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStat) -> float:
    # order matters: a sole seller is both first and last and gets the top rate
    if index == 0:
        return seller.profit * _TOP_RATE
    if index in (1, 2):
        return seller.profit * _PODIUM_RATE
    if index == total - 1:
        return 0.0
    return seller.profit * _DEFAULT_RATE


class ReportPolicies(NamedTuple):
    calculate_revenue: RevenuePolicy
    calculate_bonus: BonusPolicy


DEFAULT_POLICIES = ReportPolicies(
    calculate_revenue=calculate_simple_revenue,
    calculate_bonus=calculate_bonus_by_profit,
)
