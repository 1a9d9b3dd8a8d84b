"""Order funnel and cost model for the e-commerce profit calculator.

``compute`` turns a CalculatorInputs record into a CalculatedResults record and
``distribute`` turns those results into the chartable list of expense
components. Both are pure: no caching, no mutation of their argument.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, List

import pandas as pd

logger = logging.getLogger(__name__)

COLORS = ['#4F46E5', '#EF4444', '#F59E0B', '#10B981', '#6366F1', '#8B5CF6', '#EC4899']


# --- Records ---
@dataclass(frozen=True)
class CalculatorInputs:
    totalOrders: float
    cancelledOverCall: float
    rtoPercentage: float
    sellingPrice: float
    productCost: float
    adCostPerOrder: float
    adGstPercentage: float
    shippingCost: float
    rtoShippingCost: float
    productDamageRtoPercentage: float
    packingCost: float
    miscellaneous: float

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, values):
        # Session state may hold a stale dict; unknown keys are ignored
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass(frozen=True)
class CalculatedResults:
    orderToBeShipped: float
    rtoCount: float
    deliveredOrders: float
    totalRevenue: float
    totalProductCost: float
    totalAdCost: float
    totalShippingCost: float
    totalRtoShipping: float
    totalDamageLoss: float
    totalPackingCost: float
    totalMiscellaneous: float
    totalExpenses: float
    netProfit: float
    profitMargin: float


@dataclass(frozen=True)
class ChartDatum:
    name: str
    value: float
    color: str
    percentageOfRevenue: float
    percentageOfExpenses: float


# (label, CalculatedResults attribute), in chart order
EXPENSE_COMPONENTS = [
    ('Product', 'totalProductCost'),
    ('Ads', 'totalAdCost'),
    ('Forward Shipping', 'totalShippingCost'),
    ('RTO Shipping', 'totalRtoShipping'),
    ('Packing', 'totalPackingCost'),
    ('RTO Loss', 'totalDamageLoss'),
    ('Misc', 'totalMiscellaneous'),
]


# --- Default Parameters ---
def get_default_inputs() -> CalculatorInputs:
    return CalculatorInputs(
        totalOrders=10,
        cancelledOverCall=0,
        rtoPercentage=10,
        sellingPrice=600,
        productCost=100,
        adCostPerOrder=100,
        adGstPercentage=18,
        shippingCost=50,
        rtoShippingCost=72,
        productDamageRtoPercentage=0,
        packingCost=10,
        miscellaneous=5,
    )


# --- Calculation Logic ---
def compute(inputs: CalculatorInputs) -> CalculatedResults:
    """Derive the funnel counts and the full cost/profit breakdown.

    Total over every real input: counts are clamped at zero and margin is 0
    when there is no revenue. Counts are expectations and stay fractional.
    """
    # Funnel: placed -> shipped -> delivered
    order_to_be_shipped = max(0, inputs.totalOrders - inputs.cancelledOverCall)
    rto_count = order_to_be_shipped * (inputs.rtoPercentage / 100)
    delivered_orders = max(0, order_to_be_shipped - rto_count)

    total_revenue = delivered_orders * inputs.sellingPrice

    total_product_cost = delivered_orders * inputs.productCost
    total_damage_loss = rto_count * inputs.productCost * (inputs.productDamageRtoPercentage / 100)
    # Ads are paid on every order attempt, cancellations and RTOs included
    total_ad_cost = inputs.totalOrders * inputs.adCostPerOrder * (1 + inputs.adGstPercentage / 100)
    total_shipping_cost = order_to_be_shipped * inputs.shippingCost
    total_rto_shipping = rto_count * inputs.rtoShippingCost
    total_packing_cost = order_to_be_shipped * inputs.packingCost
    total_miscellaneous = inputs.miscellaneous

    total_expenses = (
        total_product_cost + total_ad_cost + total_shipping_cost +
        total_rto_shipping + total_damage_loss + total_packing_cost + total_miscellaneous
    )

    net_profit = total_revenue - total_expenses
    profit_margin = (net_profit / total_revenue) * 100 if total_revenue > 0 else 0

    logger.debug("Computed net profit %.2f on revenue %.2f", net_profit, total_revenue)

    return CalculatedResults(
        orderToBeShipped=order_to_be_shipped,
        rtoCount=rto_count,
        deliveredOrders=delivered_orders,
        totalRevenue=total_revenue,
        totalProductCost=total_product_cost,
        totalAdCost=total_ad_cost,
        totalShippingCost=total_shipping_cost,
        totalRtoShipping=total_rto_shipping,
        totalDamageLoss=total_damage_loss,
        totalPackingCost=total_packing_cost,
        totalMiscellaneous=total_miscellaneous,
        totalExpenses=total_expenses,
        netProfit=net_profit,
        profitMargin=profit_margin,
    )


def distribute(results: CalculatedResults) -> List[ChartDatum]:
    """Positive expense components in declaration order, with shares.

    Colours index the palette by position in the filtered list, so a component
    can change colour when an earlier one drops to zero.
    """
    entries = [(name, getattr(results, attr)) for name, attr in EXPENSE_COMPONENTS]
    entries = [(name, value) for name, value in entries if value > 0]

    revenue = results.totalRevenue
    expenses = results.totalExpenses
    return [
        ChartDatum(
            name=name,
            value=value,
            color=COLORS[index % len(COLORS)],
            percentageOfRevenue=(value / revenue) * 100 if revenue > 0 else 0,
            percentageOfExpenses=(value / expenses) * 100 if expenses > 0 else 0,
        )
        for index, (name, value) in enumerate(entries)
    ]


def distribution_frame(chart_data: List[ChartDatum]) -> pd.DataFrame:
    """Tabular view of the distribution for the detailed breakdown table."""
    columns = ['Component', 'Amount', '% of Revenue', '% of Expenses']
    rows = [
        [d.name, d.value, d.percentageOfRevenue, d.percentageOfExpenses]
        for d in chart_data
    ]
    return pd.DataFrame(rows, columns=columns)


# --- Form helpers ---
def coerce_number(raw: Any) -> float:
    """Coerce a form value to a float; anything unparseable becomes 0."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else 0.0
    text = str(raw if raw is not None else '').strip().replace(',', '')
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        logger.warning("Could not parse %r as a number, using 0", raw)
        return 0.0
    if not math.isfinite(value):
        logger.warning("Non-finite value %r, using 0", raw)
        return 0.0
    return value


def update_inputs(inputs: CalculatorInputs, field: str, raw: Any) -> CalculatorInputs:
    """Return a copy of ``inputs`` with ``field`` set to the coerced ``raw``."""
    if field not in {f.name for f in fields(CalculatorInputs)}:
        raise KeyError(f"Unknown input field: {field}")
    return replace(inputs, **{field: coerce_number(raw)})
