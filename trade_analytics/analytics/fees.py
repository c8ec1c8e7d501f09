"""
Fee analytics: totals, maker/taker composition, fee drag on profit,
cumulative fee series and a maker-only savings estimate.
"""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence

from trade_analytics.core.types import Outcome, Trade, sort_by_time

# Assumed maker fee as a fraction of what was actually paid.
DEFAULT_MAKER_FEE_RATIO = 0.5


@dataclass
class FeeBreakdown:
    total_fees: float
    maker_fees: float
    taker_fees: float
    maker_pct: float
    taker_pct: float


@dataclass
class CumulativeFeePoint:
    timestamp: datetime
    fees: float


@dataclass
class FeeSavingsEstimate:
    current_fees: float
    potential_fees_if_all_maker: float
    potential_savings: float
    savings_pct: float


def total_fees(trades: Iterable[Trade]) -> float:
    return sum(t.fees for t in trades)


def total_volume(trades: Iterable[Trade]) -> float:
    return sum(t.volume for t in trades)


def average_fee_per_trade(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return total_fees(trades) / len(trades)


def fee_composition(trades: Iterable[Trade]) -> FeeBreakdown:
    """Maker vs taker totals from each trade's fee split; missing parts count as 0."""
    maker = 0.0
    taker = 0.0
    for t in trades:
        maker += t.maker_fee or 0.0
        taker += t.taker_fee or 0.0
    total = maker + taker
    return FeeBreakdown(
        total_fees=total,
        maker_fees=maker,
        taker_fees=taker,
        maker_pct=maker / total * 100.0 if total > 0 else 0.0,
        taker_pct=taker / total * 100.0 if total > 0 else 0.0,
    )


def fee_to_profit_ratio(trades: Sequence[Trade]) -> float:
    """Total fees as percent of gross profit from winning trades. 0 without gross profit."""
    gross_profit = sum(t.pnl for t in trades if t.outcome is Outcome.WIN)
    if gross_profit == 0:
        return 0.0
    return total_fees(trades) / gross_profit * 100.0


def cumulative_fees(trades: Iterable[Trade]) -> List[CumulativeFeePoint]:
    """Running fee total in chronological order."""
    running = 0.0
    series = []
    for t in sort_by_time(trades):
        running += t.fees
        series.append(CumulativeFeePoint(t.timestamp, running))
    return series


def fees_by_symbol(trades: Iterable[Trade]) -> "OrderedDict[str, float]":
    by_symbol: "OrderedDict[str, float]" = OrderedDict()
    for t in trades:
        by_symbol[t.symbol] = by_symbol.get(t.symbol, 0.0) + t.fees
    return by_symbol


def estimate_fee_savings(
    trades: Iterable[Trade],
    maker_fee_ratio: float = DEFAULT_MAKER_FEE_RATIO,
) -> FeeSavingsEstimate:
    """
    Hypothetical fees had every order been a maker order, priced at a flat
    maker_fee_ratio of the fees actually paid. Per-trade order types are ignored.
    """
    current = total_fees(trades)
    potential = current * maker_fee_ratio
    savings = current - potential
    return FeeSavingsEstimate(
        current_fees=current,
        potential_fees_if_all_maker=potential,
        potential_savings=savings,
        savings_pct=savings / current * 100.0 if current > 0 else 0.0,
    )
