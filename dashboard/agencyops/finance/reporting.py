"""Sales leaderboard and goal progress in the viewer's display currency.

Provides:
- build_sales_stats: Revenue (converted and per currency) and lead counts
- rank_leaderboard: Order employees and assign ranks
- growth / goal_progress: Whole-number percentages
- currency_goal: Goal values converted and formatted for display
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR
from typing import Iterable, Optional

from django_fxmoney.aggregation import aggregate, totals_by_currency
from django_fxmoney.formatting import format_currency
from django_fxmoney.money import Money
from django_fxmoney.rates import RateSnapshot
from django_fxmoney.services import convert_amount

from agencyops.context import RequestContext


def round_half_up(value) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int((Decimal(str(value)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def percent(part, whole) -> int:
    return round_half_up(Decimal(str(part)) / Decimal(str(whole)) * 100)


@dataclass
class SalesStats:
    """One employee's sales figures for a period."""

    employee_id: object
    revenue: Money
    revenue_by_currency: dict = field(default_factory=dict)
    confirmed_clients: int = 0
    leads: int = 0
    won_leads: int = 0

    @property
    def conversion_rate(self) -> int:
        if self.leads <= 0:
            return 0
        return percent(self.won_leads, self.leads)


@dataclass
class LeaderboardEntry:
    stats: SalesStats
    rank: int
    revenue_growth: int = 0
    clients_growth: int = 0


def build_sales_stats(
    employee_id,
    revenue_items: Iterable,
    context: RequestContext,
    confirmed_clients: int = 0,
    leads: int = 0,
    won_leads: int = 0,
    rates: Optional[RateSnapshot] = None,
) -> SalesStats:
    """
    Summarize an employee's revenue in the context's display currency.

    revenue_items are anything aggregate() accepts (service prices, paid
    invoices, ...).
    """
    items = list(revenue_items)
    return SalesStats(
        employee_id=employee_id,
        revenue=aggregate(items, context.display_currency, rates=rates),
        revenue_by_currency=totals_by_currency(items),
        confirmed_clients=confirmed_clients,
        leads=leads,
        won_leads=won_leads,
    )


def growth(current, previous) -> int:
    """
    Percentage change from previous to current.

    A rise from zero counts as 100%; no change from zero is 0%.
    """
    current = Decimal(str(current))
    previous = Decimal(str(previous))
    if previous > 0:
        return percent(current - previous, previous)
    return 100 if current > 0 else 0


def rank_leaderboard(
    stats: Iterable[SalesStats],
    previous: Optional[dict] = None,
) -> list:
    """
    Rank employees by revenue, then confirmed clients, then conversion rate.

    All revenues must be in the same currency. previous maps employee_id to
    the prior period's SalesStats and feeds the growth figures. Ranks start
    at 1; ties keep their input order.
    """
    previous = previous or {}
    ordered = sorted(
        stats,
        key=lambda s: (s.revenue.amount, s.confirmed_clients, s.conversion_rate),
        reverse=True,
    )
    currencies = {s.revenue.currency for s in ordered}
    if len(currencies) > 1:
        raise ValueError(f"Leaderboard revenues are in several currencies: {sorted(currencies)}")

    entries = []
    for rank, entry_stats in enumerate(ordered, start=1):
        before = previous.get(entry_stats.employee_id)
        entries.append(LeaderboardEntry(
            stats=entry_stats,
            rank=rank,
            revenue_growth=growth(
                entry_stats.revenue.amount, before.revenue.amount if before else 0
            ),
            clients_growth=growth(
                entry_stats.confirmed_clients, before.confirmed_clients if before else 0
            ),
        ))
    return entries


def goal_progress(current, target) -> int:
    """Percent of target reached, capped at 100; 0 when target <= 0."""
    target = Decimal(str(target))
    if target <= 0:
        return 0
    return min(100, percent(current or 0, target))


def currency_goal(
    current,
    target,
    goal_currency: str,
    context: RequestContext,
    rates: Optional[RateSnapshot] = None,
) -> dict:
    """Progress of a money goal with both values shown in the display currency."""
    shown_current = convert_amount(current or 0, goal_currency, context.display_currency, rates=rates)
    shown_target = convert_amount(target, goal_currency, context.display_currency, rates=rates)
    return {
        "progress": goal_progress(current, target),
        "current": Money(shown_current, context.display_currency).quantized().to_dict(),
        "target": Money(shown_target, context.display_currency).quantized().to_dict(),
        "currentDisplay": format_currency(shown_current, context.display_currency),
        "targetDisplay": format_currency(shown_target, context.display_currency),
    }
