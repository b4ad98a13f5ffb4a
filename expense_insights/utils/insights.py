from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

from expense_insights.models.expense import ExpenseCategory
from expense_insights.models.insights import InsightsReport
from expense_insights.utils.currency import CurrencyFormatter

logger = logging.getLogger(__name__)

MAX_PATTERNS = 4
MAX_SUGGESTIONS = 4

HIGH_SPEND_THRESHOLD = 10000
DAILY_AVERAGE_LIMIT = 500

CATEGORY_ADVICE: Dict[ExpenseCategory, str] = {
    ExpenseCategory.FOOD: "meal planning and cooking at home",
    ExpenseCategory.TRANSPORTATION: "carpooling or using public transport",
    ExpenseCategory.SHOPPING: "creating shopping lists and avoiding impulse buys",
    ExpenseCategory.ENTERTAINMENT: "finding free or low-cost activities",
    ExpenseCategory.SUBSCRIPTIONS: "reviewing and canceling unused subscriptions",
    ExpenseCategory.GROCERIES: "buying in bulk and comparing prices",
    ExpenseCategory.FITNESS: "exploring free workout options or home exercises",
}

_CATEGORY_RANK = {category.value: rank for rank, category in enumerate(ExpenseCategory)}


@dataclass
class SpendingAggregates:
    """Figures derived from one expense list relative to a reference date."""

    reference_date: date
    total_expenses: float = 0.0
    transaction_count: int = 0
    this_month_total: float = 0.0
    this_month_count: int = 0
    last_month_total: float = 0.0
    last_month_count: int = 0
    average_transaction: float = 0.0
    category_totals: Dict[str, float] = field(default_factory=dict)
    category_counts: Dict[str, int] = field(default_factory=dict)
    top_category: Optional[str] = None
    monthly_change: float = 0.0
    change_percent: float = 0.0
    weekend_count: int = 0
    weekend_total: float = 0.0
    daily_average: float = 0.0
    has_subscriptions: bool = False
    large_expense_count: int = 0

    @property
    def category_count(self) -> int:
        return len(self.category_totals)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reference_date"] = self.reference_date.isoformat()
        data["category_count"] = self.category_count
        return data


def month_windows(reference_date: date):
    """Return (this_month_start, last_month_start, last_month_end)."""
    this_month_start = reference_date.replace(day=1)
    last_month_end = this_month_start - timedelta(days=1)
    last_month_start = last_month_end.replace(day=1)
    return this_month_start, last_month_start, last_month_end


def _read(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _amount(record: Any) -> float:
    value = _read(record, "amount")
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def _category(record: Any) -> Optional[str]:
    value = _read(record, "category")
    if isinstance(value, ExpenseCategory):
        return value.value
    if isinstance(value, str):
        return value.strip().upper() or None
    return None


def _expense_date(record: Any) -> Optional[date]:
    value = _read(record, "date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def _round_percent(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def readable_category(category: str) -> str:
    return category[:1] + category[1:].lower().replace("_", " ")


class InsightsEngine:
    """
    Derives a spending report from a list of expense records. Records may be
    ExpenseRecord models, plain dicts or any object exposing ``amount``,
    ``category`` and ``date``; only those three fields are read.
    """

    def __init__(self, formatter: Optional[CurrencyFormatter] = None) -> None:
        self._formatter = formatter or CurrencyFormatter()

    @property
    def formatter(self) -> CurrencyFormatter:
        return self._formatter

    def aggregate(
        self,
        expenses: Iterable[Any],
        reference_date: Optional[date] = None,
    ) -> SpendingAggregates:
        reference_date = _as_date(reference_date)
        this_month_start, last_month_start, last_month_end = month_windows(reference_date)

        records = list(expenses or [])
        stats = SpendingAggregates(reference_date=reference_date)
        stats.transaction_count = len(records)

        for record in records:
            amount = _amount(record)
            stats.total_expenses += amount

            category = _category(record)
            if category is not None:
                stats.category_totals[category] = stats.category_totals.get(category, 0.0) + amount
                stats.category_counts[category] = stats.category_counts.get(category, 0) + 1
                if category == ExpenseCategory.SUBSCRIPTIONS.value:
                    stats.has_subscriptions = True

            spent_on = _expense_date(record)
            if spent_on is None:
                continue
            if spent_on >= this_month_start:
                stats.this_month_total += amount
                stats.this_month_count += 1
                if spent_on.weekday() >= 5:
                    stats.weekend_count += 1
                    stats.weekend_total += amount
            elif last_month_start <= spent_on <= last_month_end:
                stats.last_month_total += amount
                stats.last_month_count += 1

        if stats.transaction_count:
            stats.average_transaction = stats.total_expenses / stats.transaction_count

        stats.top_category = self._top_category(stats.category_totals)
        stats.monthly_change = stats.this_month_total - stats.last_month_total
        if stats.last_month_total > 0:
            stats.change_percent = _round_percent(
                abs(stats.monthly_change / stats.last_month_total) * 100
            )
        stats.daily_average = stats.this_month_total / reference_date.day

        for record in records:
            category = _category(record)
            if category is None:
                continue
            category_average = stats.category_totals[category] / stats.category_counts[category]
            if _amount(record) > category_average * 2:
                stats.large_expense_count += 1

        logger.debug(
            f"Aggregated {stats.transaction_count} expenses: total={stats.total_expenses}, "
            f"this_month={stats.this_month_total}, last_month={stats.last_month_total}, "
            f"top_category={stats.top_category}"
        )
        return stats

    @staticmethod
    def _top_category(category_totals: Dict[str, float]) -> Optional[str]:
        if not category_totals:
            return None
        first_seen = list(category_totals)
        unknown_base = len(_CATEGORY_RANK)

        def rank(category: str):
            order = _CATEGORY_RANK.get(category, unknown_base + first_seen.index(category))
            return (-category_totals[category], order)

        return min(category_totals, key=rank)

    def generate(
        self,
        expenses: Iterable[Any],
        reference_date: Optional[date] = None,
    ) -> InsightsReport:
        stats = self.aggregate(expenses, reference_date)
        return InsightsReport(
            summary=self.summary(stats),
            patterns=self.patterns(stats),
            suggestions=self.suggestions(stats),
            budget_tips=self.budget_tips(stats),
            concerns=self.concerns(stats),
        )

    def summary(self, stats: SpendingAggregates) -> str:
        text = (
            f"You've spent {self._formatter.format(stats.total_expenses)} "
            f"across {stats.transaction_count} transactions."
        )
        if stats.last_month_total > 0:
            direction = "increased" if stats.monthly_change >= 0 else "decreased"
            text += (
                f" Your spending {direction} by {stats.change_percent:.1f}% "
                "compared to last month."
            )
        elif stats.transaction_count > 0:
            text += " Keep tracking your expenses to build better financial habits."
        return text

    def patterns(self, stats: SpendingAggregates) -> List[str]:
        """First applicable observations in fixed priority order, capped at four."""
        patterns: List[str] = []

        if stats.top_category:
            patterns.append(
                f"Your highest spending is in {readable_category(stats.top_category)} category"
            )

        if stats.average_transaction > 0:
            patterns.append(
                f"Your average transaction is {self._formatter.format(stats.average_transaction)}"
            )

        if stats.monthly_change > 0:
            patterns.append("Your spending has increased this month")
        elif stats.monthly_change < 0:
            patterns.append("Your spending has decreased this month - great job!")
        else:
            patterns.append("Your spending is consistent with last month")

        if stats.category_count > 5:
            patterns.append(f"You have diverse spending across {stats.category_count} categories")
        elif stats.category_count > 2:
            patterns.append(f"Your spending is spread across {stats.category_count} main categories")
        elif stats.category_count > 0:
            patterns.append("Your spending is concentrated in a few categories")

        return patterns[:MAX_PATTERNS]

    def suggestions(self, stats: SpendingAggregates) -> List[str]:
        suggestions: List[str] = []

        if stats.top_category in _CATEGORY_RANK:
            advice = CATEGORY_ADVICE.get(ExpenseCategory(stats.top_category))
            if advice:
                suggestions.append(
                    f"Consider {advice} to reduce {stats.top_category.lower()} expenses"
                )

        if stats.monthly_change > 0 and stats.change_percent > 20:
            suggestions.append("Review recent large purchases and evaluate if they were necessary")
            suggestions.append("Set spending alerts to stay within your monthly budget")

        suggestions.append("Track expenses daily to build awareness of spending habits")

        if stats.has_subscriptions:
            suggestions.append("Review all subscriptions - cancel services you rarely use")

        if stats.large_expense_count > 0:
            suggestions.append("Plan for large expenses in advance to avoid budget surprises")

        return suggestions[:MAX_SUGGESTIONS]

    def budget_tips(self, stats: SpendingAggregates) -> List[str]:
        tips = [
            "Follow the 50/30/20 rule: 50% needs, 30% wants, 20% savings",
            "Set up automatic transfers to your savings account each month",
            "Create category-wise monthly budgets to control spending",
        ]

        if stats.this_month_total > HIGH_SPEND_THRESHOLD:
            tips.append("Consider opening a high-yield savings account for better returns")
        else:
            tips.append("Build an emergency fund with 3-6 months of expenses")

        if stats.category_count > 5:
            tips.append("Use the envelope method to allocate cash for different categories")

        return tips

    def concerns(self, stats: SpendingAggregates) -> List[str]:
        concerns: List[str] = []

        if stats.monthly_change > stats.last_month_total * 0.3 and stats.last_month_total > 0:
            concerns.append(
                "⚠️ Spending increased by more than 30% - review recent purchases carefully"
            )

        if (
            stats.average_transaction > stats.total_expenses * 0.4
            and stats.transaction_count < 5
        ):
            concerns.append("⚠️ Large transactions detected - ensure these align with your budget")

        if stats.daily_average > DAILY_AVERAGE_LIMIT and stats.this_month_count > 5:
            concerns.append(
                f"💡 Your daily spending average is {self._formatter.format(stats.daily_average)}"
                " - consider setting a daily limit"
            )

        if (
            stats.weekend_count > stats.this_month_count * 0.4
            and stats.weekend_total > stats.this_month_total * 0.5
        ):
            concerns.append(
                "📊 Over 50% of spending occurs on weekends - plan weekend activities on a budget"
            )

        return concerns


def _as_date(value: Optional[date]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def generate_insights(
    expenses: Iterable[Any],
    reference_date: Optional[date] = None,
    formatter: Optional[CurrencyFormatter] = None,
) -> InsightsReport:
    return InsightsEngine(formatter).generate(expenses, reference_date)
