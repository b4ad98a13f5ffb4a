"""
expense_insights
~~~~~~~~~~~~~~~~

Spending insights for the personal expense tracker. The InsightsEngine turns a
list of expense records into a plain-language report (summary, patterns,
suggestions, budget tips and concerns) and is shared by the FastAPI handler
and any other caller that already holds the expense list.
"""

from .utils.currency import CurrencyFormatter
from .utils.insights import InsightsEngine, SpendingAggregates, generate_insights

__all__ = ["CurrencyFormatter", "InsightsEngine", "SpendingAggregates", "generate_insights"]
