from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

GROUPINGS = ("indian", "western")


class CurrencyFormatter:
    """
    Renders amounts as whole currency units for report text,
    e.g. ``₹1,23,456`` (indian grouping) or ``$123,456`` (western grouping).
    """

    def __init__(self, symbol: str = "₹", grouping: str = "indian") -> None:
        if grouping not in GROUPINGS:
            raise ValueError(f"Unsupported digit grouping: {grouping!r}")
        self.symbol = symbol
        self.grouping = grouping

    @classmethod
    def from_settings(cls, settings: Any) -> "CurrencyFormatter":
        return cls(symbol=settings.CURRENCY_SYMBOL, grouping=settings.CURRENCY_GROUPING)

    @staticmethod
    def whole_units(amount: float) -> int:
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            return 0
        if not value.is_finite():
            return 0
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def group_digits(self, digits: str) -> str:
        if len(digits) <= 3:
            return digits
        head, tail = digits[:-3], digits[-3:]
        size = 2 if self.grouping == "indian" else 3
        groups = []
        while len(head) > size:
            groups.insert(0, head[-size:])
            head = head[:-size]
        groups.insert(0, head)
        return ",".join(groups + [tail])

    def format(self, amount: float) -> str:
        units = self.whole_units(amount)
        sign = "-" if units < 0 else ""
        return f"{sign}{self.symbol}{self.group_digits(str(abs(units)))}"

    def __repr__(self) -> str:
        return f"CurrencyFormatter(symbol={self.symbol!r}, grouping={self.grouping!r})"
