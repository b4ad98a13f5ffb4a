from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ExpenseCategory(str, Enum):
    # Declaration order is the tie-break order for top-category selection
    FOOD = "FOOD"
    TRANSPORTATION = "TRANSPORTATION"
    SHOPPING = "SHOPPING"
    ENTERTAINMENT = "ENTERTAINMENT"
    BILLS = "BILLS"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    TRAVEL = "TRAVEL"
    GROCERIES = "GROCERIES"
    FITNESS = "FITNESS"
    SUBSCRIPTIONS = "SUBSCRIPTIONS"
    OTHER = "OTHER"


class ExpenseRecord(BaseModel):
    """A single logged expense as handed over by the persistence layer."""

    amount: float = 0.0
    category: Optional[str] = None
    date: Optional[Union[datetime, date_type]] = None

    # Carried through from the store, not used for insights
    title: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    payment_method: Optional[str] = None
    is_recurring: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_or_zero(cls, value):
        if value is None:
            return 0.0
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value):
        if isinstance(value, ExpenseCategory):
            return value.value
        if isinstance(value, str):
            return value.strip().upper() or None
        return value
