from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_insights.models.expense import ExpenseRecord


class InsightsReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    patterns: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    budget_tips: List[str] = Field(default_factory=list, alias="budgetTips")
    concerns: List[str] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class InsightsRequest(BaseModel):
    expenses: List[ExpenseRecord] = Field(default_factory=list)
    reference_date: Optional[date] = None
