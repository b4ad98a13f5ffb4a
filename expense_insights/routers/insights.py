import logging

from fastapi import APIRouter, HTTPException, status

from expense_insights.core.config import settings
from expense_insights.models.insights import InsightsReport, InsightsRequest
from expense_insights.utils.currency import CurrencyFormatter
from expense_insights.utils.insights import InsightsEngine

router = APIRouter()
logger = logging.getLogger(__name__)

insights_engine = InsightsEngine(CurrencyFormatter.from_settings(settings))

FALLBACK_REPORT = InsightsReport(
    summary="Basic analysis provided.",
    patterns=["Track expenses regularly"],
    suggestions=["Set monthly spending limits"],
    budget_tips=["Create a realistic budget"],
    concerns=[],
)


@router.post("/insights", response_model=InsightsReport)
def generate_insights_report(request: InsightsRequest) -> InsightsReport:
    """
    Build the insights report for the posted expenses. The month windows are
    anchored on ``reference_date`` when given, today otherwise.
    """
    if len(request.expenses) > settings.MAX_EXPENSES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"At most {settings.MAX_EXPENSES} expenses can be analyzed per request",
        )

    logger.info(f"Generating insights for {len(request.expenses)} expenses")
    try:
        report = insights_engine.generate(request.expenses, request.reference_date)
    except Exception as e:
        logger.error(f"Error generating insights: {str(e)}", exc_info=True)
        return FALLBACK_REPORT.model_copy(deep=True)

    logger.info(f"Insights generated: {len(report.concerns)} concerns")
    return report
