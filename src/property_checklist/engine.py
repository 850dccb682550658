"""One-pass evaluation: sales insights, checklist and dashboard for a listing."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from property_checklist.checklist import build_checklist, items_for_category
from property_checklist.config import Settings
from property_checklist.logging import evaluation_context, get_logger
from property_checklist.models import (
    ChecklistItem,
    DashboardScoreCategory,
    DashboardScores,
    DataStatus,
    ExtractedPropertyData,
    PremiumData,
    SalesInsights,
)
from property_checklist.sales_insights import calculate_sales_insights
from property_checklist.scoring import calculate_dashboard_scores

logger = get_logger(__name__)


class PropertyEvaluation(BaseModel):
    """Everything the dashboard shows for one listing."""

    model_config = ConfigDict(frozen=True)

    checklist: tuple[ChecklistItem, ...]
    sales_insights: SalesInsights
    dashboard: DashboardScores

    def items_for(self, category: DashboardScoreCategory) -> list[ChecklistItem]:
        return items_for_category(self.checklist, category)

    @property
    def ask_agent_items(self) -> list[ChecklistItem]:
        """Items the buyer should raise with the agent."""
        return [item for item in self.checklist if item.status == DataStatus.ASK_AGENT]


def evaluate_property(
    extracted: ExtractedPropertyData,
    premium: PremiumData | None = None,
    *,
    premium_loading: bool = False,
    settings: Settings | None = None,
) -> PropertyEvaluation:
    """Evaluate a listing end to end.

    Sales insights are computed from the scraped sale history, the checklist
    is built from every source, and the dashboard is scored from the
    checklist. Nothing here performs I/O.

    Args:
        extracted: Scraped listing fields.
        premium: Premium provider data, if available.
        premium_loading: Premium data has been requested but not yet received.
        settings: Runtime settings; only ``reference_date`` is read.

    Returns:
        The checklist, the sales insights and the dashboard scores.
    """
    today = (settings or Settings()).get_reference_date()
    effective_premium = None if premium_loading else premium

    with evaluation_context(
        reference_date=today.isoformat(),
        premium_loading=premium_loading,
        has_premium=effective_premium is not None,
    ):
        sales = calculate_sales_insights(
            extracted.sale_history, extracted.price, current_year=today.year
        )
        checklist = build_checklist(
            extracted,
            effective_premium,
            sales,
            premium_loading=premium_loading,
            today=today,
        )
        dashboard = calculate_dashboard_scores(checklist, effective_premium)

        logger.info(
            "property_evaluated",
            items=len(checklist),
            ask_agent=_count_ask_agent(checklist),
            overall_score=dashboard.overall_score,
            price_discrepancy=sales.reason,
        )
    return PropertyEvaluation(
        checklist=tuple(checklist), sales_insights=sales, dashboard=dashboard
    )


def _count_ask_agent(items: Sequence[ChecklistItem]) -> int:
    return sum(1 for item in items if item.status == DataStatus.ASK_AGENT)
