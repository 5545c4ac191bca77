import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from budgetr import projector
from budgetr.categories import category_breakdown, top_categories
from budgetr.domain import CategoryShare, DashboardSummary, ExpenditureRecord, GoalInput, GoalProjection, Settings
from budgetr.errors import InvalidInput
from budgetr.frequency import parse_frequency
from budgetr.functional import parse_amount, validate_record
from budgetr.stores import (
    CURRENT_SAVINGS_KEY,
    FREQUENCY_KEY,
    NET_MONTHLY_INCOME_KEY,
    RecordStore,
    SettingsStore,
    read_settings,
)
from budgetr.transforms import parse_record, sort_by_priority

logger = logging.getLogger(__name__)


class BudgetService:
    """Facade over injected stores.

    Every call reads a fresh snapshot from the stores and hands plain values
    to the pure projector functions; nothing is cached between calls.
    """

    def __init__(self, settings_store: SettingsStore, record_store: RecordStore):
        self.settings_store = settings_store
        self.record_store = record_store

    # --- settings

    def settings(self) -> Settings:
        return read_settings(self.settings_store)

    def set_frequency(self, value: str) -> None:
        if parse_frequency(value) is None:
            logger.warning("unknown frequency %r stored; amounts will display monthly", value)
        self.settings_store.set(FREQUENCY_KEY, value)

    def update_settings(self, net_monthly_income: Any = None, current_savings: Any = None) -> Settings:
        """Store income/savings; unparseable input is saved as 0."""
        if net_monthly_income is not None:
            self.settings_store.set(NET_MONTHLY_INCOME_KEY, parse_amount(net_monthly_income).get_or_else(0.0))
        if current_savings is not None:
            self.settings_store.set(CURRENT_SAVINGS_KEY, parse_amount(current_savings).get_or_else(0.0))
        settings = self.settings()
        logger.info(
            "settings updated: net income %.2f, savings %.2f",
            settings.net_monthly_income, settings.current_savings,
        )
        return settings

    # --- expenditures

    def add_expenditure(self, raw: Dict[str, Any], now: Optional[datetime] = None) -> ExpenditureRecord:
        checked = validate_record(parse_record(raw, now))
        if checked.is_left():
            logger.warning("expenditure rejected: %s", checked.get_error()["message"])
            raise InvalidInput(checked.get_error())

        record = checked.get_or_else(None)
        self.record_store.add(record)
        logger.info("expenditure %s added: %s %.2f (%s)", record.id, record.description, record.amount, record.category)
        return record

    def delete_expenditure(self, record_id: str) -> None:
        self.record_store.delete(record_id)
        logger.info("expenditure %s deleted", record_id)

    def expenditures(self) -> Tuple[ExpenditureRecord, ...]:
        return sort_by_priority(self.record_store.snapshot())

    # --- derived numbers

    def dashboard(self, now: Optional[datetime] = None) -> DashboardSummary:
        return projector.dashboard_summary(self.record_store.snapshot(), self.settings(), now)

    def categories(self) -> List[CategoryShare]:
        return category_breakdown(self.record_store.snapshot(), self.settings().frequency)

    def top_categories(self, k: int = 3) -> List[Tuple[str, float]]:
        return list(top_categories(self.record_store.snapshot(), k))

    def monthly_totals(self, now: Optional[datetime] = None) -> Dict[str, float]:
        return projector.monthly_totals(self.record_store.snapshot(), now)

    def project_goal(
        self,
        target_amount: Any,
        target_date: Any,
        use_average_expenses: bool = False,
        now: Optional[datetime] = None,
    ) -> GoalProjection:
        settings = self.settings()
        goal = GoalInput(
            target_amount=target_amount,
            target_date=target_date,
            current_savings=settings.current_savings,
            net_monthly_income=settings.net_monthly_income,
            use_average_expenses=use_average_expenses,
        )
        try:
            return projector.project_goal(goal, self.record_store.snapshot(), now)
        except InvalidInput as e:
            logger.warning("goal rejected (%s): %s", e.code, e)
            raise
