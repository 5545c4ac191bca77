"""Storage collaborators consumed by the budget core.

The projector never reads a store itself. Callers take a snapshot (or read
settings) and pass plain values in. The in-memory stores here are the
reference implementations used by the app and the tests.
"""
import logging
from typing import Any, Dict, Optional, Protocol, Tuple

from budgetr.domain import ExpenditureRecord, Settings
from budgetr.events import EXPENDITURES_UPDATED, FREQUENCY_CHANGED, SETTINGS_CHANGED, EventBus
from budgetr.transforms import add_record, delete_record, parse_settings

logger = logging.getLogger(__name__)

FREQUENCY_KEY = "frequency"
NET_MONTHLY_INCOME_KEY = "netMonthlyIncome"
CURRENT_SAVINGS_KEY = "currentSavings"


class SettingsStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class RecordStore(Protocol):
    def snapshot(self) -> Tuple[ExpenditureRecord, ...]: ...

    def add(self, record: ExpenditureRecord) -> None: ...

    def delete(self, record_id: str) -> None: ...


def read_settings(store: SettingsStore) -> Settings:
    return parse_settings({
        FREQUENCY_KEY: store.get(FREQUENCY_KEY),
        NET_MONTHLY_INCOME_KEY: store.get(NET_MONTHLY_INCOME_KEY),
        CURRENT_SAVINGS_KEY: store.get(CURRENT_SAVINGS_KEY),
    })


class InMemorySettingsStore:

    def __init__(self, initial: Optional[Dict[str, Any]] = None, bus: Optional[EventBus] = None):
        self._values: Dict[str, Any] = dict(initial or {})
        self._bus = bus

    def get(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        previous = self._values.get(key)
        self._values[key] = value
        if previous == value or self._bus is None:
            return
        payload = {"key": key, "value": value, "previous": previous}
        self._bus.publish(SETTINGS_CHANGED, payload)
        if key == FREQUENCY_KEY:
            self._bus.publish(FREQUENCY_CHANGED, payload)


class InMemoryRecordStore:
    """Holds an immutable tuple; every change swaps in a new one."""

    def __init__(self, records: Tuple[ExpenditureRecord, ...] = (), bus: Optional[EventBus] = None):
        self._records = tuple(records)
        self._bus = bus

    def snapshot(self) -> Tuple[ExpenditureRecord, ...]:
        return self._records

    def add(self, record: ExpenditureRecord) -> None:
        self._records = add_record(self._records, record)
        self._notify("add", record.id)

    def delete(self, record_id: str) -> None:
        remaining = delete_record(self._records, record_id)
        if len(remaining) == len(self._records):
            logger.warning("delete of unknown expenditure %s ignored", record_id)
            return
        self._records = remaining
        self._notify("delete", record_id)

    def _notify(self, action: str, record_id: str) -> None:
        if self._bus is not None:
            self._bus.publish(EXPENDITURES_UPDATED, {"action": action, "id": record_id, "count": len(self._records)})
