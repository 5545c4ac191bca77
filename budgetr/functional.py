import math
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Generic, TypeVar

from budgetr.domain import ExpenditureRecord, GoalInput

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


# --- Parsing helpers: bad input becomes Nothing, never an exception

def parse_amount(value: Any) -> Maybe[float]:
    if value is None or isinstance(value, bool):
        return Nothing()
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return Nothing()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return Nothing()
    if math.isnan(number) or math.isinf(number):
        return Nothing()
    return Some(number)


def parse_datetime(value: Any) -> Maybe[datetime]:
    """Accept datetime, date or ISO-8601 text (a trailing "Z" is allowed).

    Timezone-aware values are converted to naive local time so that every
    datetime in the core compares the same way.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return Nothing()
    else:
        return Nothing()

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return Some(parsed)


# --- Validators returning Either[dict, value]

def validate_goal(goal: GoalInput) -> Either[dict, GoalInput]:
    amount = parse_amount(goal.target_amount).get_or_else(0.0)
    if amount <= 0:
        return Left({
            "error": "invalid_goal_amount",
            "message": "Goal amount must be a positive number",
            "value": goal.target_amount,
        })

    if goal.target_date is None or goal.target_date == "":
        return Left({
            "error": "missing_goal_date",
            "message": "Goal date is required",
        })

    target = parse_datetime(goal.target_date)
    if target.is_none():
        return Left({
            "error": "invalid_goal_date",
            "message": f"Goal date {goal.target_date!r} is not a valid date",
            "value": goal.target_date,
        })

    return Right(replace(
        goal,
        target_amount=amount,
        target_date=target.get_or_else(None),
        current_savings=parse_amount(goal.current_savings).get_or_else(0.0),
        net_monthly_income=parse_amount(goal.net_monthly_income).get_or_else(0.0),
    ))


def validate_record(record: ExpenditureRecord) -> Either[dict, ExpenditureRecord]:
    if not record.description.strip():
        return Left({
            "error": "missing_description",
            "message": "Expenditure needs a description",
        })
    if not record.amount or record.amount < 0:
        return Left({
            "error": "invalid_amount",
            "message": "Expenditure amount must be a positive number",
            "value": record.amount,
        })
    return Right(record)
