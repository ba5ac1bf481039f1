import logging
import threading
from datetime import date
from typing import Dict, Optional

from dateutil.relativedelta import relativedelta

from models import DateRange, InvalidDateRange, SummaryData
from reporting import RECENT_TRANSACTIONS_LIMIT, build_summary
from repository import RepositoryError, TransactionRepository

logger = logging.getLogger(__name__)

PRESETS = ('this_month', 'last_month', 'last_3_months', 'this_year', 'all_time')

PRESET_LABELS = {
    'this_month': 'This Month',
    'last_month': 'Last Month',
    'last_3_months': 'Last 3 Months',
    'this_year': 'This Year',
    'all_time': 'All Time',
}


def resolve_preset(preset: str, today: date, repository: Optional[TransactionRepository] = None) -> DateRange:
    """
    Turn a preset name into a concrete range ending today.

    `all_time` starts at the oldest stored record and needs `repository`;
    it falls back to today when there are no records.
    """
    if preset == 'this_month':
        start = today.replace(day=1)
    elif preset == 'last_month':
        start = (today - relativedelta(months=1)).replace(day=1)
    elif preset == 'last_3_months':
        start = today - relativedelta(months=3)
    elif preset == 'this_year':
        start = date(today.year, 1, 1)
    elif preset == 'all_time':
        if repository is None:
            raise ValueError("The all_time preset needs a repository")
        start = repository.earliest_date() or today
        # records dated in the future would otherwise make the range invalid
        start = min(start, today)
    else:
        raise ValueError(f"Unknown date range preset: {preset}")
    return DateRange(start, today)


def default_range(today: date) -> DateRange:
    return DateRange(today - relativedelta(months=1), today)


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat((value or '').strip())
    except ValueError:
        raise InvalidDateRange(f"Invalid date: {value!r}")


def parse_date_range(start: str, end: str) -> DateRange:
    return DateRange(parse_date(start), parse_date(end))


class DashboardState:
    """The active range of one user's dashboard and the last summary computed for it."""

    def __init__(self, date_range: DateRange, recent_limit: int = RECENT_TRANSACTIONS_LIMIT):
        self.date_range = date_range
        self.summary = SummaryData.empty()
        self.recent_limit = recent_limit
        self.loaded = False

    def set_range(self, start_date: date, end_date: date) -> DateRange:
        # DateRange raises InvalidDateRange before the active range is touched
        self.date_range = DateRange(start_date, end_date)
        return self.date_range

    def refresh(self, repository: TransactionRepository) -> bool:
        """
        Recompute the summary for the active range.

        Both collections must load before anything is aggregated. On failure
        the previous summary is kept and False is returned.
        """
        date_range = self.date_range
        try:
            income = repository.fetch_income(date_range)
            expenses = repository.fetch_expenses(date_range)
        except RepositoryError:
            logger.exception("Error fetching dashboard data for %s..%s",
                             date_range.start_date, date_range.end_date)
            return False

        self.summary = build_summary(income, expenses, date_range, self.recent_limit)
        self.loaded = True
        return True


class DashboardStateStore:
    """Per-user dashboard state, kept for the lifetime of the process."""

    def __init__(self, recent_limit: int = RECENT_TRANSACTIONS_LIMIT):
        self.recent_limit = recent_limit
        self._states: Dict[int, DashboardState] = {}
        self._lock = threading.Lock()

    def get(self, user_id: int, today: date) -> DashboardState:
        with self._lock:
            state = self._states.get(user_id)
            if state is None:
                state = DashboardState(default_range(today), self.recent_limit)
                self._states[user_id] = state
            return state

    def discard(self, user_id: int) -> None:
        with self._lock:
            self._states.pop(user_id, None)
