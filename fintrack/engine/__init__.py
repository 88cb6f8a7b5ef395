from .errors import (
    FinanceError,
    InvalidCategory,
    InvalidDateRange,
    InvalidGoal,
    InvalidRequest,
    InvalidTransaction,
    RecordNotFound,
    ReferentialIntegrityViolation,
)
from .filters import ALL_TIME, DateRange, TransactionFilter, build_filter, parse_date
from .aggregation import breakdown_by_category, daily_totals, goal_progress, summarize, weekly_rollup
from .records import (
    EXPENSE,
    INCOME,
    KINDS,
    CategoryTotal,
    DailyTotal,
    GoalProgress,
    Summary,
    TransactionRecord,
    WeeklyRollup,
)
