from enum import Enum


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"
    transfer = "transfer"


class CategoryType(str, Enum):
    income = "income"
    expense = "expense"


class AccountType(str, Enum):
    day_to_day = "day-to-day"
    fixed_deposit = "fixed-deposit"


class GoalPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class GoalStatus(str, Enum):
    active = "active"
    completed = "completed"
    paused = "paused"


class UtilizationStatus(str, Enum):
    safe = "safe"
    warning = "warning"
    exceeded = "exceeded"
