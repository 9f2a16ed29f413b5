from finance_ledger.models.user import User
from finance_ledger.models.account import Account
from finance_ledger.models.category import Category
from finance_ledger.models.transaction import Transaction
from finance_ledger.models.budget import Budget
from finance_ledger.models.goal import Goal

__all__ = ["User", "Account", "Category", "Transaction", "Budget", "Goal"]
