from finance_ledger.models.enums import CategoryType

# Label stamped on every transfer regardless of what the caller sends
TRANSFER_CATEGORY = "Transfer"

DEFAULT_CATEGORIES = [
    {"name": "Salary", "type": CategoryType.income},
    {"name": "Freelance", "type": CategoryType.income},
    {"name": "Investments", "type": CategoryType.income},
    {"name": "Other Income", "type": CategoryType.income},
    {"name": "Food & Dining", "type": CategoryType.expense},
    {"name": "Transportation", "type": CategoryType.expense},
    {"name": "Utilities", "type": CategoryType.expense},
    {"name": "Entertainment", "type": CategoryType.expense},
    {"name": "Shopping", "type": CategoryType.expense},
    {"name": "Healthcare", "type": CategoryType.expense},
    {"name": "Education", "type": CategoryType.expense},
    {"name": "Bills & Fees", "type": CategoryType.expense},
    {"name": "Savings", "type": CategoryType.expense},
    {"name": "Other", "type": CategoryType.expense},
]
