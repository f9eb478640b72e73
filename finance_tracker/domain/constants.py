"""Domain constants for transactions, subscriptions, and categories."""

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_KINDS = (INCOME, EXPENSE)

MONTHLY = "monthly"
QUARTERLY = "quarterly"
BIANNUAL = "biannual"
ANNUAL = "annual"

# Calendar months covered by one billing period.
BILLING_CYCLE_MONTHS = {
    MONTHLY: 1,
    QUARTERLY: 3,
    BIANNUAL: 6,
    ANNUAL: 12,
}
BILLING_CYCLES = tuple(BILLING_CYCLE_MONTHS)

DEFAULT_CATEGORY_COLOR = "#94A3B8"
DEFAULT_CATEGORY_ICON = "circle-dot"

# id -> (name, icon, color)
CATEGORY_CATALOG = {
    "groceries": ("Groceries", "shopping-cart", "#4ADE80"),
    "dining": ("Dining Out", "utensils", "#FB7185"),
    "entertainment": ("Entertainment", "film", "#60A5FA"),
    "utilities": ("Utilities", "lightbulb", "#FBBF24"),
    "transportation": ("Transportation", "car", "#A78BFA"),
    "housing": ("Housing", "home", "#F472B6"),
    "healthcare": ("Healthcare", "heart-pulse", "#34D399"),
    "shopping": ("Shopping", "shopping-bag", "#F87171"),
    "education": ("Education", "graduation-cap", "#818CF8"),
    "personal": ("Personal", "user", "#6EE7B7"),
    "travel": ("Travel", "plane", "#FCD34D"),
    "income": ("Income", "wallet", "#2DD4BF"),
    "other": ("Other", "circle-dot", "#94A3B8"),
}

TIME_PERIODS = {
    "day": "Today",
    "week": "This Week",
    "month": "This Month",
    "quarter": "This Quarter",
    "year": "This Year",
    "all": "All Time",
}

SORT_FIELDS = ("date", "amount", "category")
SORT_DIRECTIONS = ("asc", "desc")

DESCRIPTION_MAX_LENGTH = 100
AMOUNT_MAX_DIGITS = 12

DEFAULT_TREND_MONTHS = 6
DEFAULT_RENEWAL_WINDOW_DAYS = 14
DEFAULT_DUE_SOON_DAYS = 7

CRITICAL_DAYS = 3
WARNING_DAYS = 7
URGENCY_CRITICAL = "critical"
URGENCY_WARNING = "warning"
URGENCY_NORMAL = "normal"


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_KINDS",
    "MONTHLY",
    "QUARTERLY",
    "BIANNUAL",
    "ANNUAL",
    "BILLING_CYCLE_MONTHS",
    "BILLING_CYCLES",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_CATEGORY_ICON",
    "CATEGORY_CATALOG",
    "TIME_PERIODS",
    "SORT_FIELDS",
    "SORT_DIRECTIONS",
    "DESCRIPTION_MAX_LENGTH",
    "AMOUNT_MAX_DIGITS",
    "DEFAULT_TREND_MONTHS",
    "DEFAULT_RENEWAL_WINDOW_DAYS",
    "DEFAULT_DUE_SOON_DAYS",
    "CRITICAL_DAYS",
    "WARNING_DAYS",
    "URGENCY_CRITICAL",
    "URGENCY_WARNING",
    "URGENCY_NORMAL",
]
