"""
Default expense categories offered to new users.
Each entry is (name, icon, color); colors are hex strings used by the charts.
"""

DEFAULT_EXPENSE_CATEGORIES = [
    ("Housing", "🏠", "#3B82F6"),
    ("Utilities", "💡", "#F59E0B"),
    ("Groceries", "🛒", "#10B981"),
    ("Dining Out", "🍽️", "#EF4444"),
    ("Transportation", "🚗", "#8B5CF6"),
    ("Gas", "⛽", "#F97316"),
    ("Insurance", "🛡️", "#0EA5E9"),
    ("Healthcare", "🏥", "#EC4899"),
    ("Entertainment", "🎬", "#A855F7"),
    ("Subscriptions", "📺", "#6366F1"),
    ("Shopping", "🛍️", "#14B8A6"),
    ("Personal Care", "💇", "#F43F5E"),
    ("Education", "📚", "#84CC16"),
    ("Travel", "✈️", "#06B6D4"),
    ("Gifts", "🎁", "#D946EF"),
    ("Savings", "🏦", "#22C55E"),
]
