"""Domain model entities for farmledger.

These are pure data classes representing business concepts, independent of
database schema. Both the in-memory store and the SQLAlchemy store hand these
out, so callers never see ORM objects.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class ExpenseCategory(str, Enum):
    """Fixed set of farm expense categories."""

    FERTILIZER = "fertilizer"
    SEEDS = "seeds"
    LABOR = "labor"
    FUEL = "fuel"
    EQUIPMENT = "equipment"
    IRRIGATION = "irrigation"
    PESTICIDES = "pesticides"
    MISCELLANEOUS = "miscellaneous"

    @property
    def label(self) -> str:
        """Human readable label."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    ExpenseCategory.FERTILIZER: "Fertilizers",
    ExpenseCategory.SEEDS: "Seeds",
    ExpenseCategory.LABOR: "Labor Charges",
    ExpenseCategory.FUEL: "Fuel",
    ExpenseCategory.EQUIPMENT: "Equipment",
    ExpenseCategory.IRRIGATION: "Irrigation",
    ExpenseCategory.PESTICIDES: "Pesticides",
    ExpenseCategory.MISCELLANEOUS: "Miscellaneous",
}


class Role(str, Enum):
    """User role."""

    ADMIN = "admin"
    USER = "user"


# Capability strings, one per application area
PERMISSION_LEDGER = "ledger"
PERMISSION_DASHBOARD = "dashboard"
PERMISSION_ACTIVITIES = "activities"
PERMISSION_ADMIN = "admin"

PERMISSIONS = (
    PERMISSION_LEDGER,
    PERMISSION_DASHBOARD,
    PERMISSION_ACTIVITIES,
    PERMISSION_ADMIN,
)


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    date: date
    category: ExpenseCategory
    amount: Decimal
    description: str
    is_paid: bool
    due_date: Optional[date] = None
    details: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class FarmFinance:
    """Finance summary for the farm.

    Only total_investment is stored; the other two are derived from the
    expense collection whenever a summary is built.
    """

    total_investment: Decimal
    total_expenses: Decimal
    balance: Decimal


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    name: str
    email: str
    farm_name: str
    role: Role
    permissions: frozenset[str] = frozenset()

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


@dataclass(frozen=True)
class PaymentReminders:
    """Unpaid expenses grouped by urgency."""

    overdue: tuple[Expense, ...]
    due_soon: tuple[Expense, ...]
    other: tuple[Expense, ...]
