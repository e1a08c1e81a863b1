"""
Core Data Models for the Budget Ledger

These models define the schemas for everything flowing between the
command surface, the ledger store and the reporting core.
They are designed to:
1. Validate user and configuration input at the boundary
2. Be immutable once constructed (the core never mutates a record)
3. Carry explicit inputs into the core instead of shared flag state

DESIGN DECISION: Amounts are plain integers (minor currency units are up
to the user). Every stored amount fits a signed 64-bit integer, the
widest integer the ledger store keeps. Totals are Python ints and are
always exact.
"""

import calendar
import datetime
from datetime import date
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


TOTAL_LABEL = "TOTAL"

AMOUNT_MIN = -2**63
AMOUNT_MAX = 2**63 - 1


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class Category(BaseModel):
    """
    A named planned-spending bucket.

    Categories are created once, when the budget is created,
    and are never updated afterwards.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique category name (join key for transactions)"
    )
    planned_amount: int = Field(
        ...,
        ge=AMOUNT_MIN,
        le=AMOUNT_MAX,
        description="Planned monthly spending for this category"
    )


class Transaction(BaseModel):
    """
    A single recorded expense.

    The id is assigned by the store on insert, so a transaction that
    has only been validated (not saved yet) carries id=None. The comment
    is kept exactly as entered.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(
        default=None,
        description="Store-assigned identifier, monotonic"
    )
    date: datetime.date = Field(
        ...,
        description="Date of the expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Name of the category this expense belongs to"
    )
    amount: int = Field(
        ...,
        ge=AMOUNT_MIN,
        le=AMOUNT_MAX,
        description="Expense amount"
    )
    comment: str = Field(
        default="",
        description="Optional free text"
    )

    @field_validator('category', mode='before')
    @classmethod
    def strip_category(cls, v):
        return v.strip() if isinstance(v, str) else v


# =============================================================================
# PERIOD
# =============================================================================

class Period(BaseModel):
    """
    Calendar year+month used to scope "current" aggregation.

    Never persisted - derived from wall-clock time on every invocation.
    """
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "Period":
        """Period containing `today` (defaults to the system date)."""
        today = today or date.today()
        return cls(year=today.year, month=today.month)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        _, days = calendar.monthrange(self.year, self.month)
        return date(self.year, self.month, days)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# =============================================================================
# REPORT MODELS
# =============================================================================

class AggregateRow(BaseModel):
    """Planned versus actual spending for one category (or the total)."""
    model_config = ConfigDict(frozen=True)

    category: str
    planned: int
    actual: int

    @property
    def balance(self) -> int:
        """Planned minus actual."""
        return self.planned - self.actual


class StatusReport(BaseModel):
    """
    Result of the monthly status computation.

    rows are ordered ascending by category name. The totals row is
    computed independently from the rows (see compute_status).
    """
    model_config = ConfigDict(frozen=True)

    period: Period
    rows: list[AggregateRow] = Field(default_factory=list)
    totals: AggregateRow
    income: Optional[int] = Field(
        default=None,
        description="Monthly income from the budget document, if stored"
    )

    @property
    def unallocated(self) -> Optional[int]:
        """Income not assigned to any planned category."""
        if self.income is None:
            return None
        return self.income - self.totals.planned


class FilterCriteria(BaseModel):
    """
    Explicit input for the transaction filter.

    Built by the command layer from parsed flags. An empty categories
    set means "no restriction". Inverted ranges are allowed and simply
    match nothing.
    """
    model_config = ConfigDict(frozen=True)

    date_from: date
    date_to: date
    categories: frozenset[str] = Field(default_factory=frozenset)
    min_amount: int = Field(default=0, ge=AMOUNT_MIN, le=AMOUNT_MAX)
    max_amount: int = Field(default=100000, ge=AMOUNT_MIN, le=AMOUNT_MAX)

    @field_validator('categories', mode='before')
    @classmethod
    def normalize_categories(cls, v):
        """Accept any iterable of names; drop surrounding whitespace."""
        if v is None:
            return frozenset()
        return frozenset(name.strip() for name in v)

    @classmethod
    def for_current_month(
        cls,
        today: Optional[date] = None,
        categories=None,
        min_amount: int = 0,
        max_amount: int = 100000,
    ) -> "FilterCriteria":
        """Default window: first day of the current month up to today."""
        today = today or date.today()
        return cls(
            date_from=today.replace(day=1),
            date_to=today,
            categories=categories or frozenset(),
            min_amount=min_amount,
            max_amount=max_amount,
        )


class FilterResult(BaseModel):
    """Matching transactions in date order plus their running sum."""
    model_config = ConfigDict(frozen=True)

    criteria: FilterCriteria
    matches: list[Transaction] = Field(default_factory=list)
    total: int = 0

    @property
    def match_count(self) -> int:
        return len(self.matches)


# =============================================================================
# BUDGET DOCUMENT (configuration input for `create`)
# =============================================================================

class PlannedCategory(BaseModel):
    """One entry of `categories-planned` in the budget document."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    amount: int = Field(..., ge=AMOUNT_MIN, le=AMOUNT_MAX)

    def to_category(self) -> Category:
        return Category(name=self.name, planned_amount=self.amount)


class BudgetDocument(BaseModel):
    """
    The YAML budget document read by `create`.

    Example:
        income: 300000
        categories-planned:
          - name: car
            amount: 20000
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    income: int = Field(
        ...,
        ge=AMOUNT_MIN,
        le=AMOUNT_MAX,
        description="Monthly income"
    )
    categories_planned: list[PlannedCategory] = Field(
        default_factory=list,
        alias="categories-planned",
        description="Planned categories in document order"
    )

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'BudgetDocument':
        """Category names are the join key, so they must be unique."""
        seen = set()
        for entry in self.categories_planned:
            if entry.name in seen:
                raise ValueError(f"Duplicate category name: {entry.name}")
            seen.add(entry.name)
        return self

    @property
    def categories(self) -> list[Category]:
        return [entry.to_category() for entry in self.categories_planned]
