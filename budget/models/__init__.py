"""
Data Models Package

This package contains all Pydantic models used by the budget ledger.
All data flowing through the system must conform to these schemas.
"""

from budget.models.ledger import (
    TOTAL_LABEL,
    AggregateRow,
    BudgetDocument,
    Category,
    FilterCriteria,
    FilterResult,
    Period,
    PlannedCategory,
    StatusReport,
    Transaction,
)
from budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "TOTAL_LABEL",
    "AggregateRow",
    "BudgetDocument",
    "Category",
    "FilterCriteria",
    "FilterResult",
    "Period",
    "PlannedCategory",
    "StatusReport",
    "Transaction",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
