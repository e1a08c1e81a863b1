"""
Main Orchestrator for the Budget Ledger

This module ties together all the components and defines the
end-to-end flows behind each command:
1. Budget Setup (budget document -> fresh ledger)
2. Expense Entry (input -> validate -> save)
3. Reporting (status and filter over a storage snapshot)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written before validation passes
- Reports never write
- Every outcome is audited

Flows receive explicit inputs (paths, criteria, periods) from the
command surface; none of them read CLI state on their own.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from budget.audit import AuditLogger, create_correlation_id
from budget.config import LedgerSettings, get_settings, load_budget_document
from budget.models.ledger import (
    BudgetDocument,
    Category,
    FilterCriteria,
    FilterResult,
    Period,
    StatusReport,
    Transaction,
)
from budget.queries import LedgerQueryExecutor
from budget.services.storage import LedgerStorageInterface, SQLiteLedgerStorage
from budget.validation import (
    InvalidDateError,
    TransactionValidator,
    UnknownCategoryError,
)


class BudgetSetupFlow:
    """
    Orchestrates budget creation.

    DESTRUCTIVE: creating a budget replaces any existing ledger,
    including every recorded expense.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger

    def create_from_document(
        self,
        document: BudgetDocument,
        correlation_id: Optional[UUID] = None,
    ) -> list[Category]:
        """
        Initialize the ledger from an already-loaded budget document.

        Returns:
            The categories written, in document order
        """
        correlation_id = correlation_id or create_correlation_id()

        categories = document.categories
        self._storage.create_ledger(categories, income=document.income)

        if self._audit_logger:
            self._audit_logger.log_budget_created(
                db_path=str(getattr(self._storage, "db_path", "<memory>")),
                category_count=len(categories),
                income=document.income,
                correlation_id=correlation_id,
            )

        return categories

    def create_from_file(
        self,
        config_path: Union[str, Path],
        correlation_id: Optional[UUID] = None,
    ) -> list[Category]:
        """
        Read the YAML budget document and initialize the ledger.

        Raises:
            ConfigReadError: If the document is missing or malformed
            StorageError: If the ledger cannot be written
        """
        document = load_budget_document(config_path)
        return self.create_from_document(document, correlation_id=correlation_id)


class ExpenseEntryFlow:
    """
    Orchestrates adding an expense.

    Flow:
    1. Validate date format
    2. Validate category against the ledger
    3. Save (only if both passed)
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or TransactionValidator(storage)
        self._audit_logger = audit_logger

    def add_expense(
        self,
        date_text: Union[str, date],
        category: str,
        amount: int,
        comment: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Validate and store one expense.

        Returns:
            The stored transaction with its assigned id

        Raises:
            InvalidDateError: If the date does not parse
            UnknownCategoryError: If the category is not planned
            StorageError: If the ledger cannot be read or written
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            transaction = self._validator.validate(
                date_text=date_text,
                category=category,
                amount=amount,
                comment=comment,
            )
        except (InvalidDateError, UnknownCategoryError) as e:
            if self._audit_logger:
                self._audit_logger.log_transaction_rejected(e, correlation_id)
            raise

        stored = self._storage.add_transaction(transaction)

        if self._audit_logger:
            self._audit_logger.log_transaction_added(
                transaction_id=stored.id,
                category=stored.category,
                amount=stored.amount,
                correlation_id=correlation_id,
            )

        return stored


class ReportFlow:
    """
    Orchestrates the read-only reports.

    Both reports go through the query executor, which reads one
    snapshot from storage and hands it to the pure reporting core.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._executor = LedgerQueryExecutor(storage)
        self._audit_logger = audit_logger

    def status(
        self,
        period: Optional[Period] = None,
        correlation_id: Optional[UUID] = None,
    ) -> StatusReport:
        """
        Planned versus actual for the given (default: current) month.

        Raises:
            EmptyPeriodError: If no expense is recorded for the month
        """
        correlation_id = correlation_id or create_correlation_id()

        report = self._executor.status(period)

        if self._audit_logger:
            self._audit_logger.log_status_computed(
                period=report.period.label,
                row_count=len(report.rows),
                total_actual=report.totals.actual,
                correlation_id=correlation_id,
            )

        return report

    def filter(
        self,
        criteria: FilterCriteria,
        correlation_id: Optional[UUID] = None,
    ) -> FilterResult:
        """Expenses matching the criteria, in date order, with their sum."""
        correlation_id = correlation_id or create_correlation_id()

        result = self._executor.filter(criteria)

        if self._audit_logger:
            self._audit_logger.log_filter_executed(
                match_count=result.match_count,
                total=result.total,
                correlation_id=correlation_id,
            )

        return result

    def categories(self) -> list[Category]:
        return self._executor.categories()


def create_app_components(
    settings: Optional[LedgerSettings] = None,
    storage: Optional[LedgerStorageInterface] = None,
) -> tuple[BudgetSetupFlow, ExpenseEntryFlow, ReportFlow]:
    """
    Factory function to create all application components.

    Args:
        settings: Resolved settings. Defaults to get_settings().
        storage: Storage backend. Defaults to SQLite at settings.db_path.
                 Pass an InMemoryLedgerStorage for testing.

    Returns:
        (budget_setup_flow, expense_entry_flow, report_flow)
    """
    settings = settings or get_settings()
    storage = storage or SQLiteLedgerStorage(settings.db_path)
    audit_logger = AuditLogger()

    return (
        BudgetSetupFlow(storage, audit_logger=audit_logger),
        ExpenseEntryFlow(storage, audit_logger=audit_logger),
        ReportFlow(storage, audit_logger=audit_logger),
    )
