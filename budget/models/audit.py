"""
Audit Models for the Budget Ledger

Every command that touches the ledger emits an audit event.
This provides:
1. A trace of what was written and when
2. Debugging information when a command fails

DESIGN DECISION: Audit events are emitted to the structured log only.
The ledger database holds budget data, never its own history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit, one per command outcome."""
    # Budget lifecycle
    BUDGET_CREATED = "budget_created"

    # Persistence
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Reporting
    STATUS_COMPUTED = "status_computed"
    FILTER_EXECUTED = "filter_executed"

    # Failures
    COMMAND_FAILED = "command_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Correlation - all events of one command invocation share it
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(
            transaction_id=12,
            category="car",
            amount=5000,
            correlation_id=correlation_id,
        )
    """

    @staticmethod
    def budget_created(
        db_path: str,
        category_count: int,
        income: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_CREATED,
            correlation_id=correlation_id,
            description=f"Budget created with {category_count} categories",
            details={
                "db_path": db_path,
                "category_count": category_count,
                "income": income,
            },
        )

    @staticmethod
    def transaction_added(
        transaction_id: int,
        category: str,
        amount: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            correlation_id=correlation_id,
            description=f"Expense {transaction_id} added to {category}",
            details={
                "transaction_id": transaction_id,
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def transaction_rejected(
        reason: str,
        error_type: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Expense rejected by validation",
            error_type=error_type,
            error_message=reason,
        )

    @staticmethod
    def status_computed(
        period: str,
        row_count: int,
        total_actual: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATUS_COMPUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Status computed for {period}",
            details={
                "period": period,
                "row_count": row_count,
                "total_actual": total_actual,
            },
        )

    @staticmethod
    def filter_executed(
        match_count: int,
        total: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_EXECUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Filter matched {match_count} expenses",
            details={"match_count": match_count, "total": total},
        )

    @staticmethod
    def command_failed(
        command: str,
        error_type: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Command '{command}' failed",
            details={"command": command},
            error_type=error_type,
            error_message=error_message,
        )
