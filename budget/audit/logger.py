"""
Audit Logger

DESIGN DECISION: Every command that reads or writes the ledger is logged.
This provides:
1. Traceability of what was written
2. Debugging capability when a command fails

The audit logger:
- Writes structured lines to stderr, never to stdout (stdout is the report)
- Never raises (a logging failure must not break a command)
- Supports correlation IDs to tie together the events of one command
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from budget.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """
    Configure stdlib logging and structlog for the CLI process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json_output: Render JSON lines instead of console key=value text
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvent models into structured log lines at the level
    matching the event severity.
    """

    def __init__(self, logger=None):
        self._logger = logger or structlog.get_logger("budget.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was emitted, False if logging failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Last resort: the command itself must still complete
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)
            return False

        return True

    def log_budget_created(
        self,
        db_path: str,
        category_count: int,
        income: int,
        correlation_id: UUID,
    ) -> None:
        """Log ledger (re)creation."""
        self.log(AuditEventBuilder.budget_created(
            db_path=db_path,
            category_count=category_count,
            income=income,
            correlation_id=correlation_id,
        ))

    def log_transaction_added(
        self,
        transaction_id: int,
        category: str,
        amount: int,
        correlation_id: UUID,
    ) -> None:
        """Log a saved expense."""
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            category=category,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_transaction_rejected(
        self,
        error: Exception,
        correlation_id: UUID,
    ) -> None:
        """Log an expense refused by validation."""
        self.log(AuditEventBuilder.transaction_rejected(
            reason=str(error),
            error_type=type(error).__name__,
            correlation_id=correlation_id,
        ))

    def log_status_computed(
        self,
        period: str,
        row_count: int,
        total_actual: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.status_computed(
            period=period,
            row_count=row_count,
            total_actual=total_actual,
            correlation_id=correlation_id,
        ))

    def log_filter_executed(
        self,
        match_count: int,
        total: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.filter_executed(
            match_count=match_count,
            total=total,
            correlation_id=correlation_id,
        ))

    def log_command_failed(
        self,
        command: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a command that ended in an error."""
        self.log(AuditEventBuilder.command_failed(
            command=command,
            error_type=type(error).__name__,
            error_message=str(error),
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a command and pass it through all
    subsequent operations.
    """
    return uuid4()
