"""Tests for the audit logger."""

from uuid import uuid4

from budget.audit import AuditLogger, create_correlation_id
from budget.models.audit import AuditEventBuilder


class FakeLogger:
    def __init__(self, fail=False):
        self.calls = []
        self._fail = fail

    def _record(self, level, event, **kw):
        if self._fail:
            raise RuntimeError("disk full")
        self.calls.append((level, event, kw))

    def debug(self, event, **kw):
        self._record("debug", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)


class TestAuditLogger:

    def test_level_follows_severity(self):
        fake = FakeLogger()
        audit = AuditLogger(logger=fake)
        correlation_id = uuid4()

        audit.log_transaction_added(1, "car", 5000, correlation_id)
        audit.log_status_computed("2024-06", 3, 5000, correlation_id)
        audit.log_transaction_rejected(ValueError("bad"), correlation_id)
        audit.log_command_failed("status", RuntimeError("boom"))

        assert [c[0] for c in fake.calls] == ["info", "debug", "warning", "error"]
        assert all(c[1] == "audit_event" for c in fake.calls)
        assert fake.calls[0][2]["correlation_id"] == str(correlation_id)
        assert fake.calls[3][2]["error_message"] == "boom"

    def test_logging_failure_does_not_raise(self, capsys):
        audit = AuditLogger(logger=FakeLogger(fail=True))
        event = AuditEventBuilder.filter_executed(0, 0, create_correlation_id())
        assert audit.log(event) is False
        assert "Failed to write audit event" in capsys.readouterr().err

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()
