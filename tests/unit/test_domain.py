"""Domain exceptions, enums, notification entity, datetime helpers and row schemas."""

from datetime import UTC, date, datetime

from mrcars_admin.core.exception_handlers import status_for
from mrcars_admin.domain.entities.notification import NotificationRecord
from mrcars_admin.domain.enums import ActivitySource, NotificationPriority, NotificationType
from mrcars_admin.domain.exceptions import (
    AuthenticationException,
    AuthProviderException,
    DashboardException,
    MutationFailedException,
    RealtimeNotConfiguredException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
)
from mrcars_admin.schemas.tables import coerce_row, coerce_rows
from mrcars_admin.shared.utils.datetime import add_months, month_label, month_start, parse_iso_utc


def test_dashboard_exception_default_error_code() -> None:
    exc = DashboardException("Something failed")
    assert exc.error_code == "DashboardException"
    assert exc.to_dict() == {"error": "DashboardException", "message": "Something failed", "details": {}}


def test_exception_status_mapping() -> None:
    assert status_for(ValidationException("bad")) == 400
    assert status_for(AuthProviderException("rate limited", 429)) == 400
    assert status_for(AuthenticationException()) == 401
    assert status_for(ResourceNotFoundException("resource", "x")) == 404
    assert status_for(StoreException("down", collection="orders")) == 502
    assert status_for(MutationFailedException("Failed", reason="denied")) == 502
    assert status_for(RealtimeNotConfiguredException()) == 503


def test_mutation_failed_details() -> None:
    assert MutationFailedException("Failed").details == {}
    assert MutationFailedException("Failed", reason="denied").details == {"reason": "denied"}


def test_notification_type_parse() -> None:
    assert NotificationType.parse("order") is NotificationType.ORDER
    assert NotificationType.parse("promotion") is NotificationType.SYSTEM
    assert NotificationType.parse(None) is NotificationType.SYSTEM
    assert "appointment" in NotificationType.values()
    assert NotificationPriority.parse("urgent") is NotificationPriority.MEDIUM


def test_activity_source_priority_order() -> None:
    assert [s.priority for s in ActivitySource] == [0, 1, 2, 3]
    assert ActivitySource.ORDER.priority < ActivitySource.USER.priority


def test_notification_from_row_tolerates_bad_data_column() -> None:
    record = NotificationRecord.from_row(
        {"id": 5, "type": "user", "read": None, "data": "not-a-dict", "created_at": "2025-01-01T00:00:00"}
    )
    assert record.id == "5"
    assert record.is_read is False
    assert record.title == ""
    assert record.priority is NotificationPriority.MEDIUM
    assert record.created_at == datetime(2025, 1, 1, tzinfo=UTC)
    assert record.action_url == "/dashboard/users"


def test_mark_read_returns_new_record() -> None:
    record = NotificationRecord.from_row({"id": "n1", "read": False})
    updated = record.mark_read()
    assert updated.is_read
    assert not record.is_read
    assert updated.mark_read() is updated


def test_parse_iso_utc() -> None:
    assert parse_iso_utc("2025-03-01T12:00:00Z") == datetime(2025, 3, 1, 12, tzinfo=UTC)
    assert parse_iso_utc("2025-03-01T14:00:00+02:00") == datetime(2025, 3, 1, 12, tzinfo=UTC)
    assert parse_iso_utc("yesterday") is None
    assert parse_iso_utc(None) is None


def test_month_arithmetic_crosses_years() -> None:
    start = month_start(datetime(2025, 1, 31, 23, 59, tzinfo=UTC))
    assert start == datetime(2025, 1, 1, tzinfo=UTC)
    assert add_months(start, -1) == datetime(2024, 12, 1, tzinfo=UTC)
    assert add_months(start, 12) == datetime(2026, 1, 1, tzinfo=UTC)
    assert month_label(date(2024, 12, 1)) == "Dec"


def test_coerce_rows_normalizes_known_tables() -> None:
    rows = coerce_rows(
        "orders",
        [{"id": "o1", "total_amount": "19.99", "created_at": "2025-03-01T00:00:00Z", "users": {"username": "a"}}],
    )
    assert rows[0]["total_amount"] == 19.99
    assert rows[0]["users"] == {"username": "a"}
    assert rows[0]["created_at"].startswith("2025-03-01T00:00:00")


def test_coerce_row_keeps_invalid_or_unknown_rows() -> None:
    bad = {"id": "c1", "year": "nineteen"}
    assert coerce_row("cars", bad) is bad
    other = {"anything": 1}
    assert coerce_row("profiles", other) is other
