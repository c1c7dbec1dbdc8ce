"""PaymentVerificationPage: manual approval and rejection of pending payments."""

from datetime import UTC, datetime

import pytest

from mrcars_admin.application.use_cases import PaymentVerificationPage, get_resource
from mrcars_admin.domain.enums import OutcomeLevel
from mrcars_admin.domain.exceptions import ResourceNotFoundException, ValidationException
from tests.fakes import FakeStore

NOW = datetime(2025, 3, 15, 9, 30, tzinfo=UTC)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        {
            "payment_transactions": [
                {
                    "id": "p1",
                    "status": "pending",
                    "transaction_type": "subscription",
                    "reference_id": "s1",
                    "amount": 49,
                    "payment_details": {"phone": "0700000000"},
                    "created_at": "2025-03-14T00:00:00Z",
                },
                {
                    "id": "p2",
                    "status": "pending",
                    "transaction_type": "order",
                    "reference_id": "o1",
                    "amount": 120,
                    "payment_details": None,
                    "created_at": "2025-03-13T00:00:00Z",
                },
                {
                    "id": "p3",
                    "status": "completed",
                    "transaction_type": "order",
                    "reference_id": "o2",
                    "amount": 80,
                    "created_at": "2025-03-12T00:00:00Z",
                },
            ],
            "user_subscriptions": [
                {"id": "s1", "status": "pending", "updated_at": "2025-03-14T00:00:00Z"},
            ],
        }
    )


async def _loaded(store: FakeStore) -> PaymentVerificationPage:
    page = PaymentVerificationPage(store, get_resource("payments"), clock=lambda: NOW)
    await page.load()
    return page


def _row(page: PaymentVerificationPage, row_id: str) -> dict:
    return next(r for r in page.rows if r["id"] == row_id)


async def test_approve_subscription_payment_activates_subscription(store: FakeStore) -> None:
    page = await _loaded(store)
    outcome = await page.approve("p1", notes="Checked M-Pesa statement")
    assert outcome.level is OutcomeLevel.SUCCESS
    assert outcome.message == "Payment approved"
    assert [w[1] for w in store.writes] == ["payment_transactions", "user_subscriptions"]
    assert store.writes[1][2] == {"status": "active", "updated_at": NOW.isoformat()}
    assert store.tables["user_subscriptions"][0]["status"] == "active"
    row = _row(page, "p1")
    assert row["status"] == "completed"
    assert row["processed_at"] == NOW.isoformat()
    assert row["payment_details"] == {
        "phone": "0700000000",
        "admin_notes": "Checked M-Pesa statement",
        "verified_by": "admin",
        "verified_at": NOW.isoformat(),
    }


async def test_approve_order_payment_touches_only_the_transaction(store: FakeStore) -> None:
    page = await _loaded(store)
    await page.approve("p2")
    assert [w[1] for w in store.writes] == ["payment_transactions"]
    assert store.tables["user_subscriptions"][0]["status"] == "pending"
    assert _row(page, "p2")["payment_details"]["admin_notes"] == ""


async def test_only_pending_payments_can_be_decided(store: FakeStore) -> None:
    page = await _loaded(store)
    with pytest.raises(ValidationException) as exc_info:
        await page.approve("p3")
    assert exc_info.value.details == {"field": "status"}
    with pytest.raises(ValidationException):
        await page.reject("p3", "duplicate")
    assert store.writes == []


async def test_unknown_payment_is_not_found(store: FakeStore) -> None:
    page = await _loaded(store)
    with pytest.raises(ResourceNotFoundException):
        await page.approve("p9")


async def test_reject_requires_reason(store: FakeStore) -> None:
    page = await _loaded(store)
    with pytest.raises(ValidationException) as exc_info:
        await page.reject("p1", "   ")
    assert exc_info.value.details == {"field": "reason"}
    assert store.writes == []


async def test_reject_marks_payment_failed(store: FakeStore) -> None:
    page = await _loaded(store)
    outcome = await page.reject("p1", "Reference not found")
    assert outcome.message == "Payment rejected"
    row = _row(page, "p1")
    assert row["status"] == "failed"
    assert row["error_message"] == "Reference not found"
    assert row["payment_details"]["rejection_reason"] == "Reference not found"
    assert row["payment_details"]["rejected_at"] == NOW.isoformat()
    assert store.tables["user_subscriptions"][0]["status"] == "pending"


async def test_failed_approval_leaves_row_pending(store: FakeStore) -> None:
    page = await _loaded(store)
    store.fail_writes = "permission denied"
    outcome = await page.approve("p1")
    assert outcome.level is OutcomeLevel.ERROR
    assert outcome.message == "Failed to approve payment"
    assert _row(page, "p1")["status"] == "pending"


async def test_payments_cannot_be_deleted_or_status_changed(store: FakeStore) -> None:
    page = await _loaded(store)
    with pytest.raises(ValidationException):
        await page.delete("p1")
    with pytest.raises(ValidationException):
        await page.set_status("p1", "completed")
