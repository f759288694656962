"""Unit tests for the potions list and its delete confirmation."""

from datetime import datetime, timedelta, timezone

import pytest

from potion_shop.domain.exceptions import PotionNotFoundError
from potion_shop.domain.models import DeliveryMethod, PaymentMethod, Potion, PotionStatus
from potion_shop.domain.notifications import (
    ConfirmationService,
    Notification,
    NotificationService,
    Severity,
)
from potion_shop.domain.services.potions_list import PotionsList
from potion_shop.repositories.potion_repository import PotionRepository

ORDER_DATE = datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)


def store_potion(repository: PotionRepository, potion_id: str) -> Potion:
    potion = Potion.create(
        id=potion_id,
        potion_number=repository.next_potion_number(),
        ordered_by="Gandalf",
        order_date=ORDER_DATE,
        ready_date=ORDER_DATE + timedelta(days=1),
        delivery_address="Bag End, The Shire",
        delivery_method=DeliveryMethod.COURIER,
        payment_method=PaymentMethod.SILVER_COINS,
        ingredients=[],
    )
    return repository.add(potion)


class TestBrowsing:
    """Tests for read-only views and detail selection."""

    def test_views_follow_store(self, potions_list: PotionsList, repository: PotionRepository):
        store_potion(repository, "pot-1")
        store_potion(repository, "pot-2")

        assert [p.id for p in potions_list.potions.value] == ["pot-1", "pot-2"]
        assert potions_list.potions_count.value == 2

    def test_view_details_and_close(self, potions_list: PotionsList, repository: PotionRepository):
        potion = store_potion(repository, "pot-1")

        potions_list.view_details(potion)
        assert potions_list.selected_potion.value == potion
        assert potions_list.display_dialog.value is True

        potions_list.close_dialog()
        assert potions_list.selected_potion.value is None
        assert potions_list.display_dialog.value is False

    def test_get_potion_missing(self, potions_list: PotionsList):
        with pytest.raises(PotionNotFoundError, match="pot-missing"):
            potions_list.get_potion("pot-missing")


class TestDelete:
    """Tests for the confirm-then-delete flow."""

    def test_delete_waits_for_confirmation(
        self,
        potions_list: PotionsList,
        repository: PotionRepository,
        confirmations: ConfirmationService,
    ):
        potion = store_potion(repository, "pot-1")

        confirmation = potions_list.delete_potion(potion)

        assert repository.count() == 1
        assert confirmations.pending == [confirmation]
        assert confirmation.message == "Are you sure you want to delete potion POT-2026-0001?"
        assert confirmation.header == "Delete Confirmation"

    def test_accept_deletes_and_notifies(
        self,
        potions_list: PotionsList,
        repository: PotionRepository,
        confirmations: ConfirmationService,
        notifications: NotificationService,
    ):
        potion = store_potion(repository, "pot-1")
        potions_list.delete_potion(potion)

        assert confirmations.accept() is True

        assert repository.count() == 0
        assert notifications.last.severity == Severity.SUCCESS
        assert notifications.last.summary == "Deleted"
        assert notifications.last.detail == "Potion POT-2026-0001 has been removed"
        assert notifications.last.life_ms == 3000

    def test_reject_keeps_potion(
        self,
        potions_list: PotionsList,
        repository: PotionRepository,
        confirmations: ConfirmationService,
        notifications: NotificationService,
    ):
        potion = store_potion(repository, "pot-1")
        potions_list.delete_potion(potion)

        rejected = confirmations.reject()

        assert rejected is not None
        assert repository.count() == 1
        assert notifications.messages == []
        assert confirmations.pending == []

    def test_accept_without_pending(self, confirmations: ConfirmationService):
        assert confirmations.accept() is False
        assert confirmations.reject() is None


class TestPresentationHelpers:
    """Tests for status severity, icons and date formatting."""

    @pytest.mark.parametrize(
        ("status", "severity"),
        [
            (PotionStatus.BREWING, "warn"),
            (PotionStatus.READY, "success"),
            ("delivered", "info"),
            ("spilled", "secondary"),
            (None, "secondary"),
        ],
    )
    def test_status_severity(self, status, severity):
        assert PotionsList.status_severity(status) == severity

    @pytest.mark.parametrize(
        "status, icon",
        [
            (PotionStatus.BREWING, "⚗️"),
            ("ready", "✅"),
            ("delivered", "🚚"),
            ("spilled", "📦"),
            (None, "📦"),
        ],
    )
    def test_status_icon(self, status, icon):
        assert PotionsList.status_icon(status) == icon

    @pytest.mark.parametrize(
        "method, icon",
        [
            (DeliveryMethod.OWL, "🦉"),
            ("Dragon Express", "🐲"),
            ("Shop Pickup", "🏪"),
            ("Broomstick", "📦"),
        ],
    )
    def test_delivery_icon(self, method, icon):
        assert PotionsList.delivery_icon(method) == icon

    @pytest.mark.parametrize(
        "method, icon",
        [
            (PaymentMethod.GOLD_COINS, "💰"),
            ("Credit Spell", "🔮"),
            ("Barter", "🤝"),
            ("IOU", "💳"),
        ],
    )
    def test_payment_icon(self, method, icon):
        assert PotionsList.payment_icon(method) == icon

    def test_format_date(self):
        assert PotionsList.format_date(ORDER_DATE) == "14/03/2026"


class TestNotificationService:
    """Tests for notification fan-out."""

    def test_listeners_receive_notifications(self, notifications: NotificationService):
        received = []
        notifications.listen(received.append)
        potions_list = PotionsList(PotionRepository(), notifications, ConfirmationService())
        potion = store_potion(potions_list.repository, "pot-1")

        potions_list.delete_potion(potion)
        potions_list.confirmations.accept()

        assert [n.summary for n in received] == ["Deleted"]

    def test_clear(self, notifications: NotificationService):
        notifications.add(Notification(Severity.ERROR, "❌ Invalid Form", "Try again"))
        notifications.clear()
        assert notifications.last is None
