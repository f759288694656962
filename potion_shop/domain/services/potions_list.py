"""List view logic: browsing, detail selection and confirmed deletion."""

from datetime import datetime

from potion_shop.config import Settings, settings
from potion_shop.domain.exceptions import PotionNotFoundError
from potion_shop.domain.forms import DELIVERY_ICONS, PAYMENT_ICONS
from potion_shop.domain.models import DeliveryMethod, PaymentMethod, Potion, PotionStatus
from potion_shop.domain.notifications import (
    Confirmation,
    ConfirmationService,
    Notification,
    NotificationService,
    Severity,
)
from potion_shop.domain.reactive import Signal
from potion_shop.repositories.potion_repository import PotionRepository

STATUS_SEVERITY = {
    PotionStatus.BREWING: "warn",
    PotionStatus.READY: "success",
    PotionStatus.DELIVERED: "info",
}

STATUS_ICONS = {
    PotionStatus.BREWING: "⚗️",
    PotionStatus.READY: "✅",
    PotionStatus.DELIVERED: "🚚",
}


class PotionsList:
    """Service layer behind the potions table."""

    def __init__(
        self,
        repository: PotionRepository,
        notifications: NotificationService,
        confirmations: ConfirmationService,
        config: Settings = settings,
    ):
        self.repository = repository
        self.notifications = notifications
        self.confirmations = confirmations
        self.config = config

        self.potions = repository.potions
        self.potions_count = repository.potions_count
        self.selected_potion: Signal[Potion | None] = Signal(None)
        self.display_dialog = Signal(False)

    def get_potion(self, potion_id: str) -> Potion:
        """
        Retrieve a potion by ID.

        Raises:
            PotionNotFoundError: If no potion has this ID
        """
        potion = self.repository.get_by_id(potion_id)
        if potion is None:
            raise PotionNotFoundError(potion_id=potion_id)
        return potion

    def view_details(self, potion: Potion) -> None:
        self.selected_potion.set(potion)
        self.display_dialog.set(True)

    def close_dialog(self) -> None:
        self.display_dialog.set(False)
        self.selected_potion.set(None)

    def delete_potion(self, potion: Potion) -> Confirmation:
        """
        Ask for confirmation before deleting ``potion``.

        Nothing is removed here; the deletion and its notification run only
        when the returned confirmation is accepted.
        """

        def accept() -> None:
            self.repository.delete(potion.id)
            self.notifications.add(
                Notification(
                    severity=Severity.SUCCESS,
                    summary="Deleted",
                    detail=f"Potion {potion.potion_number} has been removed",
                    life_ms=self.config.delete_notification_life_ms,
                )
            )

        confirmation = Confirmation(
            message=f"Are you sure you want to delete potion {potion.potion_number}?",
            header="Delete Confirmation",
            accept=accept,
        )
        self.confirmations.confirm(confirmation)
        return confirmation

    @staticmethod
    def status_severity(status: PotionStatus | str | None) -> str:
        try:
            return STATUS_SEVERITY[PotionStatus(status)]
        except (ValueError, KeyError):
            return "secondary"

    @staticmethod
    def status_icon(status: PotionStatus | str | None) -> str:
        try:
            return STATUS_ICONS[PotionStatus(status)]
        except (ValueError, KeyError):
            return "📦"

    @staticmethod
    def delivery_icon(method: DeliveryMethod | str) -> str:
        try:
            return DELIVERY_ICONS[DeliveryMethod(method)]
        except (ValueError, KeyError):
            return "📦"

    @staticmethod
    def payment_icon(method: PaymentMethod | str) -> str:
        try:
            return PAYMENT_ICONS[PaymentMethod(method)]
        except (ValueError, KeyError):
            return "💳"

    @staticmethod
    def format_date(value: datetime) -> str:
        return value.strftime("%d/%m/%Y")
