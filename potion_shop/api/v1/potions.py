"""API endpoints for potion orders."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from potion_shop.domain.exceptions import PotionNotFoundError
from potion_shop.domain.forms import PotionForm
from potion_shop.domain.models import Potion
from potion_shop.domain.notifications import ConfirmationService, NotificationService
from potion_shop.domain.services.potions_list import PotionsList
from potion_shop.repositories.potion_repository import PotionRepository
from potion_shop.schemas.potion import (
    NextPotionNumberResponse,
    NotificationResponse,
    PotionCreateRequest,
    PotionCreateResponse,
    PotionDeleteResponse,
    PotionListResponse,
    PotionResponse,
    PotionStatusUpdate,
)
from potion_shop.store import get_repository

router = APIRouter(prefix="/potions", tags=["potions"])

Repository = Annotated[PotionRepository, Depends(get_repository)]


def _potions_list(repository: PotionRepository) -> PotionsList:
    return PotionsList(repository, NotificationService(), ConfirmationService())


def _get_or_404(potions: PotionsList, potion_id: str) -> Potion:
    try:
        return potions.get_potion(potion_id)
    except PotionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.post("/", response_model=PotionCreateResponse, status_code=status.HTTP_201_CREATED)
def create_potion(
    potion_data: PotionCreateRequest,
    repository: Repository,
) -> PotionCreateResponse:
    """Fill a fresh order form with the request and submit it."""
    notifications = NotificationService()
    form = PotionForm(repository, notifications)

    form.set_value("ordered_by", potion_data.ordered_by)
    form.set_value("delivery_address", potion_data.delivery_address)
    form.set_value("delivery_method", potion_data.delivery_method)
    form.set_value("payment_method", potion_data.payment_method)
    if potion_data.ready_date is not None:
        form.set_value("ready_date", potion_data.ready_date)

    ingredient_set = form.ingredient_set
    for item in potion_data.ingredients:
        ingredient = ingredient_set.add()
        ingredient_set.update(ingredient.id, "name", item.name)
        ingredient_set.update(ingredient.id, "unit", item.unit.value)
        ingredient_set.update(ingredient.id, "quantity", item.quantity)
        ingredient_set.update(ingredient.id, "price_per_unit", item.price_per_unit)

    # Collected before submit() so a rejected form can still report them
    errors = form.errors()
    potion = form.submit()
    notification = NotificationResponse.from_notification(notifications.last)

    if potion is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "errors": errors,
                "messages": {name: form.error_for(name) for name in errors},
                "notification": notification.model_dump(),
            },
        )

    return PotionCreateResponse(
        potion=PotionResponse.model_validate(potion),
        notification=notification,
    )


@router.get("/next-number", response_model=NextPotionNumberResponse)
def get_next_potion_number(repository: Repository) -> NextPotionNumberResponse:
    """Number the next submitted potion would receive."""
    return NextPotionNumberResponse(potion_number=repository.next_potion_number())


@router.get("/", response_model=PotionListResponse)
def list_potions(repository: Repository) -> PotionListResponse:
    """List potions in submission order."""
    potions = _potions_list(repository)

    return PotionListResponse(
        potions=[PotionResponse.model_validate(p) for p in potions.potions.value],
        total=potions.potions_count.value,
    )


@router.get("/{potion_id}", response_model=PotionResponse)
def get_potion(potion_id: str, repository: Repository) -> PotionResponse:
    """Retrieve a potion by ID."""
    potion = _get_or_404(_potions_list(repository), potion_id)
    return PotionResponse.model_validate(potion)


@router.patch("/{potion_id}", response_model=PotionResponse)
def update_potion_status(
    potion_id: str,
    update: PotionStatusUpdate,
    repository: Repository,
) -> PotionResponse:
    """Move a potion to another status."""
    potion = _get_or_404(_potions_list(repository), potion_id)
    updated = potion.model_copy(update={"status": update.status})
    repository.update(potion_id, updated)
    return PotionResponse.model_validate(updated)


@router.delete("/{potion_id}", response_model=PotionDeleteResponse)
def delete_potion(
    potion_id: str,
    repository: Repository,
    confirm: bool = Query(False, description="Answer the delete confirmation with yes"),
) -> PotionDeleteResponse:
    """Delete a potion once the confirmation has been accepted."""
    notifications = NotificationService()
    confirmations = ConfirmationService()
    potions = PotionsList(repository, notifications, confirmations)

    potion = _get_or_404(potions, potion_id)
    confirmation = potions.delete_potion(potion)

    if not confirm:
        confirmations.reject()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=confirmation.message,
        )

    confirmations.accept()
    return PotionDeleteResponse(
        potion_id=potion_id,
        notification=NotificationResponse.from_notification(notifications.last),
    )
