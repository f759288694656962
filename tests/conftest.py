"""Pytest fixtures for testing."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from potion_shop.domain.forms import PotionForm
from potion_shop.domain.ingredients import IngredientSet
from potion_shop.domain.notifications import ConfirmationService, NotificationService
from potion_shop.domain.services.potions_list import PotionsList
from potion_shop.main import app
from potion_shop.repositories.potion_repository import PotionRepository
from potion_shop.store import get_repository

FIXED_NOW = datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(name="repository")
def repository_fixture() -> PotionRepository:
    """A fresh, empty potion store pinned to 2026."""
    return PotionRepository(prefix="POT", clock=fixed_clock)


@pytest.fixture(name="notifications")
def notifications_fixture() -> NotificationService:
    return NotificationService()


@pytest.fixture(name="confirmations")
def confirmations_fixture() -> ConfirmationService:
    return ConfirmationService()


@pytest.fixture(name="ingredient_set")
def ingredient_set_fixture() -> IngredientSet:
    return IngredientSet(min_ingredients=3, default_unit="g")


@pytest.fixture(name="form")
def form_fixture(
    repository: PotionRepository,
    notifications: NotificationService,
) -> PotionForm:
    """Order form whose draft is opened at FIXED_NOW."""
    return PotionForm(repository, notifications, clock=fixed_clock)


@pytest.fixture(name="potions_list")
def potions_list_fixture(
    repository: PotionRepository,
    notifications: NotificationService,
    confirmations: ConfirmationService,
) -> PotionsList:
    return PotionsList(repository, notifications, confirmations)


@pytest.fixture(name="client")
def client_fixture(repository: PotionRepository):
    """Create test client backed by a per-test potion store."""

    def get_repository_override():
        return repository

    app.dependency_overrides[get_repository] = get_repository_override
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()
