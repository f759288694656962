"""Process-wide potion store and its FastAPI dependency."""

from potion_shop.config import settings
from potion_shop.repositories.potion_repository import PotionRepository

# Lives as long as the process; nothing is written to disk
potion_repository = PotionRepository(prefix=settings.potion_number_prefix)


def get_repository() -> PotionRepository:
    """Dependency to provide the potion store to endpoints."""
    return potion_repository
