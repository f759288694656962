"""Main router aggregator for API v1."""

from fastapi import APIRouter

from potion_shop.api.v1.potions import router as potions_router

router = APIRouter(prefix="/api")

router.include_router(potions_router)
