"""API v1 router aggregator."""

from fastapi import APIRouter

from lorekeeper.api.v1.characters import router as characters_router
from lorekeeper.api.v1.stories import router as stories_router

router = APIRouter(prefix="/api/v1")
router.include_router(stories_router)
router.include_router(characters_router)
