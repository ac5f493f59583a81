from fastapi import APIRouter

from app.api.v1.endpoints import attribution, health

router = APIRouter(prefix="/api/v1")

router.include_router(attribution.router)
router.include_router(health.router)
