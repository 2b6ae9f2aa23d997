# market/routers/health.py
from fastapi import APIRouter

from market.schemas.common import HealthOut

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOut)
async def health():
    return HealthOut(status="ok")
