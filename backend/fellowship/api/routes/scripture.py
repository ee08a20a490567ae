from typing import Any, Dict
from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_user
from ...models.user import User
from ...services.scripture_service import scripture_service

router = APIRouter(prefix="/scripture", tags=["scripture"])


@router.get("/daily")
async def get_daily_verse(current_user: User = Depends(get_current_user)) -> Dict[str, Any]:
    return await scripture_service.daily_verse()


@router.get("/random")
async def get_random_verse(current_user: User = Depends(get_current_user)) -> Dict[str, Any]:
    return await scripture_service.random_verse()
