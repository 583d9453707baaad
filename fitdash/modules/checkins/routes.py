from fastapi import APIRouter, Depends
from fitdash.modules.checkins.schemas import CheckInResult, WeekCheckInsResponse
from fitdash.modules.checkins.service import CheckInService
from fitdash.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/check-ins", tags=["check-ins"])


def get_check_in_service(supabase: Client = Depends(get_user_supabase)) -> CheckInService:
    return CheckInService(supabase)


@router.post("", response_model=CheckInResult, status_code=201)
async def check_in(
    user_data: Dict = Depends(get_current_user_id),
    service: CheckInService = Depends(get_check_in_service)
):
    """Check in at the member's gym"""
    return service.check_in(user_data["id"])


@router.get("/week", response_model=WeekCheckInsResponse)
async def get_week_check_ins(
    user_data: Dict = Depends(get_current_user_id),
    service: CheckInService = Depends(get_check_in_service)
):
    return service.get_week(user_data["id"])
