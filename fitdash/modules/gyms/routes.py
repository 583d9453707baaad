from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fitdash.database.supabase_client import get_supabase
from fitdash.modules.gyms.schemas import (
    GymCreate, GymUpdate, GymResponse, GymSummary, LogoUploadResponse, GymMemberResponse
)
from fitdash.modules.gyms.service import GymService
from fitdash.modules.profiles.schemas import ProfileResponse
from fitdash.modules.profiles.service import ProfileService
from fitdash.core.dependencies import require_role, get_current_user_id, get_user_supabase, check_gym_owner
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/gyms", tags=["gyms"])


def get_gym_service(supabase: Client = Depends(get_user_supabase)) -> GymService:
    return GymService(supabase)


@router.get("", response_model=List[GymSummary])
async def list_gyms(
    search: Optional[str] = None,
    supabase: Client = Depends(get_supabase)
):
    """List gyms to join, ordered by name (search matches name or tagline)"""
    return GymService(supabase).list_gyms(search)


@router.get("/mine", response_model=GymResponse)
async def get_my_gym(
    user_data: Dict = Depends(require_role("owner")),
    service: GymService = Depends(get_gym_service)
):
    """The gym owned by the current owner"""
    gym = service.get_owned_gym(user_data["id"])
    if not gym:
        raise HTTPException(status_code=404, detail="No gym configured yet")
    return gym


@router.post("", response_model=GymResponse, status_code=201)
async def create_gym(
    gym_data: GymCreate,
    user_data: Dict = Depends(require_role("owner")),
    service: GymService = Depends(get_gym_service)
):
    """Create the owner's gym"""
    return service.create_gym(gym_data, user_data["id"])


@router.post("/logo", response_model=LogoUploadResponse, status_code=201)
async def upload_logo(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_role("owner")),
    service: GymService = Depends(get_gym_service)
):
    """Upload a gym logo (images up to 2MB)"""
    content = await file.read()
    return service.upload_logo(user_data["id"], file.filename or "", content, file.content_type)


@router.get("/{gym_id}", response_model=GymResponse)
async def get_gym(
    gym_id: str,
    service: GymService = Depends(get_gym_service)
):
    return service.get_gym_by_id(gym_id)


@router.put("/{gym_id}", response_model=GymResponse)
async def update_gym(
    gym_id: str,
    gym_data: GymUpdate,
    user_data: Dict = Depends(require_role("owner")),
    service: GymService = Depends(get_gym_service),
    supabase: Client = Depends(get_user_supabase)
):
    """Update gym settings (gym owner only)"""
    check_gym_owner(gym_id, user_data, supabase)
    return service.update_gym(gym_id, gym_data)


@router.get("/{gym_id}/members", response_model=List[GymMemberResponse])
async def list_members(
    gym_id: str,
    user_data: Dict = Depends(require_role("owner")),
    service: GymService = Depends(get_gym_service),
    supabase: Client = Depends(get_user_supabase)
):
    """Member roster (gym owner only)"""
    check_gym_owner(gym_id, user_data, supabase)
    return service.list_members(gym_id)


@router.post("/{gym_id}/join", response_model=ProfileResponse)
async def join_gym(
    gym_id: str,
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase)
):
    """Join a gym as a member"""
    return ProfileService(supabase).set_gym(user_data["id"], gym_id)
