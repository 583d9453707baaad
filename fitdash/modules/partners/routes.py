from fastapi import APIRouter, Depends, HTTPException
from fitdash.modules.partners.schemas import PartnerCreate, PartnerUpdate, PartnerResponse, PartnerListResponse
from fitdash.modules.partners.service import PartnerService
from fitdash.core.dependencies import (
    require_role, get_current_user_id, get_user_supabase, get_user_gym_id, get_owned_gym,
    check_gym_access, check_gym_owner
)
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/partners", tags=["partners"])


def get_partner_service(supabase: Client = Depends(get_user_supabase)) -> PartnerService:
    return PartnerService(supabase)


@router.get("", response_model=PartnerListResponse)
async def list_partners(
    gym_id: Optional[str] = None,
    service_type: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: PartnerService = Depends(get_partner_service),
    supabase: Client = Depends(get_user_supabase)
):
    """Partners of the user's gym (members) or owned gym (owners). Other gyms are refused."""
    if gym_id:
        check_gym_access(gym_id, user_data, supabase)
    else:
        gym_id = get_user_gym_id(user_data["id"], supabase)
        if not gym_id:
            owned = get_owned_gym(user_data["id"], supabase)
            gym_id = owned["id"] if owned else None
    return service.list_for_gym(gym_id, service_type)


@router.post("", response_model=PartnerResponse, status_code=201)
async def create_partner(
    partner_data: PartnerCreate,
    user_data: Dict = Depends(require_role("owner")),
    service: PartnerService = Depends(get_partner_service),
    supabase: Client = Depends(get_user_supabase)
):
    """Add a partner to the owner's gym"""
    gym = get_owned_gym(user_data["id"], supabase)
    if not gym:
        raise HTTPException(status_code=404, detail="Create your gym before adding partners")
    return service.create_partner(gym["id"], partner_data)


@router.put("/{partner_id}", response_model=PartnerResponse)
async def update_partner(
    partner_id: str,
    partner_data: PartnerUpdate,
    user_data: Dict = Depends(require_role("owner")),
    service: PartnerService = Depends(get_partner_service),
    supabase: Client = Depends(get_user_supabase)
):
    partner = service.get_partner(partner_id)
    check_gym_owner(partner.gym_id, user_data, supabase)
    return service.update_partner(partner_id, partner_data)


@router.delete("/{partner_id}", status_code=204)
async def delete_partner(
    partner_id: str,
    user_data: Dict = Depends(require_role("owner")),
    service: PartnerService = Depends(get_partner_service),
    supabase: Client = Depends(get_user_supabase)
):
    partner = service.get_partner(partner_id)
    check_gym_owner(partner.gym_id, user_data, supabase)
    service.delete_partner(partner_id)
    return None
