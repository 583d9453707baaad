import logging
from datetime import datetime
from supabase import Client
from fitdash.modules.partners.schemas import (
    PartnerCreate, PartnerUpdate, PartnerResponse, PartnerGymInfo, PartnerListResponse
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def service_type_tabs(partners: List[PartnerResponse]) -> List[str]:
    """'all' followed by each distinct service type in first-seen order"""
    tabs = ["all"]
    for partner in partners:
        if partner.service_type not in tabs:
            tabs.append(partner.service_type)
    return tabs


class PartnerService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_for_gym(self, gym_id: Optional[str], service_type: Optional[str] = None) -> PartnerListResponse:
        """Partners of one gym, with the gym's info and the service type tabs"""
        if not gym_id:
            return PartnerListResponse(gym=None, service_types=["all"], partners=[])
        try:
            gym_result = self.supabase.table("gyms")\
                .select("id, name, city")\
                .eq("id", gym_id)\
                .limit(1)\
                .execute()
            result = self.supabase.table("partners")\
                .select("*")\
                .eq("gym_id", gym_id)\
                .order("company_name")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching partners: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        partners = [PartnerResponse(**p) for p in result.data or []]
        tabs = service_type_tabs(partners)
        if service_type and service_type != "all":
            partners = [p for p in partners if p.service_type == service_type]
        return PartnerListResponse(
            gym=PartnerGymInfo(**gym_result.data[0]) if gym_result.data else None,
            service_types=tabs,
            partners=partners
        )

    def get_partner(self, partner_id: str) -> PartnerResponse:
        try:
            result = self.supabase.table("partners")\
                .select("*")\
                .eq("id", partner_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Partner not found")
            return PartnerResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_partner(self, gym_id: str, partner_data: PartnerCreate) -> PartnerResponse:
        try:
            result = self.supabase.table("partners").insert({
                "gym_id": gym_id,
                **partner_data.model_dump()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create partner")

            logger.info("Partner %s added to gym %s", result.data[0]["id"], gym_id)
            return PartnerResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_partner(self, partner_id: str, partner_data: PartnerUpdate) -> PartnerResponse:
        try:
            update_data = partner_data.model_dump(exclude_none=True)
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("partners")\
                .update(update_data)\
                .eq("id", partner_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Partner not found")

            return PartnerResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_partner(self, partner_id: str) -> bool:
        try:
            result = self.supabase.table("partners")\
                .delete()\
                .eq("id", partner_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
