import logging
from datetime import datetime
from supabase import Client
from fitdash.config import settings
from fitdash.modules.gyms.logo_storage import LogoStorage
from fitdash.modules.gyms.schemas import (
    GymCreate, GymUpdate, GymResponse, GymSummary, LogoUploadResponse, GymMemberResponse
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def matches_search(gym: dict, search: str) -> bool:
    """Case-insensitive match on gym name or tagline"""
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in (gym.get("name") or "").lower() or needle in (gym.get("tagline") or "").lower()


class GymService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_gyms(self, search: Optional[str] = None) -> List[GymSummary]:
        """All gyms ordered by name, optionally filtered by a search term"""
        try:
            result = self.supabase.table("gyms")\
                .select("id, name, tagline, city, logo_url")\
                .order("name")\
                .execute()
            gyms = result.data or []
            if search:
                gyms = [g for g in gyms if matches_search(g, search)]
            return [GymSummary(**gym) for gym in gyms]
        except Exception as e:
            logger.error(f"Error loading gyms: {e}")
            raise HTTPException(status_code=500, detail="Failed to load gyms")

    def get_gym_by_id(self, gym_id: str) -> GymResponse:
        try:
            result = self.supabase.table("gyms")\
                .select("*")\
                .eq("id", gym_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Gym not found")

            return GymResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_owned_gym(self, owner_id: str) -> Optional[GymResponse]:
        try:
            result = self.supabase.table("gyms")\
                .select("*")\
                .eq("owner_id", owner_id)\
                .limit(1)\
                .execute()
            return GymResponse(**result.data[0]) if result.data else None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_gym(self, gym_data: GymCreate, owner_id: str) -> GymResponse:
        """Create the owner's gym (one per owner)"""
        if self.get_owned_gym(owner_id):
            raise HTTPException(status_code=409, detail="You already have a gym")
        try:
            result = self.supabase.table("gyms").insert({
                "owner_id": owner_id,
                "name": gym_data.name,
                "tagline": gym_data.tagline or None,
                "city": gym_data.city or None,
                "logo_url": gym_data.logo_url
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create gym")

            logger.info("Owner %s created gym %s", owner_id, result.data[0]["id"])
            return GymResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_gym(self, gym_id: str, gym_data: GymUpdate) -> GymResponse:
        try:
            update_data = {"updated_at": datetime.utcnow().isoformat()}
            if gym_data.name:
                update_data["name"] = gym_data.name
            if gym_data.tagline is not None:
                update_data["tagline"] = gym_data.tagline or None
            if gym_data.city is not None:
                update_data["city"] = gym_data.city or None
            if gym_data.logo_url is not None:
                update_data["logo_url"] = gym_data.logo_url

            result = self.supabase.table("gyms")\
                .update(update_data)\
                .eq("id", gym_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Gym not found")

            return GymResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def upload_logo(self, owner_id: str, filename: str, content: bytes, content_type: Optional[str]) -> LogoUploadResponse:
        """Store a logo image under the owner's folder and return its public URL"""
        if not content_type or not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="Please upload an image file")
        if len(content) > settings.max_logo_bytes:
            raise HTTPException(status_code=400, detail="File size must be less than 2MB")
        try:
            storage = LogoStorage(self.supabase)
            key = storage.logo_key(owner_id, filename)
            url = storage.upload_file(content, key, content_type)
            return LogoUploadResponse(path=key, logo_url=url)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to upload logo: {str(e)}")

    def list_members(self, gym_id: str) -> List[GymMemberResponse]:
        """Member roster of a gym, sorted by name"""
        try:
            result = self.supabase.table("profiles")\
                .select("user_id, name, email, total_points, weekly_goal, created_at")\
                .eq("gym_id", gym_id)\
                .order("name")\
                .execute()
            return [
                GymMemberResponse(
                    user_id=member["user_id"],
                    name=member.get("name") or "Unknown",
                    email=member.get("email"),
                    total_points=member.get("total_points") or 0,
                    weekly_goal=member.get("weekly_goal"),
                    joined_at=member.get("created_at")
                )
                for member in result.data or []
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
