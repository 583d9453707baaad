"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fitdash.database.supabase_client import SupabaseClient, get_supabase
from fitdash.modules.auth.service import AuthService
from supabase import Client
from typing import List, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_supabase(token: str = Depends(get_current_token)) -> Client:
    """Supabase client acting as the caller, so table access goes through RLS"""
    return SupabaseClient.create_user_client(token)


def get_user_roles(user_id: str, supabase: Client) -> List[str]:
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", user_id)\
            .execute()
        return [r["role"] for r in result.data or []]
    except Exception as e:
        logger.error(f"Error getting user roles: {e}")
        return []


def is_admin(user_data: dict, supabase: Client) -> bool:
    roles = user_data.get("roles")
    if roles is None:
        roles = get_user_roles(user_data["id"], supabase)
    return "admin" in roles


def get_user_profile(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    result = supabase.table("profiles")\
        .select("*")\
        .eq("user_id", user_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def get_user_gym_id(user_id: str, supabase: Client) -> Optional[str]:
    """gym_id from the user's profile (None when not joined)"""
    try:
        profile = get_user_profile(user_id, supabase)
        return profile.get("gym_id") if profile else None
    except Exception as e:
        logger.error(f"Error getting user gym id: {e}")
        return None


def get_owned_gym(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """The gym owned by user_id, if any"""
    result = supabase.table("gyms")\
        .select("*")\
        .eq("owner_id", user_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def require_role(required_role: str):
    """Factory function to create role check dependency"""
    def check_role(
        user_data: dict = Depends(get_current_user_id),
        supabase: Client = Depends(get_user_supabase)
    ) -> dict:
        """Dependency to check if user holds required role (admins always pass)"""
        roles = get_user_roles(user_data["id"], supabase)
        if required_role not in roles and "admin" not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. You must be a gym {required_role}."
            )
        return {**user_data, "roles": roles}
    return check_role


def check_gym_owner(gym_id: str, user_data: dict, supabase: Client) -> Dict[str, Any]:
    """Return the gym if user owns it (or is admin)"""
    result = supabase.table("gyms")\
        .select("*")\
        .eq("id", gym_id)\
        .limit(1)\
        .execute()
    if not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gym not found"
        )
    gym = result.data[0]
    if gym.get("owner_id") == user_data["id"] or is_admin(user_data, supabase):
        return gym
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You must be the owner of this gym to perform this action"
    )


def check_gym_access(gym_id: str, user_data: dict, supabase: Client) -> dict:
    """Allow the gym's owner, its members and admins"""
    user_id = user_data["id"]
    if get_user_gym_id(user_id, supabase) == gym_id:
        return user_data
    owned = get_owned_gym(user_id, supabase)
    if owned and owned["id"] == gym_id:
        return user_data
    if is_admin(user_data, supabase):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You must be a member of this gym"
    )
