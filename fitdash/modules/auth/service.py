import logging
from supabase import Client
from fitdash.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)


def resolve_landing_route(roles: List[str], profile: Optional[Dict[str, Any]]) -> str:
    """Where the client should send a signed-in user"""
    if "owner" in roles or "admin" in roles:
        return "/owner-dashboard"
    if not profile or not profile.get("gym_id"):
        return "/join-gym"
    if not profile.get("weekly_goal"):
        return "/set-goal"
    return "/"


def display_name(user_data: Dict[str, Any], profile: Optional[Dict[str, Any]] = None) -> str:
    if profile and profile.get("name"):
        return profile["name"]
    metadata = user_data.get("user_metadata") or {}
    if metadata.get("name"):
        return metadata["name"]
    email = user_data.get("email") or ""
    return email.split("@")[0] or "Champion"


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new member or owner using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"name": register_data.name}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="This email is already registered. Please log in instead.")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

        user = auth_response.user
        # Members get their member role when they join a gym
        roles: List[str] = []
        if register_data.user_type == "owner":
            try:
                self.supabase.table("user_roles").insert({
                    "user_id": user.id,
                    "role": "owner"
                }).execute()
            except Exception as e:
                logger.error(f"Error adding owner role for {user.id}: {e}")
                raise HTTPException(
                    status_code=500,
                    detail="Account created, but the owner role could not be assigned. Please contact support."
                )
            roles = ["owner"]

        logger.info("Registered %s as %s", user.id, register_data.user_type)
        return RegisterResponse(
            user_id=user.id,
            email=user.email or register_data.email,
            roles=roles,
            message="Account created successfully!"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid email or password")
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

        user_id = auth_response.user.id
        roles = self.get_roles(user_id)
        profile = self.get_profile(user_id)
        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=user_id,
            email=auth_response.user.email or login_data.email,
            roles=roles,
            redirect_to=resolve_landing_route(roles, profile)
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            return {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def get_roles(self, user_id: str) -> List[str]:
        """Roles held by a user (user_roles rows)"""
        try:
            result = self.supabase.table("user_roles")\
                .select("role")\
                .eq("user_id", user_id)\
                .execute()
            return [r["role"] for r in result.data or []]
        except Exception as e:
            logger.error(f"Error getting roles for {user_id}: {e}")
            return []

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error getting profile for {user_id}: {e}")
            return None

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        try:
            # Supabase tokens are stateless JWTs; this revokes the refresh session
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
