from fastapi import APIRouter, Depends
from fitdash.database.supabase_client import get_session_supabase
from fitdash.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, CurrentUserResponse
)
from fitdash.modules.auth.service import AuthService, resolve_landing_route, display_name
from fitdash.core.dependencies import get_current_user_id, get_current_token, get_user_supabase
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


def get_session_auth_service(supabase: Client = Depends(get_session_supabase)) -> AuthService:
    return AuthService(supabase)


def get_user_auth_service(supabase: Client = Depends(get_user_supabase)) -> AuthService:
    return AuthService(supabase)


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_session_auth_service)
):
    """Register a member or gym owner"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_session_auth_service)
):
    """Login and get access token plus the landing route for the user's role"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_user_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    service: AuthService = Depends(get_user_auth_service),
):
    """Current user, roles and where the client should redirect them"""
    roles = service.get_roles(current_user["id"])
    profile = service.get_profile(current_user["id"])
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email") or "",
        name=display_name(current_user, profile),
        roles=roles,
        gym_id=profile.get("gym_id") if profile else None,
        redirect_to=resolve_landing_route(roles, profile)
    )
