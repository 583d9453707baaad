from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GymCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    tagline: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    logo_url: Optional[str] = None


class GymUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    tagline: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    logo_url: Optional[str] = None


class GymResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    tagline: Optional[str] = None
    city: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GymSummary(BaseModel):
    id: str
    name: str
    tagline: Optional[str] = None
    city: Optional[str] = None
    logo_url: Optional[str] = None


class LogoUploadResponse(BaseModel):
    path: str
    logo_url: str


class GymMemberResponse(BaseModel):
    user_id: str
    name: str
    email: Optional[str] = None
    total_points: int = 0
    weekly_goal: Optional[int] = None
    joined_at: Optional[datetime] = None
