from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime


class PartnerCreate(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    service_type: str = Field(min_length=1, max_length=100)
    city: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=50)
    email: EmailStr
    website: str = Field(min_length=1, max_length=255)


class PartnerUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    service_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(default=None, min_length=1, max_length=255)


class PartnerResponse(BaseModel):
    id: str
    gym_id: str
    company_name: str
    service_type: str
    city: str
    phone: str
    email: str
    website: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PartnerGymInfo(BaseModel):
    id: str
    name: str
    city: Optional[str] = None


class PartnerListResponse(BaseModel):
    gym: Optional[PartnerGymInfo] = None
    service_types: List[str]
    partners: List[PartnerResponse]
