from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Literal, Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    user_type: Literal["member", "owner"] = "member"

    @field_validator("email")
    @classmethod
    def email_length(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Email must be less than 255 characters")
        return value


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    roles: List[str] = []
    redirect_to: str


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    roles: List[str] = []
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    name: str
    roles: List[str] = []
    gym_id: Optional[str] = None
    redirect_to: str
