"""
Pydantic schemas for authentication and user management.

Field names are snake_case in Python and camelCase on the wire
(firstName, lastName, isAdmin). Request schemas reject unknown fields.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    """Base schema mapping snake_case attributes to camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class UserAuthRequest(StrictCamelModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserRegisterRequest(StrictCamelModel):
    """Request schema for self-registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: Optional[bool] = None


class UserNewRequest(StrictCamelModel):
    """Request schema for admins adding a user. Password is optional."""
    username: str = Field(..., min_length=1, max_length=25)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False


class UserUpdateRequest(StrictCamelModel):
    """Partial update; only the fields sent are changed."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password hash)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied for."""
    jobs: List[int] = []


class UserEnvelope(BaseModel):
    user: UserDetailResponse


class UserListEnvelope(BaseModel):
    users: List[UserDetailResponse]


class UserCreatedResponse(CamelModel):
    """Response for admin-created users; temp_password only when generated."""
    user: UserResponse
    token: str
    temp_password: Optional[str] = None


class ApplicationResponse(BaseModel):
    applied: int


class UserDeletedResponse(BaseModel):
    deleted: str
