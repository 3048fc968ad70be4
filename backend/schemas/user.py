from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests; the role is always customer
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    phone: Optional[str] = None
    default_address: Optional[str] = None

# Output schema for user profile details
class UserResponse(UserBase):
    id: int
    full_name: str
    phone: Optional[str] = None
    default_address: Optional[str] = None
    role_id: int
    role_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

# Registration result wrapping the created profile
class RegisterResponse(BaseModel):
    user: UserResponse

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

# Schema for profile changes; fields left out stay as they are
class ProfileUpdate(BaseModel):
    user_id: int = Field(alias="userId", gt=0)
    full_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    default_address: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
