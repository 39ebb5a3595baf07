from pydantic import BaseModel, EmailStr, Field

from college_erp.core.enums import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=2)
    role: UserRole
    password: str = Field(..., min_length=6)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    name: str
