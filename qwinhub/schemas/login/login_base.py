from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AdminOut(BaseModel):
    id: UUID
    email: str
    role: str = "admin"

    model_config = ConfigDict(from_attributes=True)
