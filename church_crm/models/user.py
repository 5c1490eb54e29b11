"""System user models (accounts, distinct from church members)"""

from typing import Literal, Optional

from pydantic import BaseModel

Role = Literal["admin", "user"]


class UserCreateRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None
    role: Role = "user"


class UserUpdateRequest(BaseModel):
    email: str
    name: Optional[str] = None
    role: Role = "user"
    password: Optional[str] = None  # re-hashed only when non-empty


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
