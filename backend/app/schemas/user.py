from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., pattern=r"^\+?[0-9]{6,15}$")


class UserOut(BaseModel):
    id: str
    name: str
    phone: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
