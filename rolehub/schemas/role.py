from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Role(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class RoleCreate(BaseModel):
    name: str = Field(..., description="Role name; normalized to upper case")


class RoleUpdate(BaseModel):
    name: str = Field(..., description="New role name; normalized to upper case")


class RoleCount(BaseModel):
    count: int


class RoleExists(BaseModel):
    exists: bool
