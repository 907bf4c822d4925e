from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from fixgeni.schemas.base import CamelModel

class CategoryOut(CamelModel):
    id: int
    slug: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class CategoryList(CamelModel):
    items: List[CategoryOut]
    total: int

class CategoryCreate(CamelModel):
    name: str = Field(..., max_length=120)
    slug: Optional[str] = Field(default=None, max_length=80)
    description: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=32)
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator('slug')
    @classmethod
    def blank_slug_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
