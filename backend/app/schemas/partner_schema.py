from pydantic import BaseModel, Field
from typing import Optional

from .common import non_nullable

class PartnerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    logo: Optional[str] = Field(None, description="Logo URL or data URI")
    link: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50, description="e.g. insurance, finance")
    description: Optional[str] = Field(None, max_length=500)
    sort_order: int = Field(0, ge=0)
    is_active: bool = True

class PartnerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    logo: Optional[str] = None
    link: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    check_required = non_nullable("name", "sort_order", "is_active")

class Partner(BaseModel):
    id: str
    name: str
    logo: Optional[str] = None
    link: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
