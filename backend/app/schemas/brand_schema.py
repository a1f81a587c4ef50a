from pydantic import BaseModel, Field
from typing import Optional

from .common import non_nullable

class BrandBase(BaseModel):
    name_kr: str = Field(..., min_length=1, max_length=100, description="Brand name shown on the site")
    name_en: Optional[str] = Field(None, max_length=100, description="English brand name")
    logo: Optional[str] = Field(None, description="Logo URL or data URI")
    is_domestic: bool = True
    is_active: bool = True
    sort_order: int = Field(999, ge=0, description="Manual display order")

class BrandCreate(BrandBase):
    """Schema for registering a new brand"""
    pass

class BrandUpdate(BaseModel):
    """Schema for a partial brand update; omitted fields are left untouched"""
    name_kr: Optional[str] = Field(None, min_length=1, max_length=100)
    name_en: Optional[str] = Field(None, max_length=100)
    logo: Optional[str] = None
    is_domestic: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable("name_kr", "is_domestic", "is_active", "sort_order")

class Brand(BaseModel):
    """Schema for reading a brand (output)"""
    id: str
    name_kr: Optional[str] = None
    name_en: Optional[str] = None
    logo: Optional[str] = None
    is_domestic: bool = True
    is_active: bool = True
    sort_order: int = 999
