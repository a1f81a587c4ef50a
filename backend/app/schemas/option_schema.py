from pydantic import BaseModel, Field
from typing import Optional

from .common import non_nullable

class OptionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(0, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50, description="Grouping shown in the option list")
    sort_order: int = Field(999, ge=0)

class OptionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50)
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable("name", "price", "sort_order")

class VehicleOption(BaseModel):
    id: str
    vehicle_id: str
    name: str
    price: int = 0
    description: Optional[str] = None
    category: Optional[str] = None
    sort_order: int = 999
