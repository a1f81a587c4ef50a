from pydantic import BaseModel, Field
from typing import Optional

from .common import non_nullable

class TrimCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Trim name")
    price: int = Field(0, ge=0, description="Price added to the base vehicle")
    description: Optional[str] = Field(None, max_length=500)
    sort_order: int = Field(999, ge=0)

class TrimUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable("name", "price", "sort_order")

class Trim(BaseModel):
    id: str
    vehicle_id: str
    name: str
    price: int = 0
    description: Optional[str] = None
    sort_order: int = 999
