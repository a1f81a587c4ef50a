from pydantic import BaseModel, Field
from typing import Literal, Optional

from .common import non_nullable

ColorType = Literal["EXTERIOR", "INTERIOR"]
HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"

class ColorCreate(BaseModel):
    type: ColorType
    name: str = Field(..., min_length=1, max_length=100)
    hex_code: str = Field(..., pattern=HEX_PATTERN, description="e.g. #1A1A1A")
    price: int = Field(0, ge=0)
    sort_order: int = Field(999, ge=0)

class ColorUpdate(BaseModel):
    type: Optional[ColorType] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    hex_code: Optional[str] = Field(None, pattern=HEX_PATTERN)
    price: Optional[int] = Field(None, ge=0)
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable("type", "name", "hex_code", "price", "sort_order")

class Color(BaseModel):
    id: str
    vehicle_id: str
    type: str
    name: str
    hex_code: str
    price: int = 0
    sort_order: int = 999
