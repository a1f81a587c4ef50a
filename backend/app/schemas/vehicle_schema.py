from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from .brand_schema import Brand
from .common import non_nullable
from .trim_schema import Trim
from .color_schema import Color
from .option_schema import VehicleOption

VehicleCategory = Literal["SEDAN", "SUV", "TRUCK", "VAN", "EV", "COMPACT", "HATCHBACK", "COUPE", "CONVERTIBLE"]

class RentPrices(BaseModel):
    """Monthly rent by contract term (months) and down payment (%)"""
    rent_price_60_0: Optional[int] = Field(None, ge=0)
    rent_price_48_0: Optional[int] = Field(None, ge=0)
    rent_price_36_0: Optional[int] = Field(None, ge=0)
    rent_price_24_0: Optional[int] = Field(None, ge=0)
    rent_price_60_25: Optional[int] = Field(None, ge=0)
    rent_price_48_25: Optional[int] = Field(None, ge=0)
    rent_price_36_25: Optional[int] = Field(None, ge=0)
    rent_price_24_25: Optional[int] = Field(None, ge=0)
    rent_price_60_50: Optional[int] = Field(None, ge=0)
    rent_price_48_50: Optional[int] = Field(None, ge=0)
    rent_price_36_50: Optional[int] = Field(None, ge=0)
    rent_price_24_50: Optional[int] = Field(None, ge=0)

class VehicleBase(RentPrices):
    name: str = Field(..., min_length=1, max_length=200, description="Vehicle model name")
    brand_id: str = Field(..., min_length=1, description="Owning brand")
    category: VehicleCategory
    fuel_types: List[str] = Field(default_factory=list, description="GASOLINE, DIESEL, HYBRID, EV, LPG")
    drive_types: List[str] = Field(default_factory=list)
    seating_capacity_min: Optional[int] = Field(None, ge=1, le=20)
    seating_capacity_max: Optional[int] = Field(None, ge=1, le=20)
    base_price: int = Field(..., ge=0, description="Vehicle price in KRW")
    thumbnail: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    image_size_preset: Optional[str] = None
    image_padding: Optional[int] = Field(None, ge=0, le=50)
    is_popular: bool = False
    is_new: bool = False
    is_active: bool = True
    sort_order: int = Field(999, ge=0)

class VehicleCreate(VehicleBase):
    """Schema for adding a new vehicle"""
    id: Optional[str] = Field(None, description="Explicit id; generated from brand, category and name when omitted")

class VehicleUpdate(RentPrices):
    """Schema for a partial vehicle update; omitted fields are left untouched"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    brand_id: Optional[str] = Field(None, min_length=1)
    category: Optional[VehicleCategory] = None
    fuel_types: Optional[List[str]] = None
    drive_types: Optional[List[str]] = None
    seating_capacity_min: Optional[int] = Field(None, ge=1, le=20)
    seating_capacity_max: Optional[int] = Field(None, ge=1, le=20)
    base_price: Optional[int] = Field(None, ge=0)
    thumbnail: Optional[str] = None
    images: Optional[List[str]] = None
    image_size_preset: Optional[str] = None
    image_padding: Optional[int] = Field(None, ge=0, le=50)
    is_popular: Optional[bool] = None
    is_new: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = Field(None, ge=0)

    check_required = non_nullable(
        "name", "brand_id", "category", "fuel_types", "drive_types", "base_price",
        "images", "is_popular", "is_new", "is_active", "sort_order",
    )

class Vehicle(RentPrices):
    """Schema for reading a vehicle (output)"""
    id: str
    name: str
    brand_id: str
    category: str
    fuel_types: List[str] = []
    drive_types: List[str] = []
    seating_capacity_min: Optional[int] = None
    seating_capacity_max: Optional[int] = None
    base_price: int = 0
    thumbnail: Optional[str] = None
    images: List[str] = []
    image_size_preset: Optional[str] = None
    image_padding: Optional[int] = None
    is_popular: bool = False
    is_new: bool = False
    is_active: bool = True
    sort_order: int = 999

class VehicleWithBrand(Vehicle):
    brand: Optional[Brand] = None

class VehicleDetail(VehicleWithBrand):
    """Vehicle page payload: the vehicle plus its trims, colors and options"""
    trims: List[Trim] = []
    colors: List[Color] = []
    options: List[VehicleOption] = []

class ImportRequest(BaseModel):
    """Copy colors and/or options from other vehicles into this one"""
    source_vehicle_ids: List[str] = Field(..., min_length=1)
    import_colors: bool = True
    import_options: bool = True
