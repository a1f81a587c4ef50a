from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON, String, Text
from ..core.database import Base

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String, primary_key=True, index=True)  # e.g. "kisuv-sorento"
    name = Column(String, nullable=False)
    brand_id = Column(String, ForeignKey("brands.id"), index=True, nullable=False)
    category = Column(String, nullable=False)  # SEDAN, SUV, TRUCK, VAN, EV
    fuel_types = Column(JSON, default=list)
    drive_types = Column(JSON, default=list)
    seating_capacity_min = Column(Integer)
    seating_capacity_max = Column(Integer)
    base_price = Column(Integer, nullable=False, default=0)

    # Monthly rent by term (months) and down payment (%)
    rent_price_60_0 = Column(Integer)
    rent_price_48_0 = Column(Integer)
    rent_price_36_0 = Column(Integer)
    rent_price_24_0 = Column(Integer)
    rent_price_60_25 = Column(Integer)
    rent_price_48_25 = Column(Integer)
    rent_price_36_25 = Column(Integer)
    rent_price_24_25 = Column(Integer)
    rent_price_60_50 = Column(Integer)
    rent_price_48_50 = Column(Integer)
    rent_price_36_50 = Column(Integer)
    rent_price_24_50 = Column(Integer)

    thumbnail = Column(Text)
    images = Column(JSON, default=list)
    image_size_preset = Column(String)
    image_padding = Column(Integer)
    is_popular = Column(Boolean, default=False)
    is_new = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=999)
    position = Column(Integer, nullable=False, default=0, index=True)


class Trim(Base):
    __tablename__ = "trims"

    id = Column(String, primary_key=True, index=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Integer, default=0)
    description = Column(Text)
    sort_order = Column(Integer, default=999)
    position = Column(Integer, nullable=False, default=0, index=True)


class Color(Base):
    __tablename__ = "colors"

    id = Column(String, primary_key=True, index=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id"), index=True, nullable=False)
    type = Column(String, nullable=False)  # EXTERIOR, INTERIOR
    name = Column(String, nullable=False)
    hex_code = Column(String(7), nullable=False)
    price = Column(Integer, default=0)
    sort_order = Column(Integer, default=999)
    position = Column(Integer, nullable=False, default=0, index=True)


class VehicleOption(Base):
    __tablename__ = "options"

    id = Column(String, primary_key=True, index=True)
    vehicle_id = Column(String, ForeignKey("vehicles.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Integer, default=0)
    description = Column(Text)
    category = Column(String(50))
    sort_order = Column(Integer, default=999)
    position = Column(Integer, nullable=False, default=0, index=True)
