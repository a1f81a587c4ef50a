from typing import Optional

from .base import Record, Relation, TableSpec
from .ids import generate_vehicle_id

# Placeholder so new records sort last until an admin orders them
LAST_SORT_ORDER = 999

RENT_TERMS = (60, 48, 36, 24)
DOWN_PAYMENT_RATES = (0, 25, 50)
RENT_PRICE_FIELDS = tuple(
    f"rent_price_{months}_{rate}" for rate in DOWN_PAYMENT_RATES for months in RENT_TERMS
)

SORTED_BY_ORDER = {"sort_order": "asc"}


def _vehicle_id(record: Record) -> Optional[str]:
    if not (record.get("brand_id") and record.get("category") and record.get("name")):
        return None
    return generate_vehicle_id(record["brand_id"], record["category"], record["name"])


BRANDS = TableSpec(
    name="brands",
    fields=("id", "name_kr", "name_en", "logo", "is_domestic", "sort_order", "is_active"),
    defaults={
        "is_domestic": True,
        "is_active": True,
        "sort_order": LAST_SORT_ORDER,
    },
    id_prefix="brand",
)

VEHICLES = TableSpec(
    name="vehicles",
    fields=(
        "id", "name", "brand_id", "category",
        "fuel_types", "drive_types",
        "seating_capacity_min", "seating_capacity_max",
        "base_price",
    ) + RENT_PRICE_FIELDS + (
        "thumbnail", "images", "image_size_preset", "image_padding",
        "is_popular", "is_new", "is_active", "sort_order",
    ),
    defaults={
        "fuel_types": [],
        "drive_types": [],
        "base_price": 0,
        "images": [],
        "is_popular": False,
        "is_new": False,
        "is_active": True,
        "sort_order": LAST_SORT_ORDER,
    },
    id_prefix="vehicle",
    id_factory=_vehicle_id,
    relations=(
        Relation("brand", target="brands", local_key="brand_id", foreign_key="id"),
        Relation("trims", target="trims", local_key="id", foreign_key="vehicle_id",
                 many=True, order_by=SORTED_BY_ORDER),
        Relation("colors", target="colors", local_key="id", foreign_key="vehicle_id",
                 many=True, order_by=SORTED_BY_ORDER),
        Relation("options", target="options", local_key="id", foreign_key="vehicle_id",
                 many=True, order_by=SORTED_BY_ORDER),
    ),
)

TRIMS = TableSpec(
    name="trims",
    fields=("id", "vehicle_id", "name", "price", "description", "sort_order"),
    defaults={"price": 0, "sort_order": LAST_SORT_ORDER},
    id_prefix="trim",
    relations=(Relation("vehicle", target="vehicles", local_key="vehicle_id", foreign_key="id"),),
)

COLORS = TableSpec(
    name="colors",
    fields=("id", "vehicle_id", "type", "name", "hex_code", "price", "sort_order"),
    defaults={"price": 0, "sort_order": LAST_SORT_ORDER},
    id_prefix="color",
    relations=(Relation("vehicle", target="vehicles", local_key="vehicle_id", foreign_key="id"),),
)

OPTIONS = TableSpec(
    name="options",
    fields=("id", "vehicle_id", "name", "price", "description", "category", "sort_order"),
    defaults={"price": 0, "sort_order": LAST_SORT_ORDER},
    id_prefix="option",
    relations=(Relation("vehicle", target="vehicles", local_key="vehicle_id", foreign_key="id"),),
)

FAQS = TableSpec(
    name="faqs",
    fields=("id", "question", "answer", "is_active", "sort_order"),
    defaults={"is_active": True, "sort_order": LAST_SORT_ORDER},
    id_prefix="faq",
)

BANNERS = TableSpec(
    name="banners",
    fields=(
        "id", "title", "subtitle", "image", "mobile_image", "link", "link_text",
        "description", "background_color", "text_color",
        "start_date", "end_date", "sort_order", "is_active",
    ),
    # New banners and partners go first
    defaults={"is_active": True, "sort_order": 0},
    id_prefix="banner",
)

PARTNERS = TableSpec(
    name="partners",
    fields=("id", "name", "logo", "link", "category", "description", "sort_order", "is_active"),
    defaults={"is_active": True, "sort_order": 0},
    id_prefix="partner",
)

ADMINS = TableSpec(
    name="admins",
    fields=("id", "email", "password", "name"),
    id_prefix="admin",
    unique_fields=("id", "email"),
)

ALL_TABLES = (BRANDS, VEHICLES, TRIMS, COLORS, OPTIONS, FAQS, BANNERS, PARTNERS, ADMINS)
