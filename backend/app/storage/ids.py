import random
import re
import string
import time
from typing import Container

# Short codes keep vehicle ids human-legible, e.g. "kisuv-sorento"
BRAND_CODES = {
    "brand-hyundai": "hd",
    "brand-kia": "ki",
    "brand-genesis": "gn",
    "brand-renault": "rn",
    "brand-kg": "kg",
    "brand-chevrolet": "cv",
    "brand-bmw": "bm",
    "brand-benz": "bz",
    "brand-audi": "ad",
    "brand-volkswagen": "vw",
    "brand-toyota": "ty",
    "brand-honda": "hd",
    "brand-nissan": "ns",
    "brand-volvo": "vo",
    "brand-tesla": "ts",
}

CATEGORY_CODES = {
    "SEDAN": "sed",
    "SUV": "suv",
    "TRUCK": "trk",
    "VAN": "van",
    "EV": "ev",
}

_BASE36 = string.digits + string.ascii_lowercase
_NAME_STRIP = re.compile(r"[^a-z0-9가-힣]")


def generate_id(prefix: str) -> str:
    """Timestamp plus random suffix, e.g. ``faq-1718000000000-k3j9x0a1b``."""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def generate_vehicle_id(brand_id: str, category: str, name: str) -> str:
    """Brand code + category code + normalized vehicle name."""
    brand_code = BRAND_CODES.get(brand_id) or brand_id.replace("brand-", "")[:2]
    category_code = CATEGORY_CODES.get(category) or category.lower()[:3]
    name_code = _NAME_STRIP.sub("", re.sub(r"\s+", "", name.lower()))
    return f"{brand_code}{category_code}-{name_code}"


def unique_id(candidate: str, taken: Container[str]) -> str:
    """Append -1, -2, ... until the id no longer collides."""
    new_id = candidate
    counter = 1
    while new_id in taken:
        new_id = f"{candidate}-{counter}"
        counter += 1
    return new_id
