import json

import pytest

from app.storage.store import build_local_store


def write_table(data_dir, name, records):
    path = data_dir / name
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def store(data_dir):
    return build_local_store(str(data_dir))


@pytest.fixture
def catalog(store):
    """Two brands, three vehicles, a few trims"""
    store.brands.create({"id": "brand-kia", "name_kr": "기아", "name_en": "Kia", "sort_order": 1})
    store.brands.create({"id": "brand-bmw", "name_kr": "BMW", "name_en": "BMW", "is_domestic": False, "sort_order": 2})

    store.vehicles.create({
        "name": "Sorento", "brand_id": "brand-kia", "category": "SUV",
        "base_price": 35000000, "rent_price_60_0": 620000, "is_popular": True, "sort_order": 2,
    })
    store.vehicles.create({
        "name": "K5", "brand_id": "brand-kia", "category": "SEDAN",
        "base_price": 28000000, "rent_price_60_0": 480000, "sort_order": 1,
    })
    store.vehicles.create({
        "name": "X5", "brand_id": "brand-bmw", "category": "SUV",
        "base_price": 110000000, "rent_price_60_0": 1500000, "is_active": False, "sort_order": 3,
    })

    store.trims.create({"vehicle_id": "kisuv-sorento", "name": "Signature", "price": 4000000, "sort_order": 2})
    store.trims.create({"vehicle_id": "kisuv-sorento", "name": "Prestige", "price": 0, "sort_order": 1})
    store.colors.create({"vehicle_id": "kisuv-sorento", "type": "EXTERIOR", "name": "Snow White", "hex_code": "#FFFFFF"})
    return store
