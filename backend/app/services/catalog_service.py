# backend/app/services/catalog_service.py

"""
Catalog queries and the integrity rules the storage layer leaves to its callers:
- brands that still own vehicles cannot be deleted
- deleting a vehicle removes its trims, colors and options
- "move up / move down" swaps sort order with the neighbouring record
- colors and options can be copied over from other vehicles, skipping duplicates
"""

import logging
from typing import Dict, List, Optional

from ..storage.base import Repository
from ..storage.store import DataStore
from ..storage.tables import DOWN_PAYMENT_RATES, RENT_TERMS

logger = logging.getLogger(__name__)

POPULAR_LIMIT = 8

# Public sort keys accepted by the vehicle list
SORT_OPTIONS = {
    "sort_order": {"sort_order": "asc"},
    "price-asc": {"rent_price_60_0": "asc"},
    "price-desc": {"rent_price_60_0": "desc"},
    "name": {"name": "asc"},
}

VEHICLE_CHILDREN = ("trims", "colors", "options")


class BrandInUseError(Exception):
    def __init__(self, brand_id: str, vehicle_count: int):
        self.brand_id = brand_id
        self.vehicle_count = vehicle_count
        super().__init__(f"Brand {brand_id} still has {vehicle_count} vehicle(s)")


def vehicle_filters(
    brand_id: Optional[str] = None,
    category: Optional[str] = None,
    is_popular: Optional[bool] = None,
    include_inactive: bool = False,
) -> Dict:
    where = {} if include_inactive else {"is_active": True}
    if brand_id:
        where["brand_id"] = brand_id
    if category:
        where["category"] = category
    if is_popular:
        where["is_popular"] = True
    return where


def vehicle_order(sort: Optional[str]) -> Dict[str, str]:
    return SORT_OPTIONS.get(sort or "sort_order", SORT_OPTIONS["sort_order"])


def list_vehicles(store: DataStore, sort: Optional[str] = None, **filters) -> List[dict]:
    return store.vehicles.find_many(
        where=vehicle_filters(**filters),
        order_by=vehicle_order(sort),
        include={"brand": True},
    )


def popular_vehicles(store: DataStore, limit: int = POPULAR_LIMIT) -> List[dict]:
    return store.vehicles.find_many(
        where={"is_active": True, "is_popular": True},
        order_by={"sort_order": "asc"},
        include={"brand": True},
        take=limit,
    )


def admin_vehicles(store: DataStore) -> List[dict]:
    """Active vehicles first, then by manual order"""
    return store.vehicles.find_many(
        order_by=[{"is_active": "desc"}, {"sort_order": "asc"}],
        include={"brand": True},
    )


def vehicle_detail(store: DataStore, vehicle_id: str) -> Optional[dict]:
    return store.vehicles.find_unique(
        where={"id": vehicle_id},
        include={"brand": True, "trims": True, "colors": True, "options": True},
    )


def delete_brand(store: DataStore, brand_id: str) -> bool:
    vehicle_count = store.vehicles.count(where={"brand_id": brand_id})
    if vehicle_count > 0:
        raise BrandInUseError(brand_id, vehicle_count)
    return store.brands.delete(where={"id": brand_id})


def delete_vehicle(store: DataStore, vehicle_id: str) -> bool:
    # Not atomic: a failure part way leaves the children already removed
    if store.vehicles.find_unique(where={"id": vehicle_id}) is None:
        return False
    for table in VEHICLE_CHILDREN:
        removed = store.tables[table].delete_many(where={"vehicle_id": vehicle_id})
        if removed:
            logger.info(f"Removed {removed} {table} of vehicle {vehicle_id}")
    return store.vehicles.delete(where={"id": vehicle_id})


def move(repo: Repository, record_id: str, direction: str, scope: Optional[Dict] = None) -> Optional[List[dict]]:
    """
    Move a record one place up or down within ``scope`` (e.g. one vehicle's trims).
    Returns the siblings in their new order, or None if the record is unknown.
    """
    if direction not in ("up", "down"):
        raise ValueError("direction must be 'up' or 'down'")

    siblings = repo.find_many(where=scope, order_by={"sort_order": "asc"})
    index = next((i for i, r in enumerate(siblings) if r["id"] == record_id), None)
    if index is None:
        return None

    neighbour = index - 1 if direction == "up" else index + 1
    if neighbour < 0 or neighbour >= len(siblings):
        return siblings

    current, other = siblings[index], siblings[neighbour]
    siblings[index], siblings[neighbour] = other, current

    if current.get("sort_order") != other.get("sort_order"):
        repo.update(where={"id": current["id"]}, data={"sort_order": other.get("sort_order")})
        repo.update(where={"id": other["id"]}, data={"sort_order": current.get("sort_order")})
        current["sort_order"], other["sort_order"] = other.get("sort_order"), current.get("sort_order")
        return siblings

    # Equal values cannot be swapped; renumber the whole scope instead
    for position, record in enumerate(siblings):
        if record.get("sort_order") != position:
            repo.update(where={"id": record["id"]}, data={"sort_order": position})
            record["sort_order"] = position
    return siblings


def rent_price(vehicle: dict, months: int, down_payment: int) -> Optional[int]:
    """Monthly rent for a contract term and down payment rate, if priced."""
    if months not in RENT_TERMS:
        raise ValueError(f"months must be one of {RENT_TERMS}")
    if down_payment not in DOWN_PAYMENT_RATES:
        raise ValueError(f"down_payment must be one of {DOWN_PAYMENT_RATES}")
    return vehicle.get(f"rent_price_{months}_{down_payment}")


def _color_key(color: dict):
    return (color.get("type"), color.get("name"))


def _option_key(option: dict):
    return option.get("name")


# table -> (duplicate key, fields copied onto the new record, label for skipped items)
IMPORTABLE = {
    "colors": (_color_key, ("type", "name", "hex_code", "price", "sort_order"),
               lambda c: f"{c.get('name')} ({c.get('type')})"),
    "options": (_option_key, ("name", "price", "description", "category", "sort_order"),
                lambda o: o.get("name")),
}


def import_items(
    store: DataStore,
    vehicle_id: str,
    source_vehicle_ids: List[str],
    import_colors: bool = True,
    import_options: bool = True,
) -> Optional[Dict[str, dict]]:
    """
    Copy colors and/or options of other vehicles onto ``vehicle_id``.
    Items the vehicle already has (same name, and same type for colors) are
    skipped, as are repeats among the sources. Returns None if the vehicle is unknown.
    """
    if store.vehicles.find_unique(where={"id": vehicle_id}) is None:
        return None

    wanted = [name for name, enabled in (("colors", import_colors), ("options", import_options)) if enabled]
    result = {}
    for table in IMPORTABLE:
        result[table] = {"added": 0, "skipped": 0, "skipped_items": []}
        if table not in wanted:
            continue

        key, fields, label = IMPORTABLE[table]
        repo = store.tables[table]
        seen = {key(item) for item in repo.find_many(where={"vehicle_id": vehicle_id})}

        for source_id in source_vehicle_ids:
            if source_id == vehicle_id:
                continue
            for item in repo.find_many(where={"vehicle_id": source_id}, order_by={"sort_order": "asc"}):
                if key(item) in seen:
                    result[table]["skipped"] += 1
                    result[table]["skipped_items"].append(label(item))
                    continue
                data = {f: item.get(f) for f in fields if item.get(f) is not None}
                data["vehicle_id"] = vehicle_id
                repo.create(data)
                seen.add(key(item))
                result[table]["added"] += 1

        logger.info(
            f"Imported {table} into {vehicle_id}: "
            f"{result[table]['added']} added, {result[table]['skipped']} skipped"
        )
    return result
