import pytest

from app.services import catalog_service
from app.services.catalog_service import BrandInUseError


def test_list_vehicles_only_active(catalog):
    vehicles = catalog_service.list_vehicles(catalog)
    assert [v["id"] for v in vehicles] == ["kised-k5", "kisuv-sorento"]
    assert vehicles[0]["brand"]["id"] == "brand-kia"


def test_list_vehicles_filters_and_sort(catalog):
    suvs = catalog_service.list_vehicles(catalog, category="SUV", include_inactive=True)
    assert {v["id"] for v in suvs} == {"kisuv-sorento", "bmsuv-x5"}

    by_price = catalog_service.list_vehicles(catalog, sort="price-desc")
    assert [v["id"] for v in by_price] == ["kisuv-sorento", "kised-k5"]


def test_unknown_sort_uses_manual_order(catalog):
    assert catalog_service.vehicle_order("cheapest") == {"sort_order": "asc"}


def test_popular_vehicles(catalog):
    assert [v["id"] for v in catalog_service.popular_vehicles(catalog)] == ["kisuv-sorento"]


def test_admin_vehicles_active_first(catalog):
    catalog.vehicles.update(where={"id": "bmsuv-x5"}, data={"sort_order": 0})
    assert [v["id"] for v in catalog_service.admin_vehicles(catalog)] == [
        "kised-k5", "kisuv-sorento", "bmsuv-x5",
    ]


def test_vehicle_detail(catalog):
    detail = catalog_service.vehicle_detail(catalog, "kisuv-sorento")
    assert detail["brand"]["name_en"] == "Kia"
    assert [t["name"] for t in detail["trims"]] == ["Prestige", "Signature"]
    assert len(detail["colors"]) == 1
    assert catalog_service.vehicle_detail(catalog, "nope") is None


def test_brand_with_vehicles_cannot_be_deleted(catalog):
    with pytest.raises(BrandInUseError) as exc_info:
        catalog_service.delete_brand(catalog, "brand-kia")
    assert exc_info.value.vehicle_count == 2
    assert catalog.brands.find_unique(where={"id": "brand-kia"}) is not None


def test_unused_brand_can_be_deleted(catalog):
    catalog.brands.create({"id": "brand-audi", "name_kr": "아우디"})
    assert catalog_service.delete_brand(catalog, "brand-audi") is True
    assert catalog_service.delete_brand(catalog, "brand-audi") is False


def test_delete_vehicle_removes_children(catalog):
    assert catalog_service.delete_vehicle(catalog, "kisuv-sorento") is True
    assert catalog.trims.count(where={"vehicle_id": "kisuv-sorento"}) == 0
    assert catalog.colors.count(where={"vehicle_id": "kisuv-sorento"}) == 0
    assert catalog.vehicles.find_unique(where={"id": "kisuv-sorento"}) is None
    assert catalog_service.delete_vehicle(catalog, "kisuv-sorento") is False


def test_move_swaps_sort_order(catalog):
    moved = catalog_service.move(catalog.brands, "brand-bmw", "up")
    assert [b["id"] for b in moved] == ["brand-bmw", "brand-kia"]
    assert catalog.brands.find_unique(where={"id": "brand-bmw"})["sort_order"] == 1
    assert catalog.brands.find_unique(where={"id": "brand-kia"})["sort_order"] == 2


def test_move_at_edge_is_a_no_op(catalog):
    moved = catalog_service.move(catalog.brands, "brand-kia", "up")
    assert [b["id"] for b in moved] == ["brand-kia", "brand-bmw"]
    assert catalog.brands.find_unique(where={"id": "brand-kia"})["sort_order"] == 1


def test_move_with_equal_orders_renumbers(store):
    for name in ("A", "B", "C"):
        store.faqs.create({"id": name, "question": name, "answer": name})

    moved = catalog_service.move(store.faqs, "C", "up")
    assert [f["id"] for f in moved] == ["A", "C", "B"]
    ordered = store.faqs.find_many(order_by={"sort_order": "asc"})
    assert [(f["id"], f["sort_order"]) for f in ordered] == [("A", 0), ("C", 1), ("B", 2)]


def test_move_within_scope(catalog):
    catalog.trims.create({"vehicle_id": "kised-k5", "name": "K5 Base", "sort_order": 0})
    prestige = catalog.trims.find_many(where={"name": "Prestige"})[0]

    moved = catalog_service.move(catalog.trims, prestige["id"], "down", scope={"vehicle_id": "kisuv-sorento"})
    assert [t["name"] for t in moved] == ["Signature", "Prestige"]


def test_move_unknown_record(catalog):
    assert catalog_service.move(catalog.brands, "nope", "up") is None
    with pytest.raises(ValueError):
        catalog_service.move(catalog.brands, "brand-kia", "sideways")


def test_rent_price(catalog):
    sorento = catalog.vehicles.find_unique(where={"id": "kisuv-sorento"})
    assert catalog_service.rent_price(sorento, 60, 0) == 620000
    assert catalog_service.rent_price(sorento, 36, 25) is None
    with pytest.raises(ValueError):
        catalog_service.rent_price(sorento, 12, 0)
    with pytest.raises(ValueError):
        catalog_service.rent_price(sorento, 60, 30)


def test_import_items_skips_duplicates(catalog):
    catalog.colors.create({"vehicle_id": "kised-k5", "type": "EXTERIOR", "name": "Snow White", "hex_code": "#FAFAFA"})
    catalog.colors.create({"vehicle_id": "kisuv-sorento", "type": "INTERIOR", "name": "Black", "hex_code": "#000000"})
    catalog.options.create({"vehicle_id": "kisuv-sorento", "name": "Sunroof", "price": 1000000})

    result = catalog_service.import_items(catalog, "kised-k5", ["kisuv-sorento"])
    assert result["colors"] == {"added": 1, "skipped": 1, "skipped_items": ["Snow White (EXTERIOR)"]}
    assert result["options"]["added"] == 1

    colors = catalog.colors.find_many(where={"vehicle_id": "kised-k5"})
    assert {(c["type"], c["name"]) for c in colors} == {("EXTERIOR", "Snow White"), ("INTERIOR", "Black")}
    # The existing color keeps its own hex code
    assert next(c for c in colors if c["name"] == "Snow White")["hex_code"] == "#FAFAFA"
    # Sources are left alone
    assert catalog.colors.count(where={"vehicle_id": "kisuv-sorento"}) == 2

    again = catalog_service.import_items(catalog, "kised-k5", ["kisuv-sorento"])
    assert again["colors"]["added"] == 0
    assert again["options"] == {"added": 0, "skipped": 1, "skipped_items": ["Sunroof"]}


def test_import_items_selection_and_unknown_vehicle(catalog):
    result = catalog_service.import_items(catalog, "kised-k5", ["kisuv-sorento", "kised-k5"], import_colors=False)
    assert result["colors"]["added"] == 0
    assert catalog.colors.count(where={"vehicle_id": "kised-k5"}) == 0

    assert catalog_service.import_items(catalog, "nope", ["kisuv-sorento"]) is None
