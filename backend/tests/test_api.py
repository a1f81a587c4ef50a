import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.auth_service import create_admin


@pytest.fixture
def client(catalog):
    create_admin(catalog, "admin@example.com", "password123", name="Admin")
    with TestClient(create_app(store=catalog)) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "password123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_public_vehicle_list(client):
    response = client.get("/api/v1/vehicles/")
    assert response.status_code == 200
    body = response.json()
    assert [v["id"] for v in body] == ["kised-k5", "kisuv-sorento"]
    assert body[0]["brand"]["name_en"] == "Kia"


def test_unknown_sort_is_rejected(client):
    assert client.get("/api/v1/vehicles/?sort=cheapest").status_code == 400


def test_vehicle_detail_and_not_found(client):
    detail = client.get("/api/v1/vehicles/kisuv-sorento").json()
    assert [t["name"] for t in detail["trims"]] == ["Prestige", "Signature"]

    assert client.get("/api/v1/vehicles/nope").status_code == 404
    # Inactive vehicles are hidden from the public site
    assert client.get("/api/v1/vehicles/bmsuv-x5").status_code == 404


def test_rent_price(client):
    body = client.get("/api/v1/vehicles/kisuv-sorento/rent-price?months=60&down_payment=0").json()
    assert body["monthly_price"] == 620000
    assert client.get("/api/v1/vehicles/kisuv-sorento/rent-price?months=12").status_code == 400


def test_login_failure(client):
    response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "wrong"})
    assert response.status_code == 401


def test_admin_routes_need_token(client):
    assert client.get("/api/v1/admin/vehicles/").status_code == 401
    assert client.get("/api/v1/admin/vehicles/", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_me_hides_password(client, auth_headers):
    body = client.get("/api/v1/auth/me", headers=auth_headers).json()
    assert body["email"] == "admin@example.com"
    assert "password" not in body


def test_brand_crud(client, auth_headers):
    created = client.post("/api/v1/admin/brands/", json={"name_kr": "아우디", "name_en": "Audi"}, headers=auth_headers)
    assert created.status_code == 201
    brand = created.json()
    assert brand["sort_order"] == 999

    updated = client.put(f"/api/v1/admin/brands/{brand['id']}", json={"name_en": "AUDI"}, headers=auth_headers).json()
    assert updated["name_en"] == "AUDI"
    assert updated["name_kr"] == "아우디"

    assert client.delete(f"/api/v1/admin/brands/{brand['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/v1/brands/{brand['id']}").status_code == 404


def test_brand_in_use_cannot_be_deleted(client, auth_headers):
    response = client.delete("/api/v1/admin/brands/brand-kia", headers=auth_headers)
    assert response.status_code == 400


def test_vehicle_needs_existing_brand(client, auth_headers):
    payload = {"name": "Q7", "brand_id": "brand-audi", "category": "SUV", "base_price": 90000000}
    assert client.post("/api/v1/admin/vehicles/", json=payload, headers=auth_headers).status_code == 400


def test_vehicle_delete_cascades(client, auth_headers, catalog):
    assert client.delete("/api/v1/admin/vehicles/kisuv-sorento", headers=auth_headers).status_code == 200
    assert catalog.trims.count() == 0
    assert client.delete("/api/v1/admin/vehicles/kisuv-sorento", headers=auth_headers).status_code == 404


def test_trim_crud(client, auth_headers):
    base = "/api/v1/admin/vehicles/kised-k5/trims"
    created = client.post(base, json={"name": "Noblesse", "price": 2500000}, headers=auth_headers)
    assert created.status_code == 201
    trim = created.json()
    assert trim["vehicle_id"] == "kised-k5"

    assert [t["name"] for t in client.get(base, headers=auth_headers).json()] == ["Noblesse"]
    # A trim is only reachable through its own vehicle
    wrong = f"/api/v1/admin/vehicles/kisuv-sorento/trims/{trim['id']}"
    assert client.delete(wrong, headers=auth_headers).status_code == 404
    assert client.delete(f"{base}/{trim['id']}", headers=auth_headers).status_code == 200


def test_color_validation(client, auth_headers):
    response = client.post(
        "/api/v1/admin/vehicles/kised-k5/colors",
        json={"type": "EXTERIOR", "name": "Red", "hex_code": "red"},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_move_brand(client, auth_headers):
    moved = client.post("/api/v1/admin/brands/brand-bmw/move", json={"direction": "up"}, headers=auth_headers)
    assert [b["id"] for b in moved.json()] == ["brand-bmw", "brand-kia"]
    assert [b["id"] for b in client.get("/api/v1/brands/").json()] == ["brand-bmw", "brand-kia"]


def test_faq_flow(client, auth_headers):
    client.post("/api/v1/admin/faqs/", json={"question": "Q", "answer": "A"}, headers=auth_headers)
    client.post("/api/v1/admin/faqs/", json={"question": "Hidden", "answer": "A", "is_active": False}, headers=auth_headers)
    assert [f["question"] for f in client.get("/api/v1/faqs/").json()] == ["Q"]


def test_site_settings(client, auth_headers):
    client.put("/api/v1/admin/site/company-info", json={"name": "Rent Car", "phone": "1588-0000"}, headers=auth_headers)
    client.put("/api/v1/admin/site/company-info", json={"phone": "02-000-0000"}, headers=auth_headers)
    assert client.get("/api/v1/site/company-info").json() == {"name": "Rent Car", "phone": "02-000-0000"}


def test_password_change(client, auth_headers):
    short = client.put(
        "/api/v1/auth/password", json={"current_password": "password123", "new_password": "abc"}, headers=auth_headers
    )
    assert short.status_code == 400

    wrong = client.put(
        "/api/v1/auth/password", json={"current_password": "nope", "new_password": "newpassword"}, headers=auth_headers
    )
    assert wrong.status_code == 400

    ok = client.put(
        "/api/v1/auth/password", json={"current_password": "password123", "new_password": "newpassword"}, headers=auth_headers
    )
    assert ok.status_code == 200
    login = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "newpassword"})
    assert login.status_code == 200


def test_backup_snapshot(client, auth_headers):
    body = client.get("/api/v1/admin/backup/", headers=auth_headers).json()
    assert body["summary"]["brands"] == 2
    assert "admins" not in body["data"]


def test_public_read_survives_corrupt_file(client, data_dir):
    (data_dir / "faqs.json").write_text("not json", encoding="utf-8")
    # Public reads fall back to an empty list when there is no second store
    assert client.get("/api/v1/faqs/").json() == []


def test_corrupt_file_on_admin_read(client, auth_headers, data_dir):
    (data_dir / "faqs.json").write_text("not json", encoding="utf-8")
    response = client.get("/api/v1/admin/faqs/", headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["error"] == "Corrupt Data"


def test_health(client):
    body = client.get("/health").json()
    assert body["components"]["storage_mode"] == "local"
    assert body["components"]["storage"].startswith("connected")


def test_update_rejects_null_for_required_fields(client, auth_headers, data_dir):
    before = (data_dir / "vehicles.json").read_bytes()
    response = client.put("/api/v1/admin/vehicles/kised-k5", json={"name": None}, headers=auth_headers)
    assert response.status_code == 422
    assert (data_dir / "vehicles.json").read_bytes() == before
    assert client.get("/api/v1/vehicles/").status_code == 200

    brands_before = (data_dir / "brands.json").read_bytes()
    response = client.put("/api/v1/admin/brands/brand-kia", json={"is_active": None}, headers=auth_headers)
    assert response.status_code == 422
    assert (data_dir / "brands.json").read_bytes() == brands_before

    trim = client.get("/api/v1/admin/vehicles/kisuv-sorento/trims", headers=auth_headers).json()[0]
    response = client.put(
        f"/api/v1/admin/vehicles/kisuv-sorento/trims/{trim['id']}", json={"price": None}, headers=auth_headers
    )
    assert response.status_code == 422


def test_update_can_still_clear_optional_fields(client, auth_headers, catalog):
    catalog.brands.update(where={"id": "brand-kia"}, data={"logo": "/logos/kia.png"})
    response = client.put("/api/v1/admin/brands/brand-kia", json={"logo": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["logo"] is None
    assert response.json()["name_kr"] == "기아"


def test_banner_flow(client, auth_headers):
    admin = "/api/v1/admin/banners/"
    summer = client.post(admin, json={"title": "Summer", "sort_order": 1}, headers=auth_headers)
    assert summer.status_code == 201
    assert summer.json()["sort_order"] == 1
    client.post(admin, json={"title": "Ended", "end_date": "2020-01-01T00:00:00Z"}, headers=auth_headers)
    client.post(admin, json={"title": "Off", "is_active": False}, headers=auth_headers)

    assert [b["title"] for b in client.get("/api/v1/banners/").json()] == ["Summer"]
    assert len(client.get(admin, headers=auth_headers).json()) == 3

    backwards = {"title": "Bad", "start_date": "2026-02-01T00:00:00Z", "end_date": "2026-01-01T00:00:00Z"}
    assert client.post(admin, json=backwards, headers=auth_headers).status_code == 422

    banner_id = summer.json()["id"]
    client.put(f"{admin}{banner_id}", json={"end_date": "2020-01-01T00:00:00Z"}, headers=auth_headers)
    # A start after the stored end is rejected
    late_start = client.put(f"{admin}{banner_id}", json={"start_date": "2021-01-01T00:00:00Z"}, headers=auth_headers)
    assert late_start.status_code == 400
    assert client.get("/api/v1/banners/").json() == []

    assert client.put(f"{admin}{banner_id}", json={"title": None}, headers=auth_headers).status_code == 422
    assert client.delete(f"{admin}{banner_id}", headers=auth_headers).status_code == 200
    assert client.get(f"{admin}{banner_id}", headers=auth_headers).status_code == 404


def test_partner_flow(client, auth_headers):
    admin = "/api/v1/admin/partners/"
    assert client.get(admin).status_code == 401
    first = client.post(admin, json={"name": "Kia Capital", "sort_order": 2}, headers=auth_headers).json()
    second = client.post(admin, json={"name": "Hyundai Card", "sort_order": 1}, headers=auth_headers).json()

    assert [p["name"] for p in client.get("/api/v1/partners/").json()] == ["Hyundai Card", "Kia Capital"]
    moved = client.post(f"{admin}{first['id']}/move", json={"direction": "up"}, headers=auth_headers).json()
    assert [p["id"] for p in moved] == [first["id"], second["id"]]

    client.put(f"{admin}{second['id']}", json={"is_active": False}, headers=auth_headers)
    assert [p["name"] for p in client.get("/api/v1/partners/").json()] == ["Kia Capital"]
    assert client.put(f"{admin}partner-nope", json={"name": "X"}, headers=auth_headers).status_code == 404


def test_import_colors_and_options(client, auth_headers, catalog):
    url = "/api/v1/admin/vehicles/kised-k5/import"
    response = client.post(url, json={"source_vehicle_ids": ["kisuv-sorento"]}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["result"]["colors"]["added"] == 1
    assert catalog.colors.count(where={"vehicle_id": "kised-k5"}) == 1

    again = client.post(url, json={"source_vehicle_ids": ["kisuv-sorento"]}, headers=auth_headers).json()
    assert again["result"]["colors"]["skipped_items"] == ["Snow White (EXTERIOR)"]

    missing = client.post(
        "/api/v1/admin/vehicles/nope/import", json={"source_vehicle_ids": ["kisuv-sorento"]}, headers=auth_headers
    )
    assert missing.status_code == 404
    assert client.post(url, json={"source_vehicle_ids": []}, headers=auth_headers).status_code == 422
