# tests/integration/test_banners_router.py

from datetime import timedelta

import pytest

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from storeadmin import models
from tests.utils.catalog import (
    create_category, create_deal, create_product, create_subcategory, random_name, window,
)

def _banner_payload(source: dict, *, starts_in=timedelta(hours=-1), ends_in=timedelta(days=1), **extra) -> dict:
    start, end = window(starts_in=starts_in, ends_in=ends_in)
    payload = {
        "name": random_name("banner-"),
        "type": "HERO",
        "start_date": start,
        "end_date": end,
        "desktop_image": "https://cdn.example.com/d.png",
        "mobile_image": "https://cdn.example.com/m.png",
        "source": source,
    }
    payload.update(extra)
    return payload

def test_create_manual_banner_keeps_order_and_duplicates(client: TestClient, db: Session, api: str):
    """
    Um banner manual guarda os produtos na ordem enviada, inclusive repetidos.
    """
    # --- Arrange ---
    p1, p2, p3 = (create_product(db) for _ in range(3))
    ids = [p3.id, p1.id, p2.id, p1.id]

    # --- Act ---
    response = client.post(f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": ids}))

    # --- Assert ---
    assert response.status_code == 201
    data = response.json()
    assert data["product_source"] == "manual"
    assert data["product_ids"] == ids
    assert data["status"] == "ACTIVE"
    assert data["selected_category_id"] is None

def test_create_banner_with_missing_product_saves_nothing(client: TestClient, db: Session, api: str):
    product = create_product(db)

    response = client.post(
        f"{api}/banners/",
        json=_banner_payload({"type": "manual", "product_ids": [product.id, 9998, 9999]}),
    )

    assert response.status_code == 404
    assert "9998, 9999" in response.json()["detail"]
    assert db.query(models.Banner).count() == 0
    assert db.query(models.BannerProduct).count() == 0

def test_banner_status_follows_time_window(client: TestClient, db: Session, api: str):
    category = create_category(db)
    source = {"type": "category", "category_id": category.id}

    future = client.post(
        f"{api}/banners/",
        json=_banner_payload(source, starts_in=timedelta(hours=1), ends_in=timedelta(hours=2)),
    )
    past = client.post(
        f"{api}/banners/",
        json=_banner_payload(source, starts_in=timedelta(hours=-2), ends_in=timedelta(hours=-1)),
    )

    assert future.json()["status"] == "SCHEDULED"
    assert past.json()["status"] == "EXPIRED"

def test_banner_with_start_after_end_is_rejected(client: TestClient, db: Session, api: str):
    category = create_category(db)
    payload = _banner_payload(
        {"type": "category", "category_id": category.id},
        starts_in=timedelta(days=2),
        ends_in=timedelta(days=1),
    )

    response = client.post(f"{api}/banners/", json=payload)

    assert response.status_code == 400

def test_duplicate_banner_name_conflicts(client: TestClient, db: Session, api: str):
    category = create_category(db)
    payload = _banner_payload({"type": "category", "category_id": category.id})

    assert client.post(f"{api}/banners/", json=payload).status_code == 201
    response = client.post(f"{api}/banners/", json=payload)

    assert response.status_code == 409

def test_unknown_source_type_is_bad_request(client: TestClient, db: Session, api: str):
    response = client.post(f"{api}/banners/", json=_banner_payload({"type": "brand", "brand_id": 1}))
    assert response.status_code == 400

def test_empty_manual_list_is_bad_request(client: TestClient, db: Session, api: str):
    response = client.post(f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": []}))
    assert response.status_code == 400

def test_banner_subcategory_cross_check(client: TestClient, db: Session, api: str):
    """Subcategoria existente, mas de outra categoria: 404, nunca resolvida em silêncio."""
    subcategory = create_subcategory(db)
    other_category = create_category(db)

    response = client.post(
        f"{api}/banners/",
        json=_banner_payload(
            {"type": "subcategory", "subcategory_id": subcategory.id, "category_id": other_category.id}
        ),
    )

    assert response.status_code == 404
    assert "does not belong" in response.json()["detail"]

def test_banner_subcategory_without_category_is_accepted(client: TestClient, db: Session, api: str):
    subcategory = create_subcategory(db)

    response = client.post(
        f"{api}/banners/",
        json=_banner_payload({"type": "subcategory", "subcategory_id": subcategory.id}),
    )

    assert response.status_code == 201
    assert response.json()["selected_subcategory_id"] == subcategory.id

def test_update_switches_source_and_clears_previous(client: TestClient, db: Session, api: str):
    # --- Arrange ---
    product = create_product(db)
    deal = create_deal(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": [product.id]})
    ).json()

    # --- Act ---
    response = client.put(
        f"{api}/banners/{created['id']}", json={"source": {"type": "deal", "deal_id": deal.id}}
    )

    # --- Assert ---
    assert response.status_code == 200
    data = response.json()
    assert data["product_source"] == "deal"
    assert data["selected_deal_id"] == deal.id
    assert data["product_ids"] == []
    assert db.query(models.BannerProduct).count() == 0
    # O produto em si continua existindo
    assert db.get(models.Product, product.id) is not None

def test_update_without_source_keeps_relation(client: TestClient, db: Session, api: str):
    product = create_product(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": [product.id]})
    ).json()

    response = client.put(f"{api}/banners/{created['id']}", json={"type": "SIDEBAR"})

    assert response.status_code == 200
    assert response.json()["type"] == "SIDEBAR"
    assert response.json()["product_ids"] == [product.id]

def test_update_with_bad_source_leaves_banner_untouched(client: TestClient, db: Session, api: str):
    product = create_product(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": [product.id]})
    ).json()

    response = client.put(
        f"{api}/banners/{created['id']}",
        json={"name": "renamed", "source": {"type": "category", "category_id": 4242}},
    )

    assert response.status_code == 404
    current = client.get(f"{api}/banners/{created['id']}").json()
    assert current["name"] == created["name"]
    assert current["product_ids"] == [product.id]

def test_update_recomputes_status(client: TestClient, db: Session, api: str):
    category = create_category(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "category", "category_id": category.id})
    ).json()
    assert created["status"] == "ACTIVE"

    start, end = window(starts_in=timedelta(days=3), ends_in=timedelta(days=4))
    response = client.put(f"{api}/banners/{created['id']}", json={"start_date": start, "end_date": end})

    assert response.json()["status"] == "SCHEDULED"

def test_banner_products_display_only_sellable(client: TestClient, db: Session, api: str):
    subcategory = create_subcategory(db)
    available = create_product(db, subcategory=subcategory)
    low = create_product(db, subcategory=subcategory, status=models.InventoryStatus.LOW_STOCK)
    create_product(db, subcategory=subcategory, status=models.InventoryStatus.OUT_OF_STOCK)
    banner = client.post(
        f"{api}/banners/",
        json=_banner_payload({"type": "subcategory", "subcategory_id": subcategory.id}),
    ).json()

    response = client.get(f"{api}/banners/{banner['id']}/products")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [available.id, low.id]

def test_list_and_search_banners(client: TestClient, db: Session, api: str):
    category = create_category(db)
    source = {"type": "category", "category_id": category.id}
    client.post(f"{api}/banners/", json=_banner_payload(source, name="Summer sale"))
    client.post(
        f"{api}/banners/",
        json=_banner_payload(source, name="Winter sale", starts_in=timedelta(days=1), ends_in=timedelta(days=2)),
    )

    active = client.get(f"{api}/banners/", params={"status": "ACTIVE"}).json()
    found = client.get(f"{api}/banners/search", params={"name": "winter"}).json()

    assert [b["name"] for b in active] == ["Summer sale"]
    assert [b["name"] for b in found] == ["Winter sale"]

def test_delete_banner_keeps_targets(client: TestClient, db: Session, api: str):
    product = create_product(db)
    banner = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": [product.id]})
    ).json()

    response = client.delete(f"{api}/banners/{banner['id']}")

    assert response.status_code == 204
    assert client.get(f"{api}/banners/{banner['id']}").status_code == 404
    assert db.query(models.BannerProduct).count() == 0
    assert db.get(models.Product, product.id) is not None

@pytest.mark.parametrize(
    "payload",
    [{"name": None}, {"type": None}, {"start_date": None}, {"end_date": None}, {"source": None}],
)
def test_explicit_null_on_required_field_is_rejected(client: TestClient, db: Session, api: str, payload: dict):
    product = create_product(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "manual", "product_ids": [product.id]})
    ).json()

    response = client.put(f"{api}/banners/{created['id']}", json=payload)

    assert response.status_code == 400
    current = client.get(f"{api}/banners/{created['id']}").json()
    assert current["name"] == created["name"]
    assert current["type"] == "HERO"
    assert current["start_date"] == created["start_date"]
    assert current["product_ids"] == [product.id]

def test_image_can_be_cleared_with_null(client: TestClient, db: Session, api: str):
    category = create_category(db)
    created = client.post(
        f"{api}/banners/", json=_banner_payload({"type": "category", "category_id": category.id})
    ).json()

    response = client.put(f"{api}/banners/{created['id']}", json={"mobile_image": None})

    assert response.status_code == 200
    assert response.json()["mobile_image"] is None
    assert response.json()["desktop_image"] == created["desktop_image"]
