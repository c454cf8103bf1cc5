# tests/integration/test_orders_router.py

from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from storeadmin import models
from storeadmin.core.config import settings
from tests.utils.catalog import create_deal, create_product

def _create_promo(client: TestClient, api: str, code: str, percentage: int, apply_on: str = "LINE_TOTAL", **extra):
    response = client.post(
        f"{api}/promos/",
        json={"promo_code": code, "discount_percentage": percentage, "apply_on": apply_on, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()

def test_checkout_uses_final_price_and_decreases_stock(client: TestClient, db: Session, api: str):
    """
    O preço de cada item é o preço final do produto no momento da compra,
    e o estoque é baixado.
    """
    # --- Arrange ---
    deal = create_deal(db, discount_percentage=10)
    product = create_product(db, base_price=100, discount=20, deal=deal, stock=5)

    # --- Act ---
    response = client.post(
        f"{api}/orders/",
        json={"customer_email": "ana@example.com", "items": [{"product_id": product.id, "quantity": 2}]},
    )

    # --- Assert ---
    assert response.status_code == 201
    data = response.json()
    assert float(data["items"][0]["price_at_purchase"]) == 70.00
    assert float(data["subtotal"]) == 140.00
    assert Decimal(data["total_price"]) == Decimal("140.00") + settings.SHIPPING_FEE
    db.refresh(product)
    assert product.stock == 3

def test_line_total_promo_discounts_subtotal(client: TestClient, db: Session, api: str):
    product = create_product(db, base_price=50, stock=10)
    _create_promo(client, api, "TEN", 10)

    response = client.post(
        f"{api}/orders/",
        json={
            "customer_email": "ana@example.com",
            "items": [{"product_id": product.id, "quantity": 2}],
            "promo_code": "TEN",
        },
    )

    data = response.json()
    assert float(data["discount_amount"]) == 10.00
    assert Decimal(data["total_price"]) == Decimal("90.00") + settings.SHIPPING_FEE
    assert data["applied_promo_code"] == "TEN"

def test_shipping_promo_discounts_shipping_fee(client: TestClient, db: Session, api: str):
    product = create_product(db, base_price=50, stock=10)
    _create_promo(client, api, "FREESHIP", 100, apply_on="SHIPPING")

    response = client.post(
        f"{api}/orders/",
        json={
            "customer_email": "ana@example.com",
            "items": [{"product_id": product.id, "quantity": 1}],
            "promo_code": "FREESHIP",
        },
    )

    data = response.json()
    assert Decimal(data["discount_amount"]) == settings.SHIPPING_FEE
    assert float(data["total_price"]) == 50.00

def test_invalid_promo_is_rejected(client: TestClient, db: Session, api: str):
    product = create_product(db, stock=10)
    _create_promo(client, api, "OLD", 10, is_valid=False)

    for code in ("OLD", "MISSING"):
        response = client.post(
            f"{api}/orders/",
            json={"customer_email": "ana@example.com", "items": [{"product_id": product.id, "quantity": 1}], "promo_code": code},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired promo code"
    assert db.query(models.Order).count() == 0

def test_insufficient_stock_rolls_back(client: TestClient, db: Session, api: str):
    plenty = create_product(db, stock=10)
    scarce = create_product(db, stock=1)

    response = client.post(
        f"{api}/orders/",
        json={
            "customer_email": "ana@example.com",
            "items": [{"product_id": plenty.id, "quantity": 2}, {"product_id": scarce.id, "quantity": 2}],
        },
    )

    assert response.status_code == 400
    db.refresh(plenty)
    assert plenty.stock == 10
    assert db.query(models.Order).count() == 0

def test_unknown_product_is_not_found(client: TestClient, db: Session, api: str):
    response = client.post(
        f"{api}/orders/",
        json={"customer_email": "ana@example.com", "items": [{"product_id": 404, "quantity": 1}]},
    )
    assert response.status_code == 404

def test_read_orders(client: TestClient, db: Session, api: str):
    product = create_product(db, stock=10)
    created = client.post(
        f"{api}/orders/",
        json={"customer_email": "bia@example.com", "items": [{"product_id": product.id, "quantity": 1}]},
    ).json()

    listed = client.get(f"{api}/orders/", params={"customer_email": "bia@example.com"}).json()
    single = client.get(f"{api}/orders/{created['id']}")

    assert [o["id"] for o in listed] == [created["id"]]
    assert single.status_code == 200
    assert client.get(f"{api}/orders/999").status_code == 404

def test_duplicate_promo_code_conflicts(client: TestClient, db: Session, api: str):
    _create_promo(client, api, "DUP", 5)
    response = client.post(f"{api}/promos/", json={"promo_code": "DUP", "discount_percentage": 5})
    assert response.status_code == 409
