import uuid

from conftest import API_TOKEN, headers_for


async def test_health(client):
    response = await client.get("/check-health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


async def test_service_key_is_required(client, seller):
    response = await client.get("/orders", headers={"X-User-Id": str(seller.id)})

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "UNAUTHORIZED"


async def test_user_identity_is_required(client):
    response = await client.get("/orders", headers={"X-API-Key": API_TOKEN})
    assert response.status_code == 401

    response = await client.get("/orders", headers={"X-API-Key": API_TOKEN, "X-User-Id": "not-a-uuid"})
    assert response.status_code == 401

    response = await client.get("/orders", headers={"X-API-Key": API_TOKEN, "X-User-Id": str(uuid.uuid4())})
    assert response.status_code == 401


async def test_admin_only_routes(client, seller):
    assert (await client.get("/users", headers=headers_for(seller))).status_code == 403
    assert (await client.get("/payouts/team?year=2025&month=1", headers=headers_for(seller))).status_code == 403


async def test_create_user_and_validation_errors(client, admin):
    response = await client.post(
        "/users",
        json={"name": "Dana", "username": "dana", "role": "sales", "commission_rate": "12.5"},
        headers=headers_for(admin),
    )
    assert response.status_code == 201
    assert response.json()["commission_rate"] == 12.5

    response = await client.post(
        "/users",
        json={"name": "Dana", "username": "dana", "role": "sales", "commission_rate": "12.5"},
        headers=headers_for(admin),
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"

    response = await client.post("/users", json={"name": "Eve"}, headers=headers_for(admin))
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "body.username" in body["error"]["details"]


async def test_order_lifecycle_over_http(client, admin, seller, campaign):
    response = await client.post(
        "/orders",
        json={"campaign_id": str(campaign.id), "products": [{"name": "Mug", "qty": 2, "base_price": 100}]},
        headers=headers_for(seller),
    )
    assert response.status_code == 201
    order = response.json()
    assert order["reference_id"] == "FB-001-01"
    assert order["order_total"] == 200.0
    assert order["snapshot_rate"] == 10.0
    assert order["commission_amount"] == 20.0
    assert order["campaign"]["reference_id"] == "FB-001"

    response = await client.put(
        f"/users/{seller.id}", json={"commission_rate": "15"}, headers=headers_for(admin)
    )
    assert response.status_code == 200

    response = await client.put(
        f"/orders/{order['id']}",
        json={"products": [{"name": "Mug", "qty": 3, "base_price": 100}]},
        headers=headers_for(seller),
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["order_total"] == 300.0
    assert updated["snapshot_rate"] == 10.0
    assert updated["commission_amount"] == 30.0

    response = await client.put(
        f"/orders/{order['id']}",
        json={"campaign_id": str(uuid.uuid4())},
        headers=headers_for(seller),
    )
    assert response.status_code == 400
    assert "immutable" in response.json()["error"]["message"]


async def test_invalid_products_over_http(client, seller, campaign):
    response = await client.post(
        "/orders",
        json={"campaign_id": str(campaign.id), "products": [{"name": "Mug", "qty": 1, "base_price": 10.999}]},
        headers=headers_for(seller),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_other_sales_person_cannot_see_campaign(client, other_seller, campaign):
    response = await client.get(f"/campaigns/{campaign.id}", headers=headers_for(other_seller))
    assert response.status_code == 403

    response = await client.get("/campaigns", headers=headers_for(other_seller))
    assert response.json() == []


async def test_unknown_campaign_is_404(client, admin):
    response = await client.get(f"/campaigns/{uuid.uuid4()}", headers=headers_for(admin))

    assert response.status_code == 404
    assert response.json()["error"] == {"code": "NOT_FOUND", "message": "Campaign not found"}


async def test_campaign_reassignment_is_rejected(client, admin, other_seller, campaign):
    response = await client.put(
        f"/campaigns/{campaign.id}",
        json={"sales_person_id": str(other_seller.id)},
        headers=headers_for(admin),
    )

    assert response.status_code == 400
    response = await client.get(f"/campaigns/{campaign.id}", headers=headers_for(admin))
    assert response.json()["sales_person_id"] == str(campaign.sales_person_id)


async def test_payouts_over_http(client, admin, seller, campaign):
    from datetime import datetime

    response = await client.post(
        "/orders",
        json={"campaign_id": str(campaign.id), "products": [{"name": "Mug", "qty": 1, "base_price": 300}]},
        headers=headers_for(seller),
    )
    assert response.status_code == 201

    now = datetime.now()
    response = await client.get(f"/payouts/me?year={now.year}&month={now.month}", headers=headers_for(seller))
    assert response.status_code == 200
    mine = response.json()
    assert mine["total_commission"] == 30.0
    assert mine["campaigns"][0]["order_count"] == 1

    response = await client.get(f"/payouts/team?year={now.year}&month={now.month}", headers=headers_for(admin))
    assert response.status_code == 200
    team = response.json()
    assert team["grand_total_commission"] == 30.0
    assert [p["name"] for p in team["sales_persons"]] == ["Alice"]

    response = await client.get("/payouts/me?year=2025&month=13", headers=headers_for(seller))
    assert response.status_code == 400


async def test_counters_cannot_be_reset_over_http(client, admin, campaign):
    response = await client.delete("/admin/counters", headers=headers_for(admin))

    assert response.status_code == 404


async def test_missing_service_key_setting(client, seller, monkeypatch):
    monkeypatch.setattr("api.security.API_KEY", "")

    response = await client.get("/orders", headers=headers_for(seller))

    assert response.status_code == 500
    assert response.json()["error"] == {"code": "INTERNAL_ERROR", "message": "API key not configured"}


async def test_money_is_sent_as_json_numbers(client, admin, seller, campaign):
    response = await client.post(
        "/orders",
        json={"campaign_id": str(campaign.id), "products": [{"name": "Mug", "qty": 3, "base_price": 33.33}]},
        headers=headers_for(seller),
    )
    order = response.json()
    assert isinstance(order["order_total"], float)
    assert order["order_total"] == 99.99
    assert order["commission_amount"] == 10.0

    response = await client.get(f"/campaigns/{campaign.id}", headers=headers_for(admin))
    detail = response.json()
    assert detail["total_revenue"] == 99.99
    assert detail["total_commission"] == 10.0


async def test_order_total_above_column_range_is_rejected(client, seller, campaign):
    response = await client.post(
        "/orders",
        json={"campaign_id": str(campaign.id), "products": [{"name": "Mug", "qty": 100000000, "base_price": 1000}]},
        headers=headers_for(seller),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
