"""Property endpoints: create, moderation, visibility, views and ownership."""

import asyncio

import pytest
from sqlalchemy import select

from realty.db.models import PropertyImage

from factories import property_payload


@pytest.mark.asyncio
async def test_seller_listing_waits_for_approval(client, seller_headers):
    resp = await client.post("/api/properties", json=property_payload(), headers=seller_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["autoApproved"] is False
    assert body["message"] == "Property created successfully"
    assert body["property"]["status"] == "pending"
    assert body["property"]["is_active"] is False

    listing = await client.get("/api/properties")
    assert listing.json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_admin_listing_is_auto_approved(client, admin_headers):
    resp = await client.post("/api/properties", json=property_payload(), headers=admin_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["autoApproved"] is True
    assert body["property"]["status"] == "approved"
    assert body["property"]["is_active"] is True

    listing = (await client.get("/api/properties")).json()
    assert [p["id"] for p in listing["properties"]] == [body["property"]["id"]]


@pytest.mark.asyncio
async def test_anonymous_create_has_no_seller(client):
    resp = await client.post("/api/properties", json=property_payload())
    assert resp.status_code == 201
    assert resp.json()["property"]["seller_id"] is None


@pytest.mark.asyncio
async def test_invalid_token_on_optional_route_is_anonymous(client):
    resp = await client.post(
        "/api/properties",
        json=property_payload(),
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 201
    assert resp.json()["autoApproved"] is False


@pytest.mark.asyncio
async def test_images_are_stored_in_display_order(client, admin_headers, session_factory):
    urls = ["http://test/static/uploads/images/a.jpg", "http://test/static/uploads/images/b.jpg"]
    resp = await client.post("/api/properties", json=property_payload(images=urls), headers=admin_headers)
    prop_id = resp.json()["property"]["id"]
    assert resp.json()["property"]["images"] == urls

    async with session_factory() as db:
        rows = (
            await db.execute(
                select(PropertyImage).where(PropertyImage.property_id == prop_id).order_by(PropertyImage.display_order)
            )
        ).scalars().all()
    assert [(r.image_url, r.display_order) for r in rows] == [(urls[0], 0), (urls[1], 1)]

    detail = (await client.get(f"/api/properties/{prop_id}")).json()
    assert detail["property"]["images"] == urls


@pytest.mark.asyncio
async def test_unknown_fields_are_not_persisted(client, seller_headers):
    resp = await client.post(
        "/api/properties",
        json=property_payload(status="approved", views=999, is_active=True, seller_id=12345),
        headers=seller_headers,
    )
    prop = resp.json()["property"]
    assert prop["status"] == "pending"
    assert prop["views"] == 0
    assert prop["is_active"] is False
    assert prop["seller_id"] != 12345


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"price": 0},
        {"price": -10},
        {"area_sqft": None},
        {"price": 10**16},
        {"property_type": "castle"},
        {"title": ""},
    ],
)
async def test_create_validation_errors(client, overrides):
    resp = await client.post("/api/properties", json=property_payload(**overrides))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"
    assert "details" in resp.json()


@pytest.mark.asyncio
async def test_farmland_price_is_derived_and_plot_fields_dropped(client, admin_headers):
    payload = property_payload(
        property_type="farmland",
        price=None,
        area_sqft=None,
        farmland_bigha=4,
        price_per_bigha=250000,
        plot_length=40,
        parking_available=True,
    )
    resp = await client.post("/api/properties", json=payload, headers=admin_headers)
    assert resp.status_code == 201
    prop = resp.json()["property"]
    assert prop["price"] == 1_000_000.0
    assert prop["area_sqft"] == 0.0
    assert prop["plot_length"] is None
    assert prop["parking"] is True


@pytest.mark.asyncio
async def test_views_increment_once_per_call(client, admin_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=admin_headers)).json()[
        "property"
    ]["id"]

    first = (await client.get(f"/api/properties/{prop_id}")).json()["property"]["views"]
    second = (await client.get(f"/api/properties/{prop_id}")).json()["property"]["views"]
    assert (first, second) == (1, 2)

    await asyncio.gather(*(client.get(f"/api/properties/{prop_id}") for _ in range(5)))
    final = (await client.get(f"/api/properties/{prop_id}")).json()["property"]["views"]
    assert final == 8


@pytest.mark.asyncio
async def test_missing_property_is_404(client):
    resp = await client.get("/api/properties/9999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Property not found"}


@pytest.mark.asyncio
async def test_approve_then_reject_flow(client, seller_headers, admin_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=seller_headers)).json()[
        "property"
    ]["id"]

    approved = await client.post(f"/api/properties/{prop_id}/approve", headers=admin_headers)
    assert approved.status_code == 200
    assert approved.json()["property"]["status"] == "approved"
    assert approved.json()["property"]["is_active"] is True
    assert (await client.get("/api/properties")).json()["pagination"]["total"] == 1

    for _ in range(2):
        rejected = await client.post(f"/api/properties/{prop_id}/reject", headers=admin_headers)
        assert rejected.status_code == 200
        assert rejected.json()["property"]["status"] == "rejected"
        assert rejected.json()["property"]["is_active"] is False
    assert (await client.get("/api/properties")).json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_moderation_requires_admin(client, seller_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=seller_headers)).json()[
        "property"
    ]["id"]
    resp = await client.post(f"/api/properties/{prop_id}/approve", headers=seller_headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "Admin access required"

    resp = await client.post(f"/api/properties/{prop_id}/approve")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_approve_missing_is_404(client, admin_headers):
    resp = await client.post("/api/properties/424242/approve", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_status_param_only_honoured_for_admins(client, seller_headers, admin_headers, buyer_headers):
    await client.post("/api/properties", json=property_payload(title="Pending one"), headers=seller_headers)
    await client.post("/api/properties", json=property_payload(title="Live one"), headers=admin_headers)

    anonymous = (await client.get("/api/properties", params={"status": "pending"})).json()
    omitted = (await client.get("/api/properties")).json()
    as_buyer = (await client.get("/api/properties", params={"status": "pending"}, headers=buyer_headers)).json()
    assert anonymous == omitted == as_buyer
    assert [p["title"] for p in anonymous["properties"]] == ["Live one"]

    as_admin = (await client.get("/api/properties", params={"status": "pending"}, headers=admin_headers)).json()
    assert [p["title"] for p in as_admin["properties"]] == ["Pending one"]


@pytest.mark.asyncio
async def test_owner_can_update_others_cannot(client, seller_headers, buyer_headers, admin_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=seller_headers)).json()[
        "property"
    ]["id"]

    resp = await client.put(f"/api/properties/{prop_id}", json={"price": 5000000}, headers=buyer_headers)
    assert resp.status_code == 403

    resp = await client.put(f"/api/properties/{prop_id}", json={"price": 5000000}, headers=seller_headers)
    assert resp.status_code == 200
    assert resp.json()["property"]["price"] == 5_000_000.0
    assert resp.json()["property"]["title"] == "3BHK Flat in Vijay Nagar"

    resp = await client.put(f"/api/properties/{prop_id}", json={"title": "Renamed"}, headers=admin_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_is_soft(client, seller_headers, admin_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=admin_headers)).json()[
        "property"
    ]["id"]

    resp = await client.delete(f"/api/properties/{prop_id}", headers=seller_headers)
    assert resp.status_code == 403

    resp = await client.delete(f"/api/properties/{prop_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert (await client.get("/api/properties")).json()["pagination"]["total"] == 0

    detail = (await client.get(f"/api/properties/{prop_id}")).json()["property"]
    assert detail["is_active"] is False
    assert detail["status"] == "approved"


@pytest.mark.asyncio
async def test_my_properties_lists_all_states(client, seller_headers, admin_headers):
    for i in range(3):
        await client.post("/api/properties", json=property_payload(title=f"Mine {i}"), headers=seller_headers)
    await client.post("/api/properties", json=property_payload(title="Not mine"), headers=admin_headers)

    resp = await client.get("/api/properties/my-properties/list", params={"limit": 2}, headers=seller_headers)
    body = resp.json()
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert all(p["title"].startswith("Mine") for p in body["properties"])

    assert (await client.get("/api/properties/my-properties/list")).status_code == 401


@pytest.mark.asyncio
async def test_pending_list_is_admin_only(client, seller_headers, admin_headers):
    await client.post("/api/properties", json=property_payload(), headers=seller_headers)
    resp = await client.get("/api/properties/pending/list", headers=admin_headers)
    assert resp.status_code == 200
    assert len(resp.json()["properties"]) == 1
    assert (await client.get("/api/properties/pending/list", headers=seller_headers)).status_code == 403


@pytest.mark.asyncio
async def test_rejected_listing_cannot_be_approved(client, seller_headers, admin_headers):
    prop_id = (await client.post("/api/properties", json=property_payload(), headers=seller_headers)).json()[
        "property"
    ]["id"]
    await client.post(f"/api/properties/{prop_id}/reject", headers=admin_headers)

    resp = await client.post(f"/api/properties/{prop_id}/approve", headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error"] == "Rejected property cannot be approved"

    detail = (await client.get(f"/api/admin/properties/{prop_id}", headers=admin_headers)).json()["property"]
    assert (detail["status"], detail["is_active"]) == ("rejected", False)

    # the admin status override is the way back
    resp = await client.put(
        f"/api/admin/properties/{prop_id}/status",
        json={"status": "approved", "is_active": True},
        headers=admin_headers,
    )
    assert resp.json()["property"]["status"] == "approved"


@pytest.mark.asyncio
async def test_city_and_price_search_second_page(client, admin_headers):
    for n in range(23):
        await client.post(
            "/api/properties", json=property_payload(price=1000000 + n * 100000), headers=admin_headers
        )
    await client.post("/api/properties", json=property_payload(price=7500000), headers=admin_headers)
    await client.post("/api/properties", json=property_payload(city="Bhopal"), headers=admin_headers)

    params = {"city": "Indore", "min_price": "1000000", "max_price": "5000000", "page": "2", "limit": "10"}
    body = (await client.get("/api/properties", params=params)).json()
    assert body["pagination"] == {"page": 2, "limit": 10, "total": 23, "pages": 3}
    assert len(body["properties"]) == 10
    assert all(p["city"] == "Indore" and 1000000 <= p["price"] <= 5000000 for p in body["properties"])

    last = (await client.get("/api/properties", params={**params, "page": "3"})).json()
    assert len(last["properties"]) == 3
