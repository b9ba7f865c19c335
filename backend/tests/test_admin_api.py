import pytest

from realty.services.dashboard import DASHBOARD_COUNTS

from factories import property_payload, rental_payload


@pytest.mark.asyncio
async def test_dashboard_counts(client, admin_headers, seller_headers, buyer_headers):
    await client.post("/api/properties", json=property_payload(), headers=seller_headers)
    await client.post("/api/properties", json=property_payload(), headers=admin_headers)
    await client.post("/api/rentals", json=rental_payload(), headers=seller_headers)
    await client.post(
        "/api/contact",
        json={"full_name": "A", "email": "a@realtytest.com", "subject": "Hi", "message": "Hello"},
    )

    resp = await client.get("/api/admin/dashboard", headers=admin_headers)
    assert resp.status_code == 200
    stats = resp.json()["stats"]
    assert set(stats) == set(DASHBOARD_COUNTS)
    assert stats["totalUsers"] == 3
    assert stats["totalProperties"] == 2
    assert stats["pendingProperties"] == 1
    assert stats["totalRentals"] == 1
    assert stats["pendingRentals"] == 1
    assert stats["unreadContacts"] == 1
    assert stats["unreadEnquiries"] == 0

    assert (await client.get("/api/admin/dashboard", headers=buyer_headers)).status_code == 403


@pytest.mark.asyncio
async def test_user_management(client, admin, admin_headers, seller, buyer):
    users = (await client.get("/api/admin/users", headers=admin_headers)).json()
    assert users["pagination"]["total"] == 3
    assert users["pagination"]["limit"] == 50

    sellers = (await client.get("/api/admin/users", params={"role": "seller"}, headers=admin_headers)).json()
    assert [u["email"] for u in sellers["users"]] == [seller.email]

    toggled = (await client.put(f"/api/admin/users/{buyer.id}/toggle", headers=admin_headers)).json()
    assert toggled["message"] == "User deactivated"
    assert toggled["user"]["is_active"] is False
    inactive = (await client.get("/api/admin/users", params={"is_active": "false"}, headers=admin_headers)).json()
    assert [u["id"] for u in inactive["users"]] == [buyer.id]

    updated = await client.put(
        f"/api/admin/users/{seller.id}", json={"role": "agent", "full_name": "Seller Renamed"}, headers=admin_headers
    )
    assert updated.json()["user"]["role"] == "agent"
    assert updated.json()["user"]["full_name"] == "Seller Renamed"

    assert (await client.delete(f"/api/admin/users/{admin.id}", headers=admin_headers)).status_code == 403
    resp = await client.delete(f"/api/admin/users/{seller.id}", headers=admin_headers)
    assert resp.json()["message"] == "User deactivated successfully"
    assert (await client.get(f"/api/admin/users/{seller.id}", headers=admin_headers)).json()["user"]["is_active"] is False

    assert (await client.get("/api/admin/users/9999", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_deactivated_users_token_stops_working(client, admin_headers, buyer, buyer_headers):
    assert (await client.get("/api/auth/me", headers=buyer_headers)).status_code == 200
    await client.put(f"/api/admin/users/{buyer.id}/toggle", headers=admin_headers)
    assert (await client.get("/api/auth/me", headers=buyer_headers)).status_code == 401


@pytest.mark.asyncio
async def test_admin_property_views(client, admin_headers, seller_headers):
    pending_id = (await client.post("/api/properties", json=property_payload(), headers=seller_headers)).json()[
        "property"
    ]["id"]
    await client.post("/api/properties", json=property_payload(), headers=admin_headers)

    everything = (await client.get("/api/admin/properties", headers=admin_headers)).json()
    assert everything["pagination"]["total"] == 2

    pending = (await client.get("/api/admin/properties", params={"status": "pending"}, headers=admin_headers)).json()
    assert [p["id"] for p in pending["properties"]] == [pending_id]

    resp = await client.put(
        f"/api/admin/properties/{pending_id}/status",
        json={"status": "approved", "is_active": True},
        headers=admin_headers,
    )
    assert resp.json()["property"]["status"] == "approved"

    # explicit override leaves unspecified fields alone
    resp = await client.put(f"/api/admin/properties/{pending_id}/status", json={"is_active": False}, headers=admin_headers)
    prop = resp.json()["property"]
    assert (prop["status"], prop["is_active"]) == ("approved", False)

    resp = await client.post(f"/api/admin/properties/{pending_id}/reject", headers=admin_headers)
    assert resp.json()["property"]["status"] == "rejected"

    assert (await client.delete(f"/api/admin/properties/{pending_id}", headers=admin_headers)).status_code == 200
    detail = (await client.get(f"/api/admin/properties/{pending_id}", headers=admin_headers)).json()["property"]
    assert detail["is_active"] is False
    assert detail["views"] == 0


@pytest.mark.asyncio
async def test_admin_listing_endpoints(client, admin_headers, seller_headers):
    await client.post("/api/rentals", json=rental_payload(), headers=seller_headers)

    rentals = (await client.get("/api/admin/rentals", headers=admin_headers)).json()
    assert rentals["pagination"]["total"] == 1
    for path, key in (
        ("/api/admin/projects", "projects"),
        ("/api/admin/events", "events"),
        ("/api/admin/investments", "opportunities"),
        ("/api/admin/contact-submissions", "submissions"),
        ("/api/admin/investor-registrations", "registrations"),
    ):
        body = (await client.get(path, headers=admin_headers)).json()
        assert body[key] == []
        assert body["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_admin_contact_submission_delete(client, admin_headers):
    sub_id = (
        await client.post(
            "/api/contact",
            json={"full_name": "A", "email": "a@realtytest.com", "subject": "Hi", "message": "Hello"},
        )
    ).json()["submission"]["id"]
    assert (await client.get(f"/api/admin/contact-submissions/{sub_id}", headers=admin_headers)).status_code == 200
    assert (await client.delete(f"/api/admin/contact-submissions/{sub_id}", headers=admin_headers)).status_code == 200
    resp = await client.get(f"/api/admin/contact-submissions/{sub_id}", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Contact submission not found"
