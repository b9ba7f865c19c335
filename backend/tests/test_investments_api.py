import asyncio

import pytest


def _opportunity(**overrides):
    payload = {
        "title": "Commercial plots on AB Road",
        "location": "AB Road",
        "city": "Indore",
        "state": "Madhya Pradesh",
        "investment_type": "land",
        "min_investment": 500000,
        "expected_roi": 12.5,
        "highlights": ["Highway frontage"],
    }
    payload.update(overrides)
    return payload


def _investor(opportunity_id=None, n=1):
    return {
        "opportunity_id": opportunity_id,
        "full_name": f"Investor {n}",
        "email": f"investor{n}@realtytest.com",
        "phone": "+919811111111",
        "investment_budget": 750000,
    }


@pytest.mark.asyncio
async def test_create_list_and_statistics(client, admin_headers):
    first = (await client.post("/api/investments", json=_opportunity(), headers=admin_headers)).json()
    assert first["opportunity"]["investors_count"] == 0
    await client.post(
        "/api/investments",
        json=_opportunity(title="Warehouse fund", investment_type="commercial", min_investment=1500000),
        headers=admin_headers,
    )

    land = (await client.get("/api/investments", params={"investment_type": "land"})).json()
    assert [o["title"] for o in land["opportunities"]] == ["Commercial plots on AB Road"]

    await client.post("/api/investments/register", json=_investor(first["opportunity"]["id"]))
    await client.post("/api/investments/register", json=_investor(None, n=2))

    stats = (await client.get("/api/investments/statistics")).json()
    assert stats == {"totalOpportunities": 2, "totalInvestors": 2, "totalInvestment": 2000000.0}


@pytest.mark.asyncio
async def test_registration_bumps_investor_count(client, admin_headers, buyer_headers):
    opp_id = (await client.post("/api/investments", json=_opportunity(), headers=admin_headers)).json()[
        "opportunity"
    ]["id"]

    await asyncio.gather(
        *(client.post("/api/investments/register", json=_investor(opp_id, n)) for n in range(4))
    )
    resp = await client.post("/api/investments/register", json=_investor(opp_id, 9), headers=buyer_headers)
    assert resp.status_code == 201

    opportunity = (await client.get(f"/api/investments/{opp_id}")).json()["opportunity"]
    assert opportunity["investors_count"] == 5

    regs = (await client.get("/api/admin/investor-registrations", headers=admin_headers)).json()
    assert regs["pagination"]["total"] == 5
    assert {r["opportunity_title"] for r in regs["registrations"]} == {"Commercial plots on AB Road"}
    assert sum(1 for r in regs["registrations"] if r["user_id"] is not None) == 1


@pytest.mark.asyncio
async def test_registration_for_missing_opportunity_is_404(client):
    resp = await client.post("/api/investments/register", json=_investor(999))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_mark_contacted_and_soft_delete(client, admin_headers):
    opp_id = (await client.post("/api/investments", json=_opportunity(), headers=admin_headers)).json()[
        "opportunity"
    ]["id"]
    await client.post("/api/investments/register", json=_investor(opp_id))
    reg_id = (await client.get("/api/admin/investor-registrations", headers=admin_headers)).json()[
        "registrations"
    ][0]["id"]

    resp = await client.post(f"/api/investments/registrations/{reg_id}/contact", headers=admin_headers)
    assert resp.status_code == 200
    regs = (await client.get("/api/admin/investor-registrations", headers=admin_headers)).json()
    assert regs["registrations"][0]["is_contacted"] is True

    assert (await client.delete(f"/api/investments/{opp_id}", headers=admin_headers)).status_code == 200
    assert (await client.get("/api/investments")).json()["pagination"]["total"] == 0
    assert (await client.get("/api/investments/statistics")).json()["totalOpportunities"] == 0


@pytest.mark.asyncio
async def test_deleted_opportunity_takes_no_registrations(client, admin_headers):
    opp_id = (await client.post("/api/investments", json=_opportunity(), headers=admin_headers)).json()[
        "opportunity"
    ]["id"]
    await client.delete(f"/api/investments/{opp_id}", headers=admin_headers)

    resp = await client.post("/api/investments/register", json=_investor(opp_id))
    assert resp.status_code == 404

    regs = (await client.get("/api/admin/investor-registrations", headers=admin_headers)).json()
    assert regs["pagination"]["total"] == 0
    stats = (await client.get("/api/investments/statistics")).json()
    assert stats["totalInvestors"] == 0
