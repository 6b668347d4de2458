"""
Test Case Suite: Property Management Module
Test ID Range: TC-026 to TC-045

This test suite validates the listing lifecycle: creation, moderation,
public search, owner/admin edits, promotion and deletion.
"""

import pytest
from httpx import AsyncClient
from primeproperty.config import settings


async def create_listing(client: AsyncClient, headers: dict, payload: dict) -> dict:
    response = await client.post("/api/properties", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def public_ids(client: AsyncClient, query: str = "") -> list:
    response = await client.get(f"/api/properties{query}")
    assert response.status_code == 200, response.text
    return [p["id"] for p in response.json()]


class TestPropertyCreation:
    """
    Test Case TC-026: Create Property with Valid Data
    Description: Verify that a seller can create a listing and that it starts unapproved
    Expected Result: Returns 201, owner is the caller, not approved, not featured
    """
    @pytest.mark.asyncio
    async def test_tc026_create_property_valid_data(self, client: AsyncClient, authenticated_seller, listing_payload):
        """TC-026: Create property with valid data"""
        seller, headers = authenticated_seller

        data = await create_listing(client, headers, listing_payload())

        assert data["title"] == "Family house with garden"
        assert data["price"] == 450000
        assert data["type"] == "house"
        assert data["status"] == "for sale"
        assert data["images"] == ["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"]
        assert data["seller_id"] == seller.id
        assert data["is_approved"] is False
        assert data["is_featured"] is False

    """
    Test Case TC-027: Create Property with Missing Required Fields
    Description: Verify that creation fails when required fields are missing
    Expected Result: Returns 400 with an error message
    """
    @pytest.mark.asyncio
    async def test_tc027_create_property_missing_fields(self, client: AsyncClient, authenticated_seller):
        """TC-027: Missing fields"""
        _, headers = authenticated_seller

        response = await client.post("/api/properties", json={"title": "No price"}, headers=headers)

        assert response.status_code == 400
        assert "error" in response.json()

    """
    Test Case TC-028: Create Property without Token
    Description: Verify that anonymous users cannot create listings
    Expected Result: Returns 401
    """
    @pytest.mark.asyncio
    async def test_tc028_create_property_anonymous(self, client: AsyncClient, listing_payload):
        """TC-028: Anonymous create"""
        response = await client.post("/api/properties", json=listing_payload())
        assert response.status_code == 401

    """
    Test Case TC-029: Admin Listing is Auto-Approved
    Description: Verify that listings created by an admin skip moderation
    Expected Result: is_approved is true and the listing is publicly visible
    """
    @pytest.mark.asyncio
    async def test_tc029_admin_listing_auto_approved(self, client: AsyncClient, authenticated_admin, listing_payload):
        """TC-029: Admin create"""
        _, headers = authenticated_admin

        data = await create_listing(client, headers, listing_payload())

        assert data["is_approved"] is True
        assert data["id"] in await public_ids(client)

    """
    Test Case TC-030: Type Specific Details
    Description: Verify that details must match the listing type
    Expected Result: Matching details are stored, mismatched ones return 400
    """
    @pytest.mark.asyncio
    async def test_tc030_type_specific_details(self, client: AsyncClient, authenticated_seller, listing_payload):
        """TC-030: Details variant"""
        _, headers = authenticated_seller

        land = await create_listing(client, headers, listing_payload(
            type="land",
            details={"kind": "land", "land_size": 1200.5, "zoning_type": "residential", "has_road_access": True},
        ))
        assert land["details"]["kind"] == "land"
        assert land["details"]["land_size"] == 1200.5
        assert land["details"]["has_road_access"] is True

        house = await create_listing(client, headers, listing_payload(
            details={"kind": "residential", "bedrooms": 3},
        ))
        # Defaults are stored for fields the client left out
        assert house["details"] == {
            "kind": "residential",
            "bedrooms": 3,
            "bathrooms": 0,
            "parking": 0,
            "has_garden": False,
            "floors": 1,
        }

        mismatch = await client.post(
            "/api/properties",
            json=listing_payload(type="office", details={"kind": "land", "land_size": 10}),
            headers=headers,
        )
        assert mismatch.status_code == 400


class TestModeration:
    """
    Test Case TC-031: Unapproved Listing Hidden from Search
    Description: Verify that a seller's listing never appears in public search before approval
    Expected Result: Absent under every filter until approved, present afterwards
    """
    @pytest.mark.asyncio
    async def test_tc031_unapproved_hidden_until_approved(
        self, client: AsyncClient, authenticated_seller, authenticated_admin, listing_payload
    ):
        """TC-031: Approval gate"""
        _, seller_headers = authenticated_seller
        _, admin_headers = authenticated_admin

        listing = await create_listing(client, seller_headers, listing_payload())

        for query in ["", "?type=house", "?location=austin", "?minPrice=0&maxPrice=1000000", "?sort=newest"]:
            assert listing["id"] not in await public_ids(client, query)

        pending = await client.get("/api/admin/pending", headers=admin_headers)
        assert listing["id"] in [p["id"] for p in pending.json()]

        approve = await client.post(f"/api/admin/approve/{listing['id']}", headers=admin_headers)
        assert approve.status_code == 200
        assert approve.json()["is_approved"] is True

        assert listing["id"] in await public_ids(client)
        pending = await client.get("/api/admin/pending", headers=admin_headers)
        assert listing["id"] not in [p["id"] for p in pending.json()]

    """
    Test Case TC-032: Approve Requires Admin
    Description: Verify that a seller cannot approve their own listing
    Expected Result: Returns 403 and the listing stays unapproved
    """
    @pytest.mark.asyncio
    async def test_tc032_approve_requires_admin(self, client: AsyncClient, authenticated_seller, listing_payload):
        """TC-032: Seller approve"""
        _, headers = authenticated_seller
        listing = await create_listing(client, headers, listing_payload())

        response = await client.post(f"/api/admin/approve/{listing['id']}", headers=headers)

        assert response.status_code == 403
        detail = await client.get(f"/api/properties/{listing['id']}")
        assert detail.json()["is_approved"] is False

    """
    Test Case TC-033: Approve Unknown Listing
    Description: Verify that approving a missing listing reports not found
    Expected Result: Returns 404
    """
    @pytest.mark.asyncio
    async def test_tc033_approve_unknown_listing(self, client: AsyncClient, authenticated_admin):
        """TC-033: Approve missing"""
        _, headers = authenticated_admin
        response = await client.post("/api/admin/approve/9999", headers=headers)
        assert response.status_code == 404


class TestPublicSearch:
    """
    Test Case TC-034: Alice Scenario
    Description: Seller Alice lists a 500000 house in Austin; it stays hidden until approved,
    then sorts after a 300000 listing with sort=price_asc
    Expected Result: 300000 listing first, Alice's second
    """
    @pytest.mark.asyncio
    async def test_tc034_alice_scenario(self, client: AsyncClient, authenticated_admin, listing_payload):
        """TC-034: End to end moderation and sorting"""
        _, admin_headers = authenticated_admin

        register = await client.post("/api/auth/register", json={
            "name": "Alice",
            "email": "alice@example.com",
            "password": "alicepass",
            "role": "seller",
        })
        assert register.status_code == 201
        alice_headers = {"Authorization": f"Bearer {register.json()['token']}"}

        alice_listing = await create_listing(client, alice_headers, listing_payload(
            title="Alice's house", price=500000, type="house", location="Austin",
        ))
        cheaper = await create_listing(client, admin_headers, listing_payload(
            title="Starter home", price=300000, type="house", location="Austin",
        ))

        assert alice_listing["id"] not in await public_ids(client, "?type=house")

        approve = await client.post(f"/api/admin/approve/{alice_listing['id']}", headers=admin_headers)
        assert approve.status_code == 200

        ordered = await public_ids(client, "?type=house&sort=price_asc")
        assert ordered == [cheaper["id"], alice_listing["id"]]

        detail = await client.get(f"/api/properties/{alice_listing['id']}")
        assert detail.json()["seller_name"] == "Alice"
        assert detail.json()["seller_email"] == "alice@example.com"

    """
    Test Case TC-035: Search Filters
    Description: Verify location, type, price range and featured filters
    Expected Result: Only matching approved listings are returned
    """
    @pytest.mark.asyncio
    async def test_tc035_search_filters(self, client: AsyncClient, authenticated_admin, listing_payload):
        """TC-035: Filters"""
        _, headers = authenticated_admin

        austin_house = await create_listing(client, headers, listing_payload(location="Austin", price=400000))
        dallas_land = await create_listing(client, headers, listing_payload(location="Dallas", type="land", price=90000))
        austin_office = await create_listing(client, headers, listing_payload(location="North Austin", type="office", price=1200000))

        assert await public_ids(client, "?location=AUSTIN") == [austin_house["id"], austin_office["id"]]
        assert await public_ids(client, "?type=land") == [dallas_land["id"]]
        assert await public_ids(client, "?minPrice=100000&maxPrice=500000") == [austin_house["id"]]
        assert await public_ids(client, "?maxPrice=400000") == [austin_house["id"], dallas_land["id"]]

        await client.put(f"/api/admin/properties/{dallas_land['id']}/feature", json={"is_featured": True}, headers=headers)
        assert await public_ids(client, "?featured=true") == [dallas_land["id"]]

    """
    Test Case TC-036: Search Ordering
    Description: Verify price and newest ordering and default insertion order
    Expected Result: Lists come back in the requested order
    """
    @pytest.mark.asyncio
    async def test_tc036_search_ordering(self, client: AsyncClient, authenticated_admin, listing_payload):
        """TC-036: Sort orders"""
        _, headers = authenticated_admin

        mid = await create_listing(client, headers, listing_payload(price=200000))
        high = await create_listing(client, headers, listing_payload(price=300000))
        low = await create_listing(client, headers, listing_payload(price=100000))

        assert await public_ids(client) == [mid["id"], high["id"], low["id"]]
        assert await public_ids(client, "?sort=price_asc") == [low["id"], mid["id"], high["id"]]
        assert await public_ids(client, "?sort=price_desc") == [high["id"], mid["id"], low["id"]]
        assert await public_ids(client, "?sort=newest") == [low["id"], high["id"], mid["id"]]

        invalid = await client.get("/api/properties?sort=cheapest")
        assert invalid.status_code == 400

    """
    Test Case TC-037: Retrieve Unknown Property
    Description: Verify that a missing listing id returns not found
    Expected Result: Returns 404 with an error body
    """
    @pytest.mark.asyncio
    async def test_tc037_retrieve_unknown_property(self, client: AsyncClient):
        """TC-037: Missing listing"""
        response = await client.get("/api/properties/424242")
        assert response.status_code == 404
        assert response.json() == {"error": "Property not found"}

    """
    Test Case TC-038: Seller Dashboard Listings
    Description: Verify that /mine returns the caller's listings whatever their state
    Expected Result: Own unapproved listing included, other sellers' listings excluded
    """
    @pytest.mark.asyncio
    async def test_tc038_my_listings(self, client: AsyncClient, make_user, listing_payload):
        """TC-038: Own listings"""
        _, first_headers = await make_user(role="seller")
        _, second_headers = await make_user(role="seller")

        mine = await create_listing(client, first_headers, listing_payload())
        await create_listing(client, second_headers, listing_payload())

        response = await client.get("/api/properties/mine", headers=first_headers)

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [mine["id"]]
        assert response.json()[0]["is_approved"] is False


class TestPropertyEditing:
    """
    Test Case TC-039: Owner Edits Listing
    Description: Verify that the owner can edit content and sale status without losing approval
    Expected Result: Returns 200, changes stored, still approved and public
    """
    @pytest.mark.asyncio
    async def test_tc039_owner_edit_keeps_approval(
        self, client: AsyncClient, authenticated_seller, authenticated_admin, listing_payload
    ):
        """TC-039: Owner edit"""
        _, seller_headers = authenticated_seller
        _, admin_headers = authenticated_admin
        listing = await create_listing(client, seller_headers, listing_payload())
        await client.post(f"/api/admin/approve/{listing['id']}", headers=admin_headers)

        response = await client.put(
            f"/api/properties/{listing['id']}",
            json={"title": "Renovated family house", "price": 475000, "status": "sold"},
            headers=seller_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Renovated family house"
        assert data["price"] == 475000
        assert data["status"] == "sold"
        assert data["location"] == "Austin, TX"
        assert data["is_approved"] is True
        assert listing["id"] in await public_ids(client)

    """
    Test Case TC-040: Non-Owner Edit Rejected
    Description: Verify that a different seller cannot edit a listing
    Expected Result: Returns 403 and the stored listing is unchanged
    """
    @pytest.mark.asyncio
    async def test_tc040_non_owner_edit_rejected(self, client: AsyncClient, make_user, listing_payload):
        """TC-040: Non-owner edit"""
        _, owner_headers = await make_user(role="seller")
        _, other_headers = await make_user(role="seller")
        listing = await create_listing(client, owner_headers, listing_payload())

        before = (await client.get(f"/api/properties/{listing['id']}")).json()

        response = await client.put(
            f"/api/properties/{listing['id']}",
            json={"title": "Hijacked", "price": 1},
            headers=other_headers,
        )

        assert response.status_code == 403
        after = (await client.get(f"/api/properties/{listing['id']}")).json()
        assert after == before

    """
    Test Case TC-041: Admin Edits Any Listing
    Description: Verify that an admin can edit a listing they do not own
    Expected Result: Returns 200 with the change applied
    """
    @pytest.mark.asyncio
    async def test_tc041_admin_edit(self, client: AsyncClient, authenticated_seller, authenticated_admin, listing_payload):
        """TC-041: Admin edit"""
        _, seller_headers = authenticated_seller
        _, admin_headers = authenticated_admin
        listing = await create_listing(client, seller_headers, listing_payload())

        response = await client.put(
            f"/api/properties/{listing['id']}",
            json={"status": "for rent"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "for rent"

    """
    Test Case TC-042: Re-moderation on Edit
    Description: With REAPPROVE_ON_EDIT enabled, a seller edit sends an approved listing back to review
    Expected Result: Listing becomes unapproved and leaves public search
    """
    @pytest.mark.asyncio
    async def test_tc042_reapprove_on_edit(
        self, client: AsyncClient, authenticated_seller, authenticated_admin, listing_payload, monkeypatch
    ):
        """TC-042: Re-moderation switch"""
        monkeypatch.setattr(settings, "REAPPROVE_ON_EDIT", True)
        _, seller_headers = authenticated_seller
        _, admin_headers = authenticated_admin
        listing = await create_listing(client, seller_headers, listing_payload())
        await client.post(f"/api/admin/approve/{listing['id']}", headers=admin_headers)

        response = await client.put(
            f"/api/properties/{listing['id']}",
            json={"description": "Now with a pool"},
            headers=seller_headers,
        )

        assert response.status_code == 200
        assert response.json()["is_approved"] is False
        assert listing["id"] not in await public_ids(client)


class TestPromotionAndDeletion:
    """
    Test Case TC-043: Promote Twice
    Description: Verify that each promotion charges and the listing stays featured
    Expected Result: Two completed promotion payments, is_featured true
    """
    @pytest.mark.asyncio
    async def test_tc043_promote_twice(self, client: AsyncClient, authenticated_seller, listing_payload):
        """TC-043: Double promotion"""
        seller, headers = authenticated_seller
        listing = await create_listing(client, headers, listing_payload())

        first = await client.post(f"/api/properties/{listing['id']}/promote", headers=headers)
        second = await client.post(f"/api/properties/{listing['id']}/promote", headers=headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["property"]["is_featured"] is True
        assert second.json()["payment"]["amount"] == settings.PROMOTION_AMOUNT

        payments = (await client.get("/api/payments", headers=headers)).json()
        assert len(payments) == 2
        for payment in payments:
            assert payment["payment_type"] == "promotion"
            assert payment["status"] == "completed"
            assert payment["property_id"] == listing["id"]
            assert payment["user_id"] == seller.id

    """
    Test Case TC-044: Promote Someone Else's Listing
    Description: Verify that promotion is restricted to owner or admin
    Expected Result: Returns 403 and no payment is written
    """
    @pytest.mark.asyncio
    async def test_tc044_promote_forbidden(self, client: AsyncClient, make_user, listing_payload):
        """TC-044: Non-owner promotion"""
        _, owner_headers = await make_user(role="seller")
        _, buyer_headers = await make_user(role="buyer")
        listing = await create_listing(client, owner_headers, listing_payload())

        response = await client.post(f"/api/properties/{listing['id']}/promote", headers=buyer_headers)

        assert response.status_code == 403
        assert (await client.get("/api/payments", headers=buyer_headers)).json() == []
        assert (await client.get(f"/api/properties/{listing['id']}")).json()["is_featured"] is False

    """
    Test Case TC-045: Delete Listing
    Description: Verify owner deletion and that other users cannot delete
    Expected Result: Stranger gets 403, owner gets success, listing then 404
    """
    @pytest.mark.asyncio
    async def test_tc045_delete_listing(self, client: AsyncClient, make_user, listing_payload):
        """TC-045: Delete"""
        _, owner_headers = await make_user(role="seller")
        _, stranger_headers = await make_user(role="seller")
        listing = await create_listing(client, owner_headers, listing_payload())

        denied = await client.delete(f"/api/properties/{listing['id']}", headers=stranger_headers)
        assert denied.status_code == 403
        assert (await client.get(f"/api/properties/{listing['id']}")).status_code == 200

        deleted = await client.delete(f"/api/properties/{listing['id']}", headers=owner_headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True}
        assert (await client.get(f"/api/properties/{listing['id']}")).status_code == 404

        missing = await client.delete(f"/api/properties/{listing['id']}", headers=owner_headers)
        assert missing.status_code == 404

    """
    Test Case TC-045b: Deleted Listing Id Not Reissued
    Description: Verify that a listing created after deleting the newest one gets a fresh id,
    so favorites and reports on the deleted listing stay dangling
    Expected Result: New id differs, no favorite or open report attaches to the new listing
    """
    @pytest.mark.asyncio
    async def test_tc045b_deleted_listing_id_not_reissued(
        self, client: AsyncClient, make_user, authenticated_admin, listing_payload
    ):
        """TC-045b: Fresh listing id after delete"""
        _, seller_headers = await make_user(role="seller")
        _, buyer_headers = await make_user(role="buyer")
        _, admin_headers = authenticated_admin

        scam = await create_listing(client, seller_headers, listing_payload(title="Scam"))
        await client.post(f"/api/favorites/{scam['id']}", headers=buyer_headers)
        report = await client.post(f"/api/properties/{scam['id']}/report", json={"reason": "fraud"}, headers=buyer_headers)
        assert report.status_code == 201

        deleted = await client.delete(f"/api/properties/{scam['id']}", headers=seller_headers)
        assert deleted.status_code == 200

        innocent = await create_listing(client, seller_headers, listing_payload(title="Innocent"))
        assert innocent["id"] != scam["id"]

        assert (await client.get("/api/favorites", headers=buyer_headers)).json() == []

        reports = (await client.get("/api/admin/reports", headers=admin_headers)).json()
        assert [(r["property_id"], r["property_title"]) for r in reports] == [(scam["id"], None)]

        resolved = await client.post(f"/api/admin/reports/{report.json()['id']}/resolve", headers=admin_headers)
        assert resolved.status_code == 200
        assert (await client.get(f"/api/properties/{innocent['id']}")).status_code == 200
