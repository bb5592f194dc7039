"""
Gebeta Backend: Health Endpoint, Middleware Chain and Seeder Tests
==================================================================
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from app import __version__
from app.models.business import Business
from app.models.menu_item import MenuItem
from app.schemas.review import ReviewCreate
from app.seed import SEED_DATA, seed_businesses
from app.services.review_service import review_service


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "Gebeta API is online"
        assert body["data"]["status"] == "Gebeta API is online"
        assert body["data"]["database"] == "connected"
        assert body["data"]["version"] == __version__
        assert body["data"]["uptimeSeconds"] >= 0

    @pytest.mark.asyncio
    async def test_unconfigured_assistant_reported_disabled(self, test_client):
        response = await test_client.get("/api/health")
        assert response.json()["data"]["assistant"] == "disabled"

    @pytest.mark.asyncio
    async def test_unreachable_assistant_reported_unavailable(self, test_client):
        with patch("app.routes.health.assistant_service") as mock_assistant:
            mock_assistant.enabled = True
            mock_assistant.health_check = AsyncMock(return_value=False)
            response = await test_client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["data"]["assistant"] == "unavailable"


class TestMiddlewareChain:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/health")
        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/businesses", headers={"X-Request-ID": "trace-123"})
        assert response.headers["x-request-id"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_envelope_carries_cors_headers(self, test_client):
        response = await test_client.get(
            "/api/businesses/detail/bad-id",
            headers={"Origin": "http://localhost:5173"},
        )
        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    @pytest.mark.asyncio
    async def test_disallowed_origin_rejected(self, test_client):
        response = await test_client.get(
            "/api/businesses",
            headers={"Origin": "http://evil.example"},
        )
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_unknown_route_is_404_envelope(self, test_client):
        response = await test_client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json()["message"] == "Route GET /api/unknown not found"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, database):
        from app.main import app

        with patch("app.routes.businesses.business_service") as mock_service:
            mock_service.list_businesses = AsyncMock(side_effect=RuntimeError("secret internals"))
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/businesses")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "unexpected_error"
        assert "secret" not in body["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error_carries_cors_headers(self, database):
        from app.main import app

        with patch("app.routes.businesses.business_service") as mock_service:
            mock_service.list_businesses = AsyncMock(side_effect=RuntimeError("boom"))
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get(
                    "/api/businesses",
                    headers={"Origin": "http://localhost:3000"},
                )

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_replaces_catalogue(self, db):
        stale = Business(name="Old Place", slug="old-place", category="delivery")
        db.add(stale)
        await db.flush()
        db.add(MenuItem(business_id=stale.id, name="Old dish", price=10))
        await db.flush()

        businesses = await seed_businesses(db)

        assert len(businesses) == len(SEED_DATA) == 4
        total = (await db.execute(select(func.count(Business.id)))).scalar_one()
        assert total == 4
        items = (await db.execute(select(func.count(MenuItem.id)))).scalar_one()
        assert items == 0

        slugs = sorted(b.slug for b in businesses)
        assert slugs == ["burger-dash", "green-garden", "night-owl-pizza", "student-center-cafeteria"]

        burger = next(b for b in businesses if b.slug == "burger-dash")
        assert burger.rating == {"average": 4.8, "count": 500}
        assert burger.is_featured is True

    @pytest.mark.asyncio
    async def test_review_builds_on_seeded_rating(self, db):
        businesses = await seed_businesses(db)
        cafeteria = next(b for b in businesses if b.slug == "student-center-cafeteria")
        average, count = cafeteria.rating_average, cafeteria.rating_count
        assert count > 0

        await review_service.create_review(
            db,
            ReviewCreate(business_id=cafeteria.id, rating=5, body="Better than last year"),
        )

        assert cafeteria.rating_count == count + 1
        expected = round((average * count + 5) / (count + 1), 2)
        assert cafeteria.rating_average == expected
        assert cafeteria.rating_average != 5.0
