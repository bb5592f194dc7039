"""
Gebeta Backend: Router Tests
============================

What we test:
    ✅ Literal and parameter matching, including trailing slashes
    ✅ Segment count must match exactly
    ✅ First registered match wins; re-registration replaces in place
    ✅ Registration rejects unknown methods and malformed patterns
    ✅ Dispatch over ASGI: path params, query strings, 404 envelope
    ✅ Handler exceptions propagate to the caller
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.http.router import Router, split_path


async def ok(request, response):
    await response.json(200, {"params": dict(request.path_params)})


async def other(request, response):
    await response.json(200, {"handler": "other"})


class TestSplitPath:

    def test_ignores_leading_and_trailing_slashes(self):
        assert split_path("/api/menu/42/") == ["api", "menu", "42"]

    def test_root_has_no_segments(self):
        assert split_path("/") == []
        assert split_path("") == []


class TestRouteMatching:

    def setup_method(self):
        self.router = Router()

    def test_literal_route_matches(self):
        self.router.get("/api/businesses", ok)
        route, params = self.router.resolve("GET", "/api/businesses")
        assert route.handler is ok
        assert params == {}

    def test_parameter_binds_segment(self):
        self.router.get("/api/menu/:businessId/top", ok)
        _, params = self.router.resolve("GET", "/api/menu/abc123/top")
        assert params == {"businessId": "abc123"}

    def test_multiple_parameters(self):
        self.router.get("/api/:resource/:id", ok)
        _, params = self.router.resolve("GET", "/api/menu/7")
        assert params == {"resource": "menu", "id": "7"}

    def test_trailing_slash_tolerated(self):
        self.router.get("/api/businesses/featured", ok)
        assert self.router.resolve("GET", "/api/businesses/featured/") is not None

    def test_segment_count_must_match(self):
        self.router.get("/api/menu/:businessId", ok)
        assert self.router.resolve("GET", "/api/menu") is None
        assert self.router.resolve("GET", "/api/menu/1/top") is None

    def test_empty_segment_does_not_bind_parameter(self):
        self.router.get("/api/menu/:businessId/top", ok)
        assert self.router.resolve("GET", "/api/menu//top") is None

    def test_method_must_match(self):
        self.router.post("/api/businesses", ok)
        assert self.router.resolve("GET", "/api/businesses") is None
        assert self.router.resolve("post", "/api/businesses") is not None

    def test_first_registered_match_wins(self):
        self.router.get("/api/menu/item/:id", ok)
        self.router.get("/api/menu/:businessId/:extra", other)
        route, params = self.router.resolve("GET", "/api/menu/item/5")
        assert route.handler is ok
        assert params == {"id": "5"}

    def test_reregistration_replaces_in_place(self):
        self.router.get("/api/a", ok)
        self.router.get("/api/b", ok)
        self.router.get("/api/a", other)

        patterns = [route.pattern for route in self.router.routes]
        assert patterns == ["/api/a", "/api/b"]
        route, _ = self.router.resolve("GET", "/api/a")
        assert route.handler is other

    def test_same_pattern_different_method_is_separate(self):
        self.router.get("/api/menu/:id", ok)
        self.router.delete("/api/menu/:id", other)
        assert len(self.router.routes) == 2


class TestRegistration:

    def setup_method(self):
        self.router = Router()

    def test_method_is_normalised(self):
        self.router.register("patch", "/api/applications/:id", ok)
        assert self.router.routes[0].method == "PATCH"

    def test_unsupported_method_rejected(self):
        with pytest.raises(ValueError, match="Unsupported method"):
            self.router.register("TRACE", "/api/x", ok)

    def test_pattern_must_start_with_slash(self):
        with pytest.raises(ValueError):
            self.router.register("GET", "api/x", ok)

    def test_parameter_needs_name(self):
        with pytest.raises(ValueError):
            self.router.register("GET", "/api/:", ok)

    def test_decorator_form(self):
        @self.router.put("/api/businesses/:id")
        async def update(request, response):
            await response.json(200, {})

        route, params = self.router.resolve("PUT", "/api/businesses/1")
        assert route.handler is update
        assert params == {"id": "1"}


class TestDispatch:

    def setup_method(self):
        self.router = Router()
        self.router.get("/api/menu/:businessId", ok)

    def client(self):
        return AsyncClient(transport=ASGITransport(app=self.router), base_url="http://test")

    @pytest.mark.asyncio
    async def test_handler_receives_path_params(self):
        async with self.client() as client:
            response = await client.get("/api/menu/b-42")
        assert response.status_code == 200
        assert response.json() == {"params": {"businessId": "b-42"}}

    @pytest.mark.asyncio
    async def test_query_string_does_not_affect_matching(self):
        async with self.client() as client:
            response = await client.get("/api/menu/b-42?category=main&available=true")
        assert response.status_code == 200
        assert response.json()["params"] == {"businessId": "b-42"}

    @pytest.mark.asyncio
    async def test_unmatched_route_returns_404_envelope(self):
        async with self.client() as client:
            response = await client.delete("/api/menu/b-42")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "not_found"
        assert body["message"] == "Route DELETE /api/menu/b-42 not found"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_handler_exception_propagates(self):
        async def boom(request, response):
            raise RuntimeError("handler failed")

        self.router.get("/api/boom", boom)
        async with self.client() as client:
            with pytest.raises(RuntimeError, match="handler failed"):
                await client.get("/api/boom")
