"""Tests for the CORS preflight handler."""

import pytest

from waypost.app import App
from waypost.http.response import respond_json
from waypost.middleware.cors import CORSConfig, cors
from waypost.testing import TestClient


async def _data(ctx, next) -> None:
    await respond_json(ctx.request, {"message": "hello"})


def _make_cors_app(config: CORSConfig | None = None) -> App:
    """Helper: create an app with a preflight route and a simple GET route."""
    app = App()
    app.options("/api/*", cors(config))
    app.get("/api/data", _data)
    return app


def _fallthrough(ctx, next) -> None:
    next()


class TestCORSConfig:
    def test_secure_defaults(self) -> None:
        cfg = CORSConfig()
        assert cfg.allow_origins == ()
        assert cfg.allow_credentials is False
        assert cfg.allowed_origin("https://example.com") is None

    def test_wildcard(self) -> None:
        cfg = CORSConfig(allow_origins=("*",))
        assert cfg.allowed_origin("https://a.example") == "*"

    def test_wildcard_with_credentials_echoes_origin(self) -> None:
        cfg = CORSConfig(allow_origins=("*",), allow_credentials=True)
        assert cfg.allowed_origin("https://a.example") == "https://a.example"

    def test_listed_origin(self) -> None:
        cfg = CORSConfig(allow_origins=("https://a.example", "https://b.example"))
        assert cfg.allowed_origin("https://b.example") == "https://b.example"
        assert cfg.allowed_origin("https://c.example") is None


class TestPreflight:
    @pytest.mark.anyio
    async def test_allowed_origin(self) -> None:
        app = _make_cors_app(
            CORSConfig(
                allow_origins=("https://example.com",),
                allow_methods=("GET", "POST"),
                allow_headers=("Content-Type", "Authorization"),
            )
        )
        async with TestClient(app) as client:
            response = await client.options(
                "/api/data", headers={"Origin": "https://example.com"}
            )

        assert response.status == 200
        assert response.header("access-control-allow-origin") == "https://example.com"
        assert response.header("access-control-allow-methods") == "GET, POST"
        assert (
            response.header("access-control-allow-headers") == "Content-Type, Authorization"
        )
        assert response.header("access-control-allow-credentials") == "false"
        assert response.body == b""

    @pytest.mark.anyio
    async def test_credentials_flag(self) -> None:
        app = _make_cors_app(CORSConfig(allow_origins=("*",), allow_credentials=True))
        async with TestClient(app) as client:
            response = await client.options("/api/x", headers={"Origin": "https://a.example"})

        assert response.header("access-control-allow-origin") == "https://a.example"
        assert response.header("access-control-allow-credentials") == "true"

    @pytest.mark.anyio
    async def test_disallowed_origin_forbidden(self) -> None:
        app = _make_cors_app(CORSConfig(allow_origins=("https://example.com",)))
        async with TestClient(app) as client:
            response = await client.options("/api/data", headers={"Origin": "https://evil.com"})

        assert response.status == 403
        assert response.header("access-control-allow-origin") is None

    @pytest.mark.anyio
    async def test_no_origin_passes_to_next_handler(self) -> None:
        calls: list[str] = []

        async def describe(ctx, next) -> None:
            calls.append("describe")
            await respond_json(ctx.request, {"methods": ["GET"]})

        app = App()
        app.options("/api/data", cors(CORSConfig(allow_origins=("*",))), describe)
        async with TestClient(app) as client:
            response = await client.options("/api/data")

        assert calls == ["describe"]
        assert response.json() == {"methods": ["GET"]}

    @pytest.mark.anyio
    async def test_no_origin_and_no_next_handler(self) -> None:
        app = _make_cors_app(CORSConfig(allow_origins=("*",)))
        async with TestClient(app) as client:
            response = await client.options("/api/data")

        # Chain ran out without a response
        assert response.status == 500

    @pytest.mark.anyio
    async def test_get_route_unaffected(self) -> None:
        app = _make_cors_app(CORSConfig(allow_origins=("*",)))
        async with TestClient(app) as client:
            response = await client.get("/api/data", headers={"Origin": "https://a.example"})

        assert response.status == 200
        assert response.json() == {"message": "hello"}
        assert response.header("access-control-allow-origin") is None
