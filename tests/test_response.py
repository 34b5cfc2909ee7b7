"""Tests for waypost.http.response — JSON, file, CORS and redirect helpers."""

import json

import pytest

from waypost.http.response import (
    FILE_CHUNK_SIZE,
    is_traversal,
    respond_cors,
    respond_file,
    respond_json,
    respond_location,
)


class TestRespondJSON:
    @pytest.mark.anyio
    async def test_compact_body_and_headers(self, make_request) -> None:
        req, sent = make_request()
        await respond_json(req, {"a": [1, 2], "b": None})

        assert sent.status == 200
        assert sent.body == b'{"a":[1,2],"b":null}'
        assert sent.headers["content-type"] == "application/json"
        assert sent.headers["content-length"] == str(len(sent.body))

    @pytest.mark.anyio
    async def test_content_length_counts_bytes(self, make_request) -> None:
        req, sent = make_request()
        await respond_json(req, "éé")

        assert json.loads(sent.body) == "éé"
        assert sent.headers["content-length"] == str(len(sent.body))

    @pytest.mark.anyio
    async def test_status_and_extra_headers(self, make_request) -> None:
        req, sent = make_request()
        await respond_json(req, [], status=201, headers={"X-Request-Id": "abc"})

        assert sent.status == 201
        assert sent.headers["x-request-id"] == "abc"
        assert req.status == 201


class TestIsTraversal:
    @pytest.mark.parametrize(
        "path",
        ["../etc/passwd", "a/../b", "./a", "a/.", "a\\..\\b"],
    )
    def test_rejected(self, path: str) -> None:
        assert is_traversal(path)

    @pytest.mark.parametrize("path", ["a/b.txt", ".hidden/x", "a/..b", "/srv/site/index.html"])
    def test_allowed(self, path: str) -> None:
        assert not is_traversal(path)


class TestRespondFile:
    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("name", "content_type"),
        [
            ("index.html", "text/html"),
            ("app.js", "application/javascript"),
            ("site.css", "text/css"),
            ("data.json", "application/json"),
            ("notes.md", "text/markdown"),
            ("module.wasm", "application/wasm"),
        ],
    )
    async def test_known_types(self, make_request, tmp_path, name, content_type) -> None:
        (tmp_path / name).write_bytes(b"content")
        req, sent = make_request()

        await respond_file(req, str(tmp_path / name))

        assert sent.status == 200
        assert sent.body == b"content"
        assert sent.headers["content-type"] == content_type
        assert sent.headers["content-length"] == "7"

    @pytest.mark.anyio
    async def test_unknown_extension_has_no_content_type(self, make_request, tmp_path) -> None:
        (tmp_path / "blob.bin").write_bytes(b"\x00\x01")
        req, sent = make_request()

        await respond_file(req, str(tmp_path / "blob.bin"))

        assert sent.status == 200
        assert "content-type" not in sent.headers
        assert sent.body == b"\x00\x01"

    @pytest.mark.anyio
    async def test_missing_file_is_404(self, make_request, tmp_path) -> None:
        req, sent = make_request()
        await respond_file(req, str(tmp_path / "nope.txt"))
        assert sent.status == 404
        assert sent.body == b""

    @pytest.mark.anyio
    async def test_directory_is_404(self, make_request, tmp_path) -> None:
        req, sent = make_request()
        await respond_file(req, str(tmp_path))
        assert sent.status == 404

    @pytest.mark.anyio
    async def test_traversal_is_404_even_if_file_exists(self, make_request, tmp_path) -> None:
        (tmp_path / "secret.txt").write_text("s")
        (tmp_path / "public").mkdir()
        req, sent = make_request()

        await respond_file(req, f"{tmp_path}/public/../secret.txt")

        assert sent.status == 404
        assert sent.body == b""

    @pytest.mark.anyio
    async def test_large_file_streams_in_chunks(self, make_request, tmp_path) -> None:
        payload = b"x" * (FILE_CHUNK_SIZE * 2 + 10)
        (tmp_path / "big.txt").write_bytes(payload)
        req, sent = make_request()

        await respond_file(req, str(tmp_path / "big.txt"))

        chunks = [m for m in sent if m["type"] == "http.response.body"]
        # three data chunks plus the closing empty message
        assert len(chunks) == 4
        assert chunks[-1] == {"type": "http.response.body", "body": b"", "more_body": False}
        assert sent.body == payload
        assert sent.headers["content-length"] == str(len(payload))

    @pytest.mark.anyio
    async def test_extra_headers_and_status(self, make_request, tmp_path) -> None:
        (tmp_path / "a.txt").write_text("hi")
        req, sent = make_request()

        await respond_file(req, str(tmp_path / "a.txt"), status=203, headers={"ETag": '"1"'})

        assert sent.status == 203
        assert sent.headers["etag"] == '"1"'
        assert sent.headers["content-type"] == "text/plain"


class TestRespondCORS:
    @pytest.mark.anyio
    async def test_four_headers(self, make_request) -> None:
        req, sent = make_request("OPTIONS", "/api")

        await respond_cors(req, "https://a.example", "GET, POST", "Content-Type", True)

        assert sent.status == 200
        assert sent.headers == {
            "access-control-allow-origin": "https://a.example",
            "access-control-allow-methods": "GET, POST",
            "access-control-allow-headers": "Content-Type",
            "access-control-allow-credentials": "true",
            "content-length": "0",
        }
        assert sent.body == b""

    @pytest.mark.anyio
    async def test_credentials_false(self, make_request) -> None:
        req, sent = make_request("OPTIONS", "/api")
        await respond_cors(req, "*", "GET", "", False)
        assert sent.headers["access-control-allow-credentials"] == "false"


class TestRespondLocation:
    @pytest.mark.anyio
    async def test_redirect(self, make_request) -> None:
        req, sent = make_request()
        await respond_location(req, "/login?next=/home")

        assert sent.status == 302
        assert sent.headers["location"] == "/login?next=/home"

    @pytest.mark.anyio
    async def test_encodes_like_encode_uri(self, make_request) -> None:
        req, sent = make_request()
        await respond_location(req, "/search?q=café au lait#top")

        assert sent.headers["location"] == "/search?q=caf%C3%A9%20au%20lait#top"

    @pytest.mark.anyio
    async def test_extra_headers(self, make_request) -> None:
        req, sent = make_request()
        await respond_location(req, "https://example.com/", headers={"Cache-Control": "no-store"})

        assert sent.headers["location"] == "https://example.com/"
        assert sent.headers["cache-control"] == "no-store"
