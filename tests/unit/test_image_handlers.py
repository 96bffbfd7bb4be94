#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_image_handlers.py
"""Unit tests for image handlers and the handler registry."""

import asyncio

import httpx
import pytest

from styledmark.exceptions import ImageResolutionError, NetworkDisabledError
from styledmark.images import (
    DataImageHandler,
    FileImageHandler,
    ImageHandlerRegistry,
    NetworkImageHandler,
    decode_image,
)
from styledmark.options import ImageHandlerOptions


def _network_handler(responder, options=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(responder))
    return NetworkImageHandler(options, client=client)


@pytest.mark.unit
class TestDecodeImage:
    """Tests for decoding image bytes with Pillow."""

    def test_png(self, png_bytes):
        image = decode_image("mem://a", png_bytes)
        assert (image.width, image.height) == (3, 2)
        assert image.mime_type == "image/png"
        assert image.url == "mem://a"

    def test_empty(self):
        with pytest.raises(ImageResolutionError, match="empty"):
            decode_image("mem://a", b"")

    def test_not_an_image(self):
        with pytest.raises(ImageResolutionError):
            decode_image("mem://a", b"definitely not an image")

    def test_too_large(self, png_bytes):
        with pytest.raises(ImageResolutionError):
            decode_image("mem://a", png_bytes, max_size_bytes=10)


@pytest.mark.unit
class TestDataImageHandler:
    """Tests for base64 data URIs."""

    def test_load(self, png_data_uri):
        image = asyncio.run(DataImageHandler().load(png_data_uri))
        assert (image.width, image.height) == (3, 2)

    def test_decode_data_uri(self, png_bytes, png_data_uri):
        data, mime_type = DataImageHandler.decode_data_uri(png_data_uri)
        assert data == png_bytes
        assert mime_type == "image/png"

    def test_non_image_mime_type(self):
        with pytest.raises(ImageResolutionError):
            DataImageHandler.decode_data_uri("data:text/plain;base64,aGVsbG8=")

    def test_invalid_base64(self):
        with pytest.raises(ImageResolutionError):
            DataImageHandler.decode_data_uri("data:image/png;base64,@@@")

    def test_not_base64(self):
        with pytest.raises(ImageResolutionError):
            DataImageHandler.decode_data_uri("data:image/png,rawdata")


@pytest.mark.unit
class TestFileImageHandler:
    """Tests for local file URLs."""

    def test_load(self, tmp_path, png_bytes):
        path = tmp_path / "pic.png"
        path.write_bytes(png_bytes)
        image = asyncio.run(FileImageHandler(root=tmp_path).load(path.as_uri()))
        assert (image.width, image.height) == (3, 2)

    def test_outside_root(self, tmp_path, png_bytes):
        root = tmp_path / "docs"
        root.mkdir()
        path = tmp_path / "secret.png"
        path.write_bytes(png_bytes)
        with pytest.raises(ImageResolutionError, match="outside"):
            FileImageHandler(root=root).path_for(path.as_uri())

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageResolutionError):
            asyncio.run(FileImageHandler(root=tmp_path).load((tmp_path / "missing.png").as_uri()))

    def test_remote_host_rejected(self):
        with pytest.raises(ImageResolutionError):
            FileImageHandler().path_for("file://server/share/pic.png")


@pytest.mark.unit
class TestNetworkImageHandler:
    """Tests for the httpx-based handler using a mock transport."""

    def test_load(self, png_bytes):
        seen = {}

        def responder(request):
            seen["user_agent"] = request.headers.get("user-agent")
            return httpx.Response(200, content=png_bytes)

        handler = _network_handler(responder, ImageHandlerOptions(user_agent="tests/1.0"))
        image = asyncio.run(handler.load("https://example.org/pic.png"))
        assert (image.width, image.height) == (3, 2)
        assert seen["user_agent"] == "tests/1.0"

    def test_http_error_status(self):
        handler = _network_handler(lambda request: httpx.Response(404))
        with pytest.raises(ImageResolutionError, match="HTTP request failed"):
            asyncio.run(handler.load("https://example.org/missing.png"))

    def test_transport_error(self):
        def responder(request):
            raise httpx.ConnectError("refused", request=request)

        handler = _network_handler(responder)
        with pytest.raises(ImageResolutionError):
            asyncio.run(handler.load("https://example.org/pic.png"))

    def test_size_limit(self, png_bytes):
        handler = _network_handler(
            lambda request: httpx.Response(200, content=png_bytes), ImageHandlerOptions(max_asset_size_bytes=10)
        )
        with pytest.raises(ImageResolutionError):
            asyncio.run(handler.load("https://example.org/pic.png"))

    def test_network_disabled_by_environment(self, monkeypatch, png_bytes):
        monkeypatch.setenv("STYLEDMARK_DISABLE_NETWORK", "true")
        handler = _network_handler(lambda request: httpx.Response(200, content=png_bytes))
        with pytest.raises(NetworkDisabledError):
            asyncio.run(handler.load("https://example.org/pic.png"))

    def test_user_agent_from_environment(self, monkeypatch):
        monkeypatch.setenv("STYLEDMARK_USER_AGENT", "env-agent")
        assert NetworkImageHandler().user_agent == "env-agent"


@pytest.mark.unit
class TestImageHandlerRegistry:
    """Tests for scheme lookup."""

    def test_default_schemes(self):
        assert sorted(ImageHandlerRegistry.default()) == ["data", "http", "https"]

    def test_file_not_registered_by_default(self):
        assert ImageHandlerRegistry.default().handler_for("file:///tmp/pic.png") is None

    def test_lookup_is_case_insensitive(self):
        registry = ImageHandlerRegistry.default()
        assert isinstance(registry.handler_for("HTTPS://example.org/a.png"), NetworkImageHandler)
        assert isinstance(registry["DATA"], DataImageHandler)

    def test_with_handler_returns_copy(self, tmp_path):
        registry = ImageHandlerRegistry.default()
        extended = registry.with_handler("file:", FileImageHandler(root=tmp_path))
        assert "file" in extended
        assert "file" not in registry
        assert len(extended) == len(registry) + 1
