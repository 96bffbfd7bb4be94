#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/images/handlers.py
"""Image handlers and the scheme-keyed handler registry.

A handler turns an absolute URL into an :class:`ImageAttachment`. Handlers
signal failure by raising :class:`ImageResolutionError`; the resolution
pipeline records any exception as a failed image and carries on.

Built-in handlers:

- :class:`NetworkImageHandler` for ``http`` and ``https`` (httpx)
- :class:`DataImageHandler` for base64 ``data:`` URIs
- :class:`FileImageHandler` for ``file:`` URLs, registered only on request

Every handler decodes the bytes with Pillow before returning them, so a
resolved image always has known dimensions.

"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import os
import re
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from io import BytesIO
from pathlib import Path
from typing import AsyncIterator, Iterator, Mapping
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

import httpx
from PIL import Image, UnidentifiedImageError

from styledmark.constants import DEFAULT_USER_AGENT, ENV_DISABLE_NETWORK, ENV_USER_AGENT
from styledmark.exceptions import ImageResolutionError, NetworkDisabledError
from styledmark.options.images import ImageHandlerOptions
from styledmark.text.attributes import ImageAttachment
from styledmark.utils.urls import url_scheme

logger = logging.getLogger(__name__)

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[^;,]+)(?P<params>(?:;[^;,]+)*?);base64,(?P<data>.+)$", re.DOTALL)


def is_network_disabled() -> bool:
    """Return True if network image loading is disabled by environment."""
    return os.getenv(ENV_DISABLE_NETWORK, "").lower() in ("true", "1", "yes", "on")


def decode_image(url: str, data: bytes, max_size_bytes: int | None = None) -> ImageAttachment:
    """Decode image bytes with Pillow and wrap them in an attachment.

    Parameters
    ----------
    url : str
        URL the bytes were loaded from
    data : bytes
        Encoded image
    max_size_bytes : int or None, default None
        Reject payloads larger than this

    Raises
    ------
    ImageResolutionError
        If the payload is empty, too large, or not an image Pillow can read

    """
    if not data:
        raise ImageResolutionError(url, "empty image data")
    if max_size_bytes is not None and len(data) > max_size_bytes:
        raise ImageResolutionError(url, f"image is {len(data)} bytes (max: {max_size_bytes})")

    try:
        with Image.open(BytesIO(data)) as image:
            width, height = image.size
            image_format = image.format or ""
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageResolutionError(url, "data is not a decodable image", original_error=e) from e

    mime_type = Image.MIME.get(image_format.upper(), f"image/{image_format.lower() or 'unknown'}")
    logger.debug(f"Decoded {image_format} image {width}x{height} from {url[:80]}")
    return ImageAttachment(url=url, data=data, mime_type=mime_type, width=width, height=height)


class ImageHandler(ABC):
    """Asynchronously load the visual content behind an image URL."""

    @abstractmethod
    async def load(self, url: str) -> ImageAttachment:
        """Load the image at ``url``.

        Raises
        ------
        ImageResolutionError
            If the image cannot be loaded

        """


class NetworkImageHandler(ImageHandler):
    """Load ``http`` and ``https`` images with httpx.

    Parameters
    ----------
    options : ImageHandlerOptions or None, default None
        Timeout, size limit, user agent and redirect policy
    client : httpx.AsyncClient or None, default None
        Client to send requests with. When omitted a client is created for
        each load and closed afterwards. A supplied client is never closed
        by the handler.

    Notes
    -----
    Setting ``STYLEDMARK_DISABLE_NETWORK`` to a true value makes every load
    fail with :class:`NetworkDisabledError`.

    """

    def __init__(self, options: ImageHandlerOptions | None = None, client: httpx.AsyncClient | None = None):
        self.options = options or ImageHandlerOptions()
        self._client = client

    @property
    def user_agent(self) -> str:
        return self.options.user_agent or os.getenv(ENV_USER_AGENT) or DEFAULT_USER_AGENT

    @asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self.options.timeout, follow_redirects=self.options.follow_redirects
        ) as client:
            yield client

    async def load(self, url: str) -> ImageAttachment:
        if is_network_disabled():
            raise NetworkDisabledError(url)
        if url_scheme(url) not in ("http", "https"):
            raise ImageResolutionError(url, "not an http(s) URL")

        max_size = self.options.max_asset_size_bytes
        try:
            async with self._client_context() as client:
                async with client.stream("GET", url, headers={"User-Agent": self.user_agent}) as response:
                    response.raise_for_status()

                    declared = response.headers.get("content-length")
                    if declared and declared.isdigit() and int(declared) > max_size:
                        raise ImageResolutionError(url, f"Content-Length too large: {declared} bytes (max: {max_size})")

                    chunks = []
                    total_size = 0
                    async for chunk in response.aiter_bytes():
                        total_size += len(chunk)
                        if total_size > max_size:
                            raise ImageResolutionError(url, f"response exceeded {max_size} bytes while streaming")
                        chunks.append(chunk)
        except httpx.HTTPError as e:
            raise ImageResolutionError(url, f"HTTP request failed: {e}", original_error=e) from e

        logger.debug(f"Fetched {total_size} bytes from {url}")
        return decode_image(url, b"".join(chunks), max_size)


class DataImageHandler(ImageHandler):
    """Decode base64 ``data:`` URIs."""

    def __init__(self, options: ImageHandlerOptions | None = None):
        self.options = options or ImageHandlerOptions()

    @staticmethod
    def decode_data_uri(url: str) -> tuple[bytes, str]:
        """Return the payload and declared MIME type of a base64 data URI.

        Raises
        ------
        ImageResolutionError
            If the URI is not a base64 image data URI

        Examples
        --------
            >>> DataImageHandler.decode_data_uri("data:image/png;base64,iVBORw0KGgo=")[1]
            'image/png'

        """
        match = _DATA_URI_PATTERN.match(url)
        if not match:
            raise ImageResolutionError(url[:80], "not a base64 data URI")

        mime_type = match.group("mime").lower()
        if not mime_type.startswith("image/"):
            raise ImageResolutionError(url[:80], f"unsupported MIME type {mime_type!r}")

        try:
            data = base64.b64decode(unquote(match.group("data")), validate=True)
        except (ValueError, binascii.Error) as e:
            raise ImageResolutionError(url[:80], "invalid base64 payload", original_error=e) from e
        return data, mime_type

    async def load(self, url: str) -> ImageAttachment:
        data, _declared_mime = self.decode_data_uri(url)
        return decode_image(url, data, self.options.max_asset_size_bytes)


class FileImageHandler(ImageHandler):
    """Read images from ``file:`` URLs.

    Local file access is opt-in: this handler is not part of the default
    registry.

    Parameters
    ----------
    root : str or Path or None, default None
        When given, only files inside this directory may be read
    options : ImageHandlerOptions or None, default None
        Size limit

    """

    def __init__(self, root: str | Path | None = None, options: ImageHandlerOptions | None = None):
        self.root = Path(root).resolve() if root is not None else None
        self.options = options or ImageHandlerOptions()

    def path_for(self, url: str) -> Path:
        """Return the local path ``url`` points to.

        Raises
        ------
        ImageResolutionError
            If the URL is not a local file URL or escapes ``root``

        """
        parts = urlsplit(url)
        if parts.scheme.lower() != "file" or parts.netloc not in ("", "localhost"):
            raise ImageResolutionError(url, "not a local file URL")
        path = Path(url2pathname(unquote(parts.path))).resolve()
        if self.root is not None and not path.is_relative_to(self.root):
            raise ImageResolutionError(url, f"path is outside {self.root}")
        return path

    async def load(self, url: str) -> ImageAttachment:
        path = self.path_for(url)
        try:
            if path.stat().st_size > self.options.max_asset_size_bytes:
                raise ImageResolutionError(url, f"file exceeds {self.options.max_asset_size_bytes} bytes")
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ImageResolutionError(url, f"cannot read {path}: {e}", original_error=e) from e
        return decode_image(url, data, self.options.max_asset_size_bytes)


class ImageHandlerRegistry(Mapping[str, ImageHandler]):
    """Mapping from lower-case URL scheme to :class:`ImageHandler`.

    Examples
    --------
        >>> registry = ImageHandlerRegistry.default()
        >>> sorted(registry)
        ['data', 'http', 'https']
        >>> registry = registry.with_handler("file", FileImageHandler(root="."))

    """

    def __init__(self, handlers: Mapping[str, ImageHandler] | None = None):
        self._handlers: dict[str, ImageHandler] = {}
        for scheme, handler in (handlers or {}).items():
            self.register(scheme, handler)

    @classmethod
    def default(cls, options: ImageHandlerOptions | None = None) -> ImageHandlerRegistry:
        """Return a registry with the ``http``, ``https`` and ``data`` handlers."""
        network = NetworkImageHandler(options)
        return cls({"http": network, "https": network, "data": DataImageHandler(options)})

    def register(self, scheme: str, handler: ImageHandler) -> None:
        """Register ``handler`` for ``scheme``, replacing any existing one."""
        scheme = scheme.lower().rstrip(":")
        if scheme in self._handlers:
            logger.debug(f"Replacing image handler for scheme {scheme!r}")
        self._handlers[scheme] = handler

    def with_handler(self, scheme: str, handler: ImageHandler) -> ImageHandlerRegistry:
        """Return a copy with ``handler`` registered for ``scheme``."""
        registry = ImageHandlerRegistry(self._handlers)
        registry.register(scheme, handler)
        return registry

    def handler_for(self, url: str) -> ImageHandler | None:
        """Return the handler for the scheme of ``url``, if one is registered."""
        return self._handlers.get(url_scheme(url))

    def __getitem__(self, scheme: str) -> ImageHandler:
        return self._handlers[scheme.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)
