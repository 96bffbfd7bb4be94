#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Image loading: handlers, registry and the asynchronous resolution pipeline."""

from styledmark.images.handlers import (
    DataImageHandler,
    FileImageHandler,
    ImageHandler,
    ImageHandlerRegistry,
    NetworkImageHandler,
    decode_image,
)
from styledmark.images.pipeline import (
    ImageLoadState,
    ImageResolutionCoordinator,
    ImageResolutionPass,
    ImageSnapshot,
    resolve_images,
)

__all__ = [
    "DataImageHandler",
    "FileImageHandler",
    "ImageHandler",
    "ImageHandlerRegistry",
    "ImageLoadState",
    "ImageResolutionCoordinator",
    "ImageResolutionPass",
    "ImageSnapshot",
    "NetworkImageHandler",
    "decode_image",
    "resolve_images",
]
