#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the built-in image handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from styledmark.constants import (
    DEFAULT_FOLLOW_REDIRECTS,
    DEFAULT_IMAGE_TIMEOUT,
    DEFAULT_MAX_ASSET_SIZE_BYTES,
)
from styledmark.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ImageHandlerOptions(CloneFrozenMixin):
    """Limits shared by the built-in image handlers.

    Parameters
    ----------
    timeout : float, default 10.0
        Network timeout in seconds for the HTTP handler
    max_asset_size_bytes : int, default 20MB
        Largest image accepted by any handler
    user_agent : str or None, default None
        User-Agent header; falls back to ``STYLEDMARK_USER_AGENT`` and then
        the library default
    follow_redirects : bool, default True
        Whether the HTTP handler follows redirects

    """

    timeout: float = field(default=DEFAULT_IMAGE_TIMEOUT, metadata={"help": "Network timeout in seconds"})
    max_asset_size_bytes: int = field(
        default=DEFAULT_MAX_ASSET_SIZE_BYTES,
        metadata={"help": "Maximum allowed size in bytes for a single image", "importance": "security"},
    )
    user_agent: Optional[str] = field(default=None, metadata={"help": "User-Agent header for image requests"})
    follow_redirects: bool = field(default=DEFAULT_FOLLOW_REDIRECTS, metadata={"help": "Follow HTTP redirects"})

    def __post_init__(self) -> None:
        """Validate numeric limits.

        Raises
        ------
        ValueError
            If the timeout or size limit is not positive

        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_asset_size_bytes <= 0:
            raise ValueError(f"max_asset_size_bytes must be positive, got {self.max_asset_size_bytes}")
