#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/images/pipeline.py
"""Asynchronous resolution of image placeholders.

Rendering emits each image as a one-character placeholder run. This module
finds those placeholders in finished styled text, loads each distinct URL
once through the handler registered for its scheme, and substitutes the
results in place. Substitutions keep the placeholder's length, so every
other offset in the text is unchanged.

Each URL moves through ``PENDING -> LOADING -> RESOLVED | FAILED``. Loads
run concurrently as asyncio tasks; only the pass itself applies results,
one settled load at a time, and yields an :class:`ImageSnapshot` after
each. The last snapshot is marked final.

Passes are tagged with a render fingerprint. An
:class:`ImageResolutionCoordinator` knows which fingerprint is current and
cancels passes for any other, so results loaded for an outdated render are
never applied.

"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional

from styledmark.images.handlers import ImageHandlerRegistry
from styledmark.text.styled_text import StyledText
from styledmark.utils.urls import url_scheme

logger = logging.getLogger(__name__)


class ImageLoadState(str, Enum):
    """Resolution state of one image URL."""

    PENDING = "pending"
    LOADING = "loading"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageSnapshot:
    """Styled text after some image loads have settled.

    Parameters
    ----------
    styled_text : StyledText
        Text with every image resolved so far substituted
    resolved, failed, pending : frozenset of str
        URLs per outcome; ``pending`` holds URLs still loading
    final : bool
        True for the last snapshot of a pass
    fingerprint : str or None
        Fingerprint of the render the text belongs to

    """

    styled_text: StyledText
    resolved: frozenset[str]
    failed: frozenset[str]
    pending: frozenset[str]
    final: bool
    fingerprint: Optional[str] = None


class ImageResolutionPass:
    """One run of image resolution over a finished styled text.

    Iterate with ``async for`` to drive the loads. A pass can be iterated
    only once; a text without placeholders yields nothing.

    Parameters
    ----------
    styled_text : StyledText
        Output of a synchronous render
    registry : ImageHandlerRegistry
        Handlers by URL scheme; copied when the pass is created
    fingerprint : str or None, default None
        Fingerprint of the render that produced ``styled_text``

    """

    def __init__(self, styled_text: StyledText, registry: ImageHandlerRegistry, fingerprint: str | None = None):
        self.styled_text = styled_text
        self.fingerprint = fingerprint
        self._registry = ImageHandlerRegistry(registry)
        self._states: dict[str, ImageLoadState] = {
            url: ImageLoadState.PENDING for url in styled_text.image_placeholders()
        }
        self._tasks: dict[asyncio.Future, str] = {}
        self._cancelled = False
        self._finished = False
        self._iterator: AsyncIterator[ImageSnapshot] | None = None

    @property
    def states(self) -> dict[str, ImageLoadState]:
        """Return the current state of every image URL in the text."""
        return dict(self._states)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def finished(self) -> bool:
        """Return True once the pass has ended, by completion or cancellation."""
        return self._finished or self._cancelled

    def cancel(self) -> None:
        """Stop the pass: outstanding loads are cancelled and nothing more is applied."""
        if self._cancelled:
            return
        self._cancelled = True
        for task in self._tasks:
            if not task.done():
                task.cancel()

    def __aiter__(self) -> AsyncIterator[ImageSnapshot]:
        if self._iterator is None:
            self._iterator = self._run()
        return self._iterator

    def _snapshot(self, styled_text: StyledText, final: bool) -> ImageSnapshot:
        by_state: dict[ImageLoadState, set[str]] = {state: set() for state in ImageLoadState}
        for url, state in self._states.items():
            by_state[state].add(url)
        return ImageSnapshot(
            styled_text=styled_text,
            resolved=frozenset(by_state[ImageLoadState.RESOLVED]),
            failed=frozenset(by_state[ImageLoadState.FAILED]),
            pending=frozenset(by_state[ImageLoadState.PENDING] | by_state[ImageLoadState.LOADING]),
            final=final,
            fingerprint=self.fingerprint,
        )

    def _start_loads(self) -> None:
        for url in self._states:
            handler = self._registry.handler_for(url)
            if handler is None:
                logger.warning(f"No image handler registered for scheme {url_scheme(url)!r}; skipping {url[:80]}")
                self._states[url] = ImageLoadState.FAILED
                continue
            self._states[url] = ImageLoadState.LOADING
            self._tasks[asyncio.ensure_future(handler.load(url))] = url

    def _settle(self, task: asyncio.Future, styled_text: StyledText) -> StyledText:
        url = self._tasks[task]
        if task.cancelled():
            logger.warning(f"Image load was cancelled: {url[:80]}")
            self._states[url] = ImageLoadState.FAILED
            return styled_text

        error = task.exception()
        if error is not None:
            logger.warning(f"Failed to load image {url[:80]}: {error}")
            self._states[url] = ImageLoadState.FAILED
            return styled_text

        self._states[url] = ImageLoadState.RESOLVED
        return styled_text.with_image(url, task.result())

    async def _run(self) -> AsyncIterator[ImageSnapshot]:
        if not self._states or self._cancelled:
            self._finished = True
            return

        logger.debug(f"Resolving {len(self._states)} image URL(s)")
        current = self.styled_text
        try:
            self._start_loads()
            pending = set(self._tasks)
            if not pending:
                yield self._snapshot(current, final=True)
                return

            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for position, task in enumerate(sorted(done, key=self._order), start=1):
                    if self._cancelled:
                        logger.debug(f"Discarding image results for superseded render {self.fingerprint}")
                        return
                    current = self._settle(task, current)
                    yield self._snapshot(current, final=not pending and position == len(done))
        finally:
            self._finished = True
            for task in self._tasks:
                if not task.done():
                    task.cancel()

    def _order(self, task: asyncio.Future) -> int:
        return list(self._states).index(self._tasks[task])


class ImageResolutionCoordinator:
    """Track the current render fingerprint and cancel passes for older ones.

    Examples
    --------
        >>> coordinator = ImageResolutionCoordinator()
        >>> coordinator.activate("a")
        >>> image_pass = coordinator.start(styled_text, "a", ImageHandlerRegistry.default())
        >>> coordinator.activate("b")  # image_pass is cancelled
        >>> image_pass.cancelled
        True

    """

    def __init__(self) -> None:
        self._active_fingerprint: str | None = None
        self._passes: list[ImageResolutionPass] = []

    @property
    def active_fingerprint(self) -> str | None:
        return self._active_fingerprint

    def is_active(self, fingerprint: str | None) -> bool:
        return fingerprint is not None and fingerprint == self._active_fingerprint

    def activate(self, fingerprint: str) -> None:
        """Make ``fingerprint`` current, cancelling passes for any other."""
        if fingerprint == self._active_fingerprint:
            return
        if self._active_fingerprint is not None:
            logger.debug(f"Render {self._active_fingerprint[:12]} superseded by {fingerprint[:12]}")
        self._active_fingerprint = fingerprint

        live = []
        for image_pass in self._passes:
            if image_pass.fingerprint == fingerprint:
                live.append(image_pass)
            else:
                image_pass.cancel()
        self._passes = live

    def start(self, styled_text: StyledText, fingerprint: str, registry: ImageHandlerRegistry) -> ImageResolutionPass:
        """Create a pass for a render.

        A pass for a fingerprint that is not current is returned already
        cancelled and yields nothing. At most one pass runs per fingerprint:
        starting another cancels the one still running, so only the newest
        pass ever produces snapshots for that render.

        """
        image_pass = ImageResolutionPass(styled_text, registry, fingerprint)
        if not self.is_active(fingerprint):
            logger.debug(f"Not resolving images for inactive render {fingerprint[:12]}")
            image_pass.cancel()
            return image_pass

        for running in self._passes:
            if running.fingerprint == fingerprint and not running.finished:
                logger.debug(f"Replacing running image pass for render {fingerprint[:12]}")
                running.cancel()
        self._passes = [p for p in self._passes if not p.finished]
        self._passes.append(image_pass)
        return image_pass

    def owns(self, image_pass: ImageResolutionPass) -> bool:
        """Return True if ``image_pass`` is the live pass of the current render."""
        return not image_pass.cancelled and image_pass in self._passes and self.is_active(image_pass.fingerprint)


def resolve_images(
    styled_text: StyledText, registry: ImageHandlerRegistry | None = None
) -> ImageResolutionPass:
    """Return a pass resolving the images of ``styled_text``.

    Uses the default registry (``http``, ``https`` and ``data``) when none
    is given.

    """
    return ImageResolutionPass(styled_text, registry if registry is not None else ImageHandlerRegistry.default())
