#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/text/styled_text.py
"""Styled text: the output data structure of the renderer.

A :class:`StyledText` is an immutable sequence of :class:`Run` values. It is
equivalent to a flat string (``StyledText.text``) with attribute ranges;
paragraphs are delimited by U+2029 and hard line breaks inside a paragraph
by U+2028.

Renderers build fragments with a :class:`StyledTextBuilder` and hand back
finished, owned ``StyledText`` values; a parent appends its children's
fragments to its own builder and never reaches back into them.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Sequence

from styledmark.constants import PARAGRAPH_SEPARATOR
from styledmark.text.attributes import ImageAttachment, TextAttributes


@dataclass(frozen=True)
class Run:
    """A contiguous span of text sharing one attribute set."""

    text: str
    attributes: TextAttributes

    def __len__(self) -> int:
        """Return the length of the run in characters."""
        return len(self.text)


@dataclass(frozen=True)
class StyledText:
    """An immutable sequence of styled runs.

    Parameters
    ----------
    runs : tuple of Run, default = ()
        Runs in display order

    Examples
    --------
        >>> from styledmark.text import StyledTextBuilder, TextAttributes
        >>> builder = StyledTextBuilder()
        >>> builder.append_text("Hello", TextAttributes(color="red"))
        >>> builder.build().text
        'Hello'

    """

    runs: tuple[Run, ...] = ()

    @property
    def text(self) -> str:
        """Return the plain string content of all runs."""
        return "".join(run.text for run in self.runs)

    def __len__(self) -> int:
        """Return the total length in characters."""
        return sum(len(run) for run in self.runs)

    def __bool__(self) -> bool:
        """Return True if there is at least one character of content."""
        return any(run.text for run in self.runs)

    def ranges(self) -> Iterator[tuple[int, int, Run]]:
        """Yield ``(start, end, run)`` for every run."""
        offset = 0
        for run in self.runs:
            yield offset, offset + len(run), run
            offset += len(run)

    def attributes_at(self, index: int) -> TextAttributes:
        """Return the attributes of the character at ``index``.

        Raises
        ------
        IndexError
            If ``index`` is outside the text

        """
        for start, end, run in self.ranges():
            if start <= index < end:
                return run.attributes
        raise IndexError(f"Index {index} out of range for styled text of length {len(self)}")

    def link_at(self, index: int) -> str | None:
        """Return the link target at ``index``, if any."""
        try:
            return self.attributes_at(index).link
        except IndexError:
            return None

    def paragraphs(self) -> list[str]:
        """Return the plain text of each paragraph."""
        return self.text.split(PARAGRAPH_SEPARATOR)

    @property
    def has_image_placeholders(self) -> bool:
        """Return True if any image still waits for resolution."""
        return any(run.attributes.is_image_placeholder for run in self.runs)

    def image_placeholders(self) -> dict[str, list[tuple[int, int]]]:
        """Map each pending image URL to the ranges of its placeholders.

        URLs appear in order of first occurrence; a URL used by several
        images maps to several ranges.

        """
        placeholders: dict[str, list[tuple[int, int]]] = {}
        for start, end, run in self.ranges():
            url = run.attributes.image_url
            if url is not None and run.attributes.image is None:
                placeholders.setdefault(url, []).append((start, end))
        return placeholders

    def replacing(self, start: int, end: int, runs: Sequence[Run]) -> StyledText:
        """Return a copy with ``[start, end)`` replaced by ``runs``.

        Runs entirely outside the range are kept as they are; runs that
        straddle a boundary are split.

        Raises
        ------
        IndexError
            If the range is not within the text

        """
        if not 0 <= start <= end <= len(self):
            raise IndexError(f"Range [{start}, {end}) out of bounds for styled text of length {len(self)}")

        before: list[Run] = []
        after: list[Run] = []
        for run_start, run_end, run in self.ranges():
            if run_end <= start:
                before.append(run)
            elif run_start >= end:
                after.append(run)
            else:
                if run_start < start:
                    before.append(Run(run.text[: start - run_start], run.attributes))
                if run_end > end:
                    after.append(Run(run.text[end - run_start :], run.attributes))
        return StyledText(tuple(before) + tuple(runs) + tuple(after))

    def with_image(self, url: str, image: ImageAttachment) -> StyledText:
        """Return a copy where every placeholder for ``url`` carries ``image``.

        Replacement runs keep the placeholder's text and length, so the
        offsets of everything else are unchanged.

        """
        result = self
        for start, end in self.image_placeholders().get(url, []):
            placeholder = result.attributes_at(start)
            text = result.text[start:end]
            result = result.replacing(start, end, [Run(text, replace(placeholder, image=image))])
        return result


class StyledTextBuilder:
    """Mutable accumulator for one rendered fragment.

    Adjacent runs with equal attributes are merged when the fragment is
    built; image runs are never merged so that each keeps its own range.

    """

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._runs: list[Run] = []

    def __len__(self) -> int:
        """Return the length of the accumulated text."""
        return sum(len(run) for run in self._runs)

    @property
    def last_attributes(self) -> TextAttributes | None:
        """Return the attributes of the last character, if any."""
        for run in reversed(self._runs):
            if run.text:
                return run.attributes
        return None

    def append_text(self, text: str, attributes: TextAttributes) -> None:
        """Append ``text`` with ``attributes``; empty text is ignored."""
        if text:
            self._runs.append(Run(text, attributes))

    def append(self, fragment: StyledText | Iterable[Run]) -> None:
        """Append every run of a finished fragment."""
        runs = fragment.runs if isinstance(fragment, StyledText) else fragment
        for run in runs:
            self.append_text(run.text, run.attributes)

    def append_separator(self, default: TextAttributes | None = None) -> None:
        """Append a paragraph separator.

        The separator takes the attributes of the last character so that it
        belongs to the paragraph it terminates. ``default`` is used when
        nothing has been accumulated yet.

        """
        attributes = self.last_attributes or default or TextAttributes()
        if attributes.is_image:
            attributes = replace(attributes, image_url=None, image=None)
        self._runs.append(Run(PARAGRAPH_SEPARATOR, attributes))

    def add_attributes(self, **changes: Any) -> None:
        """Override attribute fields over everything accumulated so far."""
        self._runs = [Run(run.text, replace(run.attributes, **changes)) for run in self._runs]

    def build(self) -> StyledText:
        """Return the accumulated runs as an immutable, coalesced fragment."""
        merged: list[Run] = []
        for run in self._runs:
            if merged and _can_merge(merged[-1], run):
                merged[-1] = Run(merged[-1].text + run.text, run.attributes)
            else:
                merged.append(run)
        return StyledText(tuple(merged))


def _can_merge(left: Run, right: Run) -> bool:
    if left.attributes.is_image or right.attributes.is_image:
        return False
    return left.attributes == right.attributes
