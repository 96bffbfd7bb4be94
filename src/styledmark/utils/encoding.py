#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/utils/encoding.py
"""Decoding of Markdown sources read as bytes."""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)

_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of ``data`` with chardet.

    Returns None when detection fails or its confidence is below
    ``confidence_threshold``.

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    return encoding if confidence >= confidence_threshold else None


def read_text_with_encoding_detection(data: bytes) -> str:
    """Decode ``data``, trying the detected encoding before common fallbacks.

    Examples
    --------
    >>> read_text_with_encoding_detection("# Überschrift".encode("utf-8"))
    '# Überschrift'

    """
    detected = detect_encoding(data)
    candidates = ((detected,) if detected else ()) + _FALLBACK_ENCODINGS
    for encoding in candidates:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")

    # latin-1 accepts every byte sequence, so this is only reached if the fallbacks change
    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")
