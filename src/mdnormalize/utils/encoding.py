#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/utils/encoding.py
"""Character encoding detection for Markdown input.

Markdown read from disk or stdin arrives as bytes. UTF-8 is tried first since
nearly every Markdown file uses it; chardet is consulted only when strict
UTF-8 decoding fails.
"""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below the threshold

    """
    sample = data[:sample_size]
    result = chardet.detect(sample)

    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def decode_markdown_bytes(data: bytes, fallback_encodings: list[str] | None = None) -> str:
    """Decode Markdown bytes into text.

    Strategies, in order: strict UTF-8 (a leading BOM is dropped), chardet
    detection, then each fallback encoding. The final ``latin-1`` fallback
    accepts any byte sequence, so decoding only fails when the caller supplies
    fallbacks that all reject the input.

    Parameters
    ----------
    data : bytes
        Raw Markdown bytes
    fallback_encodings : list[str], optional
        Encodings tried after detection. Defaults to
        ``["utf-8-sig", "cp1252", "latin-1"]``

    Returns
    -------
    str
        Decoded text

    Raises
    ------
    UnicodeDecodeError
        If no strategy can decode the data

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as utf8_error:
        last_error = utf8_error

    detected = detect_encoding(data)
    if detected:
        try:
            return data.decode(detected)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Detected encoding {detected} failed: {e}")

    for encoding in fallback_encodings or DEFAULT_FALLBACK_ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as e:
            last_error = e
            continue
        logger.debug(f"Decoded input using fallback encoding: {encoding}")
        return text

    raise last_error
