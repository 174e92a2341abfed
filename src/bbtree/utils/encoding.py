#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/utils/encoding.py
"""Character encoding detection for BBCode read from files and streams.

Forum exports are frequently in legacy encodings, so bytes are decoded with
chardet-based detection first and a list of fallback encodings second.
"""

from __future__ import annotations

import logging
from typing import IO

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

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
        Detected encoding name, or None if chardet is not installed, detection
        fails, or the confidence is below the threshold

    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet not available for encoding detection")
        return None

    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)

    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f below threshold %.2f", confidence, confidence_threshold)
        return None
    return encoding


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode binary data as text with automatic encoding detection.

    A UTF-8 byte order mark always wins. Otherwise chardet's guess is tried
    first, then each fallback encoding in order, and finally UTF-8 with
    replacement characters.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings to try in order; defaults to utf-8-sig, utf-8, cp1252, latin-1
    use_chardet : bool, default True
        Whether to attempt chardet-based detection first

    Returns
    -------
    str
        Decoded text

    Examples
    --------
    >>> read_text_with_encoding_detection(b"[b]Hello[/b]")
    '[b]Hello[/b]'

    """
    if data.startswith(b"\xef\xbb\xbf"):
        return data.decode("utf-8-sig", errors="replace")

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                return data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Failed to decode with chardet-detected encoding %s: %s", detected_encoding, e)

    for encoding in fallback_encodings or DEFAULT_FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Failed to decode with %s: %s", encoding, e)

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text file-like object and return its text.

    Binary streams are decoded with :func:`read_text_with_encoding_detection`;
    text streams are returned as-is.

    Raises
    ------
    TypeError
        If the stream yields neither ``bytes`` nor ``str``

    """
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream returned unsupported type: {type(content).__name__}")
