"""
Decode raw character exports into Python values.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .base import DecodeError

logger = logging.getLogger("rqg-character-importer")


def decode_record(raw: bytes | str) -> Any:
    """
    Parse a character export into a Python value.

    Bytes are decoded as UTF-8; a leading byte order mark is tolerated
    because some editors add one when saving JSON.

    Args:
        raw: File content as bytes or text

    Returns:
        The decoded JSON value (normally a dict, checked later by the validator)

    Raises:
        DecodeError: If the bytes are not UTF-8 or the text is not valid JSON
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Character file is not UTF-8 encoded: {e}",
                details={"position": e.start},
            ) from e
    else:
        text = raw.removeprefix("\ufeff")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON in character file: {e}",
            details={"line": e.lineno, "column": e.colno},
        ) from e
    except RecursionError as e:
        raise DecodeError("Character file is nested too deeply to decode") from e

    logger.debug(f"📄 Decoded character file ({len(text)} chars)")
    return data
