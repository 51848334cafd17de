"""
Where character files come from.

A ``Source`` yields the raw bytes of one character export, or ``None`` when
the user declined to pick anything. Only JSON content is accepted.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from .base import SourceError

logger = logging.getLogger("rqg-character-importer")

JSON_SUFFIXES = {".json"}
JSON_CONTENT_TYPES = {"application/json", "text/json"}


class Source(ABC):
    """Abstract provider of a character file."""

    @abstractmethod
    async def acquire(self) -> bytes | None:
        """Return the file content, or None if the user cancelled.

        Raises:
            SourceError: If a file was chosen but cannot be read.
        """
        ...


class FileSource(Source):
    """A local JSON file. An empty path means nothing was picked."""

    def __init__(self, path: str | Path | None):
        self.path = Path(path) if path else None

    async def acquire(self) -> bytes | None:
        if self.path is None:
            logger.debug("🚫 No file selected")
            return None

        if self.path.suffix.lower() not in JSON_SUFFIXES:
            raise SourceError(
                f"Only .json files can be imported, got '{self.path.name}'",
                details={"path": str(self.path)},
            )

        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            raise SourceError(
                f"Character file not found: {self.path}",
                details={"path": str(self.path)},
            ) from None
        except OSError as e:
            raise SourceError(
                f"Failed to read character file: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.debug(f"📂 Read {len(data)} bytes from {self.path}")
        return data


class UrlSource(Source):
    """A character export published at a URL. An empty URL means nothing was picked."""

    def __init__(self, url: str | None, timeout: float = 10.0):
        self.url = url.strip() if url else None
        self.timeout = timeout

    async def acquire(self) -> bytes | None:
        if not self.url:
            logger.debug("🚫 No URL given")
            return None

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self.url, timeout=self.timeout, follow_redirects=True)

                if response.status_code == 404:
                    raise SourceError(f"Character file not found at {self.url}")

                response.raise_for_status()

                content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
                if content_type and content_type not in JSON_CONTENT_TYPES:
                    raise SourceError(
                        f"Expected a JSON document from {self.url}, got '{content_type}'"
                    )

                data = response.content

        except httpx.TimeoutException:
            raise SourceError(
                f"{self.url} is not responding. Try again later or import from a file."
            ) from None
        except httpx.HTTPStatusError as e:
            raise SourceError(
                f"{self.url} returned HTTP {e.response.status_code}: {e.response.reason_phrase}"
            ) from None
        except httpx.RequestError as e:
            raise SourceError(f"Failed to connect to {self.url}: {e}") from None

        logger.debug(f"🌐 Fetched {len(data)} bytes from {self.url}")
        return data
