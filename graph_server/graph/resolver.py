"""Resolution of graph resource addresses into readable byte streams."""

from __future__ import annotations

import logging
import sys
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

import httpx

logger = logging.getLogger(__name__)

FILE_PREFIX = "file:"
CLASSPATH_PREFIX = "classpath:"
URL_PREFIX = "url:"
HTTP_PREFIXES = ("http://", "https://")
SPOOL_MAX_SIZE = 64 * 1024 * 1024


class ResourceResolver(ABC):
    """Opens a resource address as a binary stream."""

    @abstractmethod
    def open(self, address: str) -> BinaryIO:
        """Open the resource at ``address``.

        Raises:
            OSError: If the resource cannot be resolved or opened
        """
        pass


class DefaultResourceResolver(ResourceResolver):
    """Resolver for local paths, ``file:``, ``classpath:`` and HTTP addresses.

    Supported address forms:
    - ``file:/abs/path`` or ``file:///abs/path``: a local file
    - ``classpath:relative/path``: first match under a ``sys.path`` directory
    - ``url:https://host/path`` or a bare ``http(s)://`` URL: fetched with httpx
    - anything else: treated as a local filesystem path
    """

    def __init__(
        self,
        http_timeout: float = 30.0,
        search_path: Optional[Iterable[str]] = None,
    ):
        self.http_timeout = http_timeout
        self._search_path = list(search_path) if search_path is not None else None

    def open(self, address: str) -> BinaryIO:
        if address.startswith(URL_PREFIX):
            return self._open_url(address[len(URL_PREFIX) :])
        if address.startswith(HTTP_PREFIXES):
            return self._open_url(address)
        if address.startswith(CLASSPATH_PREFIX):
            return self._open_classpath(address[len(CLASSPATH_PREFIX) :])
        if address.startswith(FILE_PREFIX):
            path = address[len(FILE_PREFIX) :]
            if path.startswith("//"):
                path = path[2:]
            return self._open_file(Path(path))
        return self._open_file(Path(address))

    @staticmethod
    def _open_file(path: Path) -> BinaryIO:
        logger.debug(f"Opening graph file {path}")
        if not path.is_file():
            raise FileNotFoundError(f"Graph file not found: {path}")
        return open(path, "rb")

    def _open_classpath(self, relative: str) -> BinaryIO:
        relative = relative.lstrip("/")
        search_path = self._search_path if self._search_path is not None else sys.path
        for entry in search_path:
            candidate = Path(entry or ".") / relative
            if candidate.is_file():
                logger.debug(f"Resolved classpath resource {relative} to {candidate}")
                return open(candidate, "rb")
        raise FileNotFoundError(f"Classpath resource not found: {relative}")

    def _open_url(self, url: str) -> BinaryIO:
        logger.debug(f"Fetching graph resource {url}")
        # Spills to disk past SPOOL_MAX_SIZE so large graphs are not held twice in memory.
        buffer = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE)
        try:
            with httpx.stream("GET", url, timeout=self.http_timeout, follow_redirects=True) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    buffer.write(chunk)
        except httpx.HTTPError as e:
            buffer.close()
            raise OSError(f"Failed to fetch {url}: {e}") from e
        buffer.seek(0)
        return buffer
