"""
storage/blob.py -- Blob storage for uploaded images.

BlobStore is the capability the upload route depends on: hand it the bytes
and the client-supplied file name, get back a URL the browser can fetch.
LocalBlobStore writes under a directory that asgi.py serves as static files.

Stored names are "<epoch milliseconds>-<sanitized original name>". The
original name is reduced to its final path component and to a safe character
set, so "../../etc/passwd" cannot escape the upload root.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("designdesk.storage")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class BlobStore:
    def store(self, data: bytes, original_name: str) -> str:
        raise NotImplementedError


def safe_filename(original_name: str) -> str:
    """Return a file name safe to join onto the upload root."""
    base = Path(original_name.replace("\\", "/")).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "upload"


@dataclass(frozen=True)
class LocalBlobStore(BlobStore):
    root: Path
    url_prefix: str = "/uploads"

    def store(self, data: bytes, original_name: str) -> str:
        filename = f"{int(time.time() * 1000)}-{safe_filename(original_name)}"
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / filename).write_bytes(data)
        logger.info("Stored upload %s (%d bytes)", filename, len(data))
        return f"{self.url_prefix.rstrip('/')}/{filename}"
