"""
JSON document store for the listings collection.

The whole collection lives in a single JSON document holding an array
of listing objects.  There is no indexing and no partial update: every
read deserializes the full document and every write replaces it.

Persistence is delegated to a small backend object so that the same
``ListingStore`` can run against a file (production) or an in‑memory
string (tests).  ``FileBackend`` writes to a temporary file in the
target directory and renames it over the document, so a crash in the
middle of a write never leaves a truncated file behind.

Read‑modify‑write cycles go through ``ListingStore.transaction``, which
holds a re‑entrant lock for the duration of the cycle.  Two overlapping
``like`` requests therefore cannot both read the same pre‑increment
state and clobber each other.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError as SchemaError

from .errors import StoreReadError, StoreWriteError
from ..schemas.listing import Listing


logger = logging.getLogger(__name__)

READ_FAILURE_POLICIES = {"raise", "empty"}


class FileBackend:
    """Persist the document as a UTF‑8 file on disk."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def save(self, text: str) -> None:
        """Atomically replace the document with ``text``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def __repr__(self) -> str:
        return f"FileBackend({str(self.path)!r})"


class MemoryBackend:
    """Keep the document in memory.  Used by the test‑suite."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self.text = initial

    def exists(self) -> bool:
        return self.text is not None

    def load(self) -> str:
        if self.text is None:
            raise FileNotFoundError("in-memory document has not been written")
        return self.text

    def save(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return "MemoryBackend()"


def serialize(listings: List[Listing]) -> str:
    """Render the collection the way it is stored on disk (two‑space indent)."""
    payload = [listing.model_dump(by_alias=True) for listing in listings]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def deserialize(text: str) -> List[Listing]:
    """Parse a stored document back into an ordered list of listings.

    Raises ``ValueError`` (or a subclass) when the document is not a JSON
    array of listing objects.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("listings document must hold a JSON array")
    return [Listing.model_validate(item) for item in data]


class ListingStore:
    """Load and persist the full listings collection."""

    def __init__(self, backend, read_failure: str = "raise") -> None:
        if read_failure not in READ_FAILURE_POLICIES:
            raise ValueError(
                f"Unknown read failure policy {read_failure!r}; expected one of {sorted(READ_FAILURE_POLICIES)}"
            )
        self.backend = backend
        self.read_failure = read_failure
        self._lock = threading.RLock()

    def ensure_exists(self) -> None:
        """Write an empty collection if the document does not exist yet.

        Failures are logged and swallowed; later reads will report the
        problem to callers instead.
        """
        try:
            with self._lock:
                if not self.backend.exists():
                    self.backend.save(serialize([]))
                    logger.info("Initialised empty listings document at %r", self.backend)
        except OSError:
            logger.exception("Failed to initialise listings document at %r", self.backend)

    def read(self) -> List[Listing]:
        """Return every listing in stored order."""
        with self._lock:
            try:
                return deserialize(self.backend.load())
            except (OSError, ValueError, RecursionError, SchemaError) as exc:
                if self.read_failure == "empty":
                    logger.warning("Could not read listings (%s); serving an empty collection", exc)
                    return []
                logger.exception("Could not read listings from %r", self.backend)
                raise StoreReadError() from exc

    def write(self, listings: List[Listing]) -> None:
        """Replace the stored collection with ``listings``."""
        text = serialize(listings)
        with self._lock:
            try:
                self.backend.save(text)
            except OSError as exc:
                logger.exception("Could not write listings to %r", self.backend)
                raise StoreWriteError() from exc

    @contextmanager
    def transaction(self) -> Iterator[List[Listing]]:
        """Guarded read‑modify‑write of the whole collection.

        The loaded list is yielded to the caller and written back when
        the block exits normally.  If the block raises, nothing is
        written.
        """
        with self._lock:
            listings = self.read()
            yield listings
            self.write(listings)
