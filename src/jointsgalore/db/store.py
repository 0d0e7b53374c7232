"""Flat-file document store.

Every collection is a single JSON array on disk. Callers load the whole
collection, mutate it in memory and save the whole collection back; there
is no append or patch primitive.

A read-modify-write cycle is only safe while the collection lock is held:

    with store.locked("posts"):
        posts = store.load("posts")
        ...
        store.save("posts", posts)

The locks are process-local. Several worker processes sharing one data
directory still race on the same file and the last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from jointsgalore.core.errors import StorageError

__all__ = ["Document", "DocumentStore"]

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class DocumentStore:
    """Load and save named collections under a data directory."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, name: str) -> Path:
        """Return the file backing collection ``name``."""
        return self.data_dir / f"{name}.json"

    def lock_for(self, name: str) -> threading.RLock:
        """Return the lock serialising writers of collection ``name``."""
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.RLock()
            return lock

    @contextmanager
    def locked(self, name: str) -> Iterator[None]:
        """Hold the collection lock for one load-mutate-save cycle.

        The lock is re-entrant so helpers that load or normalise inside an
        already locked section do not deadlock.
        """
        with self.lock_for(name):
            yield

    def ensure(self, name: str) -> None:
        """Create the data directory and an empty collection file if missing."""
        with self.locked(name):
            path = self.path_for(name)
            if path.exists():
                return
            self.save(name, [])

    def load(self, name: str) -> list[Document]:
        """Return every document in ``name``.

        A missing or blank file is an empty collection. Anything that is not
        a JSON array raises ``StorageError``.
        """
        path = self.path_for(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Collection %s has no file yet; treating as empty", name)
            return []
        except OSError as exc:
            logger.exception("Failed to read collection %s from %s", name, path)
            raise StorageError(name, f"cannot read {path}: {exc}") from exc

        if not raw.strip():
            return []

        try:
            docs = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Collection %s at %s is not valid JSON: %s", name, path, exc)
            raise StorageError(name, f"corrupt JSON in {path}: {exc}") from exc

        if not isinstance(docs, list):
            raise StorageError(name, f"expected a JSON array in {path}")

        logger.debug("Loaded %d documents from %s", len(docs), name)
        return docs

    def save(self, name: str, docs: list[Document]) -> None:
        """Replace the persisted collection with ``docs``.

        The new content is written to a sibling temp file and moved over the
        target, so readers see either the old or the new array, never a
        truncated one.
        """
        path = self.path_for(name)
        try:
            payload = json.dumps(docs, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(name, f"cannot serialise documents: {exc}") from exc

        tmp_name: str | None = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{name}.", suffix=".tmp", dir=self.data_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            logger.exception("Failed to write collection %s to %s", name, path)
            raise StorageError(name, f"cannot write {path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:  # pragma: no cover - best effort cleanup
                    logger.warning("Could not remove temp file %s", tmp_name)

        logger.debug("Saved %d documents to %s", len(docs), name)
