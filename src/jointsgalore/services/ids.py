"""Monotonic identifier helpers for posts and comments."""

from __future__ import annotations

from collections.abc import Iterable

from jointsgalore.db.time import now_ms


def next_id(existing: Iterable[int], now: int | None = None) -> int:
    """Return a new identifier strictly greater than every id in ``existing``.

    Ids stay close to the creation timestamp in milliseconds, but two
    creates in the same millisecond no longer collide. Callers must hold the
    collection lock so that ``existing`` is the current state.
    """
    candidate = now_ms() if now is None else now
    highest = max(existing, default=None)
    if highest is not None and candidate <= highest:
        return highest + 1
    return candidate
