from __future__ import annotations

from typing import Any, Protocol


class DocumentStore(Protocol):
    """Key/value view over a JSON document tree.

    Paths are ``/``-separated (``devices/<id>``, ``users/<owner>/devices``).
    ``get`` returns ``None`` for absent paths and raises ``StoreError`` when
    the store itself is unavailable; ``set`` and ``remove`` report success.
    """

    async def get(self, path: str) -> Any: ...

    async def set(self, path: str, value: Any) -> bool: ...

    async def remove(self, path: str) -> bool: ...

    async def close(self) -> None: ...


def split_path(path: str) -> list[str]:
    parts = [part for part in path.split("/") if part]
    if not parts:
        raise ValueError(f"Empty store path: {path!r}")
    return parts
