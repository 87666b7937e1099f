from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from homelink.exceptions import StoreError

from .base import split_path

logger = logging.getLogger(__name__)


class MemoryStore:
    """Document store held in a nested dict."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    async def get(self, path: str) -> Any:
        node: Any = self._data
        for part in split_path(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    async def set(self, path: str, value: Any) -> bool:
        *parents, leaf = split_path(path)
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = copy.deepcopy(value)
        return True

    async def remove(self, path: str) -> bool:
        *parents, leaf = split_path(path)
        node: Any = self._data
        for part in parents:
            if not isinstance(node, dict) or part not in node:
                return True
            node = node[part]
        if isinstance(node, dict):
            node.pop(leaf, None)
        return True

    async def close(self) -> None:
        return None


class JsonFileStore(MemoryStore):
    """A MemoryStore persisted to a single JSON file after every write."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = path
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if self._loaded:
            return
        if self._path.exists():
            try:
                with self._path.open("r") as handle:
                    data = json.load(handle)
            except (OSError, json.JSONDecodeError) as exc:
                raise StoreError(f"Cannot read store file {self._path}: {exc}") from exc
            if not isinstance(data, dict):
                raise StoreError(f"Store file {self._path} is not a JSON object")
            self._data = data
        self._loaded = True

    def _flush(self) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w") as handle:
                json.dump(self._data, handle, indent=2)
        except OSError as exc:
            logger.warning("Failed to write store file %s: %s", self._path, exc)
            return False
        return True

    async def get(self, path: str) -> Any:
        self._load()
        return await super().get(path)

    async def set(self, path: str, value: Any) -> bool:
        self._load()
        await super().set(path, value)
        return self._flush()

    async def remove(self, path: str) -> bool:
        self._load()
        await super().remove(path)
        return self._flush()
