"""Caches that keep loaded tilesets and templates keyed by their path."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Union

ResourcePath = Union[str, "PathLike[str]"]


class ResourceCache(ABC):
    """Holds resources so that each is loaded only once."""

    @abstractmethod
    def get_tileset(self, path: ResourcePath) -> Any | None:
        """Return the cached tileset for ``path``, or None."""

    @abstractmethod
    def insert_tileset(self, path: ResourcePath, tileset: Any) -> None:
        """Store a tileset under ``path``."""

    @abstractmethod
    def get_template(self, path: ResourcePath) -> Any | None:
        """Return the cached template for ``path``, or None."""

    @abstractmethod
    def insert_template(self, path: ResourcePath, template: Any) -> None:
        """Store a template under ``path``."""


@dataclass
class DefaultResourceCache(ResourceCache):
    """A cache storing resources in dictionaries keyed by path."""

    tilesets: dict[Path, Any] = field(default_factory=dict)
    templates: dict[Path, Any] = field(default_factory=dict)

    def get_tileset(self, path: ResourcePath) -> Any | None:
        return self.tilesets.get(Path(path))

    def insert_tileset(self, path: ResourcePath, tileset: Any) -> None:
        self.tilesets[Path(path)] = tileset

    def get_template(self, path: ResourcePath) -> Any | None:
        return self.templates.get(Path(path))

    def insert_template(self, path: ResourcePath, template: Any) -> None:
        self.templates[Path(path)] = template