"""Persisted list of known task names."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from metatask.errors import RegistryError


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.metatask.tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


def render_registry(names: list[str]) -> str:
    return yaml.safe_dump({"tasks": list(names)}, sort_keys=False, default_flow_style=False)


def parse_registry(text: str, *, path: Path) -> list[str]:
    """Parse registry file contents into an ordered list of task names."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RegistryError(f"{path} parse error: {exc}") from exc
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise RegistryError(f"{path} parse error: expected mapping at top level")

    tasks = raw.get("tasks")
    if tasks is None:
        return []
    if not isinstance(tasks, list) or not all(isinstance(item, str) for item in tasks):
        raise RegistryError(f"{path} parse error: `tasks` must be a list of strings")
    if len(set(tasks)) != len(tasks):
        raise RegistryError(f"{path} parse error: duplicate task names")
    return tasks


class TaskRegistry:
    """Ordered set of task names backed by a YAML file.

    Loaded once per invocation, mutated in memory, saved explicitly.
    """

    def __init__(self, path: Path, names: list[str] | None = None):
        self.path = path
        self._names: list[str] = list(names or [])
        self.dirty = False

    @classmethod
    def load(cls, path: Path) -> TaskRegistry:
        """Read the registry, creating an empty file first when none exists."""
        try:
            if not path.exists():
                _atomic_write(path, render_registry([]))
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RegistryError(f"unable to read task registry {path}: {exc}") from exc
        return cls(path, parse_registry(text, path=path))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def contains(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def add(self, name: str) -> None:
        if name in self._names:
            raise ValueError(f"task already registered: {name}")
        self._names.append(name)
        self.dirty = True

    def remove(self, name: str) -> None:
        try:
            self._names.remove(name)
        except ValueError as exc:
            raise KeyError(name) from exc
        self.dirty = True

    def save(self) -> None:
        try:
            _atomic_write(self.path, render_registry(self._names))
        except OSError as exc:
            raise RegistryError(f"unable to save task registry {self.path}: {exc}") from exc
        self.dirty = False
