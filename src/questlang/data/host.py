"""Host capabilities the module loader uses to read and locate source files."""
from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, Mapping, Protocol

from .errors import SourceLoadError


class ModuleHost(Protocol):
    """Reads source files and resolves import specifiers."""

    def read_file(self, path: str) -> str:
        ...

    def resolve(self, from_file: str, specifier: str) -> str:
        ...


def read_source(path: Path) -> str:
    """Read a UTF-8 source file and raise SourceLoadError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceLoadError(f"File not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceLoadError(f"Unable to read source file: {path}") from exc


class FileSystemHost:
    """Host backed by the local file system; resolved paths are absolute."""

    def read_file(self, path: str) -> str:
        return read_source(Path(path))

    def resolve(self, from_file: str, specifier: str) -> str:
        base_dir = Path(from_file).resolve().parent
        return str((base_dir / specifier).resolve())


class InMemoryHost:
    """Host serving sources from a mapping of POSIX-style paths to text."""

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: Dict[str, str] = {}
        for path, text in (files or {}).items():
            self.add_file(path, text)

    def add_file(self, path: str, text: str) -> None:
        self._files[self._normalize(path)] = text

    def read_file(self, path: str) -> str:
        try:
            return self._files[self._normalize(path)]
        except KeyError as exc:
            raise SourceLoadError(f"File not found: {path}") from exc

    def resolve(self, from_file: str, specifier: str) -> str:
        base_dir = posixpath.dirname(self._normalize(from_file))
        return self._normalize(posixpath.join(base_dir, specifier))

    @staticmethod
    def _normalize(path: str) -> str:
        normalized = posixpath.normpath(path.replace("\\", "/"))
        if not normalized.startswith("/"):
            normalized = "/" + normalized
        return normalized
