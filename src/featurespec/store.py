"""File storage used by the generation pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileStore(Protocol):
    """The file operations the pipeline needs."""

    def is_dir(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> list[str]: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def delete(self, path: Path) -> None: ...

    def make_dirs(self, path: Path) -> None: ...


class LocalFileStore:
    """FileStore backed by the real filesystem."""

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path) -> list[str]:
        return sorted(p.name for p in path.iterdir() if p.is_file())

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def delete(self, path: Path) -> None:
        path.unlink()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)


class MemoryFileStore:
    """In-memory FileStore for tests."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()
        for name, content in (files or {}).items():
            self.write_text(Path(name), content)

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def list_dir(self, path: Path) -> list[str]:
        if path not in self.dirs:
            raise FileNotFoundError(f"No such directory: {path}")
        return sorted(p.name for p in self.files if p.parent == path)

    def read_text(self, path: Path) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def write_text(self, path: Path, content: str) -> None:
        self.make_dirs(path.parent)
        self.files[path] = content

    def delete(self, path: Path) -> None:
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        del self.files[path]

    def make_dirs(self, path: Path) -> None:
        self.dirs.add(path)
        self.dirs.update(path.parents)
