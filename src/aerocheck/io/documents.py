"""Document discovery and reading.

Resolves glob patterns to files and reads them as UTF-8 text. This is the
only place aerocheck touches the filesystem for inputs; the engine works on
in-memory Document values.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from aerocheck.errors import DocumentUnavailableError

IGNORED_DIRS: frozenset[str] = frozenset({"node_modules", "dist", ".git"})


class Document(BaseModel):
    """A named document to check."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Path as matched, relative to the search root")
    content: str = Field(..., description="Full document text")


def _is_ignored(path: Path) -> bool:
    return any(part in IGNORED_DIRS for part in path.parts)


def _has_magic(text: str) -> bool:
    return any(ch in text for ch in "*?[")


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts)


def _glob(pattern: str, root: Path) -> list[Path]:
    """Expand one pattern to files.

    Wildcards never match dot-files or dot-directories; a dot-directory
    is only searched when the pattern names it literally.
    """
    pattern_path = Path(pattern)
    if not _has_magic(pattern):
        candidate = pattern_path if pattern_path.is_absolute() else root / pattern_path
        return [candidate] if candidate.is_file() else []

    parts = pattern_path.parts
    split = next(i for i, part in enumerate(parts) if _has_magic(part))
    base = Path(*parts[:split]) if split else Path()
    if not base.is_absolute():
        base = root / base
    remainder = str(Path(*parts[split:]))
    return sorted(
        p for p in base.glob(remainder) if p.is_file() and not _is_hidden(p.relative_to(base))
    )


def find_documents(patterns: Iterable[str], root: Path | None = None) -> list[str]:
    """Resolve glob patterns to a deduplicated list of file names.

    Files under node_modules, dist or .git are skipped, and wildcards do
    not match hidden files or directories. A file matched by several
    patterns appears once, at its first match position.

    Args:
        patterns: Glob patterns, relative to ``root`` or absolute.
        root: Directory relative patterns are resolved against. Defaults
            to the current working directory.

    Returns:
        File names relative to ``root`` (absolute for absolute patterns).
    """
    base = root or Path.cwd()
    found: dict[str, None] = {}
    for pattern in patterns:
        matches = _glob(pattern, base)
        for path in matches:
            try:
                name = path.relative_to(base).as_posix()
            except ValueError:
                name = path.as_posix()
            if _is_ignored(Path(name)):
                continue
            found.setdefault(name, None)
        logger.debug("Pattern {!r} matched {} file(s)", pattern, len(matches))
    return list(found)


def read_document(filename: str, root: Path | None = None) -> Document:
    """Read one document as UTF-8 text.

    Raises:
        DocumentUnavailableError: If the file is missing, unreadable, or
            not valid UTF-8.
    """
    path = Path(filename)
    if not path.is_absolute() and root is not None:
        path = root / path
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentUnavailableError(filename, str(exc)) from exc
    return Document(filename=filename, content=content)


def read_documents(filenames: Iterable[str], root: Path | None = None) -> list[Document]:
    """Read every file, failing the whole batch on the first unreadable one."""
    return [read_document(name, root) for name in filenames]
