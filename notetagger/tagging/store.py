"""
File-system document store over a folder ("vault") of Markdown notes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

from .notes import extract_body_text, update_frontmatter_tags

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


@dataclass
class Note:
    """A Markdown note read from the vault."""

    path: Path
    content: str

    @property
    def title(self) -> str:
        return self.path.stem

    @property
    def body_text(self) -> str:
        return extract_body_text(self.content)


def normalize_exclude_folders(folders: Iterable[str]) -> Tuple[str, ...]:
    cleaned = (f.strip().replace("\\", "/") for f in folders)
    return tuple(f for f in cleaned if f)


class MarkdownVault:
    """Reads notes from and writes tags into a directory tree of `.md` files."""

    def __init__(self, root: Path, exclude_folders: Sequence[str] = ()):
        self.root = Path(root)
        self.exclude_folders = normalize_exclude_folders(exclude_folders)

    def relative(self, path: Path) -> str:
        path = Path(path)
        if path.is_absolute():
            try:
                path = path.relative_to(self.root)
            except ValueError:
                pass
        return path.as_posix()

    def resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    def is_excluded(self, path: Path) -> bool:
        """True if the note's vault-relative path starts with an excluded folder."""
        rel = self.relative(path)
        return any(rel.startswith(folder) for folder in self.exclude_folders)

    def iter_notes(self) -> Iterator[Path]:
        """All note paths under the root, sorted, excluded ones included."""
        for path in sorted(self.root.rglob(f"*{NOTE_SUFFIX}")):
            if path.is_file():
                yield path

    def list_notes(self) -> List[Path]:
        return list(self.iter_notes())

    def read(self, path: Path) -> Note:
        full = self.resolve(path)
        return Note(path=full, content=full.read_text(encoding="utf-8"))

    def write_tags(self, note: Note, tags: List[str], overwrite: bool = False) -> Note:
        """Write tags into the note's frontmatter and return the updated note."""
        new_content = update_frontmatter_tags(note.content, tags, overwrite=overwrite)
        note.path.write_text(new_content, encoding="utf-8")
        logger.debug("Wrote %s tags to %s", len(tags), self.relative(note.path))
        return Note(path=note.path, content=new_content)
