"""
Tagging pipeline: extract keywords from a note, optionally refine them with
an LLM, and write them back into the note's frontmatter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from notetagger.keywords import KeywordExtractor

from .refiner import LLMTagRefiner, NoopRefiner, Refiner
from .settings import TaggerSettings
from .store import MarkdownVault

logger = logging.getLogger(__name__)


@dataclass
class TagResult:
    """Outcome of tagging a single note."""

    path: Path
    tags: List[str]
    written: bool = False


@dataclass
class BatchReport:
    """Counts for a bulk run over the vault."""

    processed: int = 0
    skipped: int = 0
    failed: int = 0
    results: List[TagResult] = field(default_factory=list)
    errors: List[Tuple[Path, str]] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"Processed {self.processed} files, skipped {self.skipped} files, "
            f"failed {self.failed} files"
        )


class TaggingPipeline:
    """Extract → refine → store, for one note or a whole vault."""

    def __init__(
        self,
        extractor: KeywordExtractor,
        store: MarkdownVault,
        refiner: Optional[Refiner] = None,
        overwrite: bool = False,
    ):
        self.extractor = extractor
        self.store = store
        self.refiner = refiner or NoopRefiner()
        self.overwrite = overwrite

    def generate_tags(self, text: str, title: str = "") -> List[str]:
        tags = self.extractor.extract_keywords(text, title)
        return self.refiner.refine(tags, text)

    def tag_note(self, path: Path, dry_run: bool = False) -> TagResult:
        """
        Tag a single note.

        Read and write errors propagate; notes that yield no tags are left
        untouched.
        """
        note = self.store.read(path)
        tags = self.generate_tags(note.body_text, note.title)
        if not tags:
            logger.info("No tags generated for %s", self.store.relative(note.path))
            return TagResult(path=note.path, tags=[])
        if not dry_run:
            self.store.write_tags(note, tags, overwrite=self.overwrite)
        logger.info("Generated %s tags for %s", len(tags), note.title)
        return TagResult(path=note.path, tags=tags, written=not dry_run)

    def tag_all(self, dry_run: bool = False) -> BatchReport:
        """Tag every note in the store. One note failing never stops the run."""
        report = BatchReport()
        paths = self.store.list_notes()
        logger.info("Processing %s files...", len(paths))

        for path in paths:
            if self.store.is_excluded(path):
                report.skipped += 1
                continue
            try:
                result = self.tag_note(path, dry_run=dry_run)
            except Exception as e:
                logger.exception("Error processing %s", self.store.relative(path))
                report.failed += 1
                report.errors.append((path, str(e)))
                continue
            report.processed += 1
            report.results.append(result)

        logger.info(report.summary())
        return report


def build_refiner(settings: TaggerSettings) -> Refiner:
    if settings.refiner.active:
        return LLMTagRefiner(settings.refiner)
    return NoopRefiner()


def build_pipeline(
    settings: TaggerSettings,
    vault_root: Path,
    refiner: Optional[Refiner] = None,
) -> TaggingPipeline:
    """Build a fresh pipeline for the given settings.

    Settings changes are applied by building a new pipeline, never by
    mutating a live one.
    """
    return TaggingPipeline(
        extractor=KeywordExtractor(config=settings.extractor_config()),
        store=MarkdownVault(vault_root, exclude_folders=settings.exclude_folders),
        refiner=refiner or build_refiner(settings),
        overwrite=settings.overwrite_existing_tags,
    )
