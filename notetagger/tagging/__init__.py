"""
Note tagging around the keyword extractor.

- Markdown body cleanup and frontmatter tag rewriting
- File-system vault of notes
- Optional LLM refinement with fallback to the extracted tags
- Single-note and bulk tagging pipeline
"""

from .notes import extract_body_text, merge_tags, parse_existing_tags, update_frontmatter_tags
from .pipeline import BatchReport, TaggingPipeline, TagResult, build_pipeline
from .refiner import LLMTagRefiner, NoopRefiner, RefinementError, Refiner, RefinerSettings
from .settings import TaggerSettings
from .store import MarkdownVault, Note

__all__ = [
    "extract_body_text",
    "merge_tags",
    "parse_existing_tags",
    "update_frontmatter_tags",
    "BatchReport",
    "TaggingPipeline",
    "TagResult",
    "build_pipeline",
    "LLMTagRefiner",
    "NoopRefiner",
    "RefinementError",
    "Refiner",
    "RefinerSettings",
    "TaggerSettings",
    "MarkdownVault",
    "Note",
]
