"""
Generate tags for Markdown notes in a vault folder.

Examples:
    python -m scripts.tag_notes ~/notes
    python -m scripts.tag_notes ~/notes --note "Daily/2024-05-01.md" --dry-run
    python -m scripts.tag_notes ~/notes --exclude Templates/ --exclude Archive/ --use-ai

Settings default to the environment (see notetagger.tagging.settings);
command-line flags override them.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from notetagger.keywords import ConfigurationError
from notetagger.tagging import TaggerSettings, build_pipeline


def _apply_overrides(settings: TaggerSettings, args: argparse.Namespace) -> TaggerSettings:
    changes: dict = {}
    if args.max_tags is not None:
        changes["max_tags"] = args.max_tags
    if args.overwrite:
        changes["overwrite_existing_tags"] = True
    if args.exclude:
        changes["exclude_folders"] = tuple(args.exclude)

    refiner_changes: dict = {}
    if args.use_ai:
        refiner_changes["enabled"] = True
    if args.model:
        refiner_changes["model"] = args.model
    if refiner_changes:
        changes["refiner"] = dataclasses.replace(settings.refiner, **refiner_changes)

    return dataclasses.replace(settings, **changes) if changes else settings


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Extract keyword tags from Markdown notes and write them into frontmatter.",
    )
    parser.add_argument("vault", type=Path, help="Root folder of the notes")
    parser.add_argument(
        "--note",
        type=Path,
        default=None,
        help="Tag only this note (path relative to the vault or absolute)",
    )
    parser.add_argument("--max-tags", type=int, default=None, help="Maximum tags per note")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace existing tags instead of merging with them",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Folder prefix to skip (repeatable)",
    )
    parser.add_argument("--use-ai", action="store_true", help="Refine tags with the LLM")
    parser.add_argument("--model", type=str, default=None, help="LLM model override")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print tags without modifying any note",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = _apply_overrides(TaggerSettings.from_env(), args)
    except ConfigurationError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if not args.vault.is_dir():
        print(f"[error] vault folder not found: {args.vault}", file=sys.stderr)
        return 2

    pipeline = build_pipeline(settings, args.vault)

    if args.note is not None:
        if pipeline.store.is_excluded(args.note):
            print(f"[skip] file is in excluded folder: {args.note}")
            return 0
        try:
            result = pipeline.tag_note(args.note, dry_run=args.dry_run)
        except Exception as e:
            print(f"[error] generating tags for {args.note}: {e}", file=sys.stderr)
            return 1
        if not result.tags:
            print("No tags generated for this note")
        else:
            print(f"{result.path.stem}: {', '.join(result.tags)}")
        return 0

    report = pipeline.tag_all(dry_run=args.dry_run)
    if args.dry_run:
        for result in report.results:
            print(f"{pipeline.store.relative(result.path)}: {', '.join(result.tags)}")
    for path, error in report.errors:
        print(f"[fail] {pipeline.store.relative(path)}: {error}")
    print(report.summary())
    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
