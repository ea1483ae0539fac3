"""
Tests for the tagging pipeline, vault store and settings.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from notetagger.keywords import ConfigurationError, KeywordExtractor
from notetagger.tagging import (
    LLMTagRefiner,
    MarkdownVault,
    NoopRefiner,
    TaggerSettings,
    TaggingPipeline,
    build_pipeline,
    parse_existing_tags,
)
from notetagger.tagging.notes import split_frontmatter


class _UpperRefiner:
    def __init__(self) -> None:
        self.contexts: list[str] = []

    def refine(self, tags, context):
        self.contexts.append(context)
        return [t.upper() for t in tags]


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    (tmp_path / "Daily").mkdir()
    (tmp_path / "Templates").mkdir()
    (tmp_path / "삼성전자 발표.md").write_text(
        "삼성전자는 신제품을 공개했다. 업계는 삼성전자의 2024년 실적을 주목한다.",
        encoding="utf-8",
    )
    (tmp_path / "Daily" / "Apple News.md").write_text(
        "---\ntags: [memo]\n---\nApple Inc. announced new iPhone. Apple stock rose.",
        encoding="utf-8",
    )
    (tmp_path / "Templates" / "Meeting.md").write_text("템플릿 문서 양식", encoding="utf-8")
    (tmp_path / "123.md").write_text("", encoding="utf-8")
    return tmp_path


def _tags_of(path: Path) -> list[str]:
    frontmatter, _ = split_frontmatter(path.read_text(encoding="utf-8"))
    return parse_existing_tags(frontmatter or "")


def _pipeline(root: Path, **kwargs) -> TaggingPipeline:
    return TaggingPipeline(
        extractor=KeywordExtractor.with_max_tags(5),
        store=MarkdownVault(root, exclude_folders=["Templates/"]),
        **kwargs,
    )


def test_tag_note_writes_frontmatter(vault: Path):
    result = _pipeline(vault).tag_note(Path("삼성전자 발표.md"))
    assert result.written
    assert result.tags[0] == "삼성전자"
    assert _tags_of(vault / "삼성전자 발표.md") == result.tags


def test_tag_note_merges_existing_tags(vault: Path):
    _pipeline(vault).tag_note(Path("Daily/Apple News.md"))
    tags = _tags_of(vault / "Daily" / "Apple News.md")
    assert tags[0] == "memo"
    assert tags[1] == "Apple"


def test_tag_note_overwrite_replaces_tags(vault: Path):
    _pipeline(vault, overwrite=True).tag_note(Path("Daily/Apple News.md"))
    assert "memo" not in _tags_of(vault / "Daily" / "Apple News.md")


def test_dry_run_leaves_file_untouched(vault: Path):
    path = vault / "삼성전자 발표.md"
    before = path.read_text(encoding="utf-8")
    result = _pipeline(vault).tag_note(path, dry_run=True)
    assert result.tags
    assert not result.written
    assert path.read_text(encoding="utf-8") == before


def test_empty_note_is_not_written(vault: Path):
    result = _pipeline(vault).tag_note(Path("123.md"))
    assert result.tags == []
    assert (vault / "123.md").read_text(encoding="utf-8") == ""


def test_refiner_gets_body_text(vault: Path):
    refiner = _UpperRefiner()
    result = _pipeline(vault, refiner=refiner).tag_note(Path("Daily/Apple News.md"))
    assert "APPLE" in result.tags
    assert refiner.contexts[0].startswith("Apple Inc.")


def test_tag_all_skips_excluded_and_counts(vault: Path):
    report = _pipeline(vault).tag_all()
    assert report.processed == 3
    assert report.skipped == 1
    assert report.failed == 0
    assert "Processed 3 files, skipped 1 files" in report.summary()
    assert (vault / "Templates" / "Meeting.md").read_text(encoding="utf-8") == "템플릿 문서 양식"


def test_tag_all_continues_after_failure(vault: Path):
    (vault / "broken.md").write_bytes(b"\xff\xfe\xfa invalid utf-8")
    report = _pipeline(vault).tag_all()
    assert report.failed == 1
    assert report.processed == 3
    assert report.errors[0][0].name == "broken.md"
    assert _tags_of(vault / "삼성전자 발표.md")


def test_vault_exclusion_by_prefix(tmp_path: Path):
    store = MarkdownVault(tmp_path, exclude_folders=["Archive/", " ", "Templates"])
    assert store.exclude_folders == ("Archive/", "Templates")
    assert store.is_excluded(Path("Archive/old.md"))
    assert store.is_excluded(tmp_path / "Templates" / "t.md")
    assert not store.is_excluded(Path("Notes/Archive/old.md"))


def test_settings_from_env():
    settings = TaggerSettings.from_env(
        {
            "TAGGER_MAX_TAGS": "7",
            "TAGGER_OVERWRITE_TAGS": "true",
            "TAGGER_EXCLUDE_FOLDERS": "Templates/, Archive/\nPrivate/",
            "TAGGER_USE_AI": "1",
            "OPENAI_API_KEY": "sk-test",
            "LLM_MODEL": "gpt-4",
        }
    )
    assert settings.max_tags == 7
    assert settings.overwrite_existing_tags is True
    assert settings.exclude_folders == ("Templates/", "Archive/", "Private/")
    assert settings.refiner.active
    assert settings.refiner.model == "gpt-4"


def test_settings_defaults_from_empty_env():
    settings = TaggerSettings.from_env({})
    assert settings.max_tags == 10
    assert settings.overwrite_existing_tags is False
    assert settings.exclude_folders == ()
    assert not settings.refiner.active


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_settings_reject_bad_max_tags(value):
    with pytest.raises(ConfigurationError):
        TaggerSettings.from_env({"TAGGER_MAX_TAGS": value})


def test_settings_changes_build_new_pipeline(vault: Path):
    settings = TaggerSettings(max_tags=3)
    first = build_pipeline(settings, vault)
    second = build_pipeline(dataclasses.replace(settings, max_tags=6), vault)
    assert first.extractor.max_tags == 3
    assert second.extractor.max_tags == 6
    assert isinstance(first.refiner, NoopRefiner)
    with pytest.raises(ConfigurationError):
        dataclasses.replace(settings, max_tags=0)


def test_build_pipeline_uses_llm_refiner_when_active(vault: Path):
    settings = TaggerSettings.from_env({"TAGGER_USE_AI": "yes", "LLM_API_KEY": "sk-test"})
    pipeline = build_pipeline(settings, vault)
    assert isinstance(pipeline.refiner, LLMTagRefiner)


class _FailingRefiner:
    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def refine(self, tags, context):
        if self.fail_on in context:
            raise ValueError("refiner exploded")
        return list(tags)


def test_tag_all_isolates_refiner_errors(vault: Path):
    report = _pipeline(vault, refiner=_FailingRefiner("Apple stock")).tag_all()
    assert report.failed == 1
    assert report.processed == 2
    assert report.errors[0][0].name == "Apple News.md"
    assert "refiner exploded" in report.errors[0][1]
    assert _tags_of(vault / "삼성전자 발표.md")
    assert _tags_of(vault / "Daily" / "Apple News.md") == ["memo"]


def test_heading_and_title_case_line_round_trip(tmp_path: Path):
    note = tmp_path / "ml.md"
    note.write_text("# Open Source\nMachine Learning\n", encoding="utf-8")
    pipeline = TaggingPipeline(
        extractor=KeywordExtractor.with_max_tags(10),
        store=MarkdownVault(tmp_path),
    )
    result = pipeline.tag_note(Path("ml.md"))

    assert "Open Source" in result.tags
    assert "Machine Learning" in result.tags
    assert not any("\n" in tag for tag in result.tags)
    assert _tags_of(note) == result.tags
    _, body = split_frontmatter(note.read_text(encoding="utf-8"))
    assert body == "# Open Source\nMachine Learning\n"
