"""
Markdown note helpers: body text cleanup and frontmatter tag rewriting.

Notes look like:

    ---
    title: Example
    tags:
      - 삼성전자
      - AI
    ---
    Body text...

Only the `tags` field of the frontmatter is touched; every other line is
kept as is. The field itself is read and written with PyYAML so tag values
containing YAML syntax (`key: value`, `#`, quotes) survive a round trip.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"\A---\n(.*?)\n---(?:\n|\Z)", re.DOTALL)
TAGS_LINE_RE = re.compile(r"^tags:[ \t]*(.*)$", re.MULTILINE)
LIST_ITEM_RE = re.compile(r"^[ \t]*-[ \t]+(.*)$")

CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE_RE = re.compile(r"`[^`\n]+`")
WIKI_LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")
MD_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
FORMATTING_RE = re.compile(r"[#*_~]")


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Return (frontmatter body or None, remaining text)."""
    match = FRONTMATTER_RE.match(content)
    if not match:
        return None, content
    return match.group(1), content[match.end() :]


def extract_body_text(content: str) -> str:
    """
    Strip a note down to prose for keyword extraction.

    - Drop frontmatter, fenced code blocks and inline code
    - Keep the visible text of wiki links and Markdown links
    - Remove heading/emphasis markers (#, *, _, ~)
    """
    _, body = split_frontmatter(content)
    body = CODE_BLOCK_RE.sub("", body)
    body = INLINE_CODE_RE.sub("", body)
    body = WIKI_LINK_RE.sub(r"\1", body)
    body = MD_LINK_RE.sub(r"\1", body)
    return FORMATTING_RE.sub("", body)


def normalize_tag(tag: str) -> str:
    """Collapse all whitespace (line breaks included) to single spaces."""
    return " ".join(tag.split())


def _tags_field_span(frontmatter: str) -> Optional[Tuple[int, int, str]]:
    """(start, end, inline value) of the tags field, including block list items."""
    match = TAGS_LINE_RE.search(frontmatter)
    if not match:
        return None
    end = match.end()
    if not match.group(1).strip():
        # YAML block list: consume following "- item" lines
        for line in frontmatter[end:].split("\n")[1:]:
            if not LIST_ITEM_RE.match(line):
                break
            end += 1 + len(line)
    return match.start(), end, match.group(1)


def _tags_from_value(value: Any) -> List[str]:
    items = value if isinstance(value, list) else [value]
    tags: List[str] = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        tag = normalize_tag(str(item))
        if tag:
            tags.append(tag)
    return tags


def _tags_from_text(field: str) -> List[str]:
    """Best-effort split for a tags field that is not valid YAML."""
    lines = field.split("\n")
    inline = TAGS_LINE_RE.match(lines[0]).group(1).strip()
    if inline.startswith("["):
        items = inline.strip("[]").split(",")
    elif inline:
        items = [inline]
    else:
        items = [LIST_ITEM_RE.match(line).group(1) for line in lines[1:]]
    tags = (normalize_tag(item.strip().strip("'\"")) for item in items)
    return [tag for tag in tags if tag]


def parse_existing_tags(frontmatter: str) -> List[str]:
    """Read tags written inline (`[a, b]`), as a scalar, or as a block list."""
    span = _tags_field_span(frontmatter)
    if span is None:
        return []
    start, end, _ = span
    field = frontmatter[start:end]
    try:
        data = yaml.safe_load(field)
    except yaml.YAMLError as e:
        logger.warning("tags field is not valid YAML, splitting it as text: %s", e)
        return _tags_from_text(field)
    if not isinstance(data, dict):
        return []
    return _tags_from_value(data.get("tags"))


def merge_tags(existing: Iterable[str], new: Iterable[str]) -> List[str]:
    """Existing tags first, then new ones; duplicates dropped, order kept."""
    merged: List[str] = []
    seen = set()
    for tag in [*existing, *new]:
        if tag not in seen:
            seen.add(tag)
            merged.append(tag)
    return merged


def render_tags_field(tags: Iterable[str]) -> str:
    """Render `tags:` as an indented YAML block list, quoting values as needed."""
    cleaned = [tag for tag in (normalize_tag(t) for t in tags) if tag]
    if not cleaned:
        return "tags: []"
    dumped = yaml.safe_dump(
        cleaned,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
    return "tags:\n" + "\n".join(f"  {line}" for line in dumped.splitlines())


def update_frontmatter_tags(content: str, tags: List[str], overwrite: bool = False) -> str:
    """
    Return `content` with its frontmatter `tags` field set.

    Without `overwrite`, existing tags are kept and the new ones appended.
    A missing field is added; a missing frontmatter block is created.
    """
    tags = [tag for tag in (normalize_tag(t) for t in tags) if tag]
    frontmatter, body = split_frontmatter(content)
    if frontmatter is None:
        return f"---\n{render_tags_field(tags)}\n---\n{content}"

    span = _tags_field_span(frontmatter)
    if span is None:
        new_frontmatter = f"{frontmatter}\n{render_tags_field(tags)}"
    else:
        start, end, _ = span
        final_tags = tags if overwrite else merge_tags(parse_existing_tags(frontmatter), tags)
        new_frontmatter = frontmatter[:start] + render_tags_field(final_tags) + frontmatter[end:]

    return f"---\n{new_frontmatter}\n---\n{body}"
