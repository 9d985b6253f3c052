"""Extract tags and front-matter properties from note content."""

import re
from dataclasses import dataclass, field

import yaml

from dweller.errors import FrontMatterError

from .models import Property

FENCED_CODE_RE = re.compile(r"```.*?```", re.DOTALL)
# Inline spans stay on one line
INLINE_CODE_RE = re.compile(r"`[^`\n]*`")
# A '#' not preceded by a word character, so "word#tag" is not a tag
TAG_RE = re.compile(r"(?<!\w)#(\S+)")
FRONTMATTER_RE = re.compile(r"\A---(.*?)---", re.DOTALL)


@dataclass
class NoteMetadata:
    """Metadata extracted from a single note."""

    tags: list[str] = field(default_factory=list)
    properties: dict[str, Property] = field(default_factory=dict)


def strip_code(content: str) -> str:
    """Remove fenced code blocks and inline code spans."""
    content = FENCED_CODE_RE.sub("", content)
    return INLINE_CODE_RE.sub("", content)


def expand_tag(tag: str) -> list[str]:
    """Expand a hierarchical tag into its cumulative prefixes.

    >>> expand_tag("a/b/c")
    ['a', 'a/b', 'a/b/c']
    """
    parts = [part for part in tag.split("/") if part]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def extract_tags(content: str) -> list[str]:
    """Find every inline tag outside code, expanded, sorted and deduplicated."""
    tags: set[str] = set()
    for raw in TAG_RE.findall(strip_code(content)):
        tags.update(expand_tag(raw.lstrip("#")))
    return sorted(tags)


def extract_frontmatter(content: str) -> str | None:
    """Return the raw front matter block, or None if the note has none.

    Front matter only counts when the note starts with ``---``.
    """
    if not content.startswith("---"):
        return None

    match = FRONTMATTER_RE.match(content)
    if not match:
        return None
    return match.group(1).strip()


def parse_properties(frontmatter: str) -> dict[str, Property]:
    """Parse a front matter block into properties keyed by name."""
    try:
        data = yaml.safe_load(frontmatter)
        if not isinstance(data, dict):
            return {}
        return {
            key: Property.from_yaml(value) for key, value in data.items() if isinstance(key, str)
        }
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Error parsing front matter: {e}") from e
    # int() digit limits and pathologically deep nesting
    except (ValueError, RecursionError) as e:
        raise FrontMatterError(f"Unsupported front matter value: {e}") from e


def extract_metadata(content: str) -> NoteMetadata:
    """Extract tags and properties from a note's raw content."""
    tags = extract_tags(content)

    frontmatter = extract_frontmatter(content)
    properties = parse_properties(frontmatter) if frontmatter else {}

    return NoteMetadata(tags=tags, properties=properties)
