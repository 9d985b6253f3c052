"""Tests for metadata extraction."""

from datetime import datetime, timezone

import pytest

from dweller.errors import FrontMatterError
from dweller.indexer.extractor import (
    expand_tag,
    extract_frontmatter,
    extract_metadata,
    extract_tags,
    parse_properties,
    strip_code,
)
from dweller.indexer.models import Property, PropertyKind


class TestExpandTag:
    """Tests for hierarchical tag expansion."""

    def test_expands_prefixes_in_order(self):
        assert expand_tag("a/b/c") == ["a", "a/b", "a/b/c"]

    def test_flat_tag(self):
        assert expand_tag("project") == ["project"]

    def test_drops_empty_segments(self):
        assert expand_tag("a//b/") == ["a", "a/b"]


class TestStripCode:
    """Tests for code removal."""

    def test_removes_fenced_blocks(self):
        content = "before\n```\n#hidden\n```\nafter"
        assert "#hidden" not in strip_code(content)
        assert "before" in strip_code(content)
        assert "after" in strip_code(content)

    def test_removes_inline_code(self):
        assert strip_code("see `#hidden` here") == "see  here"

    def test_inline_code_does_not_span_lines(self):
        assert strip_code("a ` b\n#kept `c`") == "a ` b\n#kept "


class TestExtractTags:
    """Tests for inline tag extraction."""

    def test_finds_tags(self):
        assert extract_tags("Hello #world and #python") == ["python", "world"]

    def test_rejects_tag_after_word_character(self):
        assert extract_tags("word#tag") == []

    def test_accepts_tag_after_punctuation(self):
        assert extract_tags("(#tag)") == ["tag)"]

    def test_ignores_headings(self):
        assert extract_tags("# Heading\n## Sub heading") == []

    def test_hierarchical_tags_are_expanded(self):
        assert extract_tags("#proj/sub") == ["proj", "proj/sub"]

    def test_sorted_and_deduplicated(self):
        assert extract_tags("#b #a #b #a/c") == ["a", "a/c", "b"]

    def test_ignores_code(self, sample_note_content: str):
        tags = extract_tags(sample_note_content)
        assert "inline-tag" in tags
        assert "area" in tags
        assert "area/topic" in tags
        assert "nope\")" not in tags
        assert "code" not in tags
        assert "address" not in tags

    def test_unpaired_backtick_keeps_later_tags(self):
        tags = extract_tags("Use a ` alone.\n\n#real\n\nLater `code`.")
        assert tags == ["real"]


class TestFrontmatter:
    """Tests for front matter parsing."""

    def test_requires_delimiter_at_start(self):
        assert extract_frontmatter("text\n---\ntitle: x\n---") is None

    def test_extracts_block(self):
        assert extract_frontmatter("---\ntitle: x\n---\nbody") == "title: x"

    def test_parses_property_types(self):
        props = parse_properties(
            "title: Hello\ncount: 3\nscore: 1.5\ndone: true\n"
            "items: [a, 2]\ncreated: 2024-01-02\nnested: {a: 1}\nempty:"
        )

        assert props["title"] == Property.text("Hello")
        assert props["count"] == Property.number(3.0)
        assert props["score"] == Property.number(1.5)
        assert props["done"] == Property.checkbox(True)
        assert props["items"] == Property.list_of([Property.text("a"), Property.number(2)])
        assert props["created"] == Property.date(datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert props["nested"].kind == PropertyKind.UNKNOWN
        assert props["empty"].kind == PropertyKind.UNKNOWN

    def test_non_mapping_front_matter(self):
        assert parse_properties("- just\n- a list") == {}

    def test_invalid_yaml_raises(self):
        with pytest.raises(FrontMatterError):
            parse_properties("title: [unclosed")


class TestExtractMetadata:
    """Tests for combined extraction."""

    def test_tags_and_properties(self, sample_note_content: str):
        metadata = extract_metadata(sample_note_content)

        assert metadata.properties["title"] == Property.text("Test Note")
        assert metadata.properties["rating"] == Property.number(4.5)
        assert metadata.properties["tags"].kind == PropertyKind.LIST
        assert "inline-tag" in metadata.tags

    def test_note_without_front_matter(self):
        metadata = extract_metadata("Just #text")
        assert metadata.properties == {}
        assert metadata.tags == ["text"]
