"""Shared test fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault directory with sample notes."""
    vault = tmp_path / "vault"
    vault.mkdir()

    # Tagged notes used by the query tests
    (vault / "A.md").write_text("# A\n\nFirst note. #x")
    (vault / "B.md").write_text("# B\n\nSecond note. #y")
    (vault / "C.md").write_text("# C\n\nBoth tags: #x and #y")

    # Subfolder with front matter and a hierarchical tag
    projects = vault / "Projects"
    projects.mkdir()
    (projects / "Roadmap.md").write_text(
        "---\ntitle: Roadmap\npriority: 2\ndone: false\naliases: [plan, goals]\n---\n\n"
        "Working on #proj/alpha this quarter.\n"
    )
    (projects / "diagram.png").write_bytes(b"\x89PNG\r\n")

    # Obsidian config folder
    config = vault / ".obsidian"
    config.mkdir()
    (config / "app.json").write_text("{}")

    return vault


@pytest.fixture
def sample_note_content() -> str:
    """Sample note content for testing."""
    return """---
title: Test Note
tags: [test, sample]
rating: 4.5
---

# Test Note

Some text with #inline-tag and #area/topic

```python
x = 1  # not a tag
print("#nope")
```

Inline `#code` is ignored too, and so is email#address.
"""
