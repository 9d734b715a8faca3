"""
Tests for technical-domain.md and navigation.md rendering.
"""

from datetime import date

from add_context.config import DocumentSettings
from add_context.document import (
    DocumentRenderer,
    count_lines,
    parse_technical_domain,
)
from add_context.models.intelligence import (
    NamingConventions,
    NavigationEntry,
    Priority,
    ProjectIntelligence,
    TechStack,
)


class TestDocumentRenderer:
    """Tests for DocumentRenderer."""

    def test_frontmatter_first_line(self, renderer):
        """Test the document opens with the frontmatter comment."""
        content = renderer.render(ProjectIntelligence(version="2.4", updated=date(2024, 5, 6)))
        assert content.split("\n")[0] == (
            "<!-- Context: project-intelligence/technical | Priority: critical "
            "| Version: 2.4 | Updated: 2024-05-06 -->"
        )
        assert "**Last Updated**: 2024-05-06" in content

    def test_no_trailing_newline(self, renderer):
        """Test the rendered text ends on the last footer line."""
        content = renderer.render(ProjectIntelligence())
        assert content.endswith("- Decisions Log (example: decisions-log.md)")

    def test_deterministic(self, renderer, existing_record):
        """Test the same record always renders identically."""
        assert renderer.render(existing_record) == renderer.render(existing_record)

    def test_empty_record_omits_optional_sections(self, renderer):
        """Test that empty fields produce no rows or pattern blocks."""
        content = renderer.render(ProjectIntelligence())
        assert "| Framework |" not in content
        assert "### API Endpoint" not in content
        assert "### Component" not in content
        assert "| Files |" not in content
        assert "## 📂 Codebase References" in content

    def test_stack_and_naming_rows(self, renderer, existing_record):
        """Test table rows for stack and naming."""
        content = renderer.render(existing_record)
        assert "| Framework | Django | | |" in content
        assert "| Styling | Bootstrap | | |" in content
        assert "| Files | snake_case | |" in content

    def test_pattern_block_uses_code_language(self, existing_record):
        """Test the fence tag comes from document settings."""
        renderer = DocumentRenderer(settings=DocumentSettings(code_language="python"))
        content = renderer.render(existing_record)
        assert "### API Endpoint\n```python\ndef list_items(request):" in content

    def test_bullets(self, renderer, existing_record):
        """Test list items are rendered as bullets in order."""
        content = renderer.render(existing_record)
        assert "## Code Standards\n- Type hints everywhere\n- Black formatting\n" in content
        assert "## Security Requirements\n- CSRF protection on\n" in content

    def test_render_then_parse_preserves_record(self, renderer, existing_record):
        """Test that parsing rendered output gives back the same record."""
        parsed = parse_technical_domain(renderer.render(existing_record))
        assert parsed == existing_record

    def test_render_then_parse_empty_record(self, renderer):
        """Test that an empty record survives a round trip with no sub-records."""
        data = ProjectIntelligence(updated=date(2024, 1, 1))
        assert parse_technical_domain(renderer.render(data)) == data

    def test_fenced_pattern_round_trip(self, renderer):
        """Test a pattern that contains its own fences survives a round trip."""
        data = ProjectIntelligence(
            updated=date(2024, 1, 1),
            api_pattern="```ts\nexport const x = 1\n```",
        )
        content = renderer.render(data)
        assert "\n````typescript\n```ts\n" in content
        assert parse_technical_domain(content).api_pattern == data.api_pattern

    def test_pipe_in_cell_round_trip(self, renderer, existing_record):
        """Test a "|" inside a stack or naming value is escaped and read back."""
        data = existing_record.model_copy(deep=True)
        data.tech_stack = TechStack(
            framework="React | Next", language="TypeScript", database="Postgres", styling="CSS",
        )
        data.naming = NamingConventions(
            files="kebab | snake", components="PascalCase", functions="camelCase", database="snake_case",
        )
        content = renderer.render(data)
        assert "| Framework | React \\| Next | | |" in content
        assert parse_technical_domain(content) == data


class TestNavigation:
    """Tests for navigation.md rendering."""

    def test_default_navigation(self, renderer):
        """Test the default index lists technical-domain.md as critical."""
        assert renderer.render_navigation() == (
            "# Project Intelligence\n"
            "\n"
            "| File | Description | Priority |\n"
            "|------|-------------|----------|\n"
            "| technical-domain.md | Tech stack & patterns | critical |"
        )

    def test_custom_entries(self, renderer):
        """Test rendering extra entries."""
        content = renderer.render_navigation([
            NavigationEntry(name="business-domain.md", description="Business", priority=Priority.HIGH),
        ])
        assert content.endswith("| business-domain.md | Business | high |")


def test_count_lines():
    assert count_lines("a") == 1
    assert count_lines("a\nb\n") == 3
