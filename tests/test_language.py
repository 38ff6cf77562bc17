"""Tests for highlighting language detection."""

import pytest
from copilot_registry.core.language import Language, get_language


class TestGetLanguage:
    """Tests for get_language()."""

    @pytest.mark.parametrize(
        ("extension", "expected"),
        [
            (".json", "json"),
            (".md", "markdown"),
            (".ts", "typescript"),
            (".js", "javascript"),
        ],
    )
    def test__known_extension__ignores_content(self, extension: str, expected: str) -> None:
        """Known extensions decide the language regardless of content."""
        assert get_language(extension, "anything") == expected
        assert get_language(extension, '{"looks": "like json"}') == expected

    def test__unknown_extension_json_content__returns_json(self) -> None:
        """Sniff brace-wrapped content as json."""
        assert get_language(".xyz", '  { "a": 1 }  ') == "json"

    def test__unknown_extension_text_content__returns_text(self) -> None:
        """Fall back to text for anything else."""
        assert get_language(".xyz", "hello") == "text"

    def test__sniffing__is_structural_only(self) -> None:
        """Brace-wrapped content counts as json even when not parseable."""
        assert get_language(".conf", "{ not: valid json }") == "json"

    def test__array_content__returns_text(self) -> None:
        """Only object-shaped content is sniffed as json."""
        assert get_language(".xyz", "[1, 2, 3]") == "text"

    def test__empty_extension_and_content__returns_text(self) -> None:
        """Empty inputs classify as text."""
        assert get_language("", "") == "text"

    def test__none_content__returns_text(self) -> None:
        """Missing content classifies as text."""
        assert get_language(".yaml", None) == "text"

    def test__extension_match__is_case_sensitive(self) -> None:
        """Upper-case extensions fall through to sniffing."""
        assert get_language(".MD", "# Title") == "text"
        assert get_language(".JSON", '{"a": 1}') == "json"

    def test__extension_without_dot__not_matched(self) -> None:
        """Extensions are expected with their leading dot."""
        assert get_language("md", "# Title") == "text"

    def test__result__is_language_member(self) -> None:
        """Always return a member of the fixed tag set."""
        for extension, content in [(".md", ""), (".x", "{}"), (".x", "plain")]:
            assert get_language(extension, content) in set(Language)
