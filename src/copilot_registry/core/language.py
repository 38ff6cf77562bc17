"""Highlighting language detection."""

from enum import StrEnum


class Language(StrEnum):
    """Syntax highlighting language tags."""

    JSON = "json"
    MARKDOWN = "markdown"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    TEXT = "text"


EXTENSION_LANGUAGES: dict[str, Language] = {
    ".json": Language.JSON,
    ".md": Language.MARKDOWN,
    ".ts": Language.TYPESCRIPT,
    ".js": Language.JAVASCRIPT,
}


def get_language(extension: str, content: str | None) -> Language:
    """Pick a highlighting language from extension, falling back to content.

    Unknown extensions are sniffed: content that looks like a JSON object
    (trimmed text wrapped in braces) is reported as json, anything else as
    plain text. This is a structural check, not a parse.

    Args:
        extension: File extension including the dot (e.g., ".md")
        content: Raw file content

    Returns:
        Language tag
    """
    language = EXTENSION_LANGUAGES.get(extension)
    if language is not None:
        return language

    stripped = (content or "").strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        return Language.JSON
    return Language.TEXT
