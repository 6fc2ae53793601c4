"""Exceptions raised by the code splitter."""


class SplitterError(Exception):
    """Base class for all splitting failures."""


class UnsupportedLanguage(SplitterError, ValueError):
    """No tree-sitter grammar is registered for the requested language."""

    def __init__(self, language_id: str):
        super().__init__(
            f"Language {language_id} not available. Install tree-sitter-{language_id}"
        )
        self.language_id = language_id


class ParseFailure(SplitterError):
    """The grammar could not produce a syntax tree for the input."""


class TextExtractionFailure(SplitterError):
    """A node's byte range could not be turned back into text."""
