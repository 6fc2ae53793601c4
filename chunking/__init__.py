"""Structural source-code splitting built on tree-sitter."""

from .code_splitter import CodeSplitter
from .config import SplitterConfig
from .document import Document
from .errors import ParseFailure, SplitterError, TextExtractionFailure, UnsupportedLanguage
from .fallback import fallback_split
from .grammars import AVAILABLE_LANGUAGES, ParsedSource, get_available_languages, parse, register_language
from .multi_language_chunker import MultiLanguageSplitter
from .tree_sitter import JavaScriptExtractor, LanguageExtractor, PythonExtractor, RustExtractor, get_extractor

__all__ = [
    'CodeSplitter', 'SplitterConfig', 'Document',
    'SplitterError', 'UnsupportedLanguage', 'ParseFailure', 'TextExtractionFailure',
    'fallback_split', 'AVAILABLE_LANGUAGES', 'ParsedSource', 'get_available_languages',
    'parse', 'register_language', 'MultiLanguageSplitter',
    'LanguageExtractor', 'RustExtractor', 'PythonExtractor', 'JavaScriptExtractor', 'get_extractor',
]
