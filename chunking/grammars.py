"""Tree-sitter grammar registry and parser adapter."""

import logging
from typing import Any, Dict, List, Optional, Union

from tree_sitter import Language, Parser

from .errors import ParseFailure, TextExtractionFailure, UnsupportedLanguage

logger = logging.getLogger(__name__)

# Grammars are registered from whichever language bindings are installed
AVAILABLE_LANGUAGES: Dict[str, Language] = {}

try:
    import tree_sitter_rust as tsrust
    AVAILABLE_LANGUAGES['rust'] = Language(tsrust.language())
except ImportError:
    logger.debug("tree-sitter-rust not installed")

try:
    import tree_sitter_python as tspython
    AVAILABLE_LANGUAGES['python'] = Language(tspython.language())
except ImportError:
    logger.debug("tree-sitter-python not installed")

try:
    import tree_sitter_javascript as tsjavascript
    AVAILABLE_LANGUAGES['javascript'] = Language(tsjavascript.language())
    # JSX uses the same parser as JavaScript
    AVAILABLE_LANGUAGES['jsx'] = AVAILABLE_LANGUAGES['javascript']
except ImportError:
    logger.debug("tree-sitter-javascript not installed")

try:
    import tree_sitter_typescript as tstypescript
    # TypeScript has two grammars: typescript and tsx
    AVAILABLE_LANGUAGES['typescript'] = Language(tstypescript.language_typescript())
    AVAILABLE_LANGUAGES['tsx'] = Language(tstypescript.language_tsx())
except ImportError:
    logger.debug("tree-sitter-typescript not installed")

try:
    import tree_sitter_go as tsgo
    AVAILABLE_LANGUAGES['go'] = Language(tsgo.language())
except ImportError:
    logger.debug("tree-sitter-go not installed")

try:
    import tree_sitter_java as tsjava
    AVAILABLE_LANGUAGES['java'] = Language(tsjava.language())
except ImportError:
    logger.debug("tree-sitter-java not installed")


def register_language(language_id: str, language: Language) -> None:
    """Register (or replace) the grammar used for a language identifier.

    Args:
        language_id: Key callers pass to the splitter
        language: Compiled tree-sitter language
    """
    AVAILABLE_LANGUAGES[language_id] = language
    logger.debug(f"Registered tree-sitter grammar for {language_id}")


def get_available_languages() -> List[str]:
    """Get list of language identifiers with a registered grammar."""
    return list(AVAILABLE_LANGUAGES.keys())


class ParsedSource:
    """A syntax tree together with the source bytes its nodes index into.

    Instances live for a single split call; nothing derived from the tree
    should be kept once the extraction pass is over.
    """

    def __init__(self, tree: Any, source: bytes, language_name: str):
        self.tree = tree
        self.source = source
        self.language_name = language_name

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def slice(self, start: int, end: int) -> str:
        """Decode a byte range of the source.

        Raises:
            TextExtractionFailure: If the range is not valid UTF-8
        """
        try:
            return self.source[start:end].decode('utf-8')
        except UnicodeDecodeError as exc:
            raise TextExtractionFailure(
                f"Cannot decode bytes {start}..{end} of {self.language_name} source: {exc}"
            ) from exc

    def text(self, node: Any) -> str:
        """Get text content of a node."""
        return self.slice(node.start_byte, node.end_byte)

    def block(self, node: Any, end_byte: Optional[int] = None) -> str:
        """Get text of a node together with the indentation of its first line.

        When something other than whitespace precedes the node on its line,
        the text starts at the node itself.

        Args:
            node: Syntax node
            end_byte: End of the range, defaults to the node's end
        """
        start = node.start_byte
        line_start = self.source.rfind(b'\n', 0, start) + 1
        if self.source[line_start:start].strip():
            line_start = start
        return self.slice(line_start, node.end_byte if end_byte is None else end_byte)


def parse(text: Union[str, bytes], language_id: str) -> ParsedSource:
    """Parse source text with the grammar registered for ``language_id``.

    Args:
        text: Source code; ``str`` is encoded as UTF-8, ``bytes`` are used as-is
        language_id: Registered grammar key

    Returns:
        ParsedSource owning the tree and the encoded source

    Raises:
        UnsupportedLanguage: No grammar registered for ``language_id``
        ParseFailure: The parser could not produce a root node
        TextExtractionFailure: ``text`` cannot be encoded as UTF-8
    """
    language = AVAILABLE_LANGUAGES.get(language_id)
    if language is None:
        raise UnsupportedLanguage(language_id)

    if isinstance(text, str):
        try:
            source = text.encode('utf-8')
        except UnicodeEncodeError as exc:
            raise TextExtractionFailure(f"Cannot encode {language_id} source as UTF-8: {exc}") from exc
    else:
        source = bytes(text)

    try:
        parser = Parser(language)
        tree = parser.parse(source)
    except (TypeError, ValueError, RuntimeError) as exc:
        raise ParseFailure(f"Failed to parse {language_id} document: {exc}") from exc

    if tree is None or tree.root_node is None:
        raise ParseFailure(f"Failed to parse {language_id} document")

    return ParsedSource(tree, source, language_id)
