"""Per-language structural extractors built on tree-sitter syntax trees."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Type

from .composer import ContextAccumulator, compose_chunk, wrap_member, wrap_members
from .fallback import fallback_split
from .grammars import ParsedSource, parse

logger = logging.getLogger(__name__)


class LanguageExtractor(ABC):
    """Abstract base class for language-specific extractors.

    An extractor walks the top-level children of a parsed source and decides
    which of them become chunks, which are split member by member and which
    only contribute leading context to the next chunk.
    """

    def __init__(self, language_name: str, max_chunk_size: int):
        """Initialize language extractor.

        Args:
            language_name: Grammar key used when parsing
            max_chunk_size: Soft size budget handed to the fallback packer
        """
        self.language_name = language_name
        self.max_chunk_size = max_chunk_size

    @abstractmethod
    def extract(self, source: ParsedSource) -> List[str]:
        """Extract chunks from a parsed source.

        Args:
            source: Parsed source produced for this extractor's language

        Returns:
            Chunk texts in source order
        """
        pass

    def chunk_code(self, source_code: str) -> List[str]:
        """Parse and chunk source code.

        Args:
            source_code: Source code string

        Returns:
            List of chunk texts
        """
        chunks = self.extract(parse(source_code, self.language_name))
        logger.debug(f"Extracted {len(chunks)} {self.language_name} chunks")
        return chunks


class RustExtractor(LanguageExtractor):
    """Rust items, with impl blocks split into one chunk per method."""

    STANDALONE_TYPES = frozenset({
        'struct_item',
        'enum_item',
        'union_item',
        'trait_item',
        'function_item',
        'const_item',
        'static_item',
        'type_item',
        'macro_definition',
        'foreign_mod_item',
    })

    CONTEXT_TYPES = frozenset({
        'attribute_item',
        'use_declaration',
        'extern_crate_declaration',
    })

    MEMBER_CONTEXT_TYPES = frozenset({
        'line_comment',
        'block_comment',
        'attribute_item',
    })

    def __init__(self, max_chunk_size: int = 500):
        super().__init__('rust', max_chunk_size)

    def extract(self, source: ParsedSource) -> List[str]:
        chunks = []
        accumulator = ContextAccumulator()

        for child in source.root.named_children:
            kind = child.type
            if kind in self.STANDALONE_TYPES or self._is_inline_module(child):
                chunks.append(compose_chunk(source.text(child), accumulator))
                accumulator.clear()
            elif kind == 'impl_item':
                chunks.extend(self._split_impl(child, source))
                accumulator.clear()
            elif kind in self.CONTEXT_TYPES or kind == 'mod_item':
                accumulator.add_context(source.text(child))
            elif self._is_doc_comment(child, source):
                accumulator.add_doc(source.text(child))
            else:
                # Not structurally significant; leaves the accumulator alone
                continue

        return chunks

    @staticmethod
    def _is_inline_module(node: Any) -> bool:
        return node.type == 'mod_item' and node.child_by_field_name('body') is not None

    @staticmethod
    def _is_doc_comment(node: Any, source: ParsedSource) -> bool:
        if node.type == 'line_comment':
            text = source.text(node)
            return text.startswith('///') and not text.startswith('////')
        if node.type == 'block_comment':
            text = source.text(node)
            return text.startswith('/**') and not text.startswith('/**/')
        return False

    def impl_header(self, node: Any, source: ParsedSource) -> str:
        """Rebuild the declaration line of an impl block.

        ``unsafe impl<T: Debug> Printable for Vec<T>`` keeps its ``unsafe``
        keyword, type parameters, the implemented trait (negated or not) and
        the where clause; an inherent impl reduces to ``impl Person``.
        """
        keywords = {child.type for child in node.children if not child.is_named}
        header = 'unsafe impl' if 'unsafe' in keywords else 'impl'
        type_parameters = node.child_by_field_name('type_parameters')
        if type_parameters is not None:
            header += source.text(type_parameters)

        impl_type = node.child_by_field_name('type')
        subject = source.text(impl_type) if impl_type is not None else ''
        trait = node.child_by_field_name('trait')
        if trait is not None:
            negation = '!' if '!' in keywords else ''
            subject = f"{negation}{source.text(trait)} for {subject}"
        header = f"{header} {subject}"

        for child in node.named_children:
            if child.type == 'where_clause':
                header = f"{header} {source.text(child)}"
                break

        return header

    def _split_impl(self, node: Any, source: ParsedSource) -> List[str]:
        body = node.child_by_field_name('body')
        if body is None:
            return []

        header = self.impl_header(node, source)
        chunks = []
        leading: List[str] = []
        for member in body.named_children:
            if member.type == 'function_item':
                chunks.append(wrap_member(header, source.block(member), leading))
                leading = []
            elif member.type in self.MEMBER_CONTEXT_TYPES:
                leading.append(source.block(member))

        # Comments left in ``leading`` had no method after them
        return chunks


class PythonExtractor(LanguageExtractor):
    """Python functions and classes, packed by size when too large."""

    DEFINITION_TYPES = frozenset({
        'function_definition',
        'class_definition',
        'decorated_definition',
    })

    def __init__(self, max_chunk_size: int = 500):
        super().__init__('python', max_chunk_size)

    def extract(self, source: ParsedSource) -> List[str]:
        chunks = []
        for child in source.root.named_children:
            if child.type in self.DEFINITION_TYPES:
                chunks.extend(fallback_split(child, source, self.max_chunk_size))
            else:
                continue
        return chunks


class JavaScriptExtractor(LanguageExtractor):
    """JavaScript declarations carrying their imports, classes split per method."""

    DECLARATION_TYPES = frozenset({
        'function_declaration',
        'generator_function_declaration',
        # A method only reaches the top-level walk outside of a class body
        'method_definition',
    })

    # Anonymous values of ``export default``
    FUNCTION_VALUE_TYPES = frozenset({
        'function_expression',
        'function',
        'generator_function',
        'arrow_function',
    })

    CLASS_TYPES = frozenset({
        'class_declaration',
        'class',
    })

    CONTEXT_TYPES = frozenset({
        'import_statement',
        'variable_declaration',
        'lexical_declaration',
    })

    def __init__(self, max_chunk_size: int = 500, language_name: str = 'javascript'):
        super().__init__(language_name, max_chunk_size)

    def extract(self, source: ParsedSource) -> List[str]:
        chunks = []
        accumulator = ContextAccumulator()

        for child in source.root.named_children:
            kind = child.type
            if kind in self.DECLARATION_TYPES:
                chunks.append(compose_chunk(source.text(child), accumulator))
                accumulator.clear()
            elif kind == 'class_declaration':
                chunks.extend(self._split_class(child, source, accumulator))
            elif kind == 'export_statement':
                chunks.extend(self._split_export(child, source, accumulator))
            elif kind in self.CONTEXT_TYPES:
                accumulator.add_context(source.text(child))
            elif kind == 'comment' and source.text(child).startswith('/**'):
                accumulator.add_doc(source.text(child))
            else:
                continue

        return chunks

    def _split_export(
        self,
        node: Any,
        source: ParsedSource,
        accumulator: ContextAccumulator
    ) -> List[str]:
        """Chunk an exported function or class, keeping ``export [default]``.

        Re-exports, exported variables and exported identifiers are context.
        """
        exported = node.child_by_field_name('declaration')
        if exported is None:
            exported = node.child_by_field_name('value')

        if exported is None or not (
            exported.type in self.CLASS_TYPES
            or exported.type in self.DECLARATION_TYPES
            or exported.type in self.FUNCTION_VALUE_TYPES
        ):
            accumulator.add_context(source.text(node))
            return []

        modifier = source.slice(node.start_byte, exported.start_byte)
        if exported.type in self.CLASS_TYPES:
            return self._split_class(exported, source, accumulator, [modifier])

        # Up to the end of the statement so ``export default () => 1;`` keeps its semicolon
        chunk = compose_chunk(source.slice(exported.start_byte, node.end_byte), accumulator, [modifier])
        accumulator.clear()
        return [chunk]

    @staticmethod
    def class_header(node: Any, source: ParsedSource, modifiers: Iterable[str] = ()) -> str:
        """Declaration line of a class, e.g. ``export class Counter extends Base``."""
        body = node.child_by_field_name('body')
        end = body.start_byte if body is not None else node.end_byte
        declaration = ' '.join(source.slice(node.start_byte, end).split())
        return ''.join(modifiers) + declaration

    @staticmethod
    def _member_block(member: Any, source: ParsedSource) -> str:
        # Field definitions end before their semicolon
        end = member.end_byte
        following = member.next_sibling
        if following is not None and following.type == ';':
            end = following.end_byte
        return source.block(member, end)

    def _split_class(
        self,
        node: Any,
        source: ParsedSource,
        accumulator: ContextAccumulator,
        modifiers: Iterable[str] = ()
    ) -> List[str]:
        body = node.child_by_field_name('body')
        members = list(body.named_children) if body is not None else []

        if not any(member.type == 'method_definition' for member in members):
            chunk = compose_chunk(source.text(node), accumulator, modifiers)
            accumulator.clear()
            return [chunk]

        header = self.class_header(node, source, modifiers)
        chunks = []
        pending: List[Any] = []
        for member in members:
            if member.type != 'method_definition':
                pending.append(member)
                continue
            leading = [self._member_block(previous, source) for previous in pending]
            chunks.append(wrap_member(header, self._member_block(member, source), leading))
            pending = []

        # Fields and static blocks after the last method get a chunk of
        # their own; trailing comments alone are dropped.
        if any(member.type != 'comment' for member in pending):
            chunks.append(wrap_members(
                header, [self._member_block(member, source) for member in pending]
            ))

        # The class documentation is not carried over to an unrelated
        # declaration; imports and variables are.
        accumulator.docs.clear()
        return chunks


# Language identifiers with a structural extractor. Anything else that has a
# grammar is split by the fallback packer.
EXTRACTORS: Dict[str, Type[LanguageExtractor]] = {
    'rust': RustExtractor,
    'python': PythonExtractor,
    'javascript': JavaScriptExtractor,
    'jsx': JavaScriptExtractor,
}


def get_extractor(language_id: str, max_chunk_size: int) -> Optional[LanguageExtractor]:
    """Get the structural extractor for a language.

    Args:
        language_id: Grammar key
        max_chunk_size: Soft size budget

    Returns:
        LanguageExtractor instance or None when only the fallback applies
    """
    extractor_class = EXTRACTORS.get(language_id)
    if extractor_class is None:
        return None
    if extractor_class is JavaScriptExtractor:
        return JavaScriptExtractor(max_chunk_size, language_name=language_id)
    return extractor_class(max_chunk_size)
