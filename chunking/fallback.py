"""Size-bounded greedy packing of a node's children."""

import logging
from typing import Any, List

from .grammars import ParsedSource

logger = logging.getLogger(__name__)


def fallback_split(node: Any, source: ParsedSource, max_size: int) -> List[str]:
    """Split a node into chunks of at most ``max_size`` characters where possible.

    A node that already fits is returned whole. Otherwise its direct children
    are packed greedily in source order; a chunk is closed when the next child
    would push it past ``max_size``. Children are never split, so a single
    child larger than the budget ends up alone in an oversize chunk.

    Whitespace between two children packed into the same chunk is taken from
    the source. Each chunk starts at its first child's own text.

    Args:
        node: Tree-sitter node to split
        source: Parsed source the node belongs to
        max_size: Soft size budget in characters

    Returns:
        List of non-empty chunk strings in source order
    """
    node_text = source.text(node)
    if not node_text:
        return []
    if len(node_text) <= max_size:
        return [node_text]

    chunks: List[str] = []
    current = ''
    previous_end = node.start_byte

    for child in node.children:
        child_text = source.text(child)
        if current:
            piece = source.slice(previous_end, child.start_byte) + child_text
        else:
            piece = child_text

        if current and len(current) + len(piece) > max_size:
            chunks.append(current)
            current = child_text
        else:
            current += piece
        previous_end = child.end_byte

    if current:
        chunks.append(current)

    if not chunks:
        # Leaf node: nothing to pack, keep it whole
        chunks.append(node_text)

    logger.debug(
        f"Packed {node.type} ({len(node_text)} chars) into {len(chunks)} chunks "
        f"with budget {max_size}"
    )
    return chunks
