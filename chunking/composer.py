"""Assembling chunk text from accumulated context and node source."""

import textwrap
from dataclasses import dataclass, field
from typing import Iterable, List

INDENT = '    '


def _as_line(fragment: str) -> str:
    """Terminate a fragment with exactly the newline it needs."""
    return fragment if fragment.endswith('\n') else fragment + '\n'


@dataclass
class ContextAccumulator:
    """Leading context collected while walking sibling nodes.

    ``docs`` holds documentation comments, ``context`` everything else that
    should travel with the next standalone chunk (imports, attributes,
    module declarations, top-level variables). Both keep insertion order.
    """

    docs: List[str] = field(default_factory=list)
    context: List[str] = field(default_factory=list)

    def add_doc(self, fragment: str) -> None:
        self.docs.append(fragment)

    def add_context(self, fragment: str) -> None:
        self.context.append(fragment)

    def clear(self) -> None:
        self.docs.clear()
        self.context.clear()

    def is_empty(self) -> bool:
        return not self.docs and not self.context


def compose_chunk(
    text: str,
    accumulator: ContextAccumulator,
    modifiers: Iterable[str] = ()
) -> str:
    """Build a standalone chunk.

    The order is documentation, then other context, then the modifiers
    attached to the node (e.g. ``export ``), then the node text itself. Doc
    and context fragments each occupy their own line(s); modifiers are
    inline prefixes.

    Args:
        text: Source text of the node
        accumulator: Context collected before the node
        modifiers: Inline prefixes that belong to the node but lie outside its span

    Returns:
        Chunk text
    """
    parts = [_as_line(doc) for doc in accumulator.docs]
    parts.extend(_as_line(fragment) for fragment in accumulator.context)
    parts.extend(modifiers)
    parts.append(text)
    return ''.join(parts)


def _reindent(fragment: str) -> str:
    """Move a fragment one level in, keeping its inner relative indentation."""
    return textwrap.indent(textwrap.dedent(fragment.rstrip('\n')), INDENT)


def wrap_members(header: str, fragments: Iterable[str]) -> str:
    """Wrap container members in a synthesized declaration.

    The result opens with ``"<header> {"``, lists every fragment re-indented
    one level, and closes with ``"}"``. Fragments should carry the
    indentation of their first source line so their bodies line up.

    Args:
        header: Container header, e.g. ``impl<T> Display for Wrapper<T>``
        fragments: Member texts in source order

    Returns:
        Chunk text
    """
    lines = [f"{header} {{"]
    lines.extend(_reindent(fragment) for fragment in fragments)
    lines.append('}')
    return '\n'.join(lines)


def wrap_member(header: str, member_text: str, leading: Iterable[str] = ()) -> str:
    """Wrap one container member and the comments/attributes right before it.

    Args:
        header: Container header
        member_text: Source text of the member
        leading: Fragments collected right before the member

    Returns:
        Chunk text
    """
    return wrap_members(header, [*leading, member_text])
