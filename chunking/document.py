"""Document record consumed and produced by the splitter."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Document:
    """A piece of text plus arbitrary metadata.

    Documents produced by the splitter always carry empty metadata; whatever
    the input documents carried is not propagated to their chunks.
    """

    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'content': self.content,
            'metadata': dict(self.metadata),
        }
