"""Document-level driver for structural code splitting."""

import asyncio
import logging
from typing import List, Optional

from .config import DEFAULT_LANGUAGE, DEFAULT_MAX_CHUNK_SIZE, SplitterConfig
from .document import Document
from .fallback import fallback_split
from .grammars import parse
from .tree_sitter import LanguageExtractor, get_extractor

logger = logging.getLogger(__name__)


class CodeSplitter:
    """Splits source documents of one language into structural chunks."""

    def __init__(self, language: str = DEFAULT_LANGUAGE, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE):
        """Initialize the splitter.

        Args:
            language: Grammar key of the documents to split
            max_chunk_size: Soft size budget in characters
        """
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        self.language = language
        self.max_chunk_size = max_chunk_size
        self._extractor: Optional[LanguageExtractor] = get_extractor(language, max_chunk_size)

    @classmethod
    def from_config(cls, config: SplitterConfig) -> 'CodeSplitter':
        return cls(language=config.language, max_chunk_size=config.max_chunk_size)

    @property
    def uses_fallback(self) -> bool:
        """True when no structural extractor exists for the language."""
        return self._extractor is None

    def split_text(self, text: str) -> List[str]:
        """Split one source text into chunk strings.

        Raises:
            UnsupportedLanguage: No grammar registered for the language
            ParseFailure: The grammar could not root the input
            TextExtractionFailure: A node could not be decoded
        """
        source = parse(text, self.language)
        if self._extractor is not None:
            return self._extractor.extract(source)
        return fallback_split(source.root, source, self.max_chunk_size)

    def split(self, documents: List[Document]) -> List[Document]:
        """Split a batch of documents.

        Chunks come out in input order, then source order. Input metadata is
        not propagated. The first failing document aborts the whole batch.

        Args:
            documents: Source documents

        Returns:
            One document per chunk, each with empty metadata
        """
        split_docs = []
        for index, document in enumerate(documents):
            chunks = self.split_text(document.content)
            logger.debug(f"Document {index}: {len(chunks)} {self.language} chunks")
            split_docs.extend(Document(content=chunk) for chunk in chunks)

        logger.info(f"Split {len(documents)} {self.language} documents into {len(split_docs)} chunks")
        return split_docs

    async def split_async(self, documents: List[Document]) -> List[Document]:
        """Asynchronous variant of :meth:`split`.

        Each document is split synchronously; control returns to the event
        loop only between documents, so a cancelled batch stops before the
        next document and never leaves one half split.
        """
        split_docs = []
        for document in documents:
            await asyncio.sleep(0)
            split_docs.extend(Document(content=chunk) for chunk in self.split_text(document.content))

        logger.info(f"Split {len(documents)} {self.language} documents into {len(split_docs)} chunks")
        return split_docs
