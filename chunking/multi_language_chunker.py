"""File and directory front end that picks a splitter per file extension."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .code_splitter import CodeSplitter
from .config import DEFAULT_MAX_CHUNK_SIZE
from .document import Document
from .grammars import AVAILABLE_LANGUAGES

logger = logging.getLogger(__name__)


class MultiLanguageSplitter:
    """Splits source files of any supported language."""

    # Map file extensions to language identifiers
    LANGUAGE_MAP = {
        '.rs': 'rust',
        '.py': 'python',
        '.js': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.jsx': 'jsx',
        '.ts': 'typescript',
        '.tsx': 'tsx',
        '.go': 'go',
        '.java': 'java',
    }

    # Common large/build/tooling directories to skip during traversal
    DEFAULT_IGNORED_DIRS = {
        '__pycache__', '.git', '.hg', '.svn',
        '.venv', 'venv', 'env', '.env', '.direnv',
        'node_modules', '.pnpm-store', '.yarn',
        '.pytest_cache', '.mypy_cache', '.ruff_cache', '.pytype', '.ipynb_checkpoints',
        'build', 'dist', 'out', 'public',
        '.next', '.nuxt', '.svelte-kit', '.angular', '.astro', '.vite',
        '.cache', '.parcel-cache', '.turbo',
        'coverage', '.coverage', '.nyc_output',
        '.gradle', '.idea', '.vscode', '.terraform', '.mvn', '.tox',
        'target', 'bin', 'obj'
    }

    def __init__(self, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE):
        self.max_chunk_size = max_chunk_size
        self.splitters: Dict[str, CodeSplitter] = {}

    def language_for(self, file_path: str) -> Optional[str]:
        """Language identifier for a file, or None if its grammar is unavailable."""
        language = self.LANGUAGE_MAP.get(Path(file_path).suffix.lower())
        if language is None or language not in AVAILABLE_LANGUAGES:
            return None
        return language

    def is_supported(self, file_path: str) -> bool:
        """Check if file type is supported.

        Args:
            file_path: Path to file

        Returns:
            True if the extension is known and its grammar is installed
        """
        return self.language_for(file_path) is not None

    def get_splitter(self, language: str) -> CodeSplitter:
        # Lazy initialization of splitters
        if language not in self.splitters:
            self.splitters[language] = CodeSplitter(language, self.max_chunk_size)
        return self.splitters[language]

    def split_file(self, file_path: str, content: Optional[str] = None) -> List[Document]:
        """Split a file into chunk documents.

        Args:
            file_path: Path to the file
            content: Optional file content (read from disk if not provided)

        Returns:
            Chunk documents, empty for unsupported file types
        """
        language = self.language_for(file_path)
        if language is None:
            logger.debug(f"File type not supported: {file_path}")
            return []

        if content is None:
            content = Path(file_path).read_text(encoding='utf-8')

        try:
            return self.get_splitter(language).split([Document(content=content)])
        except Exception:
            logger.error(f"Failed to split {file_path} as {language}")
            raise

    def split_directory(self, directory_path: str, extensions: Optional[List[str]] = None) -> List[Document]:
        """Split all supported files in a directory.

        Args:
            directory_path: Path to directory
            extensions: Optional list of extensions to process (default: all known)

        Returns:
            Chunk documents from all files, files visited in sorted path order
        """
        dir_path = Path(directory_path)
        if not dir_path.is_dir():
            raise NotADirectoryError(f"Directory does not exist: {directory_path}")

        valid_extensions = set(extensions) & set(self.LANGUAGE_MAP) if extensions else set(self.LANGUAGE_MAP)

        all_chunks = []
        for file_path in sorted(dir_path.rglob('*')):
            if not file_path.is_file() or file_path.suffix.lower() not in valid_extensions:
                continue
            if any(part in self.DEFAULT_IGNORED_DIRS for part in file_path.relative_to(dir_path).parts):
                continue
            chunks = self.split_file(str(file_path))
            all_chunks.extend(chunks)
            logger.debug(f"Split {len(chunks)} chunks from {file_path}")

        logger.info(f"Total chunks from directory: {len(all_chunks)}")
        return all_chunks
