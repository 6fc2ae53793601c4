"""Splitter configuration with environment overrides."""

import os
from dataclasses import dataclass

DEFAULT_LANGUAGE = 'rust'
DEFAULT_MAX_CHUNK_SIZE = 500


@dataclass
class SplitterConfig:
    """Language and size budget used by a CodeSplitter."""

    language: str = DEFAULT_LANGUAGE
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE

    def __post_init__(self):
        if self.max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {self.max_chunk_size}")

    @classmethod
    def from_env(cls) -> 'SplitterConfig':
        """Build a config from CODE_SPLITTER_* environment variables."""
        language = os.getenv('CODE_SPLITTER_LANGUAGE', DEFAULT_LANGUAGE)
        raw_size = os.getenv('CODE_SPLITTER_MAX_CHUNK_SIZE', str(DEFAULT_MAX_CHUNK_SIZE))
        try:
            max_chunk_size = int(raw_size)
        except ValueError as exc:
            raise ValueError(f"CODE_SPLITTER_MAX_CHUNK_SIZE must be an integer, got {raw_size!r}") from exc
        return cls(language=language, max_chunk_size=max_chunk_size)
