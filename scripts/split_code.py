#!/usr/bin/env python3
"""Command-line tool for splitting source files into structural chunks."""

import sys
import json
import argparse
import logging
from pathlib import Path

# Add the parent directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunking.code_splitter import CodeSplitter
from chunking.config import SplitterConfig
from chunking.document import Document
from chunking.errors import SplitterError
from chunking.multi_language_chunker import MultiLanguageSplitter


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def collect_chunks(paths, language, max_chunk_size):
    """Split every given file or directory.

    With an explicit language every file is split with that grammar; otherwise
    the language is inferred from each file's extension.
    """
    if language:
        splitter = CodeSplitter(language, max_chunk_size)
        documents = []
        for path in paths:
            path = Path(path)
            files = sorted(p for p in path.rglob('*') if p.is_file()) if path.is_dir() else [path]
            documents.extend(Document(content=f.read_text(encoding='utf-8')) for f in files)
        return splitter.split(documents)

    multi_splitter = MultiLanguageSplitter(max_chunk_size)
    chunks = []
    for path in paths:
        if Path(path).is_dir():
            chunks.extend(multi_splitter.split_directory(path))
        else:
            chunks.extend(multi_splitter.split_file(path))
    return chunks


def main():
    config = SplitterConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Split source code into structural chunks"
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to split"
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Language of all inputs (default: inferred from file extension)"
    )
    parser.add_argument(
        "--max-chunk-size",
        type=int,
        default=config.max_chunk_size,
        help=f"Soft chunk size budget in characters (default: {config.max_chunk_size})"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per chunk"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    for path in args.paths:
        if not Path(path).exists():
            logger.error(f"Path does not exist: {path}")
            sys.exit(1)

    try:
        chunks = collect_chunks(args.paths, args.language, args.max_chunk_size)
    except (SplitterError, ValueError, OSError) as e:
        logger.error(f"Splitting failed: {e}")
        sys.exit(1)

    for index, chunk in enumerate(chunks):
        if args.json:
            print(json.dumps(chunk.to_dict()))
        else:
            print(f"--- chunk {index} ({len(chunk.content)} chars) ---")
            print(chunk.content)

    logger.info(f"Generated {len(chunks)} chunks")


if __name__ == "__main__":
    main()
