"""Integration tests for the document-level splitter."""

import asyncio

import pytest

import chunking.code_splitter as code_splitter
import chunking.grammars as grammars
from chunking.code_splitter import CodeSplitter
from chunking.document import Document
from chunking.errors import ParseFailure, UnsupportedLanguage
from tests.fixtures.sample_code import JS_CLASS_WITH_IMPORT, RUST_PERSON, RUST_TOP_LEVEL, RUST_TRAIT


@pytest.mark.grammar('rust')
class TestRustSplitting:
    """Rust documents through the full split path."""

    def test_split_person(self, rust_splitter):
        split_docs = rust_splitter.split([Document(content=RUST_PERSON)])

        assert len(split_docs) == 3
        assert split_docs[0].content.split('\n')[0] == "/// A person with a name and age"
        assert split_docs[1].content.split('\n')[0] == "impl Person {"
        assert split_docs[2].content.split('\n')[0] == "impl Person {"

    def test_metadata_is_not_propagated(self, rust_splitter):
        document = Document(content=RUST_TRAIT, metadata={'path': 'src/lib.rs', 'lang': 'rust'})

        split_docs = rust_splitter.split([document])

        assert len(split_docs) == 3
        assert all(doc.metadata == {} for doc in split_docs)
        assert document.metadata == {'path': 'src/lib.rs', 'lang': 'rust'}

    def test_batch_order_and_no_context_leak(self, rust_splitter):
        documents = [
            Document(content="struct A;\nuse std::io;"),
            Document(content="struct B;"),
            Document(content=RUST_TOP_LEVEL),
        ]

        contents = [doc.content for doc in rust_splitter.split(documents)]

        assert contents[:2] == ["struct A;", "struct B;"]
        assert len(contents) == 7
        assert contents[2].startswith("/// A constant value")

    def test_empty_batch(self, rust_splitter):
        assert rust_splitter.split([]) == []

    def test_split_async_matches_split(self, rust_splitter):
        documents = [Document(content=RUST_PERSON), Document(content=RUST_TRAIT)]

        async_docs = asyncio.run(rust_splitter.split_async(documents))

        assert async_docs == rust_splitter.split(documents)

    def test_failure_aborts_batch(self, rust_splitter, monkeypatch):
        real_parse = code_splitter.parse
        calls = []

        def flaky_parse(text, language_id):
            calls.append(text)
            if len(calls) == 2:
                raise ParseFailure("Failed to parse document")
            return real_parse(text, language_id)

        monkeypatch.setattr(code_splitter, 'parse', flaky_parse)

        with pytest.raises(ParseFailure):
            rust_splitter.split([
                Document(content="struct A;"),
                Document(content="struct B;"),
                Document(content="struct C;"),
            ])
        assert len(calls) == 2


@pytest.mark.grammar('javascript')
def test_javascript_scenario(javascript_splitter):
    split_docs = javascript_splitter.split([Document(content=JS_CLASS_WITH_IMPORT)])

    assert [doc.content.split('\n')[0] for doc in split_docs] == [
        "class Reader {",
        "class Reader {",
        "import { readFile } from 'fs';",
    ]
    assert "function main() {" in split_docs[2].content


@pytest.mark.grammar('python')
def test_python_large_definition_is_packed():
    splitter = CodeSplitter('python', 40)
    body = "\n".join(f"    step_{i} = {i}" for i in range(10))
    code = f"def long_function():\n{body}\n    return step_9\n"

    chunks = splitter.split_text(code)

    assert len(chunks) == 2
    assert chunks[0] == "def long_function():"
    assert "return step_9" in chunks[1]


def test_unsupported_language_is_fatal():
    splitter = CodeSplitter('cobol', 500)

    assert splitter.uses_fallback
    with pytest.raises(UnsupportedLanguage):
        splitter.split([Document(content="IDENTIFICATION DIVISION.")])


@pytest.mark.grammar('python')
def test_language_without_extractor_uses_fallback(monkeypatch):
    monkeypatch.setitem(grammars.AVAILABLE_LANGUAGES, 'python-plain', grammars.AVAILABLE_LANGUAGES['python'])
    splitter = CodeSplitter('python-plain', 11)

    assert splitter.uses_fallback
    assert splitter.split_text("a = 1\nb = 2") == ["a = 1\nb = 2"]
    assert splitter.split_text("a = 1\nb = 2\nc = 3") == ["a = 1\nb = 2", "c = 3"]
    assert splitter.split([Document(content="", metadata={'k': 1})]) == []
