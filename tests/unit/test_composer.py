"""Unit tests for chunk composition."""

from unittest import TestCase

from chunking.composer import ContextAccumulator, compose_chunk, wrap_member, wrap_members


class TestContextAccumulator(TestCase):
    """Test the sibling context buffers."""

    def test_starts_empty(self):
        accumulator = ContextAccumulator()

        assert accumulator.is_empty()
        assert accumulator.docs == []
        assert accumulator.context == []

    def test_keeps_insertion_order_and_clears(self):
        accumulator = ContextAccumulator()
        accumulator.add_context("use a;")
        accumulator.add_doc("/// doc")
        accumulator.add_context("use b;")

        assert accumulator.context == ["use a;", "use b;"]
        assert accumulator.docs == ["/// doc"]

        accumulator.clear()
        assert accumulator.is_empty()


class TestComposeChunk(TestCase):
    """Test standalone chunk assembly."""

    def test_docs_then_context_then_modifiers_then_text(self):
        accumulator = ContextAccumulator()
        accumulator.add_context("#[derive(Debug)]")
        accumulator.add_doc("/// A point")

        chunk = compose_chunk("struct P;", accumulator, ["pub "])

        assert chunk == "/// A point\n#[derive(Debug)]\npub struct P;"

    def test_fragments_with_newline_are_not_doubled(self):
        accumulator = ContextAccumulator()
        accumulator.add_doc("/// A point\n")
        accumulator.add_doc("/// in space\n")

        chunk = compose_chunk("struct P;", accumulator)

        assert chunk == "/// A point\n/// in space\nstruct P;"

    def test_without_context_text_is_unchanged(self):
        assert compose_chunk("fn f() {}", ContextAccumulator()) == "fn f() {}"

    def test_compose_does_not_clear(self):
        accumulator = ContextAccumulator()
        accumulator.add_context("use a;")
        compose_chunk("fn f() {}", accumulator)

        assert accumulator.context == ["use a;"]


class TestWrapMember(TestCase):
    """Test member wrapping for composite containers."""

    def test_plain_member(self):
        chunk = wrap_member("impl Person", "    fn age(&self) -> u32 {\n        self.age\n    }")

        assert chunk == "impl Person {\n    fn age(&self) -> u32 {\n        self.age\n    }\n}"

    def test_member_is_reindented_as_a_whole(self):
        chunk = wrap_member("class Reader", "  read() {\n    return 1;\n  }")

        assert chunk == "class Reader {\n    read() {\n      return 1;\n    }\n}"

    def test_leading_fragments_are_indented(self):
        chunk = wrap_member("class A", "m() {}", ["// first\n", "/**\n * multi\n */"])

        assert chunk == (
            "class A {\n"
            "    // first\n"
            "    /**\n"
            "     * multi\n"
            "     */\n"
            "    m() {}\n"
            "}"
        )

    def test_wrap_members_without_method(self):
        chunk = wrap_members("class Box", ["  size = 1;", "  static {\n    init();\n  }"])

        assert chunk == "class Box {\n    size = 1;\n    static {\n      init();\n    }\n}"
