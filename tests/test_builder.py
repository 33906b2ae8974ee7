"""Tests for the segment builder and the segment() entry point.

Covers the merge rules, code fidelity, and complete literate programs
from tests/fixtures.
"""

from pathlib import Path

import pytest

from tinta import (
    Code,
    ConfigurationError,
    Documentation,
    SegmentBuilder,
    SegmentConfig,
    segment,
    segment_config_context,
)
from tinta.grammar import Grammar, GrammarTable, LineCommentStyle


def shape(doc) -> list[tuple[str, str]]:
    return [(type(s).__name__, s.text) for s in doc]


class TestBasicScenarios:
    """Small inputs with exact expected output."""

    def test_doc_comment_then_code(self, grammars: GrammarTable) -> None:
        doc = segment("/** Hello */\nint main(void){return 0;}", "c", grammars)
        assert shape(doc) == [
            ("Documentation", "Hello"),
            ("Code", "\nint main(void){return 0;}"),
        ]

    def test_incidental_line_comment_stays_in_code(self, grammars: GrammarTable) -> None:
        doc = segment("int x = 10; // not documentation", "c", grammars)
        assert shape(doc) == [("Code", "int x = 10; // not documentation")]

    def test_empty_input(self, grammars: GrammarTable) -> None:
        doc = segment("", "c", grammars)
        assert doc.segments == ()
        assert doc.diagnostics == ()

    def test_whitespace_only_input(self, grammars: GrammarTable) -> None:
        assert segment("  \n\t\n", "c", grammars).segments == ()

    def test_code_only(self, grammars: GrammarTable) -> None:
        doc = segment("int x;\n", "c", grammars)
        assert shape(doc) == [("Code", "int x;\n")]

    def test_trailing_doc_comment(self, grammars: GrammarTable) -> None:
        doc = segment("int x;\n/** done */", "c", grammars)
        assert shape(doc) == [("Code", "int x;\n"), ("Documentation", "done")]

    def test_empty_doc_comment_is_still_a_segment(self, grammars: GrammarTable) -> None:
        doc = segment("/** */\nx", "c", grammars)
        assert shape(doc) == [("Documentation", ""), ("Code", "\nx")]

    def test_code_carries_highlight_language(self, grammars: GrammarTable) -> None:
        doc = segment("/** memory map */\nSECTIONS {}", "ld", grammars)
        assert doc.code[0].language == "text"
        assert doc.language == "linker-script"

    def test_unknown_language(self, grammars: GrammarTable) -> None:
        with pytest.raises(ConfigurationError):
            segment("x", "brainfuck", grammars)

    def test_language_name_needs_a_table(self) -> None:
        with pytest.raises(ConfigurationError, match="No grammar table"):
            segment("x", "c")

    def test_grammar_object_needs_no_table(self) -> None:
        grammar = Grammar(name="ini", line_comments=(LineCommentStyle(";;", documentation=True),))
        doc = segment(";; Settings\nkey=value", grammar)
        assert shape(doc) == [("Documentation", "Settings"), ("Code", "\nkey=value")]


class TestMerging:
    """Adjacent documentation comments merge into one segment."""

    def test_adjacent_lines_merge(self, grammars: GrammarTable) -> None:
        doc = segment("/** a */\n/** b */\nint x;", "c", grammars)
        assert shape(doc) == [("Documentation", "a\nb"), ("Code", "\nint x;")]

    def test_blank_line_breaks_run(self, grammars: GrammarTable) -> None:
        doc = segment("/** a */\n\n/** b */", "c", grammars)
        assert shape(doc) == [
            ("Documentation", "a"),
            ("Code", "\n\n"),
            ("Documentation", "b"),
        ]

    def test_merge_newlines_setting(self, grammars: GrammarTable) -> None:
        config = SegmentConfig(merge_newlines=2)
        doc = segment("/** a */\n\n/** b */", "c", grammars, config=config)
        assert shape(doc) == [("Documentation", "a\nb")]

    def test_merging_disabled(self, grammars: GrammarTable) -> None:
        with segment_config_context(SegmentConfig(merge_adjacent=False)):
            doc = segment("/** a */\n/** b */", "c", grammars)
        assert shape(doc) == [
            ("Documentation", "a"),
            ("Code", "\n"),
            ("Documentation", "b"),
        ]

    def test_rust_line_doc_run(self, grammars: GrammarTable) -> None:
        source = "/// Adds one.\n///\n/// Never overflows.\nfn inc(x: u8) -> u8 { x + 1 }"
        doc = segment(source, "rust", grammars)
        assert shape(doc) == [
            ("Documentation", "Adds one.\n\nNever overflows."),
            ("Code", "\nfn inc(x: u8) -> u8 { x + 1 }"),
        ]

    def test_rust_four_slashes_stay_in_code(self, grammars: GrammarTable) -> None:
        doc = segment("//// not docs\n/// Docs.\nfn f() {}", "rust", grammars)
        assert shape(doc) == [
            ("Code", "//// not docs\n"),
            ("Documentation", "Docs."),
            ("Code", "\nfn f() {}"),
        ]

    def test_incidental_comment_between_docs_stays_in_code(self, grammars: GrammarTable) -> None:
        doc = segment("/** a */\n/* note */\n/** b */", "c", grammars)
        assert shape(doc) == [
            ("Documentation", "a"),
            ("Code", "\n/* note */\n"),
            ("Documentation", "b"),
        ]

    def test_doc_and_incidental_line_comments_do_not_merge(self, grammars: GrammarTable) -> None:
        doc = segment("/// doc\n// plain\nint x;", "c", grammars)
        assert shape(doc) == [("Documentation", "doc"), ("Code", "\n// plain\nint x;")]

    def test_code_on_same_line_breaks_run(self, grammars: GrammarTable) -> None:
        doc = segment("/** a */ int x; /** b */", "c", grammars)
        assert shape(doc) == [
            ("Documentation", "a"),
            ("Code", " int x; "),
            ("Documentation", "b"),
        ]

    def test_string_containing_marker_is_code(self, grammars: GrammarTable) -> None:
        doc = segment('/** a */\nputs("/** b */");', "c", grammars)
        assert shape(doc) == [("Documentation", "a"), ("Code", '\nputs("/** b */");')]


class TestConfiguration:
    """Config read from the current context."""

    def test_text_transformer(self, grammars: GrammarTable) -> None:
        config = SegmentConfig(text_transformer=str.upper)
        doc = segment("/** hello */ x", "c", grammars, config=config)
        assert doc.documentation[0].text == "HELLO"
        assert doc.code[0].text == " x"

    def test_builder_reads_context(self, c_grammar: Grammar) -> None:
        with segment_config_context(SegmentConfig(strip_decoration=False)):
            doc = SegmentBuilder("/**\n * a\n */", c_grammar).build()
        assert doc.documentation[0].text == "* a"

    def test_config_argument_does_not_leak(self, grammars: GrammarTable) -> None:
        segment("/** a */", "c", grammars, config=SegmentConfig(merge_newlines=5))
        doc = segment("/** a */\n\n/** b */", "c", grammars)
        assert len(doc.documentation) == 2


class TestLocations:
    """Document and segment source ranges."""

    def test_document_covers_source(self, grammars: GrammarTable) -> None:
        source = "/** a */\nint x;"
        doc = segment(source, "c", grammars, source_file="a.c")
        assert doc.location.offset == 0
        assert doc.location.end_offset == len(source)
        assert doc.source_file == "a.c"
        assert str(doc.segments[1].location) == "a.c:1:9"

    def test_merged_documentation_location(self, grammars: GrammarTable) -> None:
        doc = segment("x;\n/** a */\n/** b */\ny;", "c", grammars)
        loc = doc.documentation[0].location
        assert (loc.lineno, loc.end_lineno) == (2, 3)
        assert loc.offset == 3
        assert loc.end_offset == 20


class TestFixturePrograms:
    """Complete literate programs."""

    def test_hello_world(self, grammars: GrammarTable, fixtures_dir: Path) -> None:
        source = (fixtures_dir / "c" / "hello-world.c").read_text(encoding="utf-8")
        doc = segment(source, "c", grammars)

        assert [d.text for d in doc.documentation] == [
            "`hello-world.c` - a brief hello world in C.\nThis is a literate program",
            'We start by including stdio.h ("standard input and output")\n'
            "a header that allows us to use some functions for input and output",
            "The main function is executed when our program starts.\n"
            "It returns an int to tell the operating system\n"
            "whether it was successful or failed",
            "Print hello world to the user",
            "Return zero, indicating succcess",
            "This program can be compiled and run with:\n"
            "`cc -o hello-world ./hello-world.c && ./hello-world`",
        ]
        assert doc.code[1].text == "\n#include <stdio.h>\n\n"
        assert len(doc) == 12

    def test_indentation_preserved(self, grammars: GrammarTable, fixtures_dir: Path) -> None:
        source = (fixtures_dir / "c" / "indentation-test.c").read_text(encoding="utf-8")
        doc = segment(source, "c", grammars)

        nested = doc.code[3].text
        assert "\n                if (i == 1) {\n" in nested
        assert '                    printf("  This is deeply nested\\n");' in nested
        assert doc.documentation[0].text.startswith("# Indentation Test Program\n\nThis program")

    def test_markdown_survives(self, grammars: GrammarTable, fixtures_dir: Path) -> None:
        source = (fixtures_dir / "c" / "markdown-test.c").read_text(encoding="utf-8")
        doc = segment(source, "c", grammars)

        first = doc.documentation[0].text
        assert "- Lists with *emphasis*" in first
        assert "> This is a blockquote to test markdown rendering" in first
        assert "```c\nint example = 42;\n```" in first

    def test_mixed_comments(self, grammars: GrammarTable, fixtures_dir: Path) -> None:
        source = (fixtures_dir / "c" / "mixed-comments.c").read_text(encoding="utf-8")
        doc = segment(source, "c", grammars)

        assert [type(s).__name__ for s in doc] == [
            "Documentation",
            "Code",
            "Documentation",
            "Code",
            "Documentation",
        ]
        assert "/* \n * This is a regular block comment" in doc.code[0].text
        assert "/* Single line block comment */" in doc.code[0].text
        assert "/* Another block comment\n       spanning multiple lines" in doc.code[1].text
        assert doc.documentation[1].text == "Inline documentation comment"

    def test_javascript_example(self, grammars: GrammarTable, fixtures_dir: Path) -> None:
        path = fixtures_dir / "js" / "example.js"
        doc = segment(path.read_text(encoding="utf-8"), grammars.for_path(path), grammars)

        assert [d.text for d in doc.documentation] == [
            "A simple JavaScript literate program\n"
            "This demonstrates different comment styles in JS",
            "JSDoc style comment for the conditional",
            "Main execution block\nThis runs the greeting function",
        ]
        assert "// Single line comment explaining the constant" in doc.code[0].text
        assert "return `Hello, ${name}!`;" in doc.code[1].text
        assert all(isinstance(c, Code) and c.language == "javascript" for c in doc.code)

    @pytest.mark.parametrize(
        "name", ["hello-world.c", "indentation-test.c", "markdown-test.c", "mixed-comments.c"]
    )
    def test_code_reassembles_source(
        self, grammars: GrammarTable, fixtures_dir: Path, name: str
    ) -> None:
        source = (fixtures_dir / "c" / name).read_text(encoding="utf-8")
        doc = segment(source, "c", grammars)

        rebuilt = "".join(
            s.text if isinstance(s, Code) else source[s.location.offset : s.location.end_offset]
            for s in doc
        )
        assert rebuilt == source
        assert all(isinstance(s, (Code, Documentation)) for s in doc)
        assert doc.diagnostics == ()
