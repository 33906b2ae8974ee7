"""Tests for the state-machine scanner.

Each test checks the exact span stream for a short input, so mode
transitions at construct boundaries are pinned down precisely.
"""

import pytest

from tinta.grammar import (
    BlockCommentStyle,
    Grammar,
    LineCommentStyle,
    StringDelimiter,
)
from tinta.scanner import Scanner
from tinta.spans import SpanKind


def kinds_and_values(source: str, grammar: Grammar) -> list[tuple[str, str]]:
    return [(s.kind.name, s.value) for s in Scanner(source, grammar).scan()]


class TestCodeMode:
    """Plain code without openers."""

    def test_empty_source_yields_nothing(self, c_grammar: Grammar) -> None:
        assert list(Scanner("", c_grammar).scan()) == []

    def test_plain_code_is_one_span(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("int x = 1;\nint y;", c_grammar) == [
            ("CODE", "int x = 1;\nint y;"),
        ]

    def test_lone_slash_is_code(self, c_grammar: Grammar) -> None:
        """Division is not a comment opener."""
        assert kinds_and_values("a = b / c;", c_grammar) == [("CODE", "a = b / c;")]


class TestLineComments:
    """Line comment mode."""

    def test_line_comment_after_code(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("int x = 10; // note", c_grammar) == [
            ("CODE", "int x = 10; "),
            ("LINE_COMMENT", "// note"),
        ]

    def test_newline_stays_in_code(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("// a\nx", c_grammar) == [
            ("LINE_COMMENT", "// a"),
            ("CODE", "\nx"),
        ]

    def test_carriage_return_stays_in_code(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("// a\r\nx", c_grammar) == [
            ("LINE_COMMENT", "// a"),
            ("CODE", "\r\nx"),
        ]

    def test_longest_marker_wins(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("/// doc\n// plain", c_grammar).scan())
        assert spans[0].value == "/// doc"
        assert spans[0].is_documentation
        assert spans[2].value == "// plain"
        assert not spans[2].is_documentation

    def test_four_slashes_are_incidental(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("//////// banner\n/// doc", c_grammar).scan())
        assert spans[0].value == "//////// banner"
        assert not spans[0].is_documentation
        assert spans[2].is_documentation

    def test_block_opener_inside_line_comment_is_inert(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('// /* "x"\ny', c_grammar) == [
            ("LINE_COMMENT", '// /* "x"'),
            ("CODE", "\ny"),
        ]


class TestBlockComments:
    """Block comment mode."""

    def test_doc_block_is_documentation(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("/** Hello */\nint main(void){}", c_grammar).scan())
        assert [s.kind for s in spans] == [SpanKind.BLOCK_COMMENT, SpanKind.CODE]
        assert spans[0].value == "/** Hello */"
        assert spans[0].is_documentation

    def test_plain_block_is_incidental(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("/* note */ x", c_grammar).scan())
        assert spans[0].value == "/* note */"
        assert not spans[0].is_documentation

    def test_blocks_do_not_nest(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("/* a /* b */ c */", c_grammar) == [
            ("BLOCK_COMMENT", "/* a /* b */"),
            ("CODE", " c */"),
        ]

    def test_empty_doc_marker_is_plain_empty_comment(self, c_grammar: Grammar) -> None:
        """/**/ closes immediately and is not a documentation comment."""
        spans = list(Scanner("/**/x", c_grammar).scan())
        assert spans[0].value == "/**/"
        assert not spans[0].is_documentation
        assert spans[1].value == "x"

    def test_empty_doc_comment_with_space(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("/** */", c_grammar).scan())
        assert len(spans) == 1
        assert spans[0].is_documentation

    def test_triple_star_is_documentation(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("/*** banner ***/", c_grammar).scan())
        assert len(spans) == 1
        assert spans[0].is_documentation

    def test_string_delimiter_inside_comment_is_inert(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('/* "unclosed */ y', c_grammar) == [
            ("BLOCK_COMMENT", '/* "unclosed */'),
            ("CODE", " y"),
        ]


class TestStringLiterals:
    """String literal mode."""

    def test_comment_marker_inside_string(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('x = "//"; // note', c_grammar) == [
            ("CODE", "x = "),
            ("STRING_LITERAL", '"//"'),
            ("CODE", "; "),
            ("LINE_COMMENT", "// note"),
        ]

    def test_block_opener_inside_string(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('s = "/* not a comment */";', c_grammar) == [
            ("CODE", "s = "),
            ("STRING_LITERAL", '"/* not a comment */"'),
            ("CODE", ";"),
        ]

    def test_escaped_quote_does_not_close(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('s = "a\\"b"; // c', c_grammar) == [
            ("CODE", "s = "),
            ("STRING_LITERAL", '"a\\"b"'),
            ("CODE", "; "),
            ("LINE_COMMENT", "// c"),
        ]

    def test_escaped_backslash_then_close(self, c_grammar: Grammar) -> None:
        assert kinds_and_values('"a\\\\" x', c_grammar) == [
            ("STRING_LITERAL", '"a\\\\"'),
            ("CODE", " x"),
        ]

    def test_char_literal_with_quote(self, c_grammar: Grammar) -> None:
        assert kinds_and_values("c = '\"'; // q", c_grammar) == [
            ("CODE", "c = "),
            ("STRING_LITERAL", "'\"'"),
            ("CODE", "; "),
            ("LINE_COMMENT", "// q"),
        ]

    def test_doubled_close_is_escape(self, grammars) -> None:
        sql = grammars.get("sql")
        assert kinds_and_values("'it''s' -- c", sql) == [
            ("STRING_LITERAL", "'it''s'"),
            ("CODE", " "),
            ("LINE_COMMENT", "-- c"),
        ]

    def test_multiline_template_literal(self, grammars) -> None:
        js = grammars.get("javascript")
        assert kinds_and_values("`a\n// b` // c", js) == [
            ("STRING_LITERAL", "`a\n// b`"),
            ("CODE", " "),
            ("LINE_COMMENT", "// c"),
        ]

    def test_longest_string_opener_wins(self, grammars) -> None:
        py = grammars.get("python")
        assert kinds_and_values('"""a " # b"""  # c', py) == [
            ("STRING_LITERAL", '"""a " # b"""'),
            ("CODE", "  "),
            ("LINE_COMMENT", "# c"),
        ]


class TestLocations:
    """Span locations and offsets."""

    def test_offsets_and_lines(self, c_grammar: Grammar) -> None:
        spans = list(Scanner("int a;\n  /** doc\n */\nb", c_grammar).scan())
        comment = spans[1]
        assert comment.kind is SpanKind.BLOCK_COMMENT
        assert comment.start == 9
        assert comment.end == 20
        loc = comment.location
        assert (loc.lineno, loc.col_offset) == (2, 3)
        assert (loc.end_lineno, loc.end_col_offset) == (3, 4)

    def test_location_is_cached(self, c_grammar: Grammar) -> None:
        span = next(iter(Scanner("x", c_grammar).scan()))
        assert span.location is span.location

    def test_source_file_is_recorded(self, c_grammar: Grammar) -> None:
        span = next(iter(Scanner("x", c_grammar, source_file="main.c").scan()))
        assert str(span.location) == "main.c:1:1"


class TestCustomGrammars:
    """Grammars built in code rather than loaded from JSON."""

    @pytest.fixture
    def grammar(self) -> Grammar:
        return Grammar(
            name="toy",
            line_comments=(LineCommentStyle(";"), LineCommentStyle(";;;", documentation=True)),
            block_comments=(BlockCommentStyle("(*", "*)"),),
            strings=(StringDelimiter("'", "'", escape=""),),
        )

    def test_line_markers_sorted_by_length(self, grammar: Grammar) -> None:
        spans = list(Scanner(";;; doc\n; note", grammar).scan())
        assert spans[0].is_documentation
        assert not spans[2].is_documentation

    def test_no_escape_character(self, grammar: Grammar) -> None:
        assert kinds_and_values("'a\\' ; c", grammar) == [
            ("STRING_LITERAL", "'a\\'"),
            ("CODE", " "),
            ("LINE_COMMENT", "; c"),
        ]

    def test_grammar_without_strings(self) -> None:
        grammar = Grammar(name="bare", line_comments=(LineCommentStyle("#"),))
        assert kinds_and_values('"x # y"', grammar) == [
            ("CODE", '"x '),
            ("LINE_COMMENT", '# y"'),
        ]
