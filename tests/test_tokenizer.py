"""Test the tokenizer."""
import pytest

from basiceval.errors import LexError
from basiceval.tokenizer import Token, TokenKind, Tokenizer, decode_string, tokenize


def kinds(text):
    return [token.kind for token in tokenize(text)]


class TestTokenizer:
    """Tests for Tokenizer."""

    def test_simple_statement(self):
        """Test a numbered LET statement."""
        tokens = list(tokenize("10 LET a = 3\n"))
        assert [t.kind for t in tokens] == [
            TokenKind.LINENO, TokenKind.LET, TokenKind.IDENT,
            TokenKind.EQ, TokenKind.NUMBER, TokenKind.NEWLINE,
        ]
        assert tokens[0].value == 10
        assert tokens[2].value == "a"
        assert tokens[4].value == 3.0

    def test_line_number_only_at_line_start(self):
        """Only a number opening a line is a LINENO."""
        tokens = list(tokenize("10 GOTO 20\n20 END"))
        assert tokens[0].kind == TokenKind.LINENO
        assert tokens[2].kind == TokenKind.NUMBER
        assert tokens[4].kind == TokenKind.LINENO
        assert tokens[4].value == 20

    def test_keywords_case_insensitive(self):
        """Test keywords match in any case."""
        assert kinds("let Let LET") == [TokenKind.LET] * 3

    def test_identifiers_keep_case(self):
        """Test identifiers are case-sensitive and may end in $."""
        tokens = list(tokenize("a A name$ LETTER"))
        assert [t.kind for t in tokens] == [TokenKind.IDENT] * 4
        assert [t.value for t in tokens] == ["a", "A", "name$", "LETTER"]

    def test_comparison_operators(self):
        """Test two-character operators win over one-character ones."""
        assert kinds("a <= b >= c <> d < e > f = g")[1::2] == [
            TokenKind.LE, TokenKind.GE, TokenKind.NE,
            TokenKind.LT, TokenKind.GT, TokenKind.EQ,
        ]

    def test_arithmetic_operators(self):
        """Test arithmetic operator tokens."""
        assert kinds("a + b - c * d / e % f ^ g")[1::2] == [
            TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK,
            TokenKind.SLASH, TokenKind.PERCENT, TokenKind.CARET,
        ]

    def test_string_literal(self):
        """Test string quotes are stripped and escapes decoded."""
        tokens = list(tokenize('PRINT "Hello\\n"'))
        assert tokens[1].kind == TokenKind.STRING
        assert tokens[1].value == "Hello\n"

    def test_rem_swallows_line(self):
        """Test REM consumes the rest of its line."""
        tokens = list(tokenize("10 REM this is LET a comment\n20 END"))
        assert [t.kind for t in tokens] == [
            TokenKind.LINENO, TokenKind.REM, TokenKind.NEWLINE,
            TokenKind.LINENO, TokenKind.END,
        ]
        assert tokens[1].value == "this is LET a comment"

    def test_decimal_number(self):
        """Test decimal numbers."""
        tokens = list(tokenize("PRINT 3.25 .5"))
        assert tokens[1].value == 3.25
        assert tokens[2].value == 0.5

    def test_physical_line_recorded(self):
        """Test tokens carry their physical line."""
        tokens = list(tokenize("10 END\n20 END"))
        assert tokens[0].line == 1
        assert tokens[-1].line == 2

    def test_unknown_character(self):
        """Test an unrecognised character raises LexError."""
        with pytest.raises(LexError):
            list(tokenize("10 LET a = 3 @ 4"))

    def test_tokenizer_is_iterable(self):
        """Test Tokenizer can be iterated directly."""
        assert len(list(Tokenizer("10 END"))) == 2

    def test_token_repr(self):
        """Test Token repr."""
        assert repr(Token(TokenKind.IDENT, "a")) == "Token(IDENT, 'a')"


class TestDecodeString:
    """Tests for decode_string."""

    @pytest.mark.parametrize("literal,expected", [
        ('"plain"', "plain"),
        ('"tab\\there"', "tab\there"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('"back\\\\slash"', "back\\slash"),
        ('""', ""),
    ])
    def test_decode(self, literal, expected):
        """Test escape decoding."""
        assert decode_string(literal) == expected
