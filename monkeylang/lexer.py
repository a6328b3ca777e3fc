"""Turns Monkey source text into a stream of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from monkeylang.token import Token, TokenType, lookup_ident

_END = "\0"
_WHITESPACE = frozenset(" \t\n\r")

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "/": TokenType.SLASH,
    "*": TokenType.ASTERISK,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# Characters that form a different token when followed by '='.
_EQUALS_PAIRS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.BANG, TokenType.NOT_EQ),
}


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Reads tokens one at a time from a source string."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._read_position = 0
        self._ch = _END
        self._read_char()

    def next_token(self) -> Token:
        """Return the next token; EOF is returned at and after the end."""
        self._skip_whitespace()
        ch = self._ch

        if ch == '"':
            tok = Token(TokenType.STRING, self._read_string())
        elif ch in _EQUALS_PAIRS:
            single, double = _EQUALS_PAIRS[ch]
            if self._peek_char() == "=":
                self._read_char()
                tok = Token(double, ch + self._ch)
            else:
                tok = Token(single, ch)
        elif ch in _SINGLE_CHAR_TOKENS:
            tok = Token(_SINGLE_CHAR_TOKENS[ch], ch)
        elif ch == _END:
            tok = Token(TokenType.EOF, "")
        elif _is_letter(ch):
            literal = self._read_while(_is_letter)
            return Token(lookup_ident(literal), literal)
        elif _is_digit(ch):
            return Token(TokenType.INT, self._read_while(_is_digit))
        else:
            tok = Token(TokenType.ILLEGAL, ch)

        self._read_char()
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, ending with the EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return

    def _read_char(self) -> None:
        if self._read_position >= len(self._source):
            self._ch = _END
        else:
            self._ch = self._source[self._read_position]
        self._position = self._read_position
        self._read_position += 1

    def _peek_char(self) -> str:
        if self._read_position >= len(self._source):
            return _END
        return self._source[self._read_position]

    def _skip_whitespace(self) -> None:
        while self._ch in _WHITESPACE:
            self._read_char()

    def _read_while(self, predicate) -> str:
        start = self._position
        while predicate(self._ch):
            self._read_char()
        return self._source[start:self._position]

    def _read_string(self) -> str:
        start = self._position + 1
        self._read_char()
        while self._ch not in ('"', _END):
            self._read_char()
        return self._source[start:self._position]