"""Pratt parser that builds a syntax tree from Monkey tokens."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkeylang.lexer import Lexer
from monkeylang.nodes import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkeylang.token import Token, TokenType

_INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding strength of operators, weakest first."""

    LOWEST = 1
    EQUALS = 2
    LESSGREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7
    INDEX = 8


_PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}


class ParseError(ValueError):
    """Raised when source text does not parse; holds every message found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def _parse_int64(literal: str) -> int:
    """Read a run of digits; a leading zero means octal. Raise ValueError if out of range."""
    if len(literal) > 1 and literal.startswith("0"):
        value = int(literal[1:], 8)
    else:
        value = int(literal, 10)
    if value > _INT64_MAX:
        raise ValueError(f"{literal} is out of range")
    return value


class Parser:
    """Parses the tokens of one lexer; messages for bad input gather in ``errors``."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self.errors: list[str] = []

        self._prefix_fns: dict[TokenType, Callable[[], Expression | None]] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.LBRACKET: self._parse_array_literal,
            TokenType.LBRACE: self._parse_hash_literal,
        }
        infix_operators = (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        )
        self._infix_fns: dict[TokenType, Callable[[Expression], Expression | None]] = {
            op: self._parse_infix_expression for op in infix_operators
        }
        self._infix_fns[TokenType.LBRACKET] = self._parse_index_expression
        self._infix_fns[TokenType.LPAREN] = self._parse_call_expression

        self._cur: Token = lexer.next_token()
        self._peek: Token = lexer.next_token()

    def parse_program(self) -> Program:
        """Parse every statement up to the end of input."""
        program = Program()
        while not self._cur_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self._next_token()
        return program

    # Token handling

    def _next_token(self) -> None:
        self._cur = self._peek
        self._peek = self._lexer.next_token()

    def _cur_is(self, kind: TokenType) -> bool:
        return self._cur.type is kind

    def _peek_is(self, kind: TokenType) -> bool:
        return self._peek.type is kind

    def _expect_peek(self, kind: TokenType) -> bool:
        if self._peek_is(kind):
            self._next_token()
            return True
        self.errors.append(
            f"expected next token to be {kind}, got {self._peek.type} instead"
        )
        return False

    def _peek_precedence(self) -> Precedence:
        return _PRECEDENCES.get(self._peek.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return _PRECEDENCES.get(self._cur.type, Precedence.LOWEST)

    # Statements

    def _parse_statement(self) -> Statement | None:
        if self._cur_is(TokenType.LET):
            return self._parse_let_statement()
        if self._cur_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement | None:
        tok = self._cur
        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self._cur, self._cur.literal)
        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()
        return LetStatement(tok, name, value)

    def _parse_return_statement(self) -> ReturnStatement:
        tok = self._cur
        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()
        return ReturnStatement(tok, value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        tok = self._cur
        expression = self._parse_expression(Precedence.LOWEST)
        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()
        return ExpressionStatement(tok, expression)

    def _parse_block_statement(self) -> BlockStatement:
        block = BlockStatement(self._cur)
        self._next_token()
        while not self._cur_is(TokenType.RBRACE) and not self._cur_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self._next_token()
        return block

    # Expressions

    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self._prefix_fns.get(self._cur.type)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self._cur.type} found")
            return None
        left = prefix()
        while not self._peek_is(TokenType.SEMICOLON) and precedence < self._peek_precedence():
            infix = self._infix_fns.get(self._peek.type)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)
        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self._cur, self._cur.literal)

    def _parse_integer_literal(self) -> Expression | None:
        literal = self._cur.literal
        try:
            value = _parse_int64(literal)
        except ValueError:
            self.errors.append(f'could not parse "{literal}" as integer')
            return None
        return IntegerLiteral(self._cur, value)

    def _parse_string_literal(self) -> Expression:
        return StringLiteral(self._cur, self._cur.literal)

    def _parse_boolean(self) -> Expression:
        return Boolean(self._cur, self._cur_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Expression:
        tok = self._cur
        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok, tok.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Expression:
        tok = self._cur
        precedence = self._cur_precedence()
        self._next_token()
        right = self._parse_expression(precedence)
        return InfixExpression(tok, left, tok.literal, right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()
        expression = self._parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Expression | None:
        tok = self._cur
        if not self._expect_peek(TokenType.LPAREN):
            return None
        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenType.RPAREN):
            return None
        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()
        alternative = None
        if self._peek_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()
        return IfExpression(tok, condition, consequence, alternative)

    def _parse_function_literal(self) -> Expression | None:
        tok = self._cur
        if not self._expect_peek(TokenType.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if not self._expect_peek(TokenType.LBRACE):
            return None
        body = self._parse_block_statement()
        return FunctionLiteral(tok, parameters, body)

    def _parse_function_parameters(self) -> list[Identifier]:
        if self._peek_is(TokenType.RPAREN):
            self._next_token()
            return []
        self._next_token()
        identifiers = [Identifier(self._cur, self._cur.literal)]
        while self._peek_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            identifiers.append(Identifier(self._cur, self._cur.literal))
        if not self._expect_peek(TokenType.RPAREN):
            return []
        return identifiers

    def _parse_call_expression(self, function: Expression) -> Expression:
        tok = self._cur
        arguments = self._parse_expression_list(TokenType.RPAREN)
        return CallExpression(tok, function, arguments)

    def _parse_array_literal(self) -> Expression:
        tok = self._cur
        return ArrayLiteral(tok, self._parse_expression_list(TokenType.RBRACKET))

    def _parse_expression_list(self, end: TokenType) -> list[Expression]:
        if self._peek_is(end):
            self._next_token()
            return []
        self._next_token()
        items = [self._parse_expression(Precedence.LOWEST)]
        while self._peek_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            items.append(self._parse_expression(Precedence.LOWEST))
        if not self._expect_peek(end):
            return []
        return items

    def _parse_index_expression(self, left: Expression) -> Expression | None:
        tok = self._cur
        self._next_token()
        index = self._parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenType.RBRACKET):
            return None
        return IndexExpression(tok, left, index)

    def _parse_hash_literal(self) -> Expression | None:
        tok = self._cur
        pairs: list[tuple[Expression, Expression]] = []
        while not self._peek_is(TokenType.RBRACE):
            self._next_token()
            key = self._parse_expression(Precedence.LOWEST)
            if not self._expect_peek(TokenType.COLON):
                return None
            self._next_token()
            value = self._parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self._peek_is(TokenType.RBRACE) and not self._expect_peek(TokenType.COMMA):
                return None
        if not self._expect_peek(TokenType.RBRACE):
            return None
        return HashLiteral(tok, pairs)


def parse(source: str) -> Program:
    """Parse ``source`` into a program; raise ParseError listing every problem found."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)
    return program