"""Syntax tree nodes for Monkey programs."""

from __future__ import annotations

from dataclasses import dataclass, field

from monkeylang.token import Token


class Node:
    """Base of every syntax tree node."""

    token: Token

    def token_literal(self) -> str:
        """Return the literal of the token the node starts with."""
        return self.token.literal

    def __str__(self) -> str:
        return self.token_literal()


class Statement(Node):
    """A node that stands as a statement."""


class Expression(Node):
    """A node that produces a value."""


@dataclass
class Program(Node):
    """The root of a parsed program."""

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression | None = None

    def __str__(self) -> str:
        value = str(self.value) if self.value is not None else ""
        return f"{self.token_literal()} {self.name} = {value};"


@dataclass
class ReturnStatement(Statement):
    token: Token
    return_value: Expression | None = None

    def __str__(self) -> str:
        value = str(self.return_value) if self.return_value is not None else ""
        return f"{self.token_literal()} {value};"


@dataclass
class ExpressionStatement(Statement):
    token: Token
    expression: Expression | None = None

    def __str__(self) -> str:
        return str(self.expression) if self.expression is not None else ""


@dataclass
class BlockStatement(Statement):
    token: Token
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class Boolean(Expression):
    token: Token
    value: bool


@dataclass
class IntegerLiteral(Expression):
    token: Token
    value: int


@dataclass
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            text += f"else {self.alternative}"
        return text


@dataclass
class FunctionLiteral(Expression):
    token: Token
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    token: Token
    function: Expression
    arguments: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class StringLiteral(Expression):
    token: Token
    value: str


@dataclass
class ArrayLiteral(Expression):
    token: Token
    elements: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass
class IndexExpression(Expression):
    token: Token
    left: Expression
    index: Expression | None = None

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class HashLiteral(Expression):
    """A hash literal; pairs keep the order they were written in."""

    token: Token
    pairs: list[tuple[Expression, Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"